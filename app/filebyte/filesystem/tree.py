"""Directory tree construction and text rendering.

Both building and rendering use explicit stacks, so pathological
nesting cannot exhaust the interpreter's recursion limit. Depth is
bounded by ``max_depth``; directories beyond it are marked truncated
and rendered with a marker line instead of their children.
"""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from filebyte.filesystem.errors import PathNotFoundError
from filebyte.filesystem.filters import NO_FILTER, EntryFilter
from filebyte.filesystem.models import Entry, EntryKind, SkippedEntry, SkipReason
from filebyte.filesystem.probe import probe
from filebyte.filesystem.traverser import Traverser

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

DEFAULT_MAX_DEPTH = 64


@dataclass(slots=True)
class TreeNode:
    """One entry in a rendered tree.

    Attributes:
        entry: Probed entry for this node.
        children: Child nodes, directories first then by name.
        truncated: Children were not read because of the depth guard.
        cycle: Symlink leads back to one of its own ancestors.
    """

    entry: Entry
    children: list["TreeNode"] = field(default_factory=list)
    truncated: bool = False
    cycle: bool = False

    def iter_nodes(self) -> list["TreeNode"]:
        """All nodes in depth-first pre-order, including this one."""
        ordered: list[TreeNode] = []
        stack = [self]
        while stack:
            node = stack.pop()
            ordered.append(node)
            stack.extend(reversed(node.children))
        return ordered


def build_tree(
    root: str | Path,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    entry_filter: EntryFilter = NO_FILTER,
    follow_symlinks: bool = True,
    aggregate_sizes: bool = False,
) -> tuple[TreeNode, list[SkippedEntry]]:
    """Walk ``root`` recursively and assemble a tree of nodes.

    Entries whose parent directory was filtered out (include pattern)
    attach to their nearest listed ancestor.

    Args:
        root: Directory (or file) at the top of the tree.
        max_depth: Deepest entry level to include.
        entry_filter: Include/exclude filter.
        follow_symlinks: Descend through symlinked directories.
        aggregate_sizes: Report recursive directory sizes.

    Returns:
        Tuple of (root node, skipped entries recorded during the walk).

    Raises:
        PathNotFoundError: If ``root`` does not exist.
    """
    root_str = os.path.normpath(os.fspath(root))
    if not os.path.lexists(root_str):
        raise PathNotFoundError(f"Path '{root_str}' does not exist", root_str)

    traverser = Traverser(
        recursive=True,
        entry_filter=entry_filter,
        aggregate_sizes=aggregate_sizes,
        follow_symlinks=follow_symlinks,
        max_depth=max_depth,
    )
    root_node = TreeNode(entry=probe(root_str))
    if not os.path.isdir(root_str):
        return root_node, []

    nodes: dict[str, TreeNode] = {root_str: root_node}
    for entry in traverser.walk(root_str):
        node = TreeNode(entry=entry)
        nodes[entry.path] = node
        _nearest_ancestor(entry.path, nodes).children.append(node)

    skipped = traverser.skipped
    for item in skipped:
        target = nodes.get(item.path)
        if target is None:
            continue
        if item.reason == SkipReason.DEPTH_LIMIT:
            target.truncated = True
        elif item.reason == SkipReason.SYMLINK_CYCLE:
            target.cycle = True

    for node in nodes.values():
        node.children.sort(key=lambda child: (not child.entry.is_directory, child.entry.name))

    return root_node, skipped


def _nearest_ancestor(path: str, nodes: dict[str, TreeNode]) -> TreeNode:
    parent = os.path.dirname(path)
    while parent not in nodes:
        next_parent = os.path.dirname(parent)
        if next_parent == parent:
            msg = f"No ancestor of {path} in tree"
            raise ValueError(msg)
        parent = next_parent
    return nodes[parent]


def default_label(node: TreeNode) -> str:
    """Plain-text label: name, link target and state markers."""
    entry = node.entry
    label = entry.name
    if entry.kind == EntryKind.SYMLINK and entry.link_target is not None:
        label = f"{label} -> {entry.link_target}"
        if entry.broken_link:
            label = f"{label} [broken]"
    if node.cycle:
        label = f"{label} [cycle]"
    return label


def render_tree(
    root: TreeNode,
    label: Callable[[TreeNode], str] = default_label,
    truncated_marker: str = "…",
) -> str:
    """Render a tree as connector-drawn text.

    Directories come before files at every level. Interior siblings use
    ``├──`` and the last sibling of a level uses ``└──``.

    Args:
        root: Root node (rendered on the first line without a connector).
        label: Callable producing the text for each node.
        truncated_marker: Line text shown under depth-limited directories.

    Returns:
        Rendered tree, one node per line, without a trailing newline.
    """
    lines = [label(root)]
    if root.truncated:
        lines.append(f"{LAST_BRANCH}{truncated_marker}")

    # (node, prefix for its own line, is last sibling)
    stack: list[tuple[TreeNode, str, bool]] = []
    for index in range(len(root.children) - 1, -1, -1):
        stack.append((root.children[index], "", index == len(root.children) - 1))

    while stack:
        node, prefix, is_last = stack.pop()
        connector = LAST_BRANCH if is_last else BRANCH
        lines.append(f"{prefix}{connector}{label(node)}")

        child_prefix = prefix + (SPACE if is_last else PIPE)
        if node.truncated:
            lines.append(f"{child_prefix}{LAST_BRANCH}{truncated_marker}")
            continue
        count = len(node.children)
        for index in range(count - 1, -1, -1):
            stack.append((node.children[index], child_prefix, index == count - 1))

    return "\n".join(lines)
