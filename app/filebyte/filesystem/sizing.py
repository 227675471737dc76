"""Bottom-up directory size aggregation.

Sizes are computed with an explicit post-order worklist instead of call
recursion, and every directory total is memoized by ``(st_dev, st_ino)``.
Asking for a parent first and its subdirectories afterwards therefore
costs one pass over the subtree.
"""

import logging
import os
from dataclasses import dataclass, field

from filebyte.filesystem.models import SkippedEntry, SkipReason

logger = logging.getLogger(__name__)

InodeKey = tuple[int, int]


@dataclass(slots=True)
class _Frame:
    """Work item for one directory on the aggregation stack."""

    path: str
    key: InodeKey
    pending: list[str] = field(default_factory=list)
    total: int = 0
    partial: bool = False


class DirectorySizer:
    """Computes recursive file-byte totals for directories.

    Only regular files are counted; symlinks are never followed, so the
    aggregation cannot loop. Unreadable subtrees are recorded in
    :attr:`skipped` and flag every enclosing total as partial.
    """

    def __init__(self) -> None:
        self._cache: dict[InodeKey, tuple[int, bool]] = {}
        self._recorded: set[str] = set()
        self.skipped: list[SkippedEntry] = []

    def size_of(self, path: str) -> tuple[int, bool]:
        """Return ``(total_bytes, partial)`` for the directory at ``path``.

        Args:
            path: Directory to measure.

        Returns:
            Recursive sum of descendant file sizes and whether any part
            of the subtree could not be read.
        """
        key = self._key(path)
        if key is None:
            return 0, True
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        stack = [self._open(path, key)]
        in_progress = {key}

        while stack:
            frame = stack[-1]
            if frame.pending:
                child = frame.pending.pop()
                child_key = self._key(child)
                if child_key is None:
                    frame.partial = True
                    continue
                done = self._cache.get(child_key)
                if done is not None:
                    frame.total += done[0]
                    frame.partial = frame.partial or done[1]
                    continue
                if child_key in in_progress:
                    continue
                in_progress.add(child_key)
                stack.append(self._open(child, child_key))
                continue

            stack.pop()
            in_progress.discard(frame.key)
            self._cache[frame.key] = (frame.total, frame.partial)
            if stack:
                parent = stack[-1]
                parent.total += frame.total
                parent.partial = parent.partial or frame.partial

        return self._cache[key]

    def _key(self, path: str) -> InodeKey | None:
        try:
            st = os.stat(path)
        except OSError as e:
            self._record(path, e)
            return None
        return st.st_dev, st.st_ino

    def _open(self, path: str, key: InodeKey) -> _Frame:
        """List a directory, summing its files and queueing its subdirectories."""
        frame = _Frame(path=path, key=key)
        try:
            with os.scandir(path) as it:
                for child in it:
                    try:
                        if child.is_dir(follow_symlinks=False):
                            frame.pending.append(child.path)
                        elif child.is_file(follow_symlinks=False):
                            frame.total += child.stat(follow_symlinks=False).st_size
                    except OSError as e:
                        self._record(child.path, e)
                        frame.partial = True
        except OSError as e:
            self._record(path, e)
            frame.partial = True
        return frame

    def _record(self, path: str, error: OSError) -> None:
        if path in self._recorded:
            return
        self._recorded.add(path)
        reason = (
            SkipReason.VANISHED if isinstance(error, FileNotFoundError) else SkipReason.ACCESS_DENIED
        )
        logger.warning("Size aggregation skipped %s: %s", path, error.strerror or error)
        self.skipped.append(SkippedEntry(path=path, reason=reason, detail=str(error.strerror or error)))
