"""filebyte - inspect, analyze and export directory trees."""

__version__ = "1.3.2"
