"""shelfscan - persistence layer for scanned comic and book series."""

__version__ = "0.1.0"
