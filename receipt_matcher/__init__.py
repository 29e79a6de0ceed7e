"""Receipt-to-transaction matching service."""

__version__ = "1.0.0"
