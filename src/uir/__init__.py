"""uir - a local package manager for .uir archives."""

__version__ = "1.0"
