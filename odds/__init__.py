"""A smarter cd that learns where you go and takes you there."""

__version__ = "0.1.3"