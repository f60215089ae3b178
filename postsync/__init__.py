"""Post lifecycle sync: local post store reconciled with a remote content service."""

__version__ = "0.1.0"
