"""C comment stripping, directory tree listing and a simulated heap manager."""

__version__ = "0.1.0"

__all__ = ["__version__"]