"""Cactus: purge gitignored build artifacts and caches from many repositories."""

__version__ = "0.1.0"
