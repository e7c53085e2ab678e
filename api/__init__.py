"""HTTP service around the execution mapper."""

__version__ = "0.1.0"
