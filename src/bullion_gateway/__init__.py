"""Auth and cached stock-quote gateway."""

__version__ = "0.1.0"
