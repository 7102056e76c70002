"""Jobs2Go admin console backend."""

__version__ = "0.4.0"
