"""comatrix: connectivity matrix and application catalog for EA models."""

__version__ = "0.3.0"
