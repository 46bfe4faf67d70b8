"""Window placement engine: decide where a window goes for a placement command."""

__version__ = "0.1.0"
