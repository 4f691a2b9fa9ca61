"""BSD libc utility functions: strings, modes, encodings, sorting and process helpers."""

__version__ = "0.1.0"