"""A typed, observable tree of named variables with XML load and store."""

__version__ = "0.1.0"