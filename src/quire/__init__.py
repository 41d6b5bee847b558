"""Quire: a community magazine publishing service."""

__version__ = "0.1.0"
