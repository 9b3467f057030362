"""Describe relational tables once; get PostgreSQL DDL and record classes."""

__version__ = "0.1.0"
__all__ = ["__version__"]