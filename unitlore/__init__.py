"""Rational numerics, fuzzy name search, mapping merge and a parser for unit definition files."""

__version__ = "0.1.0"

__all__ = ["defs", "gnu_units", "merge", "numeric", "search", "tokens"]