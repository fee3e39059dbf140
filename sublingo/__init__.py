"""Sublingo: bilingual subtitle alignment and re-rendering."""

__version__ = "0.1.0"
