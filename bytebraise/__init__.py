"""Syntax trees, a token-driven parser and tree editing helpers for BitBake metadata."""

__version__ = "0.1.0"