"""Recursive mountain ranges, temples and words, plus a small console test harness."""

__version__ = "0.1.0"
__all__ = ["__version__"]