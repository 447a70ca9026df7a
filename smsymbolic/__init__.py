"""Symbolic expression trees with differentiation, simplification and string helpers."""

__version__ = "0.22.9"
__all__ = ["expr", "strings", "find_source", "simplify", "diff"]