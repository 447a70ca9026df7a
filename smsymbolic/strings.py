"""Substring search and splitting."""

from __future__ import annotations

from typing import Optional


def str_find(haystack: str, needle: str) -> Optional[int]:
    """Index of the first occurrence of needle, or None."""
    index = haystack.find(needle)
    return None if index < 0 else index


def str_findr(haystack: str, needle: str) -> Optional[int]:
    """Index of the last occurrence of needle, or None."""
    if len(needle) > len(haystack):
        return None
    index = haystack.rfind(needle)
    return None if index < 0 else index


def str_split(haystack: str, needle: str) -> list[str]:
    """Split haystack around needle, keeping each needle as its own part.

    str_split("abc123", "1") gives ["abc", "1", "23"].
    """
    if not needle or not haystack:
        return [haystack]
    parts: list[str] = []
    pos = 0
    while (index := haystack.find(needle, pos)) >= 0:
        if index > pos:
            parts.append(haystack[pos:index])
        parts.append(needle)
        pos = index + len(needle)
    if pos < len(haystack):
        parts.append(haystack[pos:])
    return parts