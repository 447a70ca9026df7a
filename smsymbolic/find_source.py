"""Locate source files in the working directory or along SMS_PATH."""

from __future__ import annotations

import os
from typing import Optional

PATH_VARIABLE = "SMS_PATH"


def split_search_path(value: str) -> list[str]:
    """Split a colon-separated path list; a backslash-escaped colon is kept literally."""
    directories: list[str] = []
    current: list[str] = []
    chars = iter(range(len(value)))
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and value[i + 1 : i + 2] == ":":
            current.append(":")
            i += 2
            continue
        if ch == ":":
            if current:
                directories.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    del chars
    if current:
        directories.append("".join(current))
    return directories


def path_find(needle: str) -> Optional[str]:
    """Return the path of needle in the working directory or SMS_PATH, or None."""
    needle = os.fspath(needle)
    if not needle:
        return None
    try:
        cwd = os.getcwd()
    except OSError:
        return None
    candidate = f"{cwd}/{needle}"
    if os.path.exists(candidate):
        return candidate
    search_path = os.environ.get(PATH_VARIABLE)
    if search_path is None:
        return None
    for directory in split_search_path(search_path):
        candidate = f"{directory}/{needle}"
        if os.path.exists(candidate):
            return candidate
    return None