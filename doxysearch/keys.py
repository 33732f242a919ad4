"""
Search key normalization.

Doxygen stores every searchable symbol under a URL-safe key derived from its
name. The same transformation is applied to user input before matching, so
`operator!=` typed by a user finds the row stored as `operator_21_3d`.

Rules:
- The name is lower-cased.
- ASCII letters, digits and any character at or above U+0080 are kept as is.
- Every other character becomes `_` followed by its code point as lowercase
  hex, zero padded to two digits (`!` -> `_21`, tab -> `_09`).
"""

import re


__all__ = ["encode_key", "decode_key", "is_valid_key"]


KEEP = re.compile(r"[a-z0-9\u0080-\U0010ffff]")
KEY_PATTERN = re.compile(r"^(?:[a-z0-9\u0080-\U0010ffff]|_[0-9a-f]{2})+$")


def encode_key(name):
    # type: (str) -> str
    """
    Convert a symbol name or search query to its normalized key.

    :param name: Symbol name or user query (e.g. "operator*=")
    :return: Normalized key (e.g. "operator_2a_3d")
    """
    parts = []
    for char in name.lower():
        if KEEP.match(char):
            parts.append(char)
        else:
            parts.append(f"_{ord(char):02x}")
    return "".join(parts)


def decode_key(key):
    # type: (str) -> str
    """
    Recover the lower-cased name from a normalized key.

    :param key: Normalized key (e.g. "operator_5b_5d")
    :return: Lower-cased symbol name (e.g. "operator[]")
    :raises ValueError: If the key contains a malformed `_hh` escape
    """
    result = []
    pos = 0
    while pos < len(key):
        char = key[pos]
        if char != "_":
            result.append(char)
            pos += 1
            continue
        code = key[pos + 1 : pos + 3]
        if len(code) != 2 or not re.fullmatch(r"[0-9a-f]{2}", code):
            raise ValueError(f"Malformed escape in key '{key}' at position {pos}")
        result.append(chr(int(code, 16)))
        pos += 3
    return "".join(result)


def is_valid_key(key):
    # type: (str) -> bool
    """Check that a key is non-empty and only made of kept characters and `_hh` escapes."""
    return bool(key) and KEY_PATTERN.match(key) is not None
