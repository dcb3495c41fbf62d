"""Expansion of system-dependent format segments found in message catalogs.

Catalogs may carry ``<inttypes.h>`` macro names such as ``PRId64`` in place
of printf/scanf length modifiers. This module maps each such tag to the
conversion text for a platform with 32-bit ``int`` and 64-bit ``long long``
and pointers.
"""

from __future__ import annotations

_PRI_CONVERSIONS = "Xdiox" + "u"
_SCN_CONVERSIONS = "diouxX"[:5]

_PRI_MODIFIERS = {"8": "", "16": "", "32": "", "64": "ll"}
_SCN_MODIFIERS = {"8": "hh", "16": "h", "32": "", "64": "ll"}
_WIDE_MODIFIER = "ll"


def _build_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for prefix, conversions, modifiers in (
        ("PRI", _PRI_CONVERSIONS, _PRI_MODIFIERS),
        ("SCN", _SCN_CONVERSIONS, _SCN_MODIFIERS),
    ):
        for conv in conversions:
            for bits, modifier in modifiers.items():
                for kind in ("", "FAST", "LEAST"):
                    table[f"{prefix}{conv}{kind}{bits}"] = modifier + conv
            table[f"{prefix}{conv}MAX"] = _WIDE_MODIFIER + conv
            table[f"{prefix}{conv}PTR"] = _WIDE_MODIFIER + conv
    return table


_SYSDEP_TABLE = _build_table()


def get_string_by_tag(tag: str) -> str:
    """Return the conversion text for ``tag``, or an empty string if unknown."""
    return _SYSDEP_TABLE.get(tag, "")