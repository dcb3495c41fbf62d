"""String hash used by the hash table of compiled message catalogs."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_HIGH_NIBBLE = 0xF0000000


def string_hash(text: str | bytes) -> int:
    """Return the P. J. Weinberger hash of ``text`` as an unsigned 32-bit value.

    Text is hashed as UTF-8 bytes. As with a C string, hashing stops at the
    first NUL byte.
    """
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    value = 0
    for byte in data:
        if byte == 0:
            break
        value = ((value << 4) + byte) & _MASK32
        high = value & _HIGH_NIBBLE
        if high:
            value ^= high
            value ^= high >> 24
    return value