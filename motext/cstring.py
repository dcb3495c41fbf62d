"""Bounded string copy, concatenation and tokenising with C buffer semantics.

Sizes are buffer sizes that include room for a terminating NUL, so at most
``size - 1`` characters of content fit.
"""

from __future__ import annotations


def _check_size(size: int) -> None:
    if size < 0:
        raise ValueError(f"buffer size must not be negative: {size}")


def strlcpy(src: str, size: int) -> tuple[str, int]:
    """Copy ``src`` into a buffer of ``size``.

    Returns the buffer contents and ``len(src)``; truncation happened when the
    returned length is at least ``size``.
    """
    _check_size(size)
    if size == 0:
        return "", len(src)
    return src[: size - 1], len(src)


def strlcat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append ``src`` to ``dst`` held in a buffer of ``size``.

    Returns the buffer contents and ``min(size, len(dst)) + len(src)``;
    truncation happened when that length is at least ``size``. When ``dst``
    already fills the buffer it is returned unchanged.
    """
    _check_size(size)
    dlen = min(len(dst), size)
    room = size - dlen
    if room == 0:
        return dst, dlen + len(src)
    return dst[:dlen] + src[: room - 1], dlen + len(src)


def strsep(text: str | None, delims: str) -> tuple[str | None, str | None]:
    """Split off the next token of ``text`` at any character of ``delims``.

    Returns ``(token, rest)``. ``rest`` is ``None`` when no tokens remain,
    and both are ``None`` when ``text`` is ``None``. Tokens may be empty.
    """
    if text is None:
        return None, None
    for position, char in enumerate(text):
        if char in delims:
            return text[:position], text[position + 1 :]
    return text, None