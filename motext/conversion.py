"""Conversion of translated messages from a catalog's charset to an output codeset."""

from __future__ import annotations

import codecs
import locale
from typing import Optional

CONVERSION_LIMIT = 16 * 1024


class MessageConverter:
    """Converts message bytes between encodings, remembering each result."""

    def __init__(self) -> None:
        self._cache: dict[tuple[bytes, str, str], bytes] = {}

    def convert(
        self, message: bytes, fromcode: Optional[str], tocode: Optional[str] = None
    ) -> bytes:
        """Return ``message`` re-encoded from ``fromcode`` to ``tocode``.

        The message is returned unchanged when ``fromcode`` is ``None``, when
        both names match ignoring case, or when conversion fails. ``tocode``
        of ``None`` stands for the locale's preferred encoding.
        """
        if fromcode is None:
            return message
        if tocode is None:
            tocode = locale.getpreferredencoding(False)
        if tocode.lower() == fromcode.lower():
            return message

        key = (message, fromcode, tocode)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            codecs.lookup(fromcode)
            codecs.lookup(tocode)
            result = message.decode(fromcode).encode(tocode)
        except (LookupError, UnicodeError):
            return message
        if len(result) + 1 > CONVERSION_LIMIT:
            return message
        self._cache[key] = result
        return result

    def __len__(self) -> int:
        return len(self._cache)