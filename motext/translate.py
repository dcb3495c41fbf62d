"""Message lookup across text domains, locale categories and catalogs.

All ``*gettext`` functions share one implementation, :meth:`Translator.dcngettext`.
When no translation can be found the original message is returned: ``msgid1``
when ``n`` is 1 and ``msgid2`` otherwise.
"""

from __future__ import annotations

import locale
import os
import stat
from typing import Mapping, Optional

from motext.conversion import MessageConverter
from motext.domains import (
    DEFAULT_TEXTDOMAIN_PATH,
    PATH_MAX,
    DomainBinding,
    DomainRegistry,
)
from motext.localenv import Category, category_name, get_lang_env
from motext.mofile import MoFile, MoFormatError, load_mo

_DEFAULT_LOCALES = ("C", "POSIX")


def find_catalog(
    dirname: str, lpath: str, category: str, domainname: str
) -> Optional[tuple[str, MoFile]]:
    """Find and load the first usable catalog named by the locale list ``lpath``.

    ``lpath`` is a colon-separated list of locale names. The search stops,
    finding nothing, at a default locale (``C`` or ``POSIX``). Returns the
    catalog's path and the parsed catalog, or ``None``.
    """
    for name in lpath.split(":"):
        if not name:
            continue
        if name in _DEFAULT_LOCALES:
            return None
        if "/" in name or "/" in category or "/" in domainname:
            continue
        path = f"{dirname}/{name}/{category}/{domainname}.mo"
        try:
            info = os.stat(path)
        except OSError:
            continue
        if not stat.S_ISREG(info.st_mode):
            continue
        try:
            return path, load_mo(path)
        except (OSError, MoFormatError):
            continue
    return None


def get_indexed_string(text: bytes, index: int) -> bytes:
    """Return plural form ``index`` of a NUL-separated translation.

    An index past the last form yields the tail of the entry's last byte,
    as the catalog walk stops one byte before the end.
    """
    position = 0
    remaining = len(text)
    while index > 0:
        if remaining <= 1:
            break
        if text[position] == 0:
            index -= 1
        position += 1
        remaining -= 1
    return text[position:].split(b"\0", 1)[0]


def _default(msgid1: Optional[str], msgid2: Optional[str], n: int) -> Optional[str]:
    return msgid1 if n == 1 else msgid2


class Translator:
    """Looks up translated messages using a domain registry and an environment."""

    def __init__(
        self,
        registry: Optional[DomainRegistry] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.registry = registry if registry is not None else DomainRegistry()
        self.environ = environ
        self.converter = MessageConverter()
        self._last: Optional[tuple[str, str, str]] = None

    def gettext(self, msgid: str) -> Optional[str]:
        """Translate ``msgid`` in the current domain."""
        return self.dcngettext(None, msgid, None, 1, Category.MESSAGES)

    def dgettext(self, domainname: Optional[str], msgid: str) -> Optional[str]:
        """Translate ``msgid`` in ``domainname``."""
        return self.dcngettext(domainname, msgid, None, 1, Category.MESSAGES)

    def dcgettext(
        self, domainname: Optional[str], msgid: str, category: int
    ) -> Optional[str]:
        """Translate ``msgid`` in ``domainname`` under ``category``."""
        return self.dcngettext(domainname, msgid, None, 1, category)

    def ngettext(
        self, msgid1: str, msgid2: Optional[str], n: int
    ) -> Optional[str]:
        """Translate the singular or plural message in the current domain."""
        return self.dcngettext(None, msgid1, msgid2, n, Category.MESSAGES)

    def dngettext(
        self, domainname: Optional[str], msgid1: str, msgid2: Optional[str], n: int
    ) -> Optional[str]:
        """Translate the singular or plural message in ``domainname``."""
        return self.dcngettext(domainname, msgid1, msgid2, n, Category.MESSAGES)

    def dcngettext(
        self,
        domainname: Optional[str],
        msgid1: Optional[str],
        msgid2: Optional[str],
        n: int,
        category: int = Category.MESSAGES,
    ) -> Optional[str]:
        """Translate a message in ``domainname`` under ``category``.

        ``msgid1`` is used when ``n`` is 1 and ``msgid2`` otherwise; that
        message is returned unchanged when no translation is found.
        """
        binding = self._resolve(domainname, category)
        msgid = _default(msgid1, msgid2, n)
        if binding is None or binding.catalog is None or msgid is None:
            return msgid

        catalog = binding.catalog
        raw = catalog.lookup(msgid)
        if raw is None:
            return msgid
        first = raw.split(b"\0", 1)[0]
        if not msgid:
            return first.decode(catalog.charset or "utf-8", errors="replace")
        return self._decode(first, catalog.charset, binding.codeset)

    def _resolve(self, domainname: Optional[str], category: int) -> Optional[DomainBinding]:
        if domainname is None:
            domainname = self.registry.current_domainname
        cname = category_name(category)
        if not domainname or cname is None:
            return None

        lpath = get_lang_env(cname, self.environ)
        if lpath is None:
            return None

        binding = self.registry.lookup(domainname)
        if binding is None:
            if self.registry.bindtextdomain(domainname, DEFAULT_TEXTDOMAIN_PATH) is None:
                return None
            binding = self.registry.lookup(domainname)
            if binding is None:
                return None

        if not os.path.isabs(binding.path):
            absolute = os.getcwd() + "/" + binding.path
            if len(absolute) + 1 > PATH_MAX:
                return None
            binding.path = absolute

        state = (domainname, cname, lpath)
        if self._last == state and binding.catalog is not None:
            return binding

        found = find_catalog(binding.path, lpath, cname, domainname)
        if found is None:
            return None
        binding.catalog = found[1]
        self._last = state
        return binding

    def _decode(
        self, message: bytes, charset: Optional[str], codeset: Optional[str]
    ) -> str:
        converted = self.converter.convert(message, charset, codeset)
        tocode = codeset if codeset is not None else locale.getpreferredencoding(False)
        try:
            return converted.decode(tocode)
        except (LookupError, UnicodeError):
            return converted.decode(charset or "utf-8", errors="replace")