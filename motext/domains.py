"""Registry of text domains and the directories and codesets bound to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from motext.mofile import MoFile

DEFAULT_DOMAINNAME = "messages"
DEFAULT_TEXTDOMAIN_PATH = "/usr/share/locale"
PATH_MAX = 1024


@dataclass(eq=False)
class DomainBinding:
    """A domain with its catalog directory, output codeset and loaded catalog."""

    domainname: str
    path: str = ""
    codeset: Optional[str] = None
    catalog: Optional[MoFile] = None


class DomainRegistry:
    """The current text domain and all domain bindings."""

    def __init__(self) -> None:
        self._bindings: list[DomainBinding] = [
            DomainBinding(DEFAULT_DOMAINNAME, DEFAULT_TEXTDOMAIN_PATH)
        ]
        self._current = DEFAULT_DOMAINNAME

    @property
    def current_domainname(self) -> str:
        """The domain used when none is named."""
        return self._current

    def __iter__(self) -> Iterator[DomainBinding]:
        return iter(self._bindings)

    def textdomain(self, domainname: Optional[str]) -> str:
        """Set and return the current domain.

        ``None`` leaves it as it is; an empty string restores the default.
        """
        if domainname is not None:
            self._current = (domainname or DEFAULT_DOMAINNAME)[: PATH_MAX - 1]
        return self._current

    def bindtextdomain(
        self, domainname: Optional[str], dirname: Optional[str]
    ) -> Optional[str]:
        """Bind ``domainname`` to ``dirname`` and return the bound directory.

        With ``dirname`` of ``None`` only the current binding is reported.
        ``None`` is returned for an empty domain name or an over-long name.
        """
        if not domainname:
            return None
        if dirname is not None and len(dirname) + 1 > PATH_MAX:
            return None
        if len(domainname) + 1 > PATH_MAX:
            return None

        binding = self.lookup(domainname, dirname is not None)
        if dirname is None:
            return binding.path if binding is not None else DEFAULT_TEXTDOMAIN_PATH
        assert binding is not None
        binding.path = dirname
        binding.catalog = None
        return binding.path

    def bind_textdomain_codeset(
        self, domainname: str, codeset: Optional[str]
    ) -> Optional[str]:
        """Set the output codeset of ``domainname`` and return it.

        With ``codeset`` of ``None`` only the current setting is reported.
        """
        binding = self.lookup(domainname, codeset is not None)
        if binding is None:
            return None
        if codeset is not None:
            binding.codeset = codeset
        return binding.codeset

    def lookup(self, domainname: str, create: bool = False) -> Optional[DomainBinding]:
        """Return the binding of ``domainname``, adding one when ``create`` is set."""
        for binding in self._bindings:
            if binding.domainname == domainname:
                return binding
        if not create:
            return None
        binding = DomainBinding(domainname[: PATH_MAX - 1])
        self._bindings.insert(0, binding)
        return binding