"""Locale categories and the search list of locale names taken from the environment."""

from __future__ import annotations

import os
from enum import IntEnum
from typing import Mapping, Optional


class Category(IntEnum):
    """Locale categories under which message catalogs may be installed."""

    COLLATE = 0
    CTYPE = 1
    MONETARY = 2
    NUMERIC = 3
    TIME = 4
    MESSAGES = 5


_CATEGORY_NAMES = {
    Category.COLLATE: "LC_COLLATE",
    Category.CTYPE: "LC_CTYPE",
    Category.MONETARY: "LC_MONETARY",
    Category.NUMERIC: "LC_NUMERIC",
    Category.TIME: "LC_TIME",
    Category.MESSAGES: "LC_MESSAGES",
}


def category_name(category: int) -> Optional[str]:
    """Return the directory name of ``category``, or ``None`` if it is unknown."""
    try:
        return _CATEGORY_NAMES[Category(category)]
    except ValueError:
        return None


def split_locale(name: str) -> str:
    """Expand an XPG locale name into a colon-separated search list.

    The name has the form ``language[_territory[.codeset]][@modifier]``; the
    list runs from the most to the least specific variant. A name that does
    not fit that form is returned unchanged.
    """
    rest, at, modifier = name.rpartition("@")
    if not at:
        rest, modifier = name, None
    base, dot, codeset = rest.rpartition(".")
    if not dot:
        base, codeset = rest, None
    language, underscore, territory = base.rpartition("_")
    if not underscore:
        language, territory = base, None

    if not language:
        return name
    if codeset is not None and territory is None:
        return name

    variants: list[str] = []
    if modifier is not None:
        if territory is not None:
            if codeset is not None:
                variants.append(f"{language}_{territory}.{codeset}@{modifier}")
            variants.append(f"{language}_{territory}@{modifier}")
        variants.append(f"{language}@{modifier}")
    if territory is not None:
        if codeset is not None:
            variants.append(f"{language}_{territory}.{codeset}")
        variants.append(f"{language}_{territory}")
    variants.append(language)
    return ":".join(variants)


def get_lang_env(
    category_name: str, environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """Return the colon-separated list of locale names to search.

    ``LANGUAGE`` is used as given when set. Otherwise the first of
    ``LC_ALL``, the category's own variable and ``LANG`` is expanded with
    :func:`split_locale`. ``None`` means no locale is configured.
    """
    env = os.environ if environ is None else environ
    language = env.get("LANGUAGE")
    if language is not None:
        return language
    for variable in ("LC_ALL", category_name, "LANG"):
        value = env.get(variable)
        if value is not None:
            return split_locale(value)
    return None