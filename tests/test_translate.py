import struct
from pathlib import Path

import pytest

from motext.domains import DomainRegistry
from motext.localenv import Category
from motext.translate import Translator, find_catalog, get_indexed_string

HEADER_UTF8 = b"Content-Type: text/plain; charset=UTF-8\n"
HEADER_LATIN1 = b"Content-Type: text/plain; charset=ISO-8859-1\n"


def build_mo(entries: dict) -> bytes:
    keys = sorted(entries)
    count = len(keys)
    otable = 28
    ttable = otable + 8 * count
    start = ttable + 8 * count
    blob = b""
    originals = []
    for key in keys:
        originals.append((len(key), start + len(blob)))
        blob += key + b"\0"
    translations = []
    for key in keys:
        value = entries[key]
        translations.append((len(value), start + len(blob)))
        blob += value + b"\0"
    out = struct.pack("<7I", 0x950412DE, 0, count, otable, ttable, 0, 0)
    for length, offset in originals + translations:
        out += struct.pack("<2I", length, offset)
    return out + blob


def install(root: Path, lang: str, domain: str, entries: dict) -> Path:
    directory = root / lang / "LC_MESSAGES"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{domain}.mo"
    path.write_bytes(build_mo(entries))
    return path


def make_translator(root: Path, environ: dict, codeset="UTF-8") -> Translator:
    registry = DomainRegistry()
    registry.textdomain("app")
    registry.bindtextdomain("app", str(root))
    registry.bind_textdomain_codeset("app", codeset)
    return Translator(registry, environ)


@pytest.fixture
def german(tmp_path):
    install(
        tmp_path,
        "de",
        "app",
        {b"": HEADER_UTF8, b"Hello": b"Hallo", b"file\0files": b"Datei\0Dateien"},
    )
    return tmp_path


def test_gettext_finds_translation(german):
    translator = make_translator(german, {"LANG": "de_DE.UTF-8"})
    assert translator.gettext("Hello") == "Hallo"


def test_missing_message_returns_msgid(german):
    translator = make_translator(german, {"LANG": "de_DE"})
    assert translator.gettext("Goodbye") == "Goodbye"


def test_no_catalog_falls_back(tmp_path):
    translator = make_translator(tmp_path, {"LANG": "fr_FR"})
    assert translator.gettext("Hello") == "Hello"
    assert translator.ngettext("file", "files", 2) == "files"
    assert translator.ngettext("file", "files", 1) == "file"


def test_default_locale_stops_search(german):
    translator = make_translator(german, {"LANGUAGE": "C:de"})
    assert translator.gettext("Hello") == "Hello"


def test_language_list_is_searched_in_order(german):
    translator = make_translator(german, {"LANGUAGE": "fr:de"})
    assert translator.gettext("Hello") == "Hallo"


def test_no_locale_in_environment(german):
    translator = make_translator(german, {})
    assert translator.gettext("Hello") == "Hello"


def test_unknown_category_returns_msgid(german):
    translator = make_translator(german, {"LANG": "de"})
    assert translator.dcgettext("app", "Hello", 99) == "Hello"


def test_dgettext_named_domain(german):
    registry = DomainRegistry()
    registry.bindtextdomain("app", str(german))
    registry.bind_textdomain_codeset("app", "UTF-8")
    translator = Translator(registry, {"LANG": "de"})
    assert translator.dgettext("app", "Hello") == "Hallo"
    assert translator.gettext("Hello") == "Hello"


def test_plural_without_plural_rule(german):
    translator = make_translator(german, {"LANG": "de"})
    assert translator.dngettext("app", "file", "files", 1) == "Datei"
    assert translator.ngettext("file", "files", 2) == "files"


def test_missing_plural_msgid_returns_none(german):
    translator = make_translator(german, {"LANG": "de"})
    assert translator.ngettext("Hello", None, 3) is None


def test_empty_msgid_returns_header(german):
    translator = make_translator(german, {"LANG": "de"})
    assert translator.gettext("") == HEADER_UTF8.decode()


def test_charset_conversion(tmp_path):
    text = "Grüße"
    install(tmp_path, "de", "app", {b"": HEADER_LATIN1, b"Greetings": text.encode("latin-1")})
    translator = make_translator(tmp_path, {"LANG": "de"}, codeset="UTF-8")
    assert translator.gettext("Greetings") == text
    assert len(translator.converter) == 1


def test_rebinding_reloads_catalog(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    install(first, "de", "app", {b"Hello": b"Hallo"})
    install(second, "de", "app", {b"Hello": b"Servus"})
    translator = make_translator(first, {"LANG": "de"})
    assert translator.gettext("Hello") == "Hallo"
    translator.registry.bindtextdomain("app", str(second))
    assert translator.gettext("Hello") == "Servus"


def test_relative_directory_is_made_absolute(german, monkeypatch):
    monkeypatch.chdir(german.parent)
    translator = make_translator(Path(german.name), {"LANG": "de"})
    assert translator.gettext("Hello") == "Hallo"
    binding = translator.registry.lookup("app")
    assert binding.path == f"{german.parent}/{german.name}"


def test_dcngettext_messages_category(german):
    translator = make_translator(german, {"LC_MESSAGES": "de_AT"})
    assert translator.dcngettext("app", "Hello", "Hellos", 1, Category.MESSAGES) == "Hallo"


def test_find_catalog_returns_path(german):
    found = find_catalog(str(german), "xx:de", "LC_MESSAGES", "app")
    assert found is not None
    path, catalog = found
    assert path == f"{german}/de/LC_MESSAGES/app.mo"
    assert catalog.lookup("Hello") == b"Hallo"


def test_find_catalog_rejects_default_and_slashes(german):
    assert find_catalog(str(german), "POSIX:de", "LC_MESSAGES", "app") is None
    assert find_catalog(str(german), "de", "LC_MESSAGES", "a/pp") is None
    assert find_catalog(str(german), "x/de", "LC_MESSAGES", "app") is None


def test_find_catalog_skips_broken_file(tmp_path):
    directory = tmp_path / "de" / "LC_MESSAGES"
    directory.mkdir(parents=True)
    (directory / "app.mo").write_bytes(b"not a catalog")
    assert find_catalog(str(tmp_path), "de", "LC_MESSAGES", "app") is None


@pytest.mark.parametrize(
    "index, expected",
    [(0, b"one"), (1, b"two"), (2, b"three")],
)
def test_get_indexed_string(index, expected):
    assert get_indexed_string(b"one\0two\0three", index) == expected


def test_get_indexed_string_past_end():
    assert get_indexed_string(b"a\0bc", 2) == b"c"