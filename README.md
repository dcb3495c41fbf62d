# motext

`motext` looks up translated messages in compiled gettext catalogs
(`.mo` files). It is pure Python and has no dependencies.

What it does:

- parses `.mo` files in both byte orders, format revisions 0.0, 0.1 and 1.1,
  system-dependent strings (`<PRIu64>` and similar) included
  (`motext.mofile.parse_mo`, `load_mo`);
- looks messages up through the catalog's hash table and falls back to a
  binary search of the original strings (`MoFile.lookup`);
- finds catalogs from `LANGUAGE`, `LC_ALL`, the category's own variable
  (such as `LC_MESSAGES`) and `LANG`. `LANGUAGE` is used as given, a
  colon-separated list; the other variables are expanded into the less
  specific forms of the locale name (`de_DE.UTF-8@euro`, then `de_DE@euro`,
  `de@euro`, `de_DE.UTF-8`, `de_DE`, `de`). The search stops at `C` or
  `POSIX`;
- converts translations from the catalog's charset to the codeset bound
  to the domain, or to the locale's preferred encoding when none is bound.

## Installation

```
pip install motext
```

## Usage

```python
from motext.domains import DomainRegistry
from motext.translate import Translator

registry = DomainRegistry()
registry.bindtextdomain("myapp", "/usr/share/locale")
registry.textdomain("myapp")
registry.bind_textdomain_codeset("myapp", "UTF-8")

tr = Translator(registry, {"LANG": "de_DE.UTF-8"})
print(tr.gettext("Hello"))
print(tr.dgettext("myapp", "Goodbye"))
```

The translator looks for
`/usr/share/locale/de_DE.UTF-8/LC_MESSAGES/myapp.mo`, then the less
specific locale names. When no environment mapping is given, `os.environ`
is used. When nothing is found the original message is returned.

`ngettext`, `dngettext` and `dcngettext` choose `msgid1` when `n` is 1 and
`msgid2` otherwise, look that message up, and return the first form of its
translation, or the chosen message unchanged when it is not in the catalog.

A catalog can also be read by itself:

```python
from motext.mofile import load_mo

catalog = load_mo("myapp.mo")
print(len(catalog), catalog.charset, catalog.lookup("Hello"))
```

`lookup` returns the raw translation bytes (plural forms separated by NUL
bytes) or `None`. `load_mo` and `parse_mo` raise `MoFormatError` for data
that is not a valid catalog; `load_mo` accepts only regular files of at most
1 MiB. `motext.translate.get_indexed_string` picks one plural form out of
such a raw translation.

## Other modules

- `motext.localenv`: `Category`, `category_name`, `split_locale`,
  `get_lang_env`.
- `motext.conversion`: `MessageConverter`, which caches each conversion.
- `motext.strhash`: `string_hash`, the hash used by catalog hash tables.
- `motext.sysdep`: `get_string_by_tag`, expanding `PRI*`/`SCN*` tags.
- `motext.cstring`: `strlcpy`, `strlcat`, `strsep` with C buffer semantics.
- `motext.tree`: `SearchTree`, an unbalanced binary search tree.

## What it does not do

- It does not evaluate a catalog's `Plural-Forms` expression; the plural
  functions always return the first form of a translation.
- It does not write or compile `.mo` files.
- It has no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```