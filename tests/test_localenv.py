import pytest

from motext.localenv import Category, category_name, get_lang_env, split_locale


def test_category_names():
    assert category_name(Category.MESSAGES) == "LC_MESSAGES"
    assert category_name(Category.CTYPE) == "LC_CTYPE"
    assert category_name(int(Category.TIME)) == "LC_TIME"


def test_unknown_category():
    assert category_name(999) is None


def test_split_plain_language():
    assert split_locale("en") == "en"


def test_split_full_name():
    assert split_locale("ja_JP.eucJP@mod") == (
        "ja_JP.eucJP@mod:ja_JP@mod:ja@mod:ja_JP.eucJP:ja_JP:ja"
    )


def test_split_territory():
    assert split_locale("en_US") == "en_US:en"


@pytest.mark.parametrize("name", ["en.UTF-8", ".UTF-8", "_US", "@euro"])
def test_split_invalid_returned_unchanged(name):
    assert split_locale(name) == name


@pytest.mark.parametrize("name", ["de_DE.UTF-8", "sr_RS@latin", "pt_BR"])
def test_split_ends_with_language_and_starts_with_most_specific(name):
    parts = split_locale(name).split(":")
    assert parts[-1] == name.split("_")[0].split("@")[0]
    assert parts[0] == name
    assert len(parts) == len(set(parts))


def test_language_variable_used_verbatim():
    env = {"LANGUAGE": "fr:de", "LC_ALL": "it_IT", "LANG": "es_ES"}
    assert get_lang_env("LC_MESSAGES", env) == "fr:de"


def test_lc_all_precedes_category_and_lang():
    env = {"LC_ALL": "de_DE", "LC_MESSAGES": "fr_FR", "LANG": "es_ES"}
    assert get_lang_env("LC_MESSAGES", env) == split_locale("de_DE")


def test_category_precedes_lang():
    env = {"LC_MESSAGES": "fr_FR", "LANG": "es_ES"}
    assert get_lang_env("LC_MESSAGES", env) == split_locale("fr_FR")


def test_lang_fallback():
    env = {"LANG": "es_ES"}
    assert get_lang_env("LC_MESSAGES", env) == split_locale("es_ES")


def test_nothing_configured():
    assert get_lang_env("LC_MESSAGES", {}) is None