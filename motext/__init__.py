"""Reading compiled gettext message catalogs and translating messages with them."""

__version__ = "0.1.0"