[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motext"
version = "0.1.0"
description = "Reader for compiled gettext message catalogs (.mo files) with domain binding, locale search and charset conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["gettext", "i18n", "l10n", "mo", "translation", "catalog"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Internationalization",
    "Topic :: Software Development :: Localization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["motext"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
