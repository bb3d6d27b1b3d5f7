"""Qodana-specific knowledge base.

Contains curated information about available linters, the languages
they cover, and native IDE launchers.
"""

from qodana_cli.knowledge.linters import (
    RELEASE,
    get_extension_languages,
    get_language_linters,
    get_linter_image,
    get_linters,
    get_native_ides,
)

__all__ = [
    "RELEASE",
    "get_extension_languages",
    "get_language_linters",
    "get_linter_image",
    "get_linters",
    "get_native_ides",
]
