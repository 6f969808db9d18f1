"""Утилиты для генератора"""

from .naming import (
    combine_route,
    escape_for_js_string,
    format_code,
    replace_ignore_case,
    strip_suffix_ignore_case,
    to_camel_case,
    to_sentence_case,
)

__all__ = [
    "combine_route",
    "escape_for_js_string",
    "format_code",
    "replace_ignore_case",
    "strip_suffix_ignore_case",
    "to_camel_case",
    "to_sentence_case",
]
