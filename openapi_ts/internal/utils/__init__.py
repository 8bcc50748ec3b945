"""Утилиты для генератора"""

from .naming import (
    to_safe_prop_key,
    quote_literal,
    join_comment,
    pascal_case,
    kebab_case,
)

__all__ = [
    "to_safe_prop_key",
    "quote_literal",
    "join_comment",
    "pascal_case",
    "kebab_case",
]
