"""Утилиты для работы с именами ключей, типов и комментариями"""

import re
from typing import List, Optional

SAFE_PROP_KEY = re.compile(r"[a-zA-Z$_]\w*", re.ASCII)

# Все переводы строк, завершающие `//` комментарий в TypeScript
LINE_BREAKS = re.compile("\r\n|[\r\n\u2028\u2029]")
LINE_BREAK_ESCAPES = re.compile("[\r\n\u2028\u2029]")
_LINE_BREAKS = {
    "\r": "\\r",
    "\n": "\\n",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def to_safe_prop_key(key: str) -> str:
    """
    Возвращает безопасное имя свойства.

    Если ключ начинается с буквы, `$` или `_` и содержит только
    символы слова, он остается как есть. Иначе ключ оборачивается в
    одинарные кавычки.

    Examples:
        >>> to_safe_prop_key("user_id")
        'user_id'
        >>> to_safe_prop_key("content-type")
        "'content-type'"
    """
    if SAFE_PROP_KEY.fullmatch(key):
        return key

    return quote_literal(key)


def quote_literal(value: str) -> str:
    """
    Строковый литерал TypeScript в одинарных кавычках.

    Экранируются обратная косая черта, кавычка и переводы строк.

    Examples:
        >>> quote_literal("it's")
        "'it\\\\'s'"
    """
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    escaped = LINE_BREAK_ESCAPES.sub(lambda match: _LINE_BREAKS[match.group()], escaped)
    return f"'{escaped}'"


def join_comment(comment: Optional[str] = None) -> str:
    """Хвостовой комментарий строки, переводы строк заменяются пробелами"""
    if comment:
        return " // " + LINE_BREAKS.sub(" ", comment)

    return ""


def split_words(text: str) -> List[str]:
    # Границы регистра: userName -> user Name, HTTPError -> HTTP Error
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", text)
    text = re.sub(r"([A-Z])([A-Z][a-z])", r"\1 \2", text)
    # Буквы любого алфавита, без подчеркивания
    return re.findall(r"[^\W_]+", text)


def pascal_case(text: str) -> str:
    """
    PascalCase преобразование.

    Examples:
        >>> pascal_case("/users/{id}")
        'UsersId'
        >>> pascal_case("api.user_info")
        'ApiUserInfo'
        >>> pascal_case("用户 订单")
        '用户订单'
    """
    parts = []

    for index, word in enumerate(split_words(text)):
        head = word[0]
        # Слово из цифр внутри имени отделяется подчеркиванием
        if index > 0 and head.isdigit():
            head = "_" + head
        elif head.islower():
            head = head.upper()
        parts.append(head + word[1:].lower())

    return "".join(parts)


def kebab_case(text: str) -> str:
    """kebab-case преобразование для имен директорий и файлов"""
    return "-".join(word.lower() for word in split_words(text))
