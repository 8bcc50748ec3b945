"""Вывод типа по живому JSON-значению (без схемы)"""

import logging
from typing import Any

import aiohttp

from ..utils.naming import to_safe_prop_key

logger = logging.getLogger(__name__)

ANY_RECORD = "{[P:string]: any}"


def json_to_type(data: Any) -> str:
    """
    Структурный тип по значению.

    Examples:
        >>> json_to_type({"id": 1, "tags": ["a"]})
        '{id: number;tags: string[];}'
        >>> json_to_type([])
        'any[]'
    """
    if data is None:
        return "any"

    if isinstance(data, (list, tuple)):
        return (json_to_type(data[0]) if data else "any") + "[]"

    if isinstance(data, dict):
        if not data:
            return ANY_RECORD

        return (
            "{"
            + "".join(
                f"{to_safe_prop_key(str(key))}: {json_to_type(value)};"
                for key, value in data.items()
            )
            + "}"
        )

    if isinstance(data, bool):
        return "boolean"

    if isinstance(data, (int, float)):
        return "number"

    if isinstance(data, str):
        return "string"

    return "any"


async def request_response_type(method: str, url: str, **options) -> str:
    """
    Тип ответа по реальному запросу к API.

    Используется в manual_types для ответов, которых нет в документе:

        manual_types={"/posts": {"get": {
            "response_type": lambda item: request_response_type("get", POSTS_URL)
        }}}
    """
    logger.info("Запрос образца ответа: %s %s", method.upper(), url)

    async with aiohttp.ClientSession() as session:
        async with session.request(method, url, **options) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)

    return json_to_type(data)
