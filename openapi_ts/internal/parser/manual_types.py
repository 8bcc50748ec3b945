import asyncio
import inspect
from typing import Any, Dict

from ..types.models import RequestItem
from .json_types import json_to_type

MANUAL_TYPE_FIELDS = (
    "request_path_type",
    "request_query_type",
    "request_body_type",
    "response_type",
)


async def resolve_manual_type(item: RequestItem, value: Any) -> str:
    """Строка - как есть, callable - вызывается с RequestItem, данные - через json_to_type"""
    if callable(value):
        value = value(item)

        if inspect.isawaitable(value):
            value = await value

    if isinstance(value, str):
        return value

    return json_to_type(value)


async def merge_manual_types(item: RequestItem, manual_types: Dict[str, Any]):
    """Параллельное разрешение ручных типов с заменой полей RequestItem"""
    unknown = set(manual_types) - set(MANUAL_TYPE_FIELDS)
    if unknown:
        raise ValueError(
            f"Неизвестные поля manual_types для {item.method.upper()} {item.url}: "
            f"{', '.join(sorted(unknown))}"
        )

    async def merge_field(field_name: str, value: Any):
        setattr(item, field_name, await resolve_manual_type(item, value))

    await asyncio.gather(
        *(
            merge_field(field_name, value)
            for field_name, value in manual_types.items()
            if value is not None and value != ""
        )
    )

    return item
