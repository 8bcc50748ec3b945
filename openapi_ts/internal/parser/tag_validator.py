from typing import Iterable, List, Optional


def _normalize(tags: Optional[Iterable[str]]) -> Optional[List[str]]:
    if not tags:
        return None

    return [tag.upper() for tag in tags]


class TagValidator:
    """Фильтр операций по тегам (без учета регистра)"""

    def __init__(
        self,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ):
        self._include = _normalize(include)
        self._exclude = _normalize(exclude)

    def validate(self, tag: str) -> bool:
        """Проверка, попадает ли тег в итоговую генерацию"""
        tag = tag.upper()

        if self._include is not None and tag not in self._include:
            return False

        if self._exclude is not None and tag in self._exclude:
            return False

        return True
