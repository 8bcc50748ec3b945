"""
Главный модуль генератора - чистый интерфейс
"""

from typing import Dict, Any

from .config import DocConfig
from .internal.parser.openapi import OpenApiParser
from .internal.types.models import Project


class ApiTypesGenerator:
    """Чистый интерфейс для генерации функций запросов и типов"""

    def __init__(self, openapi_spec: Dict[str, Any], config: DocConfig = None):
        self.parser = OpenApiParser(openapi_spec, config or DocConfig())

    async def generate(self) -> Project:
        """Генерация проекта"""
        return await self.parser.parse()


async def generate_types(openapi_spec: Dict[str, Any], config: DocConfig = None) -> Project:
    """Генерация функций запросов и деклараций из документа"""
    generator = ApiTypesGenerator(openapi_spec, config)
    return await generator.generate()
