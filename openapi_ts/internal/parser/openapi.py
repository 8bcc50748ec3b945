from typing import Dict, Any

from ...config import DocConfig
from ..types.models import Project
from ..generator.declarations import DeclarationGenerator
from .schemas import SchemaParser


class OpenApiParser:
    """Парсер документа Swagger 2 / OpenAPI 3"""

    def __init__(self, openapi_dict: Dict[str, Any], config: DocConfig):
        self.openapi_dict = openapi_dict
        self.config = config

    async def parse(self) -> Project:
        """Разбор документа в Project с файлами функций и деклараций"""
        schema_parser = SchemaParser(self.openapi_dict, self.config)
        await schema_parser.parse_paths()

        generator = DeclarationGenerator(schema_parser, self.config)
        return generator.generate()
