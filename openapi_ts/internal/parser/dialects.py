"""
Диалекты документа: Swagger 2 и OpenAPI 3.

Алгоритм разбора один (`SchemaParser`), диалект отвечает только за
различия: где лежат схемы, откуда берется тело запроса и ответ,
как расширяется объект через additionalProperties.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from ..types.schema import InlineNode, SchemaNode, is_ref, parse_schema
from .json_types import ANY_RECORD

if TYPE_CHECKING:
    from .schemas import SchemaParser

JSON_CONTENT = "application/json"
FORM_DATA_CONTENT = "multipart/form-data"


class Dialect:
    name: str = ""
    schemas_path: Tuple[str, ...] = ()
    # Разрешает схему прямо в объекте параметра и тип `file`
    permissive: bool = False
    # Тело запроса описывается параметрами in: body / in: formData
    body_in_parameters: bool = False

    def get_schemas(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Словарь именованных схем документа"""
        container: Any = doc
        for key in self.schemas_path:
            container = container.get(key) if isinstance(container, dict) else None

        return container if isinstance(container, dict) else {}

    def get_param_schema(self, param: Dict[str, Any]) -> Optional[SchemaNode]:
        raw = param.get("schema")

        if raw is None and self.permissive:
            raw = param

        return parse_schema(raw)

    def get_response_schema(self, response: Dict[str, Any]) -> Optional[SchemaNode]:
        raise NotImplementedError

    def parse_request_body(
        self, parser: "SchemaParser", operation: Dict[str, Any]
    ) -> Tuple[str, bool]:
        """Тип тела запроса и признак form-data"""
        return "", False

    def parse_additional(self, parser: "SchemaParser", node: InlineNode) -> str:
        additional = node.additional_properties

        if additional is True:
            return " & " + ANY_RECORD

        return ""


class SwaggerV2Dialect(Dialect):
    name = "swagger2"
    schemas_path = ("definitions",)
    permissive = True
    body_in_parameters = True

    def get_response_schema(self, response: Dict[str, Any]) -> Optional[SchemaNode]:
        return parse_schema(response.get("schema"))

    def parse_additional(self, parser: "SchemaParser", node: InlineNode) -> str:
        additional = node.additional_properties

        # Расширение только вложенными properties, а не всей схемой
        if isinstance(additional, InlineNode) and additional.properties:
            return " & " + parser.parse_properties(additional.properties)

        return super().parse_additional(parser, node)


class OpenApiV3Dialect(Dialect):
    name = "openapi3"
    schemas_path = ("components", "schemas")

    @staticmethod
    def _get_content_schema(obj: Dict[str, Any], content_type: str) -> Any:
        content = obj.get("content") or {}
        media = content.get(content_type)

        return media.get("schema") if isinstance(media, dict) else None

    def get_response_schema(self, response: Dict[str, Any]) -> Optional[SchemaNode]:
        return parse_schema(self._get_content_schema(response, JSON_CONTENT))

    def parse_request_body(
        self, parser: "SchemaParser", operation: Dict[str, Any]
    ) -> Tuple[str, bool]:
        body = operation.get("requestBody")

        if is_ref(body):
            return parser.parse_ref(body["$ref"]), False

        if not isinstance(body, dict):
            return "", False

        schema = self._get_content_schema(body, JSON_CONTENT)
        if schema is not None:
            return parser.parse_schema_item(parse_schema(schema)), False

        schema = self._get_content_schema(body, FORM_DATA_CONTENT)
        if schema is not None:
            body_type = parser.parse_schema_item(parse_schema(schema))
            return f"FormData | {body_type}" if body_type else "FormData", True

        return "", False

    def parse_additional(self, parser: "SchemaParser", node: InlineNode) -> str:
        additional = node.additional_properties

        if additional is not None and additional is not True:
            additional_type = parser.parse_schema_item(additional)
            return f" & {additional_type}" if additional_type else ""

        return super().parse_additional(parser, node)


def get_dialect(doc: Dict[str, Any]) -> Dialect:
    """Диалект определяется наличием поля `swagger`"""
    return SwaggerV2Dialect() if "swagger" in doc else OpenApiV3Dialect()
