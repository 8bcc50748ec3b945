import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...config import DocConfig
from ..types.models import RequestItem
from ..types.schema import InlineNode, ReferenceNode, SchemaKind, SchemaNode, parse_schema
from ..types.schema_resolver import SchemaNameResolver
from ..utils.naming import join_comment, pascal_case, quote_literal, to_safe_prop_key
from .dialects import Dialect, get_dialect
from .manual_types import merge_manual_types
from .tag_validator import TagValidator

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "patch", "head", "options")

DEFAULT_TAG = "main"
DEPRECATED_COMMENT = "/** @deprecated */"
UNION_OR_INTERSECTION = re.compile(r"[|&]")


@dataclass
class ParamsSchema:
    """Шаблоны типов параметров одной операции"""

    path: str = ""
    query: str = ""
    body: str = ""
    is_form_data: bool = False


def _wrap_record(lines: List[str]) -> str:
    return "{\n" + "".join(lines) + "}" if lines else ""


class SchemaParser:
    """Разбор путей и схем документа в шаблоны типов"""

    def __init__(
        self,
        doc: Dict[str, Any],
        config: DocConfig,
        dialect: Optional[Dialect] = None,
    ):
        self.doc = doc
        self.config = config
        self.dialect = dialect or get_dialect(doc)
        self.tags: Dict[str, List[RequestItem]] = {}
        self.resolver = SchemaNameResolver()

        self._schemas = self.dialect.get_schemas(doc)
        self._tag_validator = TagValidator(config.include, config.exclude)

    @property
    def refs(self) -> Dict[str, bool]:
        return self.resolver.refs

    @property
    def types_template(self) -> str:
        return self.resolver.types_template

    @property
    def interfaces_template(self) -> str:
        return self.resolver.interfaces_template

    def to_safe_prop_key(self, key: str, source: str) -> str:
        """Безопасное имя свойства с учетом prop_key_replacer (source: param | schema)"""
        replacer = self.config.prop_key_replacer
        return to_safe_prop_key(replacer(key, source) if replacer else key)

    def get_tag(self, url: str, method: str, operation: Dict[str, Any]) -> str:
        if self.config.get_tag:
            return self.config.get_tag(url, method, operation)

        tags = operation.get("tags")
        if isinstance(tags, list) and tags and tags[0]:
            return str(tags[0])

        return DEFAULT_TAG

    @staticmethod
    def get_function_name(source: str, method: str, tag: str) -> str:
        """
        Имя функции: метод + PascalCase источника.

        Повторяющийся префикс `(tag_)?(method)?` удаляется, чтобы не
        получалось getGetUser.
        """
        prefix = re.compile(f"({re.escape(tag)}_)?({re.escape(method)})?", re.IGNORECASE)
        return method + pascal_case(prefix.sub("", source, count=1))

    async def parse_paths(self) -> Dict[str, List[RequestItem]]:
        """Разбор всех путей документа, группировка операций по тегам"""
        paths = self.doc.get("paths") or {}
        manual_types = self.config.manual_types or {}
        url_to_name = self.config.url_to_name_replacer
        tasks = []

        for url, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue

            for key, operation in path_item.items():
                # Кроме методов в path item бывают parameters, summary, servers...
                method = str(key).lower()
                if method not in HTTP_METHODS or not isinstance(operation, dict):
                    continue

                path = url_to_name(url) if url_to_name else url
                tag = self.get_tag(path, method, operation)

                if not self._tag_validator.validate(tag):
                    continue

                item = self.parse_operation(url, path, method, tag, operation)
                self.tags.setdefault(tag, []).append(item)

                manual = (manual_types.get(url) or {}).get(method)
                if manual:
                    tasks.append(merge_manual_types(item, manual))

        await asyncio.gather(*tasks)
        return self.tags

    def parse_operation(
        self, url: str, path: str, method: str, tag: str, operation: Dict[str, Any]
    ) -> RequestItem:
        name = self.get_function_name(operation.get("operationId") or path, method, tag)
        params = self.parse_params_schema(operation)

        if self.dialect.body_in_parameters:
            body, is_form_data = params.body, params.is_form_data
        else:
            body, is_form_data = self.dialect.parse_request_body(self, operation)

        return RequestItem(
            name=name,
            url=url,
            method=method,
            tag=tag,
            description=operation.get("description") or operation.get("summary") or "",
            deprecated=bool(operation.get("deprecated")),
            request_path_type=params.path,
            request_query_type=params.query,
            request_body_type=body,
            request_body_is_form_data=is_form_data,
            response_type=self.parse_response_schema(operation),
        )

    def parse_params_schema(self, operation: Dict[str, Any]) -> ParamsSchema:
        """Разбор parameters в шаблоны path / query / body"""
        path: List[str] = []
        query: List[str] = []
        body: List[str] = []
        root_body = ""
        is_form_data = False

        for param in operation.get("parameters") or []:
            if not isinstance(param, dict):
                continue

            if param.get("$ref"):
                logger.warning("TODO: параметр-ссылка не поддерживается: %s", param["$ref"])
                continue

            location = param.get("in")
            schema = self.dialect.get_param_schema(param)

            # Весь body - эта схема, а не отдельное поле body
            if location == "body" and param.get("name") == "root":
                root_type = self.parse_schema_item(schema)
                root_body = f"{root_body} & {root_type}" if root_body else root_type
                continue

            prop_type = (
                f"  {self.to_safe_prop_key(str(param.get('name', '')), 'param')}: "
                f"{self.parse_schema_item(schema) or 'any'}"
                f"{join_comment(param.get('description'))}\n"
            )

            if location == "path":
                path.append(prop_type)
            elif location == "query":
                query.append(prop_type)
            elif location == "formData":
                body.append(prop_type)
                is_form_data = True
            elif location == "body":
                body.append(prop_type)

        body_type = " & ".join(filter(None, [_wrap_record(body), root_body]))

        if is_form_data:
            body_type = f"FormData | {body_type}"

        return ParamsSchema(
            path=_wrap_record(path),
            query=_wrap_record(query),
            body=body_type,
            is_form_data=is_form_data,
        )

    def parse_response_schema(self, operation: Dict[str, Any]) -> str:
        responses = operation.get("responses") or {}
        # YAML превращает ключ 200 в int
        response = responses.get("200", responses.get(200))

        if isinstance(response, dict) and response.get("$ref"):
            return self.parse_ref(response["$ref"])

        if not isinstance(response, dict):
            return ""

        return self.parse_schema_item(self.dialect.get_response_schema(response))

    def parse_ref(self, ref: str) -> str:
        """Имя типа по ссылке; схема объявляется при первом обращении"""
        name = self.resolver.get_ref_name(ref)
        type_name = self.resolver.format_schema_name(name)

        self.ref_schema(name, type_name)

        return type_name

    def ref_schema(self, schema_name: str, type_name: str):
        raw = self._schemas.get(schema_name)

        # Нет схемы - висячая ссылка, декларации не будет
        if raw is None:
            return

        # Регистрация до рекурсии, иначе циклические схемы не завершатся
        if not self.resolver.register_schema(type_name):
            return

        node = parse_schema(raw)
        schema_type = self.parse_schema_item(node)

        self.resolver.add_declaration(
            type_name,
            schema_type,
            comment=self.get_schema_item_comment(node),
            interface=isinstance(node, InlineNode) and node.kind is SchemaKind.OBJECT,
        )

    @staticmethod
    def get_schema_item_comment(node: Optional[SchemaNode]) -> str:
        if not isinstance(node, InlineNode):
            return ""

        comment = ""

        if node.description:
            comment += "\n/** " + node.description.replace("*/", "*\\/") + " */"

        if node.deprecated:
            comment += "\n" + DEPRECATED_COMMENT

        return comment

    def parse_schema_item(self, node: Optional[SchemaNode]) -> str:
        """
        Тип по узлу схемы.

        Пустая строка означает «типа нет» и отличается от `any`:
        по ней генератор решает, нужен ли параметр.
        """
        if node is None:
            return ""

        if isinstance(node, ReferenceNode):
            return self.parse_ref(node.ref)

        if node.kind is SchemaKind.COMBINED:
            combine_type = (" & " if node.combinator == "allOf" else " | ").join(
                self.parse_schema_item(member) for member in node.members
            )

            # Комбинированные схемы могут быть null
            return f"({combine_type}) | null" if combine_type else ""

        if node.kind is SchemaKind.INTEGER:
            return "number"

        if node.kind is SchemaKind.STRING:
            if node.enum:
                return " | ".join(quote_literal(str(value)) for value in node.enum)

            return "string"

        if node.kind is SchemaKind.FILE:
            return "File" if self.dialect.permissive else "file"

        if node.kind is SchemaKind.ARRAY:
            return self.parse_array_item(node)

        if node.kind is SchemaKind.OBJECT:
            return self.parse_properties(node.properties) + self.dialect.parse_additional(
                self, node
            )

        return " | ".join(node.type_names)

    def parse_array_item(self, node: InlineNode) -> str:
        if isinstance(node.items, list):
            item_type = " | ".join(
                filter(None, (self.parse_schema_item(item) for item in node.items))
            )
        else:
            item_type = self.parse_schema_item(node.items)

        if not item_type:
            item_type = "any"
        elif UNION_OR_INTERSECTION.search(item_type):
            item_type = f"({item_type})"

        return item_type + "[]"

    def parse_properties(self, properties: Dict[str, Optional[SchemaNode]]) -> str:
        """Запись `{ ... }` из свойств объекта"""
        template = "{\n"

        for key, prop in properties.items():
            prop_type = self.parse_schema_item(prop) or "any"
            prop_key = self.to_safe_prop_key(key, "schema")

            # Ссылки комментируются в месте объявления схемы
            if isinstance(prop, InlineNode):
                if prop.deprecated:
                    template += DEPRECATED_COMMENT + "\n"

                template += f"  {prop_key}: {prop_type}{join_comment(prop.description)}\n"
            else:
                template += f"  {prop_key}: {prop_type}\n"

        return template + "}"
