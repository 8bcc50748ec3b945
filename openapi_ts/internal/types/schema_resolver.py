import re
from typing import Dict, List

from ..utils.naming import pascal_case

API_PREFIX = re.compile(r"^api\.", re.IGNORECASE)
INTERSECTED_RECORD = re.compile(r"}\s*&\s*\{")


def is_record_literal(type_str: str) -> bool:
    """Самостоятельная запись `{ ... }`, которую можно объявить как interface"""
    return (
        type_str.startswith("{")
        and type_str.endswith("}")
        and not INTERSECTED_RECORD.search(type_str)
    )


class SchemaNameResolver:
    """Реестр ссылочных схем: имена, дедупликация и накопленные декларации"""

    def __init__(self):
        self.refs: Dict[str, bool] = {}
        self._types: List[str] = []
        self._interfaces: List[str] = []

    @staticmethod
    def get_ref_name(ref: str) -> str:
        """Имя схемы без пути: последний сегмент после `/`"""
        return ref.split("/")[-1]

    @staticmethod
    def format_schema_name(name: str) -> str:
        """PascalCase имя типа без префикса `api.`"""
        return pascal_case(API_PREFIX.sub("", name))

    def is_registered(self, type_name: str) -> bool:
        return self.refs.get(type_name, False)

    def register_schema(self, type_name: str) -> bool:
        """
        Регистрация имени типа.

        Returns:
            False, если тип уже зарегистрирован и повторно объявляться не должен
        """
        if self.is_registered(type_name):
            return False

        self.refs[type_name] = True
        return True

    def add_declaration(
        self, type_name: str, schema_type: str, comment: str = "", interface: bool = False
    ):
        """Добавление декларации ссылочной схемы в общий шаблон документа"""
        schema_type = schema_type or "any"

        if interface and is_record_literal(schema_type):
            self._interfaces.append(f"{comment}\ninterface {type_name} {schema_type}\n")
        else:
            self._types.append(f"{comment}\ntype {type_name} = {schema_type}\n")

    @property
    def types_template(self) -> str:
        return "".join(self._types)

    @property
    def interfaces_template(self) -> str:
        return "".join(self._interfaces)
