"""
Конфигурация сборки API: документы, фильтры и параметры шаблонов
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional, Union

import toml

# Ручные типы: url -> метод -> поле RequestItem -> строка | данные | callable
ManualTypes = Dict[str, Dict[str, Dict[str, Any]]]

DEFAULT_CONFIG_FILE = "openapi-ts.toml"

# Callable-опции задаются только из Python и в toml не сохраняются
CALLABLE_OPTIONS = ("prop_key_replacer", "url_to_name_replacer", "get_tag", "formatter")


@dataclass
class DocConfig:
    """Конфигурация одного документа"""

    name: str = "main"  # имя scope документа
    link: Optional[str] = None  # ссылка или путь к документу
    ssr: Union[bool, List[str]] = False  # генерировать SSR-варианты методов
    import_request_from: str = "@/utils/request"
    import_axios_types_from: str = "axios"
    include: Optional[List[str]] = None  # только эти теги
    exclude: Optional[List[str]] = None  # исключить теги
    url_prefix: Optional[str] = None
    remove_url_prefix: Optional[str] = None
    # Корневая структура ответа, `T` - тип данных ответа
    response_root_interface: Optional[Dict[str, str]] = None
    custom_response_return_path: Optional[str] = None
    prop_key_replacer: Optional[Callable[[str, str], str]] = None
    url_to_name_replacer: Optional[Callable[[str], str]] = None
    get_tag: Optional[Callable[[str, str, Dict[str, Any]], str]] = None
    manual_types: Optional[ManualTypes] = None
    # Внешний форматтер деклараций типов
    formatter: Optional[Callable[[str], str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocConfig":
        """Создание из словаря (toml), неизвестные и callable ключи игнорируются"""
        known = {f.name for f in fields(cls)} - set(CALLABLE_OPTIONS)
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        """Сериализуемая часть конфигурации"""
        result = {}

        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in CALLABLE_OPTIONS or value is None:
                continue
            result[f.name] = value

        return result


@dataclass
class BuildConfig:
    """Конфигурация сборки всех документов"""

    docs: List[DocConfig] = field(default_factory=list)
    out_dir: str = "src/apis"

    @classmethod
    def from_file(
        cls, config_path: str = DEFAULT_CONFIG_FILE, search_dir: str = None
    ) -> Optional["BuildConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, DEFAULT_CONFIG_FILE)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
            return cls(
                docs=[DocConfig.from_dict(doc) for doc in config_data.get("docs", [])],
                out_dir=config_data.get("out_dir", "src/apis"),
            )
        except (toml.TomlDecodeError, TypeError):
            return None

    def save_to_file(self, config_path: str = DEFAULT_CONFIG_FILE) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            "out_dir": self.out_dir,
            "docs": [doc.to_dict() for doc in self.docs],
        }

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "BuildConfig":
        """Объединение с аргументами командной строки"""
        return BuildConfig(
            docs=self.docs,
            out_dir=args.out_dir or self.out_dir,
        )
