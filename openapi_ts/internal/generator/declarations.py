import re
from typing import Dict, List

from ...config import DocConfig
from ..parser.schemas import SchemaParser
from ..types.models import CodeBlock, Project, RequestItem
from ..types.schema_resolver import is_record_literal
from ..utils.naming import kebab_case, pascal_case, to_safe_prop_key
from .templates import templates

# Правило имени типа: метод + имя функции + суффикс
# GetUserInfo + Params -> interface GetUserInfoParams {}
TYPE_NAME_SUFFIXES = {
    "params": "Params",
    "path_params": "PathParams",
    "data": "Request",
    "res": "Response",
    "res_root": "ResponseROOT",
}

BODY_METHODS = re.compile(r"^(post|put|patch)")
PATH_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")
FORM_DATA_HEADERS = "headers: { ...options.config?.headers, 'Content-Type': 'multipart/form-data' }"


def _escape_comment(text: str) -> str:
    return text.replace("*/", "*\\/").replace("\n", " ")


class DeclarationGenerator:
    """Генерация функций запросов и деклараций типов по результату SchemaParser"""

    def __init__(self, parser: SchemaParser, config: DocConfig):
        self.parser = parser
        self.config = config
        self.scope_name = pascal_case(config.name)
        self.project = Project(name=config.name)

    def generate(self) -> Project:
        for tag, request_items in self.parser.tags.items():
            self._generate_group(tag, request_items)

        self.project.add_file(
            kebab_case(self.config.name + "-types") + ".d.ts"
        ).add_code_block(self.create_doc_types())

        return self.project

    def _generate_group(self, tag: str, request_items: List[RequestItem]):
        folder_name = kebab_case(tag) or "main"
        scope_tag = pascal_case(tag) or "Main"

        functions_file = self.project.add_file(f"{folder_name}/index.ts")
        functions_file.imports.append(self.create_imports())

        ssr_blocks = []
        dts_template = ""

        for request_item in request_items:
            functions_file.add_code_block(self.create_function(request_item, scope_tag))

            if self.is_ssr_method(request_item.method):
                ssr_blocks.append(self.create_function(request_item, scope_tag, ssr=True))

            dts_template += self.create_item_types(request_item)

        for block in ssr_blocks:
            functions_file.add_code_block(block)

        if self.config.formatter:
            dts_template = self.config.formatter(dts_template)

        self.project.add_file(f"{folder_name}/types.d.ts").add_code_block(
            templates.group_types.format(
                scope=self.scope_name, tag=scope_tag, body=dts_template
            )
        )

    def create_imports(self) -> str:
        template = templates.imports_ssr if self.config.ssr else templates.imports
        return template.format(
            axios_types_from=self.config.import_axios_types_from,
            request_from=self.config.import_request_from,
        )

    def is_ssr_method(self, method: str) -> bool:
        """
        SSR-варианты по умолчанию только для get: на сервере обычно только
        читают данные. Список методов в ssr включает нужные явно.
        """
        ssr = self.config.ssr

        if not ssr:
            return False

        if isinstance(ssr, (list, tuple, set)):
            return method in ssr

        return method == "get"

    def format_url(self, url: str) -> str:
        """URL шаблона: префиксы и подстановка path-параметров"""
        remove_prefix = self.config.remove_url_prefix

        if remove_prefix and url.startswith(remove_prefix):
            url = url[len(remove_prefix) :]

        def replace(match: re.Match) -> str:
            key = to_safe_prop_key(match.group(1))
            access = f"[{key}]" if key.startswith("'") else f".{key}"
            return "${options.pathParams" + access + "}"

        return (self.config.url_prefix or "") + PATH_PLACEHOLDER.sub(replace, url)

    def create_return_type(self, ref: str) -> Dict[str, str]:
        """
        Тип возврата функции. При custom_response_return_path тип
        ставится в Promise<...> возврата, иначе дженериком вызова.
        """
        path = self.config.custom_response_return_path

        if not path:
            return {"in_apply": f"<{ref}>", "in_return": ""}

        path_ref = "".join(f"['{part}']" for part in path.split(".") if part)
        return {"in_apply": "", "in_return": f": Promise<{ref}{path_ref}>"}

    def create_function(
        self, request_item: RequestItem, scope_tag: str, ssr: bool = False
    ) -> CodeBlock:
        api_ref_prefix = f"API.{self.scope_name}.{scope_tag}.{pascal_case(request_item.name)}"
        is_form_data = request_item.request_body_is_form_data
        has_data = bool(request_item.request_body_type)
        has_query = bool(request_item.request_query_type)

        args = []

        # SSR обязательно получает RequestContext
        if ssr:
            args.append("ctx: RequestContext;")

        if request_item.request_path_type:
            args.append(f"pathParams: {api_ref_prefix}{TYPE_NAME_SUFFIXES['path_params']};")

        if has_data:
            data_ref = api_ref_prefix + TYPE_NAME_SUFFIXES["data"]
            args.append(f"data: {data_ref};" if is_form_data else f"data: Partial<{data_ref}>;")

        if has_query:
            args.append(f"params: Partial<{api_ref_prefix}{TYPE_NAME_SUFFIXES['params']}>;")

        args.append("config?: AxiosRequestConfig")

        url = f"`{self.format_url(request_item.url)}`"
        send_data = has_data and bool(BODY_METHODS.match(request_item.method))
        return_type = self.create_return_type(api_ref_prefix + TYPE_NAME_SUFFIXES["res"])

        if ssr:
            options = [
                "...options.config",
                f"method: '{request_item.method}'",
                f"url: {url}",
                "data: options.data" if send_data else "",
                "params: options.params" if has_query else "",
                FORM_DATA_HEADERS if send_data and is_form_data else "",
            ]
            call = (
                f"requestSSR{return_type['in_apply']}(options.ctx, "
                f"{{ {', '.join(filter(bool, options))} }})"
            )
        else:
            config_parts = [
                "...options.config",
                "params: options.params" if has_query else "",
                FORM_DATA_HEADERS if send_data and is_form_data else "",
            ]
            config_parts = list(filter(bool, config_parts))
            config = (
                "options.config"
                if len(config_parts) == 1
                else f"{{ {', '.join(config_parts)} }}"
            )
            call = (
                f"httpClient.{request_item.method}{return_type['in_apply']}("
                f"{', '.join(filter(bool, [url, 'options.data' if send_data else '', config]))})"
            )

        comment = []
        if request_item.description:
            comment.append(
                f"{'SSR: ' if ssr else ''}{_escape_comment(request_item.description)}"
            )
        if request_item.deprecated:
            comment.append("@deprecated")

        code = "\n/** " + " ".join(comment) + " */" if comment else ""
        code += templates.function.format(
            name=request_item.name + ("SSR" if ssr else ""),
            args=" ".join(args),
            return_type=return_type["in_return"],
            call=call,
        )

        return CodeBlock(code=code)

    def create_type_template(self, name: str, type_str: str, in_response_root: bool = False) -> str:
        """
        interface или type для типа операции.

        Известная схема документа - ссылка на API.<Scope>.<Type>,
        самостоятельная запись - interface, остальное - type.
        """
        if type_str in self.parser.refs:
            type_str = f"API.{self.scope_name}.{type_str}"

        if in_response_root:
            return (
                f"\ntype {name} = API.{self.scope_name}."
                f"{TYPE_NAME_SUFFIXES['res_root']}<{type_str}>\n"
            )

        if is_record_literal(type_str):
            return f"\ninterface {name} {type_str}\n"

        return f"\ntype {name} = {type_str}\n"

    def create_item_types(self, request_item: RequestItem) -> str:
        scope_ref_name = pascal_case(request_item.name)
        template = ""

        if request_item.request_path_type:
            template += self.create_type_template(
                scope_ref_name + TYPE_NAME_SUFFIXES["path_params"],
                request_item.request_path_type,
            )

        if request_item.request_query_type:
            template += self.create_type_template(
                scope_ref_name + TYPE_NAME_SUFFIXES["params"],
                request_item.request_query_type,
            )

        if request_item.request_body_type:
            template += self.create_type_template(
                scope_ref_name + TYPE_NAME_SUFFIXES["data"],
                request_item.request_body_type,
            )

        # Ответ объявляется всегда: на него ссылается функция
        template += self.create_type_template(
            scope_ref_name + TYPE_NAME_SUFFIXES["res"],
            request_item.response_type or "any",
            bool(self.config.response_root_interface),
        )

        return template

    def create_doc_types(self) -> str:
        """Декларации всех схем документа и корневой структуры ответа"""
        response_root = self.config.response_root_interface
        template = ""

        if response_root:
            template += templates.response_root.format(
                name=TYPE_NAME_SUFFIXES["res_root"],
                props="".join(f"  {key}: {value}\n" for key, value in response_root.items()),
            )

        template += self.parser.types_template
        template += self.parser.interfaces_template

        return templates.doc_types.format(scope=self.scope_name, body=template)
