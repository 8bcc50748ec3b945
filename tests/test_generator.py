"""
Тесты генерации функций запросов и деклараций типов
"""

import pytest

from openapi_ts.config import DocConfig
from openapi_ts.generator import ApiTypesGenerator, generate_types


def user_doc(paths=None):
    return {
        "openapi": "3.0.0",
        "info": {"title": "Test API", "version": "1.0.0"},
        "components": {
            "schemas": {"User": {"type": "object", "properties": {"name": {"type": "string"}}}}
        },
        "paths": paths
        or {
            "/users/{id}": {
                "get": {
                    "operationId": "getUsers",
                    "description": "Пользователь",
                    "parameters": [
                        {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}}
                    ],
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {"schema": {"$ref": "#/components/schemas/User"}}
                            }
                        }
                    },
                }
            }
        },
    }


async def generate_files(doc, **options):
    project = await generate_types(doc, DocConfig(**options))
    return {code_file.file_name: str(code_file) for code_file in project.files}


class TestProjectFiles:
    """Тесты состава файлов"""

    @pytest.mark.asyncio
    async def test_files_per_tag(self):
        """Тест файлов для каждого тега и общего файла типов"""
        doc = user_doc(
            paths={
                "/articles": {"get": {"tags": ["Blog Article"]}},
                "/health": {"get": {}},
            }
        )
        files = await generate_files(doc, name="Pet Store")

        assert sorted(files) == [
            "blog-article/index.ts",
            "blog-article/types.d.ts",
            "main/index.ts",
            "main/types.d.ts",
            "pet-store-types.d.ts",
        ]
        assert "namespace PetStore {\nnamespace BlogArticle {" in files["blog-article/types.d.ts"]

    @pytest.mark.asyncio
    async def test_generator_class(self):
        """Тест ApiTypesGenerator с конфигом по умолчанию"""
        project = await ApiTypesGenerator(user_doc()).generate()

        assert project.name == "main"
        assert [code_file.file_name for code_file in project.files] == [
            "main/index.ts",
            "main/types.d.ts",
            "main-types.d.ts",
        ]

    @pytest.mark.asyncio
    async def test_non_ascii_tags_and_schemas(self):
        """Тест: теги и схемы не на латинице дают отдельные файлы и декларации"""
        doc = {
            "openapi": "3.0.0",
            "info": {"title": "Shop", "version": "1.0.0"},
            "components": {
                "schemas": {
                    "用户": {"type": "object", "properties": {"id": {"type": "integer"}}},
                    "订单": {"type": "object", "properties": {"id": {"type": "integer"}}},
                }
            },
            "paths": {
                "/users": {
                    "get": {
                        "tags": ["用户"],
                        "responses": {"200": {"content": {"application/json": {"schema": {
                            "$ref": "#/components/schemas/用户"}}}}},
                    }
                },
                "/orders": {
                    "get": {
                        "tags": ["订单"],
                        "responses": {"200": {"content": {"application/json": {"schema": {
                            "$ref": "#/components/schemas/订单"}}}}},
                    }
                },
            },
        }
        files = await generate_files(doc, name="shop")

        assert sorted(files) == sorted(
            [
                "用户/index.ts",
                "用户/types.d.ts",
                "订单/index.ts",
                "订单/types.d.ts",
                "shop-types.d.ts",
            ]
        )
        assert "namespace Shop {\nnamespace 用户 {" in files["用户/types.d.ts"]
        assert "\ntype GetUsersResponse = API.Shop.用户\n" in files["用户/types.d.ts"]
        assert "httpClient.get<API.Shop.订单.GetOrdersResponse>(`/orders`" in files["订单/index.ts"]
        assert "\ninterface 用户 {\n  id: number\n}\n" in files["shop-types.d.ts"]
        assert "\ninterface 订单 {\n  id: number\n}\n" in files["shop-types.d.ts"]


class TestFunctions:
    """Тесты функций запросов"""

    @pytest.mark.asyncio
    async def test_get_with_path_params(self):
        """Тест GET с path параметром"""
        files = await generate_files(user_doc())

        assert files["main/index.ts"] == (
            "import type { AxiosRequestConfig } from 'axios'\n"
            "import { httpClient } from '@/utils/request'\n"
            "\n"
            "\n/** Пользователь */"
            "\nexport function getUsers(options: { pathParams: API.Main.Main.GetUsersPathParams; "
            "config?: AxiosRequestConfig }) {\n"
            "  return httpClient.get<API.Main.Main.GetUsersResponse>"
            "(`/users/${options.pathParams.id}`, options.config)\n"
            "}\n"
        )

    @pytest.mark.asyncio
    async def test_import_sources(self):
        """Тест источников импорта"""
        files = await generate_files(
            user_doc(), import_request_from="~/http", import_axios_types_from="axios-lite"
        )

        assert "import type { AxiosRequestConfig } from 'axios-lite'" in files["main/index.ts"]
        assert "import { httpClient } from '~/http'" in files["main/index.ts"]

    @pytest.mark.asyncio
    async def test_body_sent_only_for_post_put_patch(self):
        """Тест: тело передается только для post / put / patch"""
        body = {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/User"}}}}
        doc = user_doc(
            paths={
                "/users": {
                    "post": {"requestBody": body},
                    "delete": {"requestBody": body},
                }
            }
        )
        code = (await generate_files(doc))["main/index.ts"]

        assert "data: Partial<API.Main.Main.PostUsersRequest>;" in code
        assert (
            "httpClient.post<API.Main.Main.PostUsersResponse>(`/users`, options.data, options.config)"
            in code
        )
        assert "data: Partial<API.Main.Main.DeleteUsersRequest>;" in code
        assert "httpClient.delete<API.Main.Main.DeleteUsersResponse>(`/users`, options.config)" in code

    @pytest.mark.asyncio
    async def test_query_params(self):
        """Тест query параметров"""
        doc = user_doc(
            paths={
                "/search": {
                    "get": {"parameters": [{"name": "q", "in": "query", "schema": {"type": "string"}}]}
                }
            }
        )
        code = (await generate_files(doc))["main/index.ts"]

        assert "params: Partial<API.Main.Main.GetSearchParams>; config?: AxiosRequestConfig" in code
        assert (
            "httpClient.get<API.Main.Main.GetSearchResponse>"
            "(`/search`, { ...options.config, params: options.params })" in code
        )

    @pytest.mark.asyncio
    async def test_form_data(self):
        """Тест form-data: тип без Partial и заголовок multipart"""
        doc = {
            "swagger": "2.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {
                "/upload": {
                    "post": {
                        "parameters": [{"name": "file", "in": "formData", "type": "file"}],
                    }
                }
            },
        }
        files = await generate_files(doc)
        code = files["main/index.ts"]

        assert "data: API.Main.Main.PostUploadRequest;" in code
        assert (
            "(`/upload`, options.data, { ...options.config, headers: "
            "{ ...options.config?.headers, 'Content-Type': 'multipart/form-data' } })" in code
        )
        assert (
            "\ntype PostUploadRequest = FormData | {\n  file: File\n}\n"
            in files["main/types.d.ts"]
        )

    @pytest.mark.asyncio
    async def test_url_prefixes(self):
        """Тест префиксов URL"""
        doc = user_doc(paths={"/api/files/{file-id}": {"get": {"operationId": "getFile"}}})
        code = (await generate_files(doc, remove_url_prefix="/api", url_prefix="/v2"))["main/index.ts"]

        assert "(`/v2/files/${options.pathParams['file-id']}`, options.config)" in code

    @pytest.mark.asyncio
    async def test_deprecated_comment(self):
        """Тест комментария deprecated"""
        doc = user_doc(paths={"/old": {"get": {"deprecated": True, "summary": "Старый"}}})
        code = (await generate_files(doc))["main/index.ts"]

        assert "\n/** Старый @deprecated */\nexport function getOld(" in code

    @pytest.mark.asyncio
    async def test_custom_response_return_path(self):
        """Тест типа возврата по пути внутри ответа"""
        code = (await generate_files(user_doc(), custom_response_return_path="data.list"))[
            "main/index.ts"
        ]

        assert "config?: AxiosRequestConfig }): Promise<API.Main.Main.GetUsersResponse['data']['list']> {" in code
        assert "return httpClient.get(`/users/${options.pathParams.id}`, options.config)" in code


class TestSSR:
    """Тесты SSR-вариантов функций"""

    @pytest.mark.asyncio
    async def test_ssr_only_for_get_by_default(self):
        """Тест: при ssr=True вариант создается только для get"""
        body = {"content": {"application/json": {"schema": {"type": "string"}}}}
        doc = user_doc()
        doc["paths"]["/users"] = {"post": {"requestBody": body}}
        code = (await generate_files(doc, ssr=True))["main/index.ts"]

        assert "import type { RequestContext } from '@/utils/request'" in code
        assert "import { httpClient, requestSSR } from '@/utils/request'" in code
        assert "/** SSR: Пользователь */" in code
        assert (
            "export function getUsersSSR(options: { ctx: RequestContext; "
            "pathParams: API.Main.Main.GetUsersPathParams; config?: AxiosRequestConfig }) {\n"
            "  return requestSSR<API.Main.Main.GetUsersResponse>(options.ctx, "
            "{ ...options.config, method: 'get', url: `/users/${options.pathParams.id}` })\n"
        ) in code
        assert "postUsersSSR" not in code

        # SSR-варианты идут после обычных функций
        assert code.index("function postUsers(") < code.index("function getUsersSSR(")

    @pytest.mark.asyncio
    async def test_ssr_methods_list(self):
        """Тест явного списка методов SSR"""
        body = {"content": {"application/json": {"schema": {"type": "string"}}}}
        doc = user_doc()
        doc["paths"]["/users"] = {"post": {"requestBody": body}}
        code = (await generate_files(doc, ssr=["post"]))["main/index.ts"]

        assert "getUsersSSR" not in code
        assert (
            "requestSSR<API.Main.Main.PostUsersResponse>(options.ctx, "
            "{ ...options.config, method: 'post', url: `/users`, data: options.data })" in code
        )


class TestDeclarations:
    """Тесты файлов деклараций"""

    @pytest.mark.asyncio
    async def test_group_types(self):
        """Тест деклараций группы"""
        files = await generate_files(user_doc())

        assert files["main/types.d.ts"] == (
            "declare namespace API {\n"
            "namespace Main {\n"
            "namespace Main {\n"
            "\ninterface GetUsersPathParams {\n  id: number\n}\n"
            "\ntype GetUsersResponse = API.Main.User\n"
            "\n}}}\n"
        )

    @pytest.mark.asyncio
    async def test_doc_types(self):
        """Тест общего файла схем документа"""
        files = await generate_files(user_doc())

        assert files["main-types.d.ts"] == (
            "declare namespace API {\n"
            "namespace Main {\n"
            "\n"
            "\ninterface User {\n  name: string\n}\n"
            "\n}}\n"
        )

    @pytest.mark.asyncio
    async def test_response_without_schema_is_any(self):
        """Тест: тип ответа объявляется и без схемы"""
        doc = user_doc(paths={"/ping": {"get": {"responses": {"204": {}}}}})
        files = await generate_files(doc)

        assert "\ntype GetPingResponse = any\n" in files["main/types.d.ts"]

    @pytest.mark.asyncio
    async def test_response_root_interface(self):
        """Тест корневой структуры ответа"""
        files = await generate_files(
            user_doc(), response_root_interface={"code": "number", "data": "T"}
        )

        assert (
            "\ntype GetUsersResponse = API.Main.ResponseROOT<API.Main.User>\n"
            in files["main/types.d.ts"]
        )
        assert "interface ResponseROOT<T> {\n  code: number\n  data: T\n}\n" in files["main-types.d.ts"]

    @pytest.mark.asyncio
    async def test_formatter(self):
        """Тест внешнего форматтера деклараций"""
        files = await generate_files(user_doc(), formatter=lambda text: text.replace("  ", "    "))

        assert "interface GetUsersPathParams {\n    id: number\n}" in files["main/types.d.ts"]

    @pytest.mark.asyncio
    async def test_manual_types(self):
        """Тест ручных типов операции"""
        files = await generate_files(
            user_doc(),
            manual_types={
                "/users/{id}": {
                    "get": {"response_type": {"id": 1, "tags": ["a"]}, "request_query_type": "{ q: string }"}
                }
            },
        )

        assert "\ninterface GetUsersResponse {id: number;tags: string[];}\n" in files["main/types.d.ts"]
        assert "\ninterface GetUsersParams { q: string }\n" in files["main/types.d.ts"]
        assert "params: Partial<API.Main.Main.GetUsersParams>;" in files["main/index.ts"]
