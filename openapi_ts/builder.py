"""
Сборка: загрузка документов, генерация и запись результата
"""

import asyncio
import json
import os
from typing import Any, Dict, List, Optional, Union

import httpx
import yaml

from .config import BuildConfig, DocConfig
from .generator import ApiTypesGenerator
from .internal.types.models import Project
from .internal.utils.fs import clean_dir, create_dir, write_file
from .internal.utils.naming import kebab_case


def load_document(text: str) -> Dict[str, Any]:
    """JSON или YAML документ в словарь"""
    try:
        doc = json.loads(text)
    except ValueError:
        doc = yaml.safe_load(text)

    if not isinstance(doc, dict):
        raise ValueError("Документ API должен быть объектом")

    return doc


async def fetch_doc(
    name: str, link: str, client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """Загрузка документа по ссылке или из локального файла"""
    print(f"📥 [api/{name}] Загрузка документа...")

    if os.path.exists(link):
        with open(link, "r", encoding="utf-8") as f:
            return load_document(f.read())

    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await fetch_doc(name, link, own_client)

    response = await client.get(link)
    response.raise_for_status()

    return load_document(response.text)


def save_project(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    for code_model in project.files:
        write_file(os.path.join(target_path, code_model.file_name), str(code_model))


async def build_doc(
    out_dir: str, doc_config: DocConfig, client: Optional[httpx.AsyncClient] = None
) -> Project:
    """Загрузка, генерация и запись одного документа"""
    if not doc_config.name:
        raise ValueError("Не указано имя документа (name)")

    if not doc_config.link:
        raise ValueError(f"[api/{doc_config.name}] Не указана ссылка на документ")

    scope_out_dir = create_dir(os.path.join(out_dir, kebab_case(doc_config.name)))

    doc = await fetch_doc(doc_config.name, doc_config.link, client)

    print(f"⚙️ [api/{doc_config.name}] Генерация кода...")
    project = await ApiTypesGenerator(doc, doc_config).generate()

    save_project(project, scope_out_dir)

    # Копия документа для локальной отладки
    write_file(
        os.path.join(scope_out_dir, "_doc.json"),
        json.dumps(doc, indent=2, ensure_ascii=False, default=str),
    )

    print(f"✅ [api/{doc_config.name}] Сборка завершена, файлов: {len(project.files)}")
    return project


async def build_api(
    config: BuildConfig, client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Union[Project, BaseException]]:
    """
    Сборка всех документов конфигурации.

    Документы обрабатываются конкурентно и независимо: ошибка одного
    не прерывает остальные и возвращается в результате вместо Project.
    """
    out_dir = clean_dir(os.path.join(os.getcwd(), config.out_dir))

    docs: List[DocConfig] = []
    for doc_config in config.docs:
        if not doc_config.link:
            print(f"❌ [api/{doc_config.name}] Сначала укажите ссылку на документ")
            continue
        docs.append(doc_config)

    async def run(http_client: httpx.AsyncClient):
        return await asyncio.gather(
            *(build_doc(out_dir, doc_config, http_client) for doc_config in docs),
            return_exceptions=True,
        )

    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            results = await run(own_client)
    else:
        results = await run(client)

    for doc_config, result in zip(docs, results):
        if isinstance(result, BaseException):
            print(f"❌ [api/{doc_config.name}] Ошибка генерации: {result}")

    return {doc_config.name: result for doc_config, result in zip(docs, results)}
