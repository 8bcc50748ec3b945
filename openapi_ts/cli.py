import argparse
import asyncio
import sys

from openapi_ts.builder import build_api
from openapi_ts.config import DEFAULT_CONFIG_FILE, BuildConfig, DocConfig


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript функций запросов и типов из OpenAPI/Swagger"
    )
    parser.add_argument(
        "--config", type=str, default=DEFAULT_CONFIG_FILE, help="Путь к конфигу"
    )
    parser.add_argument("--out-dir", type=str, help="Директория результата")
    parser.add_argument(
        "--init-config", action="store_true", help=f"Создать конфиг {DEFAULT_CONFIG_FILE}"
    )
    parser.add_argument("--name", type=str, help="Имя документа для --init-config")
    parser.add_argument("--link", type=str, help="Ссылка на документ для --init-config")
    return parser


def generate(argv=None):
    """Сборка всех документов из конфига"""
    args = create_parser().parse_args(argv)

    # Инициализация конфига
    if args.init_config:
        config = BuildConfig(
            docs=[DocConfig(name=args.name or "main", link=args.link)],
            out_dir=args.out_dir or "src/apis",
        )
        config.save_to_file(args.config)
        print(f"✅ Создан конфиг файл {args.config}")
        return

    file_config = BuildConfig.from_file(args.config)

    if not file_config:
        print(f"❌ Ошибка: конфиг {args.config} не найден, создайте его с --init-config")
        sys.exit(1)

    final_config = file_config.merge_with_args(args)

    if not final_config.docs:
        print("❌ Ошибка: в конфиге нет ни одного документа")
        sys.exit(1)

    print(f"🚀 Сборка API в {final_config.out_dir}")
    results = asyncio.run(build_api(final_config))

    if any(isinstance(result, BaseException) for result in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    generate()
