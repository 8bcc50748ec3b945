"""Работа с файлами результата"""

import os
import shutil


def create_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path


def write_file(path: str, content: str):
    create_dir(os.path.dirname(path) or ".")

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def clean_dir(path: str) -> str:
    """Удаление содержимого директории, сама директория остается"""
    if os.path.isdir(path):
        for entry in os.listdir(path):
            entry_path = os.path.join(path, entry)
            if os.path.isdir(entry_path) and not os.path.islink(entry_path):
                shutil.rmtree(entry_path)
            else:
                os.remove(entry_path)

    return create_dir(path)
