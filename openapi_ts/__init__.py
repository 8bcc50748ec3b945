from .config import BuildConfig, DocConfig
from .generator import ApiTypesGenerator, generate_types
from .builder import build_api, build_doc, fetch_doc

__all__ = [
    "BuildConfig",
    "DocConfig",
    "ApiTypesGenerator",
    "generate_types",
    "build_api",
    "build_doc",
    "fetch_doc",
]
