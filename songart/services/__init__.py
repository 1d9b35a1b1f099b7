from .assets import FileSystemAssets, InMemoryAssets
from .background import hue_for_date, parse_background_descriptor, resolve_background
from .batch import BatchRenderer
from .catalog import load_catalog
from .layer_resolver import build_layer_spec
from .slug import slugify

__all__ = [
    "BatchRenderer",
    "FileSystemAssets",
    "InMemoryAssets",
    "build_layer_spec",
    "hue_for_date",
    "load_catalog",
    "parse_background_descriptor",
    "resolve_background",
    "slugify",
]
