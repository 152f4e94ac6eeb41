"""
Any class decorated with @analyzer(".ext", ...) is added to the dispatch
table in registration order. All submodules of this package are imported
below, so an analyzer becomes available simply by living here.
"""

import importlib
import pathlib
import pkgutil
from typing import List, Tuple, Type

from abc_metrics.errors import PathLike, UnsupportedFileError

registry: List[Tuple[Tuple[str, ...], Type]] = []


def analyzer(*extensions: str):
    def wrapper(cls: Type):
        cls.extensions = tuple(extensions)
        registry.append((cls.extensions, cls))
        return cls

    return wrapper


def has_extension(file_path: PathLike, extension: str) -> bool:
    return str(file_path).endswith(extension)


def find_analyzer_class(file_path: PathLike):
    for extensions, cls in registry:
        if any(has_extension(file_path, ext) for ext in extensions):
            return cls
    return None


def is_supported(file_path: PathLike) -> bool:
    return find_analyzer_class(file_path) is not None


def get_analyzer_for_file(file_path: PathLike):
    """First registered analyzer whose extension matches, else UnsupportedFileError."""
    cls = find_analyzer_class(file_path)
    if cls is None:
        raise UnsupportedFileError(file_path)
    return cls()


_pkg_path = pathlib.Path(__file__).parent
for m in pkgutil.iter_modules([str(_pkg_path)]):
    if m.name != "__init__":
        importlib.import_module(f"{__name__}.{m.name}")
