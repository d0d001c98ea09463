"""Field type source loading.

A source is either a :class:`Field` subclass or a locator string:

- ``"package.module:ClassName"`` — imported with :mod:`importlib`.
- ``"path/to/fields.py:ClassName"`` — the file is loaded as a module.
- ``"path/to/fields.py"`` — the file is loaded and the last Field subclass
  it defines is used.

INVARIANT: loading never raises. Failures are logged and return None.
"""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

from attachments.domain.field_types import FieldTypeSource
from attachments.domain.fields import Field

logger = logging.getLogger(__name__)

_MODULE_PREFIX = "attachments_field_source_"


def load_field_type(source: FieldTypeSource, *, base_dir: Path | None = None) -> type[Field] | None:
    """Resolve *source* to a Field subclass, or None if it cannot be loaded.

    Relative file paths are resolved against *base_dir* (default: CWD).
    """
    if inspect.isclass(source):
        if issubclass(source, Field):
            return source
        logger.warning("Field type source %r is not a Field subclass", source)
        return None

    if not isinstance(source, str) or not source.strip():
        logger.warning("Invalid field type source %r", source)
        return None

    locator = source.strip()
    target, _, class_name = locator.rpartition(":")
    if not target or not class_name.isidentifier():
        # No class suffix; a drive letter colon belongs to the path.
        target, class_name = locator, ""

    if _looks_like_path(target):
        module = _load_file(_resolve_path(target, base_dir))
    else:
        module = _import_module(target)
    if module is None:
        return None

    if class_name:
        obj = getattr(module, class_name, None)
    else:
        obj = _last_field_class(module)

    if not (inspect.isclass(obj) and issubclass(obj, Field)):
        logger.warning("Field type source %r does not provide a Field subclass", source)
        return None
    return obj


def _looks_like_path(target: str) -> bool:
    return target.endswith(".py") or "/" in target or "\\" in target


def _resolve_path(target: str, base_dir: Path | None) -> Path:
    path = Path(target).expanduser()
    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path
    return path


def _import_module(dotted: str) -> ModuleType | None:
    try:
        return importlib.import_module(dotted)
    except Exception:
        logger.warning("Failed to import field type module %s", dotted, exc_info=True)
        return None


def _load_file(path: Path) -> ModuleType | None:
    if not path.is_file():
        logger.warning("Field type source not found: %s", path)
        return None

    module_name = f"{_MODULE_PREFIX}{path.stem}"
    try:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            logger.warning("Could not create module spec for %s", path)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load field type source %s", path, exc_info=True)
        sys.modules.pop(module_name, None)
        return None
    return module


def _last_field_class(module: ModuleType) -> type[Field] | None:
    """Return the last Field subclass defined (not imported) in *module*."""
    found: type[Field] | None = None
    for obj in vars(module).values():
        if not inspect.isclass(obj) or obj.__module__ != module.__name__:
            continue
        if issubclass(obj, Field) and not inspect.isabstract(obj):
            found = obj
    return found
