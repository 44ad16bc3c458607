"""Config files and transformer modules.

A config file is a Python module defining `CONFIG`, a mapping of target
names to options::

    CONFIG = {
        "petstore": {
            "file": "petstore.yaml",
            "output": "petstore.ts",
            "custom_import": "import { HttpClient } from './Http'",
            "custom_generator": http_generator,
        },
    }

Relative `file` and `output` paths are resolved against the config file.
"""

from __future__ import annotations

import importlib.util
from dataclasses import dataclass, fields
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from oats_generator.shared.errors import ConfigError

SOURCE_KEYS = ("file", "url", "github")


@dataclass(frozen=True, slots=True)
class TargetConfig:
    """One generation target of a config file."""

    name: str
    output: Path
    file: Path | None = None
    url: str | None = None
    github: str | None = None
    transformer: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    validation: bool = False
    custom_import: str | None = None
    custom_generator: Callable[..., str] | None = None
    custom_generator_wrap: Callable[[str], str] | None = None
    custom_operation_name_generator: Callable[..., str] | None = None


_OPTION_KEYS = frozenset(f.name for f in fields(TargetConfig)) - {"name"}
_CALLABLE_KEYS = (
    "transformer",
    "custom_generator",
    "custom_generator_wrap",
    "custom_operation_name_generator",
)


def load_module(path: Path, module_name: str) -> ModuleType:
    """Import a Python file as a module."""
    if not path.is_file():
        raise ConfigError(f"File '{path}' does not exist")
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import '{path}' as a Python module")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _target(name: str, options: Any, base: Path) -> TargetConfig:
    where = f"target '{name}'"
    if not isinstance(options, dict):
        raise ConfigError(f"{where}: options must be a mapping")

    unknown = sorted(set(options) - _OPTION_KEYS)
    if unknown:
        raise ConfigError(f"{where}: unknown option(s) {', '.join(unknown)}")

    sources = [key for key in SOURCE_KEYS if options.get(key)]
    if len(sources) != 1:
        raise ConfigError(f"{where}: exactly one of {', '.join(SOURCE_KEYS)} is required")
    if not options.get("output"):
        raise ConfigError(f"{where}: 'output' is required")

    for key in _CALLABLE_KEYS:
        if options.get(key) is not None and not callable(options[key]):
            raise ConfigError(f"{where}: '{key}' must be callable")

    values = dict(options)
    values["output"] = base / options["output"]
    if options.get("file"):
        values["file"] = base / options["file"]
    values["validation"] = bool(options.get("validation", False))
    return TargetConfig(name=name, **values)


def load_config(path: Path) -> dict[str, TargetConfig]:
    """Load the targets of a config file.

    Raises:
        ConfigError: If the file is missing, has no `CONFIG` mapping, or a
            target is invalid.
    """
    module = load_module(path, "oats_generator_config")
    config = getattr(module, "CONFIG", None)
    if not isinstance(config, dict):
        raise ConfigError(f"Config file '{path}' must define a CONFIG mapping")

    base = path.resolve().parent
    return {name: _target(name, options, base) for name, options in config.items()}


def load_transformer(path: Path) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Load the `transform(spec)` function of a transformer module."""
    module = load_module(path, "oats_generator_transformer")
    transform = getattr(module, "transform", None)
    if not callable(transform):
        raise ConfigError(f"Transformer '{path}' must define a transform(spec) function")
    return transform
