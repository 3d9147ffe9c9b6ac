"""Configuration loading for schemagen (.schemagen.yml)."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".schemagen.yml"

DEFAULT_EXCLUDE = ("ArcGisMapServerCatalogGroup", "addUserCatalogMember")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class OutputMode(enum.Enum):
    """How the collection schema composes its per-type alternatives."""

    EDITOR = "editor"
    VALIDATION = "validation"

    @classmethod
    def parse(cls, value: str) -> "OutputMode":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(mode.value for mode in cls)
            raise ConfigError(f"Unknown output mode '{value}' (expected one of: {choices})") from exc


@dataclass(frozen=True)
class FamilyNames:
    """Names of the root class and the two abstract entity families."""

    root: str = "CatalogMember"
    item: str = "CatalogItem"
    group: str = "CatalogGroup"

    def all(self) -> tuple[str, str, str]:
        return (self.root, self.item, self.group)


@dataclass
class RunConfig:
    """Settings for one derivation run, passed explicitly to each component."""

    source: Optional[Path] = None
    source_globs: List[str] = field(default_factory=list)
    dest: Path = Path("out")
    models_dir: str = "lib/Models"
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    families: FamilyNames = field(default_factory=FamilyNames)
    output_mode: OutputMode = OutputMode.VALIDATION
    json_indent: Optional[int] = 2
    version_subdir: bool = True
    static_dir: Optional[Path] = None
    jsdoc_json: Optional[Path] = None
    max_workers: Optional[int] = None
    allow_partial: bool = False
    quiet: bool = False
    verbose: bool = False


def load_config(config_path: Path) -> RunConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RunConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = RunConfig()

    source = _as_str(data.get("source"))
    if source:
        config.source = root / source
    dest = _as_str(data.get("dest"))
    if dest:
        config.dest = root / dest

    models_data = _as_dict(data.get("models"))
    if models_data:
        models_dir = _as_str(models_data.get("dir"))
        if models_dir:
            config.models_dir = models_dir
        config.source_globs = _as_str_list(models_data.get("globs"))
        if "exclude" in models_data:
            config.exclude = _as_str_list(models_data.get("exclude"))

    families_data = _as_dict(data.get("families"))
    if families_data:
        defaults = FamilyNames()
        config.families = FamilyNames(
            root=_as_str(families_data.get("root")) or defaults.root,
            item=_as_str(families_data.get("item")) or defaults.item,
            group=_as_str(families_data.get("group")) or defaults.group,
        )

    output_data = _as_dict(data.get("output"))
    if output_data:
        mode = _as_str(output_data.get("mode"))
        if mode:
            config.output_mode = OutputMode.parse(mode)
        if "indent" in output_data:
            indent = _as_int(output_data.get("indent"))
            if indent is None or indent < 0:
                raise ConfigError("output.indent must be a non-negative integer")
            config.json_indent = indent
        if _as_bool(output_data.get("minify")):
            config.json_indent = None
        version_subdir = _as_bool(output_data.get("version_subdir"))
        if version_subdir is not None:
            config.version_subdir = version_subdir
        static_dir = _as_str(output_data.get("static_dir"))
        if static_dir:
            config.static_dir = root / static_dir

    docs_data = _as_dict(data.get("docs"))
    jsdoc_json = _as_str(docs_data.get("jsdoc_json")) if docs_data else None
    if jsdoc_json:
        config.jsdoc_json = root / jsdoc_json

    run_data = _as_dict(data.get("run"))
    if run_data:
        if "max_workers" in run_data:
            workers = _as_int(run_data.get("max_workers"))
            if workers is None or workers < 1:
                raise ConfigError("run.max_workers must be a positive integer")
            config.max_workers = workers
        config.allow_partial = _as_bool(run_data.get("allow_partial")) or False

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "FamilyNames",
    "OutputMode",
    "RunConfig",
    "load_config",
]
