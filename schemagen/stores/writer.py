"""Writes generated schema documents and static assets to the output directory."""

from __future__ import annotations

import json
import shutil
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

from ..config import ConfigError
from ..logging import get_logger


@dataclass
class WriteFailure:
    """An output file that could not be written."""

    path: Path
    error: str


def resolve_destination(dest: Path, source: Optional[Path], version_subdir: bool) -> Path:
    """Return the output directory, nested under the source package version when asked."""
    if not version_subdir:
        return dest
    if source is None:
        raise ConfigError("A source directory is required to resolve the version subdirectory")
    package_json = source / "package.json"
    try:
        version = json.loads(package_json.read_text(encoding="utf-8"))["version"]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise ConfigError(f"Couldn't access package version at {package_json} ({exc})") from exc
    return dest / str(version)


class SchemaWriter:
    """Serialises documents as JSON; failures are logged and recorded, never raised."""

    def __init__(self, dest: Path, indent: Optional[int] = 2) -> None:
        self.dest = dest
        self.indent = indent
        self.logger = get_logger("stores.writer")
        self._failures: List[WriteFailure] = []
        self._lock = threading.Lock()

    @property
    def failures(self) -> List[WriteFailure]:
        with self._lock:
            return list(self._failures)

    def prepare(self) -> None:
        """Create the destination directory; its parent must already exist."""
        if self.dest.is_dir():
            return
        if not self.dest.parent.exists():
            raise FileNotFoundError(
                f"Parent directory missing, so unable to create {self.dest}"
            )
        self.dest.mkdir(exist_ok=True)

    def write(self, filename: str, document: Mapping[str, Any]) -> Optional[Path]:
        path = self.dest / filename
        try:
            path.write_text(json.dumps(document, indent=self.indent), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            self._record(path, exc)
            return None
        self.logger.debug("Wrote %s", path)
        return path

    def copy_static(self, source_dir: Path) -> List[Path]:
        """Copy every file in ``source_dir`` into the destination directory."""
        copied: List[Path] = []
        for source in sorted(source_dir.iterdir()):
            if not source.is_file():
                continue
            target = self.dest / source.name
            try:
                shutil.copyfile(source, target)
            except OSError as exc:
                self._record(target, exc)
                continue
            self.logger.info("Copied %s", source.name)
            copied.append(target)
        return copied

    def _record(self, path: Path, exc: Exception) -> None:
        self.logger.error("Failed to write %s: %s", path, exc)
        with self._lock:
            self._failures.append(WriteFailure(path=path, error=str(exc)))


__all__ = ["SchemaWriter", "WriteFailure", "resolve_destination"]
