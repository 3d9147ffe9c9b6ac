"""Locating the model source files a run derives schemas from."""

from __future__ import annotations

import glob
import re
from pathlib import Path
from typing import List, Sequence

from .config import FamilyNames, RunConfig


def schemable_pattern(families: FamilyNames) -> re.Pattern[str]:
    suffixes = "|".join(re.escape(name) for name in families.all())
    return re.compile(rf"({suffixes})\.js$")


def is_schemable(filename: str, families: FamilyNames, exclude: Sequence[str]) -> bool:
    """Return True for model files named after a family that are not excluded shims."""
    if not schemable_pattern(families).search(filename):
        return False
    return not any(name in filename for name in exclude)


def locate_model_files(config: RunConfig) -> List[Path]:
    """Return the model files to process, sorted for a stable run order."""
    if config.source_globs:
        found = set()
        for pattern in config.source_globs:
            found.update(Path(match) for match in glob.glob(pattern, recursive=True))
        return sorted(path for path in found if path.is_file())

    if config.source is None:
        raise ValueError("Either a source directory or source globs are required")
    models_dir = config.source / config.models_dir
    if not models_dir.is_dir():
        raise FileNotFoundError(f"Model directory not found: {models_dir}")
    return sorted(
        path
        for path in models_dir.iterdir()
        if path.is_file() and is_schemable(path.name, config.families, config.exclude)
    )


__all__ = ["is_schemable", "locate_model_files", "schemable_pattern"]
