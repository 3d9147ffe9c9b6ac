"""Tests for schemagen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from schemagen.config import ConfigError, FamilyNames, OutputMode, RunConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == RunConfig()
    assert config.output_mode is OutputMode.VALIDATION
    assert config.json_indent == 2
    assert config.version_subdir is True
    assert config.exclude == ["ArcGisMapServerCatalogGroup", "addUserCatalogMember"]


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".schemagen.yml"
    config_file.write_text(
        """
source: "terriajs"
dest: "build/schema"
models:
  dir: "lib/Models"
  globs:
    - "extra/**/*CatalogItem.js"
  exclude: [LegacyCatalogGroup]
families:
  root: Node
  item: Leaf
output:
  mode: editor
  minify: true
  version_subdir: false
  static_dir: "static"
docs:
  jsdoc_json: "jsdoc.json"
run:
  max_workers: 4
  allow_partial: yes
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.source == tmp_path / "terriajs"
    assert config.dest == tmp_path / "build" / "schema"
    assert config.source_globs == ["extra/**/*CatalogItem.js"]
    assert config.exclude == ["LegacyCatalogGroup"]
    assert config.families == FamilyNames(root="Node", item="Leaf", group="CatalogGroup")
    assert config.output_mode is OutputMode.EDITOR
    assert config.json_indent is None
    assert config.version_subdir is False
    assert config.static_dir == tmp_path / "static"
    assert config.jsdoc_json == tmp_path / "jsdoc.json"
    assert config.max_workers == 4
    assert config.allow_partial is True


def test_load_config_from_directory(tmp_path: Path) -> None:
    (tmp_path / ".schemagen.yml").write_text("output:\n  indent: 4\n", encoding="utf-8")

    assert load_config(tmp_path).json_indent == 4


@pytest.mark.parametrize(
    "content",
    [
        "output:\n  mode: fancy\n",
        "output:\n  indent: -1\n",
        "run:\n  max_workers: 0\n",
        "- just\n- a list\n",
        "source: [unclosed\n",
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, content: str) -> None:
    (tmp_path / ".schemagen.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_output_mode_parse_is_case_insensitive() -> None:
    assert OutputMode.parse(" Editor ") is OutputMode.EDITOR
