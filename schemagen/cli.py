"""CLI entrypoint for schemagen."""

from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path

from .config import ConfigError, OutputMode, RunConfig, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator, RunReport


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemagen",
        description="Generate JSON Schema documents from documented model sources.",
    )
    parser.add_argument(
        "--source",
        help="Source package root containing package.json and the model directory.",
    )
    parser.add_argument(
        "--source-glob",
        action="append",
        dest="source_globs",
        default=None,
        help="Glob of model files to process (repeatable). Overrides the model directory.",
    )
    parser.add_argument("--dest", help="Directory to write schema documents into.")
    parser.add_argument(
        "--config",
        help="Path to a .schemagen.yml file or the directory holding one (defaults to cwd).",
    )
    parser.add_argument(
        "--minify",
        action="store_true",
        help="Write compact JSON without indentation.",
    )
    parser.add_argument(
        "--editor",
        action="store_true",
        help="Build the collection schema for form editors instead of validation.",
    )
    parser.add_argument(
        "--no-version-subdir",
        action="store_true",
        help="Write straight into --dest rather than a subdirectory named after the version.",
    )
    parser.add_argument("--static-dir", help="Directory of static files to copy alongside.")
    parser.add_argument(
        "--allow-partial",
        action="store_true",
        help="Write the collection schema even when some classes failed.",
    )
    parser.add_argument("--jobs", type=int, help="Number of worker threads.")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _apply_overrides(config: RunConfig, args: argparse.Namespace) -> RunConfig:
    changes: dict[str, object] = {}
    if args.source:
        changes["source"] = Path(args.source)
    if args.source_globs:
        changes["source_globs"] = list(args.source_globs)
    if args.dest:
        changes["dest"] = Path(args.dest)
    if args.minify:
        changes["json_indent"] = None
    if args.editor:
        changes["output_mode"] = OutputMode.EDITOR
    if args.no_version_subdir:
        changes["version_subdir"] = False
    if args.static_dir:
        changes["static_dir"] = Path(args.static_dir)
    if args.allow_partial:
        changes["allow_partial"] = True
    if args.jobs is not None:
        if args.jobs < 1:
            raise ConfigError("--jobs must be a positive integer")
        changes["max_workers"] = args.jobs
    if args.quiet:
        changes["quiet"] = True
    if args.verbose:
        changes["verbose"] = True
    return dataclasses.replace(config, **changes)


def _summarise(report: RunReport) -> str:
    lines = [f"Wrote {len(report.models)} class schema(s) to {report.dest}"]
    for failure in report.failures:
        lines.append(f"  failed: {failure.message}")
    for write_failure in report.write_failures:
        lines.append(f"  not written: {write_failure.path} ({write_failure.error})")
    if not report.collection_written:
        lines.append("  collection schema was not written")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for schema generation."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config) if args.config else Path.cwd())
        config = _apply_overrides(config, args)
    except ConfigError as exc:
        parser.exit(1, f"schemagen: invalid configuration: {exc}\n")

    configure_logging(verbose=config.verbose, quiet=config.quiet)

    try:
        report = Orchestrator(config).run()
    except (ConfigError, FileNotFoundError, ValueError) as exc:
        parser.exit(1, f"schemagen failed: {exc}\nRun with --verbose for more details.\n")

    summary = _summarise(report)
    if not report.complete:
        parser.exit(1, f"{summary}\n")
    if not config.quiet:
        print(summary)


__all__ = ["main"]
