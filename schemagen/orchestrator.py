"""Pipeline orchestration for a schema derivation run."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .config import RunConfig
from .errors import BrokenInheritanceChain, DuplicateTypeId, SchemaGenError
from .hierarchy import ParentResolver, default_resolvers, find_broken_chains, scan_hierarchy
from .logging import get_logger
from .models import ClassModel
from .parsing import (
    CommentExtractor,
    DocExtractor,
    DocRecord,
    JsdocJsonExtractor,
    ParsedSource,
    find_getter_literal,
    parse_source,
)
from .schema import (
    ComposedSchema,
    build_collection_schema,
    compose,
    find_class_record,
    find_class_tag,
    find_duplicate_type_ids,
    load_own_properties,
    resolve_property,
)
from .schema.constants import COLLECTION_FILENAME, schema_filename, shell_filename
from .source_scanner import locate_model_files
from .stores import SchemaWriter, WriteFailure
from .stores.writer import resolve_destination


@dataclass
class ClassFailure:
    """A class whose derivation failed, with enough context to diagnose it."""

    class_name: str
    source_path: Path
    error: Exception

    @property
    def message(self) -> str:
        return f"{self.class_name} ({self.source_path}): {self.error}"


@dataclass
class ClassResult:
    """Outcome of deriving one class: a model and its documents, or a failure."""

    path: Path
    model: Optional[ClassModel] = None
    composed: Optional[ComposedSchema] = None
    failure: Optional[ClassFailure] = None


@dataclass
class RunReport:
    """Summary of a run, telling the caller whether the output set is whole."""

    dest: Path
    models: List[ClassModel] = field(default_factory=list)
    failures: List[ClassFailure] = field(default_factory=list)
    write_failures: List[WriteFailure] = field(default_factory=list)
    collection_written: bool = False

    @property
    def complete(self) -> bool:
        return not self.failures and not self.write_failures and self.collection_written


class Orchestrator:
    """Runs per-class derivation concurrently, then builds the collection schema."""

    def __init__(
        self,
        config: RunConfig,
        extractor: DocExtractor | None = None,
        resolvers: Optional[Iterable[ParentResolver]] = None,
    ) -> None:
        self.config = config
        if extractor is None:
            extractor = (
                JsdocJsonExtractor(config.jsdoc_json)
                if config.jsdoc_json is not None
                else CommentExtractor()
            )
        self.extractor = extractor
        self.resolvers = (
            list(resolvers) if resolvers is not None else default_resolvers(config.families)
        )
        self.logger = get_logger("orchestrator")

    def run(self) -> RunReport:
        """Derive every model file, write its documents, then write the collection."""
        config = self.config
        dest = resolve_destination(config.dest, config.source, config.version_subdir)
        writer = SchemaWriter(dest, indent=config.json_indent)
        writer.prepare()
        self.logger.info("Writing schema to: %s", dest)

        files = locate_model_files(config)
        self.logger.debug("Located %d model files", len(files))

        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            results = list(pool.map(lambda path: self._derive_and_write(path, writer), files))

        report = RunReport(dest=dest)
        for result in results:
            if result.failure is not None:
                report.failures.append(result.failure)
            elif result.model is not None:
                report.models.append(result.model)

        duplicates = find_duplicate_type_ids(report.models)
        if duplicates:
            error = DuplicateTypeId(duplicates)
            self.logger.error("%s", error)
            claimed = {name for names in duplicates.values() for name in names}
            for model in report.models:
                if model.name in claimed:
                    report.failures.append(
                        ClassFailure(model.name, model.source_path or Path(model.name), error)
                    )

        failed = {failure.class_name for failure in report.failures}
        survivors = {model.name: model for model in report.models if model.name not in failed}
        broken = find_broken_chains(
            {name: model.parent_name for name, model in survivors.items()},
            config.families,
            failed,
        )
        for name, reason in sorted(broken.items()):
            source_path = survivors[name].source_path or Path(name)
            failure = ClassFailure(name, source_path, BrokenInheritanceChain(name, reason))
            self.logger.error("Error processing %s", failure.message)
            report.failures.append(failure)
        failed.update(broken)

        if failed and not config.allow_partial:
            self.logger.error(
                "Not writing %s: %d class(es) failed: %s",
                COLLECTION_FILENAME,
                len(failed),
                ", ".join(sorted(failed)),
            )
        else:
            if failed:
                self.logger.warning(
                    "Writing %s without failed classes: %s",
                    COLLECTION_FILENAME,
                    ", ".join(sorted(failed)),
                )
            eligible = [model for model in report.models if model.name not in failed]
            collection = build_collection_schema(eligible, config.output_mode, config.families)
            report.collection_written = writer.write(COLLECTION_FILENAME, collection) is not None

        if config.static_dir is not None:
            writer.copy_static(config.static_dir)

        report.write_failures = writer.failures
        return report

    def derive_class(self, path: Path) -> ClassResult:
        """Scan, load, resolve and compose one model file."""
        try:
            parsed = parse_source(path)
            records = self.extractor.extract(parsed)
            model = self.build_model(parsed, records)
            composed = compose(
                model,
                [resolve_property(annotation) for annotation in model.own_properties],
                self.config.families,
            )
        except (SchemaGenError, OSError, UnicodeDecodeError, ValueError) as exc:
            failure = ClassFailure(class_name=path.stem, source_path=path, error=exc)
            self.logger.error("Error processing %s", failure.message)
            return ClassResult(path=path, failure=failure)

        if model.type_id is None:
            # Intermediate classes such as ImageryLayerCatalogItem have no concrete type.
            self.logger.info("(%s has no type ID)", model.name)
        self.logger.info("%-31s%s", model.name, " ".join(composed.schema["properties"]))
        return ClassResult(path=path, model=model, composed=composed)

    def build_model(self, parsed: ParsedSource, records: List[DocRecord]) -> ClassModel:
        link = scan_hierarchy(parsed.text, parsed.path, self.config.families, self.resolvers)
        class_record = find_class_record(records, parsed.class_name)
        doc_name = class_record.name
        return ClassModel(
            name=parsed.class_name,
            parent_name=link.parent_name,
            inherits_at_line=link.inherits_at_line,
            own_properties=tuple(load_own_properties(records, doc_name, link.inherits_at_line)),
            type_id=find_getter_literal(parsed, "type"),
            type_name=find_getter_literal(parsed, "typeName"),
            source_path=parsed.path,
            doc_name=doc_name,
            editor_title=find_class_tag(records, doc_name, "editortitle"),
            editor_description=find_class_tag(records, doc_name, "editordescription", "description"),
        )

    def _derive_and_write(self, path: Path, writer: SchemaWriter) -> ClassResult:
        result = self.derive_class(path)
        if result.composed is not None:
            writer.write(schema_filename(result.composed.class_name), result.composed.schema)
            if result.composed.shell is not None:
                writer.write(shell_filename(result.composed.class_name), result.composed.shell)
        return result


__all__ = ["ClassFailure", "ClassResult", "Orchestrator", "RunReport"]
