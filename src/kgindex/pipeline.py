import logging
from pathlib import Path

from .engine import build_index
from .projection import project_index
from .qualifiers import resolve_qualifiers
from .reader import load_entities, load_properties, load_redirects
from .report import build_summary, validate_coverage, write_summary
from .schema import KnowledgeBaseSchema
from .writer import write_index, write_inverses, write_prefixes, write_redirects

logger = logging.getLogger(__name__)

KINDS = ("entities", "properties")


def load_records(kind, path, schema, options, redirects_path=None):
    """Parse the dump and run the qualifier pre-pass; returns {id: Record}."""
    if kind == "properties":
        return load_properties(path, schema, show_progress=options.progress)
    records = load_entities(path, schema, ignore_types=options.ignore_types, show_progress=options.progress)
    redirects = load_redirects(redirects_path, schema, show_progress=options.progress) if redirects_path else None
    return resolve_qualifiers(records, ignore_types=options.ignore_types, redirects=redirects)


def run(kind, path, out_dir, knowledge_base, options, redirects_path=None, language=None):
    """Build and write the index for one dump; returns the CoverageReport."""
    if kind not in KINDS:
        raise ValueError(f"Unknown kind {kind!r}, expected one of {KINDS}.")
    schema_kwargs = {"full_ids": options.full_ids, "short_properties": options.short_properties}
    if language:
        schema_kwargs["language"] = language
    schema = KnowledgeBaseSchema(knowledge_base, **schema_kwargs)

    records = load_records(kind, path, schema, options, redirects_path=redirects_path)
    index, report = build_index(records, options, kind=kind, knowledge_base=knowledge_base)
    validate_coverage(report)
    rows = project_index(index, records, workers=options.workers, show_progress=options.progress)

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    write_index(rows, schema, kind, out_dir, wikidata_qualifiers=options.wikidata_qualifiers)
    if not options.full_ids:
        write_prefixes(schema, kind, out_dir)
    if kind == "entities" and redirects_path:
        write_redirects(rows, records, schema, out_dir)
    if kind == "properties":
        write_inverses(rows, records, schema, out_dir)
    write_summary(build_summary(report, options, path, redirects_path), out_dir)
    logger.info("[+] Index for %s %s written to %s.", knowledge_base, kind, out_dir)
    return report
