import logging

from tqdm import tqdm

from . import config
from .errors import IndexInputError
from .utils import read_lines, split_fields

logger = logging.getLogger(__name__)


def _check_header(header, expected, path):
    fields = split_fields(header)
    if len(fields) != len(expected):
        raise IndexInputError(
            "INVALID_HEADER",
            f"{path}: expected a header with {len(expected)} columns ({', '.join(expected)}), got {len(fields)}",
            {"path": str(path), "header": fields},
        )


def _ensure_unique(records):
    by_id = {}
    for record in records:
        if record.id in by_id:
            raise IndexInputError("DUPLICATE_ID", f"Duplicate id detected: {record.id}", {"id": record.id})
        by_id[record.id] = record
    return by_id


def _load(path, columns, parse, desc, show_progress):
    lines = read_lines(path)
    if not lines:
        raise IndexInputError("EMPTY_INPUT", f"{path}: file should have at least a header line", {"path": str(path)})
    _check_header(lines[0], columns, path)
    records = []
    rows = tqdm(lines[1:], desc=desc, unit="row", disable=not show_progress)
    for line_no, line in enumerate(rows, start=2):
        if not line.strip():
            continue
        records.append(parse(line, line_no))
    logger.info("[*] Parsed %s rows from %s.", len(records), path)
    return _ensure_unique(records)


def load_entities(path, schema, ignore_types=False, show_progress=False):
    """Return {id: Record} for an entity dump; any bad row aborts the run."""
    return _load(
        path,
        config.ENTITY_COLUMNS,
        lambda line, line_no: schema.parse_entity(line, line_no, ignore_types=ignore_types),
        f"processing {schema.name} entities",
        show_progress,
    )


def load_properties(path, schema, show_progress=False):
    """Return {id: Record} for a property dump."""
    return _load(path, config.PROPERTY_COLUMNS, schema.parse_property, f"processing {schema.name} properties", show_progress)


def load_redirects(path, schema, show_progress=False):
    """Return {id: redirects}; lines that do not resolve are skipped."""
    redirects = {}
    skipped = 0
    for line in tqdm(read_lines(path), desc="processing entity redirects", unit="row", disable=not show_progress):
        if not line.strip():
            continue
        parsed = schema.parse_redirect(line)
        if parsed is None:
            skipped += 1
            continue
        ent, targets = parsed
        redirects[ent] = targets
    if skipped:
        logger.warning("[!] Skipped %s redirect lines that did not resolve to %s ids.", skipped, schema.name)
    logger.info("[*] Loaded redirects for %s entities.", len(redirects))
    return redirects
