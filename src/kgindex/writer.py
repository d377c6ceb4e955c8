import logging
from pathlib import Path

from . import config

logger = logging.getLogger(__name__)


def wikidata_qualifier_rows(prop, forms, schema):
    """Extra (identifier, forms) rows for the statement/qualifier/value variants of a property."""
    for prefix, suffix in config.WIKIDATA_QUALIFIER_SUFFIXES:
        yield schema.format_property(prop, prefix), [f"{form} ({suffix})" for form in forms]


def format_identifier(schema, kind, record_id):
    if kind == "properties":
        return schema.format_property(record_id)
    return schema.format_entity(record_id)


def write_index(rows, schema, kind, out_dir, wikidata_qualifiers=False):
    """Write index.tsv: one line per id, identifier first, then its surface forms."""
    path = Path(out_dir) / config.INDEX_FILE
    written = 0
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        for row in rows:
            fh.write("\t".join([format_identifier(schema, kind, row.id), *row.forms]) + "\n")
            written += 1
            if kind == "properties" and wikidata_qualifiers and schema.name == "wikidata":
                for identifier, forms in wikidata_qualifier_rows(row.id, row.forms, schema):
                    fh.write("\t".join([identifier, *forms]) + "\n")
                    written += 1
    logger.info("[+] Wrote %s index rows to %s.", written, path)
    return path


def write_prefixes(schema, kind, out_dir):
    path = Path(out_dir) / config.PREFIXES_FILE
    prefixes = schema.property_prefixes() if kind == "properties" else schema.entity_prefixes()
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        for short, long in prefixes.items():
            fh.write(f"{short}\t<{long}>\n")
    return path


def write_redirects(rows, records, schema, out_dir):
    """Write redirects.tsv for indexed entities that have redirects."""
    path = Path(out_dir) / config.REDIRECTS_FILE
    written = 0
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        for row in rows:
            redirects = records[row.id].redirects
            if not redirects:
                continue
            fh.write("\t".join([schema.format_entity(row.id), *(schema.format_entity(r) for r in redirects)]) + "\n")
            written += 1
    logger.info("[+] Wrote %s redirect rows to %s.", written, path)
    return path


def write_inverses(rows, records, schema, out_dir):
    """Write inverses.tsv (property, inverse property) for indexed properties."""
    path = Path(out_dir) / config.INVERSES_FILE
    written = 0
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        for row in rows:
            for inverse in records[row.id].inverses:
                fh.write(f"{schema.format_property(row.id)}\t{schema.format_property(inverse)}\n")
                written += 1
    logger.info("[+] Wrote %s inverse property pairs to %s.", written, path)
    return path
