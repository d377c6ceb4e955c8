#!/usr/bin/env python3
"""
build_index.py -- surface-form index builder for knowledge-base dumps

Reads:
  - <kb>-entities.tsv   (id, label, description, count, types, aliases)
  - <kb>-properties.tsv (id, label, count, aliases, inverses)
  - optional <kb>-entity-redirects.tsv
Writes (into --output):
  - index.tsv, prefixes.tsv, summary.json
  - redirects.tsv (entities with --redirects) / inverses.tsv (properties)
"""

import argparse
import logging
import sys

from kgindex import config
from kgindex.errors import IndexInputError
from kgindex.models import IndexOptions
from kgindex.pipeline import run

logger = logging.getLogger("build_index")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build a unique surface-form index from a knowledge-base dump.")
    parser.add_argument("kind", choices=("entities", "properties"), help="Which dump is being indexed.")
    parser.add_argument("-f", "--file", required=True, help="Input TSV (.tsv, .tsv.gz or .tsv.zst).")
    parser.add_argument("-o", "--output", required=True, help="Output directory.")
    parser.add_argument("-k", "--knowledge-base", required=True, choices=config.KNOWLEDGE_BASES)
    parser.add_argument("-r", "--redirects", default=None, help="Entity redirects TSV (entities only).")
    parser.add_argument("--language", default=config.LABEL_LANGUAGE, help="Language tag of label literals.")
    parser.add_argument(
        "--ignore-types",
        action="store_true",
        help="Do not derive qualifiers from the type column; use the description instead.",
    )
    parser.add_argument(
        "--keep-most-common-non-unique",
        action="store_true",
        help="Give a shared label to its most frequent record instead of leaving it unassigned.",
    )
    parser.add_argument(
        "--check-for-popular-aliases",
        action="store_true",
        help="Defer labels that are the unique alias of a more frequent record.",
    )
    parser.add_argument("--no-aliases", action="store_true", help="Skip the alias pass.")
    parser.add_argument("--full-ids", action="store_true", help="Write full IRIs instead of prefixed ids.")
    parser.add_argument("--short-properties", action="store_true", help="Write properties without a prefix.")
    parser.add_argument(
        "--include-wikidata-qualifiers",
        action="store_true",
        help="Also write p/pq/pqn/ps/psn rows for Wikidata properties.",
    )
    parser.add_argument("--workers", type=int, default=config.PROJECTION_WORKERS, help="Projection threads.")
    parser.add_argument("-p", "--progress", action="store_true", help="Show progress bars on a terminal.")
    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format=config.LOG_FORMAT, datefmt=config.LOG_DATEFMT)
    args = parse_args(argv)
    if args.redirects and args.kind != "entities":
        logger.warning("[!] --redirects only applies to entity runs; ignoring it.")
        args.redirects = None
    options = IndexOptions(
        ignore_types=args.ignore_types,
        keep_most_common_non_unique=args.keep_most_common_non_unique,
        check_for_popular_aliases=args.check_for_popular_aliases,
        no_aliases=args.no_aliases,
        full_ids=args.full_ids,
        short_properties=args.short_properties,
        wikidata_qualifiers=args.include_wikidata_qualifiers,
        workers=max(1, args.workers),
        progress=args.progress and sys.stderr.isatty(),
    )
    try:
        report = run(
            args.kind,
            args.file,
            args.output,
            args.knowledge_base,
            options,
            redirects_path=args.redirects,
            language=args.language,
        )
    except IndexInputError as exc:
        logger.error("[!] %s", exc)
        return 1
    for line in report.lines():
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
