import dataclasses
import json
from pathlib import Path

import jsonschema

from . import config


def _ensure(condition, message):
    if not condition:
        raise ValueError(message)


def load_summary_schema(path=config.SUMMARY_SCHEMA_FILE):
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def validate_coverage(report):
    """Check the counting invariants of a finished build."""
    _ensure(report.by_label <= report.records, "More records reachable by label than records parsed.")
    _ensure(report.covered <= report.records, "More records covered than records parsed.")
    stages = report.stage_coverage
    _ensure(
        all(earlier <= later for earlier, later in zip(stages, stages[1:])),
        f"Coverage decreased between passes: {stages}",
    )
    if stages:
        _ensure(stages[-1] == report.covered, f"Final stage coverage {stages[-1]} != covered {report.covered}.")


def build_summary(report, options, input_path, redirects_path=None):
    return {
        "inputs": {
            "file": str(input_path),
            "redirects": str(redirects_path) if redirects_path else None,
        },
        "options": dataclasses.asdict(options),
        "coverage": report.to_dict(),
    }


def validate_summary(summary, schema=None):
    schema = schema or load_summary_schema()
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(summary), key=lambda e: len(list(e.absolute_path)))
    if errors:
        error = errors[0]
        raise ValueError(f"Summary does not match schema at {list(error.absolute_path)}: {error.message}")


def write_summary(summary, out_dir):
    validate_summary(summary)
    path = Path(out_dir) / config.SUMMARY_FILE
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(summary, fh, ensure_ascii=True, indent=2, sort_keys=True)
    return path
