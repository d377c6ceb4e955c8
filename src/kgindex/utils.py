import gzip
import io
from contextlib import contextmanager
from pathlib import Path

import zstandard as zstd

from . import config


@contextmanager
def open_text(path):
    """Open a plain, gzip or zstandard compressed text file for reading."""
    path = Path(path)
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8", newline="\n") as fh:
            yield fh
        return
    if path.suffix == ".zst":
        with open(path, "rb") as raw:
            reader = zstd.ZstdDecompressor().stream_reader(raw)
            with io.TextIOWrapper(reader, encoding="utf-8", newline="\n") as fh:
                yield fh
        return
    with open(path, "r", encoding="utf-8", newline="\n") as fh:
        yield fh


def read_lines(path):
    """Return all lines of a text file without their line terminators."""
    with open_text(path) as fh:
        return [line.rstrip("\r\n") for line in fh]


def split_fields(line):
    """Split a TSV line, dropping one trailing empty field like a terminator split."""
    fields = line.split("\t")
    if len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return fields


def split_list(value, separator=config.LIST_SEPARATOR):
    """Split a semicolon list, trimming items and dropping empty ones."""
    if not value:
        return []
    return [item.strip() for item in value.split(separator) if item.strip()]


def unique_in_order(values):
    """Return values with duplicates removed, keeping first occurrences."""
    seen = set()
    out = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def chunked(values, size):
    batch = []
    for value in values:
        batch.append(value)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def frequency_order(records):
    """Records sorted by descending frequency, ties broken by id."""
    return sorted(records, key=lambda record: (-record.frequency, record.id))
