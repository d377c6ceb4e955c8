from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from rapidfuzz.distance import Levenshtein
from tqdm import tqdm

from . import config
from .models import AssignmentKind, Record, SurfaceKey
from .utils import chunked, frequency_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectedRow:
    id: str
    forms: tuple[str, ...]


def display_label(record: Record, own: Optional[SurfaceKey], has_aliases: bool) -> str:
    """Canonical label of a record given the keys that resolved to it."""
    if own is not None:
        return own.render()
    if has_aliases or not record.qualifier:
        return record.label
    return f"{record.label} ({record.qualifier})"


def _alias_position(record: Record, key: SurfaceKey) -> int:
    try:
        return record.aliases.index(key.text)
    except ValueError:
        return len(record.aliases)


def _sort_by_distance(keys: list[SurfaceKey], anchor: str, record: Record) -> list[str]:
    keys = sorted(keys, key=lambda key: _alias_position(record, key))
    return [
        key.render()
        for key in sorted(keys, key=lambda key: Levenshtein.distance(anchor, key.render(), processor=str.lower))
    ]


def project_record(record: Record, keys: list[tuple[SurfaceKey, AssignmentKind]]) -> ProjectedRow:
    """Order all surface forms of one record: own label, aliases, qualified aliases."""
    own = [key for key, kind in keys if kind in (AssignmentKind.OWN_LABEL, AssignmentKind.OWN_LABEL_QUALIFIED)]
    aliases = [key for key, kind in keys if kind == AssignmentKind.ALIAS]
    alias_infos = [key for key, kind in keys if kind == AssignmentKind.ALIAS_QUALIFIED]
    assert len(own) + len(aliases) + len(alias_infos) == len(keys)
    assert len(own) <= 1, f"expected at most one own label for {record.id}, got {[key.render() for key in own]}"
    own_key = own[0] if own else None
    label = display_label(record, own_key, bool(aliases or alias_infos))
    forms = [own_key.render()] if own_key else []
    forms.extend(_sort_by_distance(aliases, label, record))
    forms.extend(_sort_by_distance(alias_infos, label, record))
    return ProjectedRow(id=record.id, forms=tuple(forms))


def project_index(index, records, workers=1, show_progress=False):
    """Return one ProjectedRow per indexed record, most frequent first.

    Rows are computed on a thread pool over read-only data; ``map`` keeps the
    input order so the caller can write them out deterministically.
    """
    keys_by_id = index.by_id()
    ordered = [record for record in frequency_order(records.values()) if record.id in keys_by_id]
    rows = []
    progress = tqdm(total=len(ordered), desc="creating outputs", unit="record", disable=not show_progress)
    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        for batch in chunked(ordered, config.PROJECTION_CHUNK_SIZE):
            for row in executor.map(lambda record: project_record(record, keys_by_id[record.id]), batch):
                rows.append(row)
                progress.update(1)
    progress.close()
    logger.info("[*] Projected %s indexed records.", len(rows))
    return rows
