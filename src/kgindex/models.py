from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class AssignmentKind(IntEnum):
    """How a surface form came to point at a record; lower wins within one record."""

    OWN_LABEL = 0
    OWN_LABEL_QUALIFIED = 1
    ALIAS = 2
    ALIAS_QUALIFIED = 3


@dataclass(frozen=True)
class Record:
    id: str
    label: str
    qualifier: str = ""
    aliases: tuple[str, ...] = ()
    frequency: int = 0
    redirects: Optional[tuple[str, ...]] = None
    description: str = ""
    type_ids: tuple[str, ...] = ()
    inverses: tuple[str, ...] = ()


@dataclass(frozen=True)
class SurfaceKey:
    text: str
    qualifier: Optional[str] = None

    def render(self) -> str:
        if self.qualifier:
            return f"{self.text} ({self.qualifier})"
        return self.text


@dataclass(frozen=True)
class Assignment:
    id: str
    kind: AssignmentKind


@dataclass(frozen=True)
class IndexOptions:
    ignore_types: bool = False
    keep_most_common_non_unique: bool = False
    check_for_popular_aliases: bool = False
    no_aliases: bool = False
    full_ids: bool = False
    short_properties: bool = False
    wikidata_qualifiers: bool = False
    workers: int = 1
    progress: bool = False


@dataclass
class CoverageReport:
    """Counts gathered while the index is built, in pass order."""

    kind: str
    knowledge_base: str
    records: int = 0
    by_label: int = 0
    by_label_and_qualifier: int = 0
    leftover: int = 0
    total_aliases: int = 0
    added_aliases: int = 0
    index_size: int = 0
    covered: int = 0
    stage_coverage: list[int] = field(default_factory=list)

    def percent(self, value: int) -> float:
        if not self.records:
            return 0.0
        return 100.0 * value / self.records

    def alias_percent(self) -> float:
        if not self.total_aliases:
            return 0.0
        return 100.0 * self.added_aliases / self.total_aliases

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "knowledge_base": self.knowledge_base,
            "records": self.records,
            "by_label": self.by_label,
            "by_label_and_qualifier": self.by_label_and_qualifier,
            "leftover": self.leftover,
            "total_aliases": self.total_aliases,
            "added_aliases": self.added_aliases,
            "index_size": self.index_size,
            "covered": self.covered,
            "stage_coverage": list(self.stage_coverage),
            "coverage_percent": round(self.percent(self.covered), 4),
        }

    def lines(self) -> list[str]:
        title = f"{self.knowledge_base} {self.kind}"
        return [
            title,
            "#" * len(title),
            f"records:                  {self.records}",
            f"unique by label:          {self.by_label}",
            f"label coverage:           {self.percent(self.by_label):.2f}%",
            f"unique by label and info: {self.by_label_and_qualifier}",
            f"label and info coverage:  {self.percent(self.by_label_and_qualifier):.2f}%",
            f"records left:             {self.leftover}",
            f"added unique aliases:     {self.added_aliases} ({self.alias_percent():.2f}% of all aliases)",
            f"final index size:         {self.index_size}",
            f"final index coverage:     {self.percent(self.covered):.2f}%",
        ]
