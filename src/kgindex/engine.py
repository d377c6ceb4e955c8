"""Disambiguation engine: turns label groups into a unique surface-form index.

Passes, in order:

1. bare labels: unique labels are committed directly, shared labels go to
   their most frequent record when ``keep_most_common_non_unique`` is set;
2. qualified labels: everything still pending is grouped by
   ``(label, qualifier)`` and committed as ``label (qualifier)``, or as the
   bare label if nobody claimed it yet and the popular-alias oracle agrees;
3. aliases: every record, most frequent first, claims its aliases (or
   qualified aliases) wherever they are still free.
"""

import logging
from collections import defaultdict

from tqdm import tqdm

from .index import SurfaceIndex, bare, qualified
from .models import AssignmentKind, CoverageReport
from .oracle import PopularAliasOracle
from .pool import LabelPool
from .utils import frequency_order

logger = logging.getLogger(__name__)


def most_frequent(ids, records):
    """Most frequent id; ties go to the smallest id."""
    return min(ids, key=lambda record_id: (-records[record_id].frequency, record_id))


class DisambiguationEngine:
    def __init__(self, records, options, kind="entities", knowledge_base=""):
        self.records = records
        self.options = options
        self.pool = LabelPool(records, collect_aliases=options.check_for_popular_aliases)
        self.oracle = PopularAliasOracle(self.pool, enabled=options.check_for_popular_aliases)
        self.index = SurfaceIndex()
        self.pending = []
        self.leftover = set()
        self.report = CoverageReport(kind=kind, knowledge_base=knowledge_base, records=len(records))

    def _progress(self, iterable, desc, total=None):
        return tqdm(iterable, desc=desc, total=total, unit="group", disable=not self.options.progress)

    def _covered(self):
        return len(self.index.covered_ids())

    def _claim_label(self, label, record_id):
        """Commit the bare label unless the oracle defers it; return success."""
        if self.oracle.vetoes(label, record_id):
            return False
        self.index.commit(bare(label), record_id, AssignmentKind.OWN_LABEL)
        return True

    def add_labels(self):
        for label, ids in self._progress(self.pool.groups(), "adding unique labels", total=len(self.pool)):
            if len(ids) == 1:
                if not self._claim_label(label, ids[0]):
                    self.pending.append(ids[0])
                continue
            if self.options.keep_most_common_non_unique:
                winner = most_frequent(ids, self.records)
                if self._claim_label(label, winner):
                    ids = [record_id for record_id in ids if record_id != winner]
            self.pending.extend(ids)
        self.report.by_label = self._covered()
        self.report.stage_coverage.append(self.report.by_label)
        logger.info("[*] Bare labels: %s records indexed, %s pending.", self.report.by_label, len(self.pending))

    def _qualified_groups(self):
        groups = defaultdict(list)
        for record_id in self.pending:
            record = self.records[record_id]
            if not record.qualifier:
                self.leftover.add(record_id)
                continue
            if not self.index.is_free(qualified(record.label, record.qualifier)):
                self.leftover.add(record_id)
                continue
            groups[(record.label, record.qualifier)].append(record_id)

        def order(item):
            (label, qualifier), ids = item
            top = max(self.records[record_id].frequency for record_id in ids)
            return (-top, len(ids), label, qualifier)

        return sorted(groups.items(), key=order)

    def _claim_qualified(self, label, qualifier, record_id):
        if self.index.is_free(bare(label)) and not self.oracle.vetoes(label, record_id):
            self.index.commit(bare(label), record_id, AssignmentKind.OWN_LABEL)
            return
        key = qualified(label, qualifier)
        if not self.index.is_free(key):
            self.leftover.add(record_id)
            return
        self.index.commit(key, record_id, AssignmentKind.OWN_LABEL_QUALIFIED)

    def add_qualified_labels(self):
        groups = self._qualified_groups()
        for (label, qualifier), ids in self._progress(groups, "adding label-info pairs"):
            if len(ids) == 1:
                self._claim_qualified(label, qualifier, ids[0])
                continue
            if self.options.keep_most_common_non_unique:
                winner = most_frequent(ids, self.records)
                self._claim_qualified(label, qualifier, winner)
                ids = [record_id for record_id in ids if record_id != winner]
            self.leftover.update(ids)
        self.pending = []
        self.report.by_label_and_qualifier = self._covered()
        self.report.leftover = len(self.leftover)
        self.report.stage_coverage.append(self.report.by_label_and_qualifier)
        logger.info(
            "[*] Qualified labels: %s records indexed, %s left without a label.",
            self.report.by_label_and_qualifier,
            self.report.leftover,
        )

    def add_aliases(self):
        before = len(self.index)
        total = 0
        if not self.options.no_aliases:
            ordered = frequency_order(self.records.values())
            for record in tqdm(ordered, desc="adding aliases", unit="record", disable=not self.options.progress):
                total += len(record.aliases)
                for alias in record.aliases:
                    if self.index.try_commit(bare(alias), record.id, AssignmentKind.ALIAS):
                        continue
                    if not record.qualifier:
                        continue
                    self.index.try_commit(qualified(alias, record.qualifier), record.id, AssignmentKind.ALIAS_QUALIFIED)
        self.report.total_aliases = total
        self.report.added_aliases = len(self.index) - before
        self.report.stage_coverage.append(self._covered())
        logger.info("[*] Aliases: %s of %s added.", self.report.added_aliases, total)

    def run(self):
        """Run all passes and return (index, report); the index is frozen afterwards."""
        self.add_labels()
        self.add_qualified_labels()
        self.add_aliases()
        self.index.freeze()
        self.report.index_size = len(self.index)
        self.report.covered = self._covered()
        return self.index, self.report


def build_index(records, options, kind="entities", knowledge_base=""):
    return DisambiguationEngine(records, options, kind=kind, knowledge_base=knowledge_base).run()
