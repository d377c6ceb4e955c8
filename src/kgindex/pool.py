from collections import defaultdict

from .utils import unique_in_order


class LabelPool:
    """Records grouped by raw label, plus the aliases that name exactly one record."""

    def __init__(self, records, collect_aliases=False):
        self.records = records
        self.label_groups = defaultdict(list)
        self.unique_aliases = {}
        for record in records.values():
            self.label_groups[record.label].append(record.id)
        if collect_aliases:
            alias_groups = defaultdict(list)
            for record in records.values():
                for alias in record.aliases:
                    alias_groups[alias].append(record.id)
            for alias, ids in alias_groups.items():
                ids = unique_in_order(ids)
                if len(ids) == 1:
                    self.unique_aliases[alias] = ids[0]
        grouped = sum(len(ids) for ids in self.label_groups.values())
        if grouped != len(records):
            raise ValueError(f"Label pool holds {grouped} records, expected {len(records)}.")

    def __len__(self):
        return len(self.label_groups)

    def groups(self):
        """Yield (label, ids) in label order; ids are sorted for determinism."""
        for label in sorted(self.label_groups):
            yield label, sorted(self.label_groups[label])

    def alias_owner(self, alias):
        return self.unique_aliases.get(alias)
