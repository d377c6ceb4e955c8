import unittest

from kgindex.engine import build_index
from kgindex.index import SurfaceIndex, bare, qualified
from kgindex.models import AssignmentKind, IndexOptions, Record
from kgindex.projection import display_label, project_index, project_record


class ProjectRecordTests(unittest.TestCase):
    def test_own_label_first_then_aliases_by_distance(self) -> None:
        record = Record(
            id="Q60",
            label="New York City",
            qualifier="city",
            aliases=("NYC", "New York", "new york city"),
            frequency=10,
        )
        keys = [
            (qualified("NY", "city"), AssignmentKind.ALIAS_QUALIFIED),
            (bare("NYC"), AssignmentKind.ALIAS),
            (bare("New York"), AssignmentKind.ALIAS),
            (bare("new york city"), AssignmentKind.ALIAS),
            (bare("New York City"), AssignmentKind.OWN_LABEL),
        ]
        row = project_record(record, keys)
        self.assertEqual(row.forms, ("New York City", "new york city", "New York", "NYC", "NY (city)"))

    def test_distance_ties_keep_alias_order(self) -> None:
        record = Record(id="Q1", label="abc", aliases=("abd", "abe"))
        keys = [
            (bare("abe"), AssignmentKind.ALIAS),
            (bare("abd"), AssignmentKind.ALIAS),
            (bare("abc"), AssignmentKind.OWN_LABEL),
        ]
        self.assertEqual(project_record(record, keys).forms, ("abc", "abd", "abe"))

    def test_qualified_own_label_is_display_label(self) -> None:
        record = Record(id="Q89", label="Apple", qualifier="fruit", aliases=("Apples",))
        own = qualified("Apple", "fruit")
        keys = [
            (bare("Apples"), AssignmentKind.ALIAS),
            (own, AssignmentKind.OWN_LABEL_QUALIFIED),
        ]
        self.assertEqual(project_record(record, keys).forms, ("Apple (fruit)", "Apples"))
        self.assertEqual(display_label(record, own, True), "Apple (fruit)")

    def test_alias_only_record_uses_raw_label(self) -> None:
        record = Record(id="Q2", label="Mercury", qualifier="element", aliases=("Hg",))
        row = project_record(record, [(bare("Hg"), AssignmentKind.ALIAS)])
        self.assertEqual(row.forms, ("Hg",))
        self.assertEqual(display_label(record, None, True), "Mercury")

    def test_display_label_without_keys(self) -> None:
        record = Record(id="Q2", label="Mercury", qualifier="element")
        self.assertEqual(display_label(record, None, False), "Mercury (element)")
        self.assertEqual(display_label(Record(id="Q3", label="Venus"), None, False), "Venus")

    def test_two_own_labels_is_an_invariant_failure(self) -> None:
        record = Record(id="Q1", label="Apple", qualifier="fruit")
        keys = [
            (bare("Apple"), AssignmentKind.OWN_LABEL),
            (qualified("Apple", "fruit"), AssignmentKind.OWN_LABEL_QUALIFIED),
        ]
        with self.assertRaises(AssertionError):
            project_record(record, keys)


class ProjectIndexTests(unittest.TestCase):
    def setUp(self) -> None:
        records = [
            Record(id="Q89", label="Apple", qualifier="fruit", aliases=("apple fruit",), frequency=10),
            Record(id="Q312", label="Apple", qualifier="company", aliases=("Apple Computer", "AAPL"), frequency=90),
            Record(id="Q1", label="Apple", frequency=1),
            Record(id="Q2", label="Pear", frequency=90),
        ]
        self.records = {record.id: record for record in records}
        self.options = IndexOptions(keep_most_common_non_unique=True)

    def test_rows_ordered_by_frequency_and_unindexed_skipped(self) -> None:
        index, _ = build_index(self.records, self.options)
        rows = project_index(index, self.records)
        self.assertEqual([row.id for row in rows], ["Q2", "Q312", "Q89"])

    def test_own_label_leads_every_row(self) -> None:
        index, _ = build_index(self.records, self.options)
        keys_by_id = index.by_id()
        for row in project_index(index, self.records, workers=3):
            own = [key for key, kind in keys_by_id[row.id] if kind <= AssignmentKind.OWN_LABEL_QUALIFIED]
            if own:
                self.assertEqual(row.forms[0], own[0].render())

    def test_thread_pool_matches_single_worker(self) -> None:
        index, _ = build_index(self.records, self.options)
        single = project_index(index, self.records, workers=1)
        pooled = project_index(index, self.records, workers=4)
        self.assertEqual(single, pooled)

    def test_empty_index(self) -> None:
        self.assertEqual(project_index(SurfaceIndex(), self.records), [])


if __name__ == "__main__":
    unittest.main()
