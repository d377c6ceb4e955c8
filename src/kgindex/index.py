from collections import defaultdict

from .models import Assignment, SurfaceKey


class SurfaceIndex:
    """SurfaceKey -> Assignment with first-committer-wins semantics.

    Rendered forms are unique too: a bare key ``"Apple (fruit)"`` and the
    qualified key ``("Apple", "fruit")`` cannot both be claimed.
    """

    def __init__(self):
        self._entries = {}
        self._rendered = {}
        self._frozen = False

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def get(self, key):
        return self._entries.get(key)

    def is_free(self, key):
        return key not in self._entries and key.render() not in self._rendered

    def commit(self, key, record_id, kind):
        if self._frozen:
            raise RuntimeError("Index is read-only once projection has started.")
        if not self.is_free(key):
            raise ValueError(f"Surface form {key.render()!r} is already claimed.")
        self._entries[key] = Assignment(record_id, kind)
        self._rendered[key.render()] = key

    def try_commit(self, key, record_id, kind):
        if not self.is_free(key):
            return False
        self.commit(key, record_id, kind)
        return True

    def freeze(self):
        self._frozen = True

    def items(self):
        return self._entries.items()

    def covered_ids(self):
        return {assignment.id for assignment in self._entries.values()}

    def by_id(self):
        """Return {id: [(SurfaceKey, AssignmentKind), ...]} in key order."""
        grouped = defaultdict(list)
        for key in sorted(self._entries, key=lambda k: (k.text, k.qualifier or "")):
            assignment = self._entries[key]
            grouped[assignment.id].append((key, assignment.kind))
        return dict(grouped)


def bare(text):
    return SurfaceKey(text, None)


def qualified(text, qualifier):
    return SurfaceKey(text, qualifier or None)
