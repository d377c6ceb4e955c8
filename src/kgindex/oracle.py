class PopularAliasOracle:
    """Answers whether a label is better known as the alias of another record.

    Keeps a rare record from squatting on a bare label when a strictly more
    frequent record is commonly called that as a secondary name.
    """

    def __init__(self, pool, enabled=True):
        self.pool = pool
        self.enabled = enabled

    def better_owner(self, label, candidate_id):
        """Return the id of the more popular alias owner, or None."""
        if not self.enabled:
            return None
        owner = self.pool.alias_owner(label)
        if owner is None or owner == candidate_id:
            return None
        records = self.pool.records
        if records[owner].frequency > records[candidate_id].frequency:
            return owner
        return None

    def vetoes(self, label, candidate_id):
        return self.better_owner(label, candidate_id) is not None
