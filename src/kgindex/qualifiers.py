import dataclasses


def type_qualifier(record, records):
    """Label of the most frequent known type of ``record``, or ''."""
    known = [type_id for type_id in record.type_ids if type_id in records]
    if not known:
        return ""
    known.sort(key=lambda type_id: records[type_id].frequency)
    return records[known[-1]].label


def resolve_qualifiers(records, ignore_types=False, redirects=None):
    """Return a new {id: Record} with final qualifiers (and redirects) filled in.

    Type labels are looked up in the unmodified input, so the result does not
    depend on iteration order.
    """
    redirects = redirects or {}
    resolved = {}
    for ent, record in records.items():
        qualifier = "" if ignore_types else type_qualifier(record, records)
        resolved[ent] = dataclasses.replace(
            record,
            qualifier=qualifier or record.description,
            redirects=redirects.get(ent),
        )
    return resolved
