"""Per knowledge base row parsing and identifier formatting.

One ``KnowledgeBaseSchema`` is selected at startup and handed to the reader
and the writers; nothing else in the pipeline knows which knowledge base the
dump came from.
"""

from __future__ import annotations

import re
from typing import Optional

from . import config
from .errors import IndexInputError, malformed_row
from .models import Record
from .utils import split_fields, split_list, unique_in_order


def _literal_pattern(language: str) -> re.Pattern:
    return re.compile(rf'^"(.*)"@{re.escape(language)}$')


_TAGGED_LITERAL = re.compile(r'^"(.*)"@[A-Za-z][\w-]*$')


def _unquote(value: str) -> str:
    """Strip one ``"text"@lang`` literal; anything else is kept as written."""
    match = _TAGGED_LITERAL.fullmatch(value)
    return match.group(1).strip() if match else value.strip()


def parse_frequency(value: str, line_no: int) -> int:
    value = value.strip()
    if not value:
        return 0
    match = config.TYPED_INTEGER_PATTERN.match(value)
    if not match:
        raise IndexInputError(
            "INVALID_FREQUENCY",
            f"Line {line_no}: cannot parse frequency {value!r}",
            {"line": line_no, "value": value},
        )
    return int(match.group(1))


class KnowledgeBaseSchema:
    """Capability set {parse_entity, parse_property, format_*} for one knowledge base."""

    def __init__(self, name: str, language: str = config.LABEL_LANGUAGE, full_ids: bool = False, short_properties: bool = False) -> None:
        if name not in config.KNOWLEDGE_BASES:
            raise IndexInputError("UNKNOWN_KB", f"Invalid knowledge base {name!r}", {"choices": list(config.KNOWLEDGE_BASES)})
        self.name = name
        self.full_ids = full_ids
        self.short_properties = short_properties
        self.entity_pattern = config.ENTITY_PATTERNS[name]
        self.property_pattern = config.PROPERTY_PATTERNS[name]
        self.label_pattern = _literal_pattern(language)

    # -- parsing -------------------------------------------------------

    def match_entity(self, value: str) -> Optional[str]:
        match = self.entity_pattern.fullmatch(value.strip())
        return match.group(1).strip() if match else None

    def match_property(self, value: str) -> Optional[str]:
        match = self.property_pattern.fullmatch(value.strip())
        return match.group(1).strip() if match else None

    def _label(self, value: str, line_no: int) -> str:
        match = self.label_pattern.match(value.strip())
        if not match:
            raise IndexInputError(
                "INVALID_LABEL",
                f"Line {line_no}: failed to capture label in {value!r}",
                {"line": line_no, "value": value},
            )
        return match.group(1).strip()

    def _aliases(self, value: str) -> tuple[str, ...]:
        aliases = (_unquote(alias) for alias in split_list(value))
        return tuple(unique_in_order(alias for alias in aliases if alias))

    def parse_entity(self, line: str, line_no: int = 0, ignore_types: bool = False) -> Record:
        fields = split_fields(line)
        if len(fields) < config.ENTITY_MIN_FIELDS or len(fields) > len(config.ENTITY_COLUMNS):
            raise malformed_row(line_no, f"expected {config.ENTITY_MIN_FIELDS}-{len(config.ENTITY_COLUMNS)} fields, got {len(fields)}", line)
        ent = self.match_entity(fields[0])
        if ent is None:
            raise IndexInputError(
                "INVALID_ID",
                f"Line {line_no}: failed to capture entity in {fields[0]!r}",
                {"line": line_no, "value": fields[0]},
            )
        label = self._label(fields[1], line_no)
        desc_match = self.label_pattern.match(fields[2].strip())
        description = desc_match.group(1).strip() if desc_match else ""
        frequency = parse_frequency(fields[3], line_no)
        type_ids: tuple[str, ...] = ()
        if not ignore_types and len(fields) > 4:
            matched = (self.match_entity(item) for item in split_list(fields[4]))
            type_ids = tuple(unique_in_order(t for t in matched if t))
        aliases = self._aliases(fields[5]) if len(fields) > 5 else ()
        return Record(
            id=ent,
            label=label,
            aliases=aliases,
            frequency=frequency,
            description=description,
            type_ids=type_ids,
        )

    def property_qualifier(self, prop: str, line_no: int = 0) -> str:
        if self.name == "freebase":
            parts = [part for part in prop.split(".") if part]
            if len(parts) < 2:
                raise IndexInputError("INVALID_ID", f"Line {line_no}: invalid freebase property {prop!r}", {"line": line_no})
            return parts[-2].replace("_", " ")
        if self.name == "dbpedia" and prop.startswith("ontology/"):
            return "ontology"
        return ""

    def parse_property(self, line: str, line_no: int = 0) -> Record:
        fields = split_fields(line)
        if len(fields) < config.PROPERTY_MIN_FIELDS or len(fields) > len(config.PROPERTY_COLUMNS):
            raise malformed_row(line_no, f"expected {config.PROPERTY_MIN_FIELDS}-{len(config.PROPERTY_COLUMNS)} fields, got {len(fields)}", line)
        prop = self.match_property(fields[0])
        if prop is None:
            raise IndexInputError(
                "INVALID_ID",
                f"Line {line_no}: failed to capture property in {fields[0]!r}",
                {"line": line_no, "value": fields[0]},
            )
        label = self._label(fields[1], line_no)
        frequency = parse_frequency(fields[2], line_no)
        aliases = self._aliases(fields[3]) if len(fields) > 3 else ()
        inverses: tuple[str, ...] = ()
        if len(fields) > 4:
            matched = (self.match_property(item) for item in split_list(fields[4]))
            inverses = tuple(unique_in_order(p for p in matched if p))
        return Record(
            id=prop,
            label=label,
            qualifier=self.property_qualifier(prop, line_no),
            aliases=aliases,
            frequency=frequency,
            inverses=inverses,
        )

    def parse_redirect(self, line: str) -> Optional[tuple[str, tuple[str, ...]]]:
        """Return (id, redirects) or None when the line cannot be resolved."""
        fields = split_fields(line)
        if len(fields) != 2:
            return None
        ent = self.match_entity(fields[0])
        if ent is None:
            return None
        redirects = []
        for item in split_list(fields[1]):
            redirect = self.match_entity(item)
            if redirect is None:
                return None
            redirects.append(redirect)
        if not redirects:
            return None
        return ent, tuple(unique_in_order(redirects))

    # -- formatting ----------------------------------------------------

    def entity_prefixes(self) -> dict[str, str]:
        return dict(config.ENTITY_PREFIXES[self.name])

    def property_prefixes(self) -> dict[str, str]:
        return dict(config.PROPERTY_PREFIXES[self.name])

    def format_entity(self, ent: str) -> str:
        prefix, namespace = next(iter(config.ENTITY_PREFIXES[self.name].items()))
        if self.full_ids:
            return f"<{namespace}{ent}>"
        return f"{prefix}:{ent}"

    def format_property(self, prop: str, prefix: Optional[str] = None) -> str:
        if self.name == "dbpedia":
            match = config.DBPEDIA_PROPERTY_PATTERN.match(prop)
            if not match:
                raise ValueError(f"invalid dbpedia property {prop!r}")
            prefix = "dbo" if match.group(1) == "ontology" else "dbp"
            local = match.group(2)
        else:
            prefix = prefix or config.DEFAULT_PROPERTY_PREFIX[self.name]
            local = prop
        if self.full_ids:
            return f"<{config.PROPERTY_PREFIXES[self.name][prefix]}{local}>"
        if self.short_properties and prefix == config.DEFAULT_PROPERTY_PREFIX.get(self.name, prefix):
            return prop
        return f"{prefix}:{local}"
