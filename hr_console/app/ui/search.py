"""Free-text matching used by the global filter of listing tables.

A record matches a query when any of the well-known fields contains the
query, case-insensitively. Leave and report rows reference an employee,
either by id (resolved through an auxiliary employee list) or through a
nested ``user`` object; the referenced employee's name, email and
position are searched as well.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from hr_console.app.ui.listing_view import read_field

GLOBAL_SEARCH_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "username",
    "position",
    "type",
    "reason",
    "status",
)
LOOKUP_SEARCH_FIELDS = ("first_name", "last_name", "email", "position")
NESTED_ENTITY_FIELD = "user"
DEFAULT_LOOKUP_KEY = "user_id"


def field_text(record: Any, name: str) -> str:
    value = read_field(record, name)
    if value is None:
        return ""
    return str(value).lower()


def contains(text: str, query: str) -> bool:
    return query.lower() in text.lower()


def build_lookup_index(lookup: Iterable[Any], id_field: str = "id") -> dict[Any, Any]:
    index: dict[Any, Any] = {}
    for entity in lookup:
        entity_id = read_field(entity, id_field)
        if entity_id is not None and entity_id not in index:
            index[entity_id] = entity
    return index


def _entity_terms(entity: Any) -> list[str]:
    terms = [field_text(entity, name) for name in LOOKUP_SEARCH_FIELDS]
    terms.append(f"{field_text(entity, 'first_name')} {field_text(entity, 'last_name')}")
    return terms


def search_terms(
    record: Any,
    lookup_index: Mapping[Any, Any] | None = None,
    lookup_key: str = DEFAULT_LOOKUP_KEY,
) -> list[str]:
    terms = [field_text(record, name) for name in GLOBAL_SEARCH_FIELDS]
    terms.append(f"{field_text(record, 'first_name')} {field_text(record, 'last_name')}")

    if lookup_index:
        referenced = lookup_index.get(read_field(record, lookup_key))
        if referenced is not None:
            terms.extend(_entity_terms(referenced))

    nested = read_field(record, NESTED_ENTITY_FIELD)
    if nested is not None:
        terms.extend(_entity_terms(nested))
    return terms


def matches_global_filter(
    record: Any,
    query: str,
    lookup_index: Mapping[Any, Any] | None = None,
    lookup_key: str = DEFAULT_LOOKUP_KEY,
) -> bool:
    if not query:
        return True
    needle = query.lower()
    return any(needle in term for term in search_terms(record, lookup_index, lookup_key))
