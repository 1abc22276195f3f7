"""Queryable resource kinds and their selector-to-field mapping."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


class UnknownResourceError(ValueError):
    """Raised when a query type or selector is not in the resource table."""


@dataclass(frozen=True)
class ResourceKind:
    """A resource collection and the wire fields it can be filtered by."""

    name: str
    selectors: Mapping[str, str]


RESOURCE_KINDS: Mapping[str, ResourceKind] = MappingProxyType({
    "post": ResourceKind(
        name="posts",
        selectors=MappingProxyType({
            "id": "id",
            "username": "username",
            "expression": "expression_name",
            "query": "q",
            "expressionCreator": "expression_creator",
        }),
    ),
    "expression": ResourceKind(
        name="expressions",
        selectors=MappingProxyType({
            "id": "id",
            "username": "username",
            "expression": "expression_name",
            "query": "q",
        }),
    ),
})


def is_known_type(query_type: str) -> bool:
    return query_type in RESOURCE_KINDS


def is_known_selector(query_type: str, query_selector: str) -> bool:
    kind = RESOURCE_KINDS.get(query_type)
    return kind is not None and query_selector in kind.selectors


def resolve(query_type: str, query_selector: str) -> Tuple[str, str]:
    """
    Resolve a query type and selector to (collection name, wire field).

    Raises:
        UnknownResourceError: If either value is outside the table
    """
    kind = RESOURCE_KINDS.get(query_type)
    if kind is None:
        raise UnknownResourceError(f"Unknown query type: {query_type!r}")
    field = kind.selectors.get(query_selector)
    if field is None:
        raise UnknownResourceError(f"Unknown selector {query_selector!r} for query type {query_type!r}")
    return kind.name, field
