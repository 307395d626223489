"""Mapping of parameter records onto URL query parameters.

Parameter records are pydantic models whose fields carry a :class:`QueryKey`
annotation naming the query parameter they are sent as::

    class Params(BaseModel):
        query: Annotated[str, QueryKey("query")] = ""
        per_page: Annotated[int, QueryKey("per_page")] = 0

:func:`to_query` walks the fields in declaration order and keeps only the
annotated ones whose value differs from the zero value of its type (``""``
for strings, ``0`` for integers).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, final
from urllib.parse import urlencode

from pydantic import BaseModel

__all__ = (
    "QueryKey",
    "to_query",
    "encode_query",
)


@final
@dataclass(
    init=True,
    repr=True,
    eq=True,
    order=False,
    unsafe_hash=False,
    frozen=True,
    match_args=True,
    kw_only=False,
    slots=True,
)
class QueryKey:
    """Field annotation naming the query parameter a field is sent as."""

    name: str


def _query_key(metadata: Iterable[Any]) -> str:
    for item in metadata:
        if isinstance(item, QueryKey):
            return item.name
    return ""


def _is_zero(value: object) -> bool:
    if isinstance(value, str):
        return value == ""
    if isinstance(value, int):
        return value == 0
    return value is None


def to_query(params: BaseModel) -> dict[str, str]:
    """Return the query parameters of `params` as an ordered mapping.

    Fields without a non-empty :class:`QueryKey` are never emitted, and fields
    holding their zero value are omitted.
    """

    query: dict[str, str] = {}
    for name, field in type(params).model_fields.items():
        key = _query_key(field.metadata)
        value = getattr(params, name)
        if key and not _is_zero(value):
            query[key] = str(value)
    return query


def encode_query(params: BaseModel) -> str:
    """Render :func:`to_query` as a percent-encoded query string."""
    return urlencode(to_query(params))
