# apps/api/query.py
"""
Cypher composition for the two-hop collaborative-filtering traversal.

    (u)-[l1]->(item1)<-[l2]-(u2)-[l3]->(item2)

Items reached through users who share at least one linked item with ``u``
are counted by distinct ``l3`` edges. Optional filters (category set, link
type) each bind exactly one positional parameter; the parameter token is
derived when the value is bound and reused for every reference to it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

PARAM_PREFIX = "p"

RECOMMEND_MATCH = """
MATCH (u:User)-[l1:LINKED]->(item1:Item)<-[l2:LINKED]-(u2:User),
      (u2)-[l3:LINKED]->(item2:Item)
""".strip()

RECOMMEND_RETURN = """
RETURN item2.id AS id, item2.name AS name, item2.categories AS categories,
       count(DISTINCT l3) AS frequency
ORDER BY frequency DESC, id ASC
""".strip()


def param_name(index: int) -> str:
    return f"{PARAM_PREFIX}{index}"


@dataclass(frozen=True)
class TraversalQuery:
    text: str
    params: List[Any]


class CypherBuilder:
    """Accumulates WHERE predicates and their positional parameters."""

    def __init__(self, match: str, returns: str):
        self._match = match
        self._returns = returns
        self._where: List[str] = []
        self.params: List[Any] = []

    def bind(self, value: Any) -> str:
        self.params.append(value)
        return "$" + param_name(len(self.params) - 1)

    def where(self, predicate: str) -> "CypherBuilder":
        self._where.append(predicate)
        return self

    def build(self) -> TraversalQuery:
        parts = [self._match]
        if self._where:
            parts.append("WHERE " + "\n  AND ".join(self._where))
        parts.append(self._returns)
        return TraversalQuery(text="\n".join(parts), params=list(self.params))


def compose_recommendation_query(
    uid: str,
    link_type: str = "",
    categories: Iterable[str] | None = None,
) -> TraversalQuery:
    cats: Sequence[str] = [c for c in (categories or []) if c]

    q = CypherBuilder(RECOMMEND_MATCH, RECOMMEND_RETURN)
    q.where(f"u.id = {q.bind(uid)}")

    if cats:
        # Any category match is enough
        q.where(f"ANY(x IN {q.bind(list(cats))} WHERE x IN item2.categories)")

    if link_type:
        t = q.bind(link_type)
        q.where(f"l1.type = {t} AND l2.type = {t} AND l3.type = {t}")
        # With a type filter only same-typed links exclude an item
        q.where(f"NOT EXISTS {{ MATCH (u)-[:LINKED {{type: {t}}}]->(item2) }}")
    else:
        q.where("NOT EXISTS { MATCH (u)-[:LINKED]->(item2) }")

    return q.build()
