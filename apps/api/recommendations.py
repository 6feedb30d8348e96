# apps/api/recommendations.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from errors import BadRequest, NotFound
from models import Item, Link, Recommendation, User
from query import compose_recommendation_query

log = logging.getLogger("recommendations")


def _recommendation_from_row(row: Dict[str, Any]) -> Recommendation:
    return Recommendation(
        item=Item(
            id=str(row.get("id") or ""),
            name=row.get("name") or "",
            categories=list(row.get("categories") or []),
        ),
        frequency=int(row.get("frequency") or 0),
    )


def rank(recs: Iterable[Recommendation]) -> List[Recommendation]:
    # Frequency first; equal frequencies fall back to item id so output is stable
    return sorted(recs, key=lambda r: (-r.frequency, r.item.id))


class RecommendationEngine:
    """
    Entry point for the HTTP layer. Holds an explicit graph store handle;
    no state is kept between calls.
    """

    def __init__(self, store):
        self.store = store

    def get_user(self, user_id: str) -> User:
        if not user_id:
            raise BadRequest("Missing user id")
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def get_item(self, item_id: str) -> Item:
        if not item_id:
            raise BadRequest("Missing item id")
        item = self.store.get_item(item_id)
        if item is None:
            raise NotFound(f"Item {item_id} not found")
        return item

    def upsert_user(self, user: User) -> User:
        return self.store.upsert_user(user)

    def upsert_item(self, item: Item) -> Item:
        return self.store.upsert_item(item)

    def upsert_link(self, link: Link) -> Link:
        if not link.is_well_formed():
            raise BadRequest("Link requires userId and itemId")
        return self.store.upsert_link(link)

    def recommend(
        self,
        user_id: str,
        link_type: Optional[str] = "",
        categories: Optional[Iterable[str]] = None,
    ) -> List[Recommendation]:
        """
        Items linked by users who share at least one linked item with
        ``user_id``, ranked by the number of distinct supporting links.

        An empty ``link_type`` matches links of any type; an empty
        ``categories`` matches items of any category.
        """
        if not user_id:
            raise BadRequest("Missing user id")

        cats = [c for c in (categories or []) if c]
        query = compose_recommendation_query(user_id, link_type or "", cats)
        rows = self.store.run_query(query.text, query.params)
        recs = rank(_recommendation_from_row(r) for r in rows)

        log.info(
            "recommend_ok user=%s type=%s categories=%d results=%d",
            user_id, link_type or "*", len(cats), len(recs),
        )
        return recs
