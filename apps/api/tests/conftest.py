"""Shared test fixtures and an in-memory graph store for engine and route tests."""

import re
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from deps import get_engine
from errors import BadRequest, InvalidReference
from ids import new_id
from main import app
from models import Item, Link, User
from recommendations import RecommendationEngine


def _token(pattern: str, text: str) -> Optional[int]:
    m = re.search(pattern, text)
    return int(m.group(1)) if m else None


class FakeGraphStore:
    """
    Dict-backed stand-in for Neo4jGraphStore.

    run_query does not parse Cypher; it locates each filter through the
    $pN token the composer wrote next to it and evaluates the two-hop
    traversal in Python. A token pointing at the wrong position makes the
    traversal read the wrong value.
    """

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.items: Dict[str, Item] = {}
        self.links: Dict[str, Link] = {}
        self.queries: List[tuple] = []

    # --- CRUD ---

    def get_user(self, user_id: str) -> Optional[User]:
        u = self.users.get(user_id)
        return User(id=u.id, name=u.name) if u else None

    def get_item(self, item_id: str) -> Optional[Item]:
        i = self.items.get(item_id)
        return Item(id=i.id, name=i.name, categories=list(i.categories)) if i else None

    def upsert_user(self, user: User) -> User:
        if not user.id:
            user.id = new_id()
        self.users[user.id] = User(id=user.id, name=user.name)
        return user

    def upsert_item(self, item: Item) -> Item:
        if not item.id:
            item.id = new_id()
        self.items[item.id] = Item(id=item.id, name=item.name, categories=list(item.categories))
        return item

    def upsert_link(self, link: Link) -> Link:
        if not link.is_well_formed():
            raise BadRequest("Link requires userId and itemId")
        missing_user = link.user_id not in self.users
        missing_item = link.item_id not in self.items
        if missing_user or missing_item:
            raise InvalidReference(
                user_id=link.user_id if missing_user else "",
                item_id=link.item_id if missing_item else "",
            )
        if not link.id:
            link.id = new_id()
        self.links[link.id] = Link(
            id=link.id, user_id=link.user_id, item_id=link.item_id, type=link.type, score=link.score
        )
        return link

    # --- traversal ---

    def run_query(self, text: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        self.queries.append((text, list(params)))

        uid = params[_token(r"u\.id = \$p(\d+)", text)]
        cat_pos = _token(r"ANY\(x IN \$p(\d+) WHERE", text)
        type_pos = _token(r"l1\.type = \$p(\d+)", text)
        cats = set(params[cat_pos]) if cat_pos is not None else None
        link_type = params[type_pos] if type_pos is not None else None

        def typed(l: Link) -> bool:
            return link_type is None or l.type == link_type

        def already_linked(item_id: str) -> bool:
            return any(
                l.user_id == uid and l.item_id == item_id and typed(l)
                for l in self.links.values()
            )

        support: Dict[str, set] = defaultdict(set)
        links = list(self.links.values())
        for l1 in links:
            if l1.user_id != uid or l1.user_id not in self.users or not typed(l1):
                continue
            for l2 in links:
                if l2.item_id != l1.item_id or l2.id == l1.id or not typed(l2):
                    continue
                for l3 in links:
                    if l3.user_id != l2.user_id or l3.id in (l1.id, l2.id) or not typed(l3):
                        continue
                    item2 = self.items[l3.item_id]
                    if already_linked(item2.id):
                        continue
                    if cats is not None and not cats & set(item2.categories):
                        continue
                    support[item2.id].add(l3.id)

        return [
            {
                "id": item_id,
                "name": self.items[item_id].name,
                "categories": list(self.items[item_id].categories),
                "frequency": len(ids),
            }
            for item_id, ids in support.items()
        ]


def link(store: FakeGraphStore, user_id: str, item_id: str, type: str = "Buy", score: int = 0) -> Link:
    return store.upsert_link(Link(user_id=user_id, item_id=item_id, type=type, score=score))


# --- Fixtures ---


@pytest.fixture
def store():
    return FakeGraphStore()


@pytest.fixture
def engine(store):
    return RecommendationEngine(store)


@pytest.fixture
def books(store):
    """u1 and u2 both bought i1; u2 also bought i2. All items are books."""
    store.upsert_user(User(id="u1", name="Ann"))
    store.upsert_user(User(id="u2", name="Bob"))
    store.upsert_item(Item(id="i1", name="Dune", categories=["book"]))
    store.upsert_item(Item(id="i2", name="Emma", categories=["book"]))
    link(store, "u1", "i1")
    link(store, "u2", "i1")
    link(store, "u2", "i2")
    return store


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
