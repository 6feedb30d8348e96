# apps/api/graph.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from neo4j import GraphDatabase, Driver
from neo4j.exceptions import DriverError, Neo4jError

from errors import BadRequest, InvalidReference, StoreError
from ids import new_id
from models import Item, Link, User
from query import param_name

# silence verbose driver logs/notifications
logging.getLogger("neo4j").setLevel(logging.WARNING)
logging.getLogger("neo4j.notifications").setLevel(logging.ERROR)

log = logging.getLogger("graph")

CONSTRAINTS = (
    "CREATE CONSTRAINT user_id_unique IF NOT EXISTS FOR (u:User) REQUIRE u.id IS UNIQUE",
    "CREATE CONSTRAINT item_id_unique IF NOT EXISTS FOR (i:Item) REQUIRE i.id IS UNIQUE",
)


def _user_from_record(rec) -> User:
    return User(id=rec["id"], name=rec["name"] or "")


def _item_from_record(rec) -> Item:
    return Item(id=rec["id"], name=rec["name"] or "", categories=list(rec["categories"] or []))


class Neo4jGraphStore:
    """
    Users, Items and LINKED edges on top of a Neo4j driver.

    The driver is owned by the caller (created at startup, closed at
    shutdown). A session is opened per operation; driver and Cypher failures
    surface as StoreError with the original exception chained.
    """

    def __init__(self, driver: Driver, database: Optional[str] = None):
        self._driver = driver
        self._database = database or None

    @classmethod
    def from_settings(cls, settings) -> "Neo4jGraphStore":
        uri = (settings.neo4j_uri or "").strip()
        driver = GraphDatabase.driver(
            uri,
            auth=(settings.neo4j_username or "", settings.neo4j_password or ""),
        )
        log.info("Neo4j driver created: %s", uri)
        return cls(driver, database=settings.neo4j_database or "neo4j")

    def close(self) -> None:
        self._driver.close()

    @contextmanager
    def _session(self) -> Iterator[Any]:
        try:
            with self._driver.session(database=self._database) as sess:
                yield sess
        except (Neo4jError, DriverError) as exc:
            log.warning("graph_store_failed error=%s", exc)
            raise StoreError(str(exc)) from exc

    def ping(self) -> bool:
        with self._session() as sess:
            rec = sess.run("RETURN 1 AS ok").single()
            return bool(rec and rec["ok"])

    def ensure_constraints(self) -> None:
        with self._session() as sess:
            for stmt in CONSTRAINTS:
                sess.run(stmt)
        log.info("Neo4j constraints ensured")

    # --- reads ---

    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as sess:
            rec = sess.run(
                """
                MATCH (u:User {id: $id})
                RETURN u.id AS id, u.name AS name
                LIMIT 1
                """,
                id=user_id,
            ).single()
        return _user_from_record(rec) if rec else None

    def get_item(self, item_id: str) -> Optional[Item]:
        with self._session() as sess:
            rec = sess.run(
                """
                MATCH (i:Item {id: $id})
                RETURN i.id AS id, i.name AS name, i.categories AS categories
                LIMIT 1
                """,
                id=item_id,
            ).single()
        return _item_from_record(rec) if rec else None

    # --- writes ---

    def upsert_user(self, user: User) -> User:
        if not user.id:
            user.id = new_id()
        with self._session() as sess:
            sess.run(
                """
                MERGE (u:User {id: $id})
                SET u.name = $name
                """,
                id=user.id,
                name=user.name,
            )
        return user

    def upsert_item(self, item: Item) -> Item:
        if not item.id:
            item.id = new_id()
        with self._session() as sess:
            sess.run(
                """
                MERGE (i:Item {id: $id})
                SET i.name = $name, i.categories = $categories
                """,
                id=item.id,
                name=item.name,
                categories=list(item.categories),
            )
        return item

    def upsert_link(self, link: Link) -> Link:
        if not link.is_well_formed():
            raise BadRequest("Link requires userId and itemId")
        if not link.id:
            link.id = new_id()
        with self._session() as sess:
            # Check endpoints first so MERGE never sees a half-matched pattern
            found = sess.run(
                """
                OPTIONAL MATCH (u:User {id: $uid})
                OPTIONAL MATCH (i:Item {id: $iid})
                RETURN u IS NOT NULL AS has_user, i IS NOT NULL AS has_item
                """,
                uid=link.user_id,
                iid=link.item_id,
            ).single()
            has_user = bool(found and found["has_user"])
            has_item = bool(found and found["has_item"])
            if not (has_user and has_item):
                raise InvalidReference(
                    user_id="" if has_user else link.user_id,
                    item_id="" if has_item else link.item_id,
                )
            merged = sess.run(
                """
                MATCH (u:User {id: $uid})
                MATCH (i:Item {id: $iid})
                MERGE (u)-[l:LINKED {id: $lid}]->(i)
                SET l.type = $type, l.score = $score
                RETURN l.id AS id
                """,
                uid=link.user_id,
                iid=link.item_id,
                lid=link.id,
                type=link.type,
                score=int(link.score),
            ).single()
            if not merged:
                raise InvalidReference(user_id=link.user_id, item_id=link.item_id)
        log.info(
            "link_upsert_ok link=%s user=%s item=%s type=%s",
            link.id, link.user_id, link.item_id, link.type,
        )
        return link

    # --- traversal ---

    def run_query(self, text: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """Run a composed query; params[n] is bound to $pn."""
        bound = {param_name(i): v for i, v in enumerate(params)}
        with self._session() as sess:
            return [rec.data() for rec in sess.run(text, bound)]
