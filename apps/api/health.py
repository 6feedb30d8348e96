# apps/api/health.py
from __future__ import annotations

import logging
from typing import Any, Dict

from config import settings

log = logging.getLogger("health")


def check_neo4j(store) -> Dict[str, Any]:
    """Check if the graph store answers a trivial query."""
    uri = (settings.neo4j_uri or "").strip()
    if not uri:
        return {"ok": False, "error": "Neo4j URI not configured"}
    if store is None:
        return {"ok": False, "error": "graph store not initialised"}
    try:
        return {"ok": bool(store.ping())}
    except Exception as e:
        log.warning("Neo4j health check failed: %s", e)
        return {"ok": False, "error": str(e)}


def collect_health_status(store) -> Dict[str, Any]:
    """
    Run all health checks and return overall status.

    The graph store is the only required dependency.
    """
    neo4j = check_neo4j(store)
    return {
        "ok": bool(neo4j.get("ok", False)),
        "checks": {"neo4j": neo4j},
    }
