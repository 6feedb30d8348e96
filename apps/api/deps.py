# apps/api/deps.py
from fastapi import Request

from graph import Neo4jGraphStore
from recommendations import RecommendationEngine


def get_store(request: Request) -> Neo4jGraphStore:
    return request.app.state.store


def get_engine(request: Request) -> RecommendationEngine:
    return RecommendationEngine(get_store(request))
