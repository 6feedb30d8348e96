# apps/api/routes_links.py
from fastapi import APIRouter, Depends, status

from deps import get_engine
from recommendations import RecommendationEngine
from schemas import LinkIn, LinkOut
from security import require_basic_auth

router = APIRouter(prefix="/link", tags=["links"], dependencies=[Depends(require_basic_auth)])


@router.post("", response_model=LinkOut, status_code=status.HTTP_201_CREATED)
def upsert_link(body: LinkIn, engine: RecommendationEngine = Depends(get_engine)):
    # Both endpoints must already exist; see Neo4jGraphStore.upsert_link
    return LinkOut.from_model(engine.upsert_link(body.to_model()))
