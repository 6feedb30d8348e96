# apps/api/routes_recommend.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from deps import get_engine
from recommendations import RecommendationEngine
from schemas import RecommendationOut
from security import require_basic_auth

router = APIRouter(prefix="/recommend", tags=["recommend"], dependencies=[Depends(require_basic_auth)])


@router.get("/{uid}", response_model=List[RecommendationOut])
def recommend(
    uid: str,
    link_type: Optional[str] = Query(None, alias="type", description="Only follow links of this type"),
    category: List[str] = Query([], description="Match items in any of these categories"),
    engine: RecommendationEngine = Depends(get_engine),
):
    categories = [c.strip() for c in category if c.strip()]
    recs = engine.recommend(uid.strip(), (link_type or "").strip(), categories)
    return [RecommendationOut.from_model(r) for r in recs]
