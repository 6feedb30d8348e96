# apps/api/routes_items.py
from fastapi import APIRouter, Depends, status

from deps import get_engine
from recommendations import RecommendationEngine
from schemas import ItemIn, ItemOut
from security import require_basic_auth

router = APIRouter(prefix="/item", tags=["items"], dependencies=[Depends(require_basic_auth)])


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def upsert_item(body: ItemIn, engine: RecommendationEngine = Depends(get_engine)):
    return ItemOut.from_model(engine.upsert_item(body.to_model()))


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: str, engine: RecommendationEngine = Depends(get_engine)):
    return ItemOut.from_model(engine.get_item(item_id.strip()))
