# apps/api/routes_users.py
from fastapi import APIRouter, Depends, status

from deps import get_engine
from recommendations import RecommendationEngine
from schemas import UserIn, UserOut
from security import require_basic_auth

router = APIRouter(prefix="/user", tags=["users"], dependencies=[Depends(require_basic_auth)])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def upsert_user(body: UserIn, engine: RecommendationEngine = Depends(get_engine)):
    return UserOut.from_model(engine.upsert_user(body.to_model()))


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, engine: RecommendationEngine = Depends(get_engine)):
    return UserOut.from_model(engine.get_user(user_id.strip()))
