# apps/api/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from models import Item, Link, Recommendation, User


class UserIn(BaseModel):
    id: Optional[str] = ""
    name: Optional[str] = ""

    def to_model(self) -> User:
        return User(id=(self.id or "").strip(), name=self.name or "")


class UserOut(BaseModel):
    id: str
    name: str

    @classmethod
    def from_model(cls, u: User) -> "UserOut":
        return cls(id=u.id, name=u.name)


class ItemIn(BaseModel):
    id: Optional[str] = ""
    name: Optional[str] = ""
    categories: List[str] = []

    def to_model(self) -> Item:
        return Item(id=(self.id or "").strip(), name=self.name or "", categories=self.categories)


class ItemOut(BaseModel):
    id: str
    name: str
    categories: List[str] = []

    @classmethod
    def from_model(cls, i: Item) -> "ItemOut":
        return cls(id=i.id, name=i.name, categories=list(i.categories))


class LinkIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = ""
    user_id: Optional[str] = Field("", alias="userId")
    item_id: Optional[str] = Field("", alias="itemId")
    type: Optional[str] = ""  # Buy, Rate, View, ...
    score: int = 0

    def to_model(self) -> Link:
        return Link(
            id=(self.id or "").strip(),
            user_id=(self.user_id or "").strip(),
            item_id=(self.item_id or "").strip(),
            type=self.type or "",
            score=self.score,
        )


class LinkOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    item_id: str = Field(alias="itemId")
    type: str
    score: int

    @classmethod
    def from_model(cls, l: Link) -> "LinkOut":
        return cls(id=l.id, user_id=l.user_id, item_id=l.item_id, type=l.type, score=l.score)


class RecommendationOut(BaseModel):
    item: ItemOut
    frequency: int

    @classmethod
    def from_model(cls, r: Recommendation) -> "RecommendationOut":
        return cls(item=ItemOut.from_model(r.item), frequency=r.frequency)
