# apps/api/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List


def normalize_categories(categories: Iterable[str] | None) -> List[str]:
    # Categories are a set; keep a stable, de-duplicated order for storage
    return sorted({(c or "").strip() for c in (categories or []) if (c or "").strip()})


@dataclass
class User:
    id: str = ""
    name: str = ""


@dataclass
class Item:
    id: str = ""
    name: str = ""
    categories: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.categories = normalize_categories(self.categories)


@dataclass
class Link:
    user_id: str
    item_id: str
    id: str = ""
    type: str = ""  # Buy, Rate, View, ...
    score: int = 0

    def is_well_formed(self) -> bool:
        return bool(self.user_id) and bool(self.item_id)


@dataclass
class Recommendation:
    item: Item
    frequency: int = 0  # distinct supporting links, recomputed per query
