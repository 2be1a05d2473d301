from __future__ import annotations

from pydantic import BaseModel


class MenuItemOut(BaseModel):
    id: str
    name: str
    price: int
    available: bool
    description: str = ""
    category: str = ""
