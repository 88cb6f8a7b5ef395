# handlers/category_handler.py
from typing import List, Literal, Optional

from fastapi import Depends
from pydantic import BaseModel, ConfigDict, Field

from fintrack.store import RecordStore
from fintrack.web_app import app, get_current_user_id, get_store


class CategoryIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    type: Literal["income", "expense"]
    color: Optional[str] = None


class CategoryOut(BaseModel):
    id: int
    name: str
    type: str
    color: str
    is_default: bool


@app.get("/api/categories", response_model=List[CategoryOut])
def list_categories(owner_id: int = Depends(get_current_user_id), store: RecordStore = Depends(get_store)):
    return [
        CategoryOut(id=c.id, name=c.name, type=c.type, color=c.color, is_default=bool(c.is_default))
        for c in store.list_categories(owner_id)
    ]


@app.post("/api/categories")
def create_category(body: CategoryIn, owner_id: int = Depends(get_current_user_id),
                    store: RecordStore = Depends(get_store)):
    category = store.create_category(owner_id, body.name, body.type, body.color)
    return {"success": True, "id": category.id}


@app.delete("/api/categories/{category_id}")
def delete_category(category_id: int, owner_id: int = Depends(get_current_user_id),
                    store: RecordStore = Depends(get_store)):
    store.delete_category(owner_id, category_id)
    return {"success": True}
