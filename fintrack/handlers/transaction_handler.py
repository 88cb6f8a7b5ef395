# handlers/transaction_handler.py
import datetime
from typing import List, Optional

from fastapi import Depends, Query
from pydantic import BaseModel

from fintrack.engine.filters import build_filter
from fintrack.store import RecordStore
from fintrack.web_app import app, get_current_user_id, get_store


class TransactionIn(BaseModel):
    category_id: int
    amount: float
    date: datetime.date
    description: Optional[str] = None


class TransactionOut(BaseModel):
    id: int
    category_id: int
    category_name: str
    category_type: str
    category_color: str
    amount: float
    description: Optional[str] = None
    date: datetime.date


@app.get("/api/transactions", response_model=List[TransactionOut])
def list_transactions(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = build_filter(owner_id, start_date, end_date)
    return [record.to_dict() for record in store.list_transactions(txn_filter)]


@app.post("/api/transactions")
def create_transaction(body: TransactionIn, owner_id: int = Depends(get_current_user_id),
                       store: RecordStore = Depends(get_store)):
    transaction = store.create_transaction(
        owner_id,
        body.category_id,
        body.amount,
        body.date,
        body.description
    )
    return {"success": True, "id": transaction.id}


@app.delete("/api/transactions/{transaction_id}")
def delete_transaction(transaction_id: int, owner_id: int = Depends(get_current_user_id),
                       store: RecordStore = Depends(get_store)):
    store.delete_transaction(owner_id, transaction_id)
    return {"success": True}
