# handlers/report_handler.py
import datetime
from typing import List, Optional

from fastapi import Depends, Query
from fastapi.responses import Response
from pydantic import BaseModel

from fintrack.charts import build_breakdown_chart, build_daily_chart, build_summary_chart
from fintrack.engine.aggregation import WEEK, breakdown_by_category, daily_totals, summarize, weekly_rollup
from fintrack.engine.errors import InvalidDateRange
from fintrack.engine.filters import DateRange, TransactionFilter, build_filter
from fintrack.store import RecordStore
from fintrack.web_app import app, get_current_user_id, get_store


class SummaryOut(BaseModel):
    income: float
    expense: float
    balance: float


class CategoryTotalOut(BaseModel):
    category_id: int
    name: str
    color: str
    total: float
    percent: float


class WeeklyRollupOut(SummaryOut):
    count: int


class DailyTotalOut(BaseModel):
    date: datetime.date
    income: float
    expense: float


def current_date() -> datetime.date:
    return datetime.date.today()


def _png(buf) -> Response:
    content = buf.getvalue()
    buf.close()
    return Response(content=content, media_type="image/png")


def _bounded_filter(owner_id: int, start_date, end_date) -> TransactionFilter:
    txn_filter = build_filter(owner_id, start_date, end_date)
    if txn_filter.date_range.start is None or txn_filter.date_range.end is None:
        raise InvalidDateRange("both startDate and endDate are required")
    return txn_filter


# --- 1. Income / expense / balance over the chosen range ---
@app.get("/api/summary", response_model=SummaryOut)
def get_summary(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = build_filter(owner_id, start_date, end_date)
    return summarize(store.list_transactions(txn_filter)).to_dict()


# --- 2. Where the money went ---
@app.get("/api/spending-by-category", response_model=List[CategoryTotalOut])
def get_spending_by_category(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = build_filter(owner_id, start_date, end_date)
    return [item.to_dict() for item in breakdown_by_category(store.list_transactions(txn_filter))]


# --- 3. Trailing seven days, independent of any chosen range ---
@app.get("/api/weekly-summary", response_model=WeeklyRollupOut)
def get_weekly_summary(owner_id: int = Depends(get_current_user_id), store: RecordStore = Depends(get_store)):
    today = current_date()
    txn_filter = TransactionFilter(owner_id, DateRange(today - WEEK, today))
    return weekly_rollup(store.list_transactions(txn_filter), today).to_dict()


# --- 4. Day-by-day series ---
@app.get("/api/daily-totals", response_model=List[DailyTotalOut])
def get_daily_totals(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = _bounded_filter(owner_id, start_date, end_date)
    rng = txn_filter.date_range
    return [d.to_dict() for d in daily_totals(store.list_transactions(txn_filter), rng.start, rng.end)]


# --- 5. Charts ---
@app.get("/api/charts/spending-by-category.png")
def chart_spending_by_category(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = build_filter(owner_id, start_date, end_date)
    breakdown = breakdown_by_category(store.list_transactions(txn_filter))
    rng = txn_filter.date_range
    return _png(build_breakdown_chart(breakdown, rng.start, rng.end))


@app.get("/api/charts/summary.png")
def chart_summary(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = build_filter(owner_id, start_date, end_date)
    summary = summarize(store.list_transactions(txn_filter))
    rng = txn_filter.date_range
    return _png(build_summary_chart(summary, rng.start, rng.end))


@app.get("/api/charts/daily.png")
def chart_daily(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    txn_filter = _bounded_filter(owner_id, start_date, end_date)
    rng = txn_filter.date_range
    return _png(build_daily_chart(daily_totals(store.list_transactions(txn_filter), rng.start, rng.end)))
