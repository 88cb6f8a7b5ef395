# charts.py
import matplotlib

matplotlib.use('Agg')  # Use non-GUI backend for image generation
import matplotlib.pyplot as plt
from io import BytesIO
from typing import List

from fintrack.engine.records import CategoryTotal, DailyTotal, Summary


def _to_png(fig) -> BytesIO:
    buf = BytesIO()
    fig.savefig(buf, format="png")
    buf.seek(0)
    plt.close(fig)
    return buf


def _period_label(start, end) -> str:
    if start is None and end is None:
        return "all time"
    return f"{start or '…'}–{end or '…'}"


# --------------------------------------------
# 1. Doughnut of expenses per category
# --------------------------------------------
def build_breakdown_chart(breakdown: List[CategoryTotal], start=None, end=None) -> BytesIO:
    labels = [item.name for item in breakdown] or ["No expenses"]
    sizes = [float(item.total) for item in breakdown] or [1.0]
    colors = [item.color for item in breakdown] or ["#d1d5db"]

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.pie(
        sizes,
        labels=labels,
        colors=colors,
        autopct="%1.1f%%" if breakdown else None,
        startangle=90,
        wedgeprops={"width": 0.4},
    )
    ax.set_title(f"Spending by category: {_period_label(start, end)}")
    return _to_png(fig)


# --------------------------------------------
# 2. Income, expense and balance bars
# --------------------------------------------
def build_summary_chart(summary: Summary, start=None, end=None) -> BytesIO:
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(
        ["Income", "Expenses", "Balance"],
        [float(summary.income), float(summary.expense), float(summary.balance)],
        color=["#10b981", "#ef4444", "#3b82f6"],
    )
    ax.axhline(0, color="black", linewidth=0.8)
    ax.set_title(f"Summary: {_period_label(start, end)}")
    ax.set_ylabel("Amount")
    return _to_png(fig)


# --------------------------------------------
# 3. Daily income/expense lines with the peak expense day marked
# --------------------------------------------
def build_daily_chart(daily: List[DailyTotal]) -> BytesIO:
    dates = [d.day for d in daily]
    income_vals = [float(d.income) for d in daily]
    expense_vals = [float(d.expense) for d in daily]
    max_val = max(expense_vals) if expense_vals else 0.0
    max_day = dates[expense_vals.index(max_val)] if expense_vals and max_val > 0 else None

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(dates, income_vals, color="#10b981", label="Income")
    ax.plot(dates, expense_vals, color="#ef4444", label="Expenses")
    if max_day:
        ax.scatter([max_day], [max_val], color="black")
        ax.text(max_day, max_val, f"  Max: {max_val:.2f}", fontsize=8)
    ax.legend()
    if dates:
        ax.set_title(f"Daily totals: {dates[0]}–{dates[-1]}")
    ax.set_xlabel("Date")
    ax.set_ylabel("Amount")
    fig.autofmt_xdate()
    return _to_png(fig)
