import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from fintrack.charts import build_breakdown_chart, build_daily_chart, build_summary_chart
from fintrack.engine.records import CategoryTotal, DailyTotal, Summary

PNG = b"\x89PNG\r\n\x1a\n"


def test_breakdown_chart_with_and_without_data():
    items = [CategoryTotal(2, "Groceries", "#ef4444", Decimal("150")),
             CategoryTotal(3, "Transportation", "#f59e0b", Decimal("50"))]
    assert build_breakdown_chart(items).getvalue().startswith(PNG)
    assert build_breakdown_chart([], datetime.date(2025, 1, 1), None).getvalue().startswith(PNG)


def test_summary_chart():
    buf = build_summary_chart(Summary(Decimal("3000"), Decimal("200")))
    assert buf.getvalue().startswith(PNG)


def test_daily_chart_handles_quiet_days():
    days = [DailyTotal(datetime.date(2025, 1, d)) for d in range(1, 4)]
    assert build_daily_chart(days).getvalue().startswith(PNG)
    days.append(DailyTotal(datetime.date(2025, 1, 4), Decimal("10"), Decimal("7")))
    assert build_daily_chart(days).getvalue().startswith(PNG)


def test_summary_chart_draws_balance_bar(monkeypatch):
    fig, ax = MagicMock(), MagicMock()
    monkeypatch.setattr('fintrack.charts.plt.subplots', lambda *a, **kw: (fig, ax))
    monkeypatch.setattr('fintrack.charts._to_png', lambda f: "PNG")

    assert build_summary_chart(Summary(Decimal("3000"), Decimal("200"))) == "PNG"
    labels, values = ax.bar.call_args[0]
    assert labels == ["Income", "Expenses", "Balance"]
    assert values == [3000.0, 200.0, 2800.0]
    assert ax.bar.call_args[1]["color"][2] == "#3b82f6"
