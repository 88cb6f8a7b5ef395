import datetime

import pytest

D = datetime.date
TODAY = D(2025, 6, 15)


@pytest.fixture()
def headers(alice):
    return {"X-User-Id": str(alice.id)}


@pytest.fixture(autouse=True)
def fixed_today(monkeypatch):
    monkeypatch.setattr('fintrack.handlers.report_handler.current_date', lambda: TODAY)


def category_ids(client, headers):
    return {c["name"]: c["id"] for c in client.get("/api/categories", headers=headers).json()}


def add_transaction(client, headers, category_id, amount, day=TODAY):
    resp = client.post(
        "/api/transactions",
        json={"category_id": category_id, "amount": amount, "date": day.isoformat()},
        headers=headers
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["id"]


@pytest.fixture()
def sample_day(client, headers):
    ids = category_ids(client, headers)
    add_transaction(client, headers, ids["Salary"], 3000)
    add_transaction(client, headers, ids["Groceries"], 150)
    add_transaction(client, headers, ids["Transportation"], 50)
    return ids


def test_summary_for_sample_day(client, headers, sample_day):
    resp = client.get("/api/summary", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"income": 3000.0, "expense": 200.0, "balance": 2800.0}


def test_summary_respects_date_range(client, headers, sample_day):
    resp = client.get("/api/summary", params={"startDate": "2025-06-16"}, headers=headers)
    assert resp.json() == {"income": 0.0, "expense": 0.0, "balance": 0.0}

    resp = client.get("/api/summary", params={"startDate": "2025-06-15", "endDate": "2025-06-15"}, headers=headers)
    assert resp.json()["balance"] == 2800.0


def test_summary_inverted_range_is_an_error(client, headers, sample_day):
    resp = client.get("/api/summary", params={"startDate": "2025-06-20", "endDate": "2025-06-01"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidDateRange"


def test_summary_malformed_date_is_an_error(client, headers):
    resp = client.get("/api/summary", params={"endDate": "15/06/2025"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidDateRange"


def test_spending_by_category(client, headers, sample_day):
    resp = client.get("/api/spending-by-category", headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [(row["name"], row["total"]) for row in body] == [("Groceries", 150.0), ("Transportation", 50.0)]
    assert body[0]["color"] == "#ef4444"
    assert body[0]["category_id"] == sample_day["Groceries"]


def test_spending_by_category_is_owner_scoped(client, headers, store, sample_day):
    bob = store.create_user("bob", "hash")
    resp = client.get("/api/spending-by-category", headers={"X-User-Id": str(bob.id)})
    assert resp.json() == []


def test_weekly_summary_window(client, headers):
    ids = category_ids(client, headers)
    add_transaction(client, headers, ids["Groceries"], 10, TODAY - datetime.timedelta(days=7))
    add_transaction(client, headers, ids["Groceries"], 99, TODAY - datetime.timedelta(days=8))
    add_transaction(client, headers, ids["Salary"], 500, TODAY)

    resp = client.get("/api/weekly-summary", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"income": 500.0, "expense": 10.0, "balance": 490.0, "count": 2}


def test_daily_totals(client, headers, sample_day):
    resp = client.get("/api/daily-totals", params={"startDate": "2025-06-14", "endDate": "2025-06-15"},
                      headers=headers)
    assert resp.status_code == 200
    assert resp.json() == [
        {"date": "2025-06-14", "income": 0.0, "expense": 0.0},
        {"date": "2025-06-15", "income": 3000.0, "expense": 200.0},
    ]


def test_daily_totals_up_to_last_calendar_day(client, headers):
    resp = client.get("/api/daily-totals", params={"startDate": "9999-12-30", "endDate": "9999-12-31"},
                      headers=headers)
    assert resp.status_code == 200
    assert [row["date"] for row in resp.json()] == ["9999-12-30", "9999-12-31"]


@pytest.mark.parametrize("path", ["/api/daily-totals", "/api/charts/daily.png"])
def test_daily_range_too_long(client, headers, path):
    resp = client.get(path, params={"startDate": "0001-01-01", "endDate": "9999-12-31"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidDateRange"


def test_daily_totals_needs_both_bounds(client, headers):
    resp = client.get("/api/daily-totals", params={"startDate": "2025-06-14"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidDateRange"


@pytest.mark.parametrize("path,params", [
    ("/api/charts/spending-by-category.png", {}),
    ("/api/charts/summary.png", {"startDate": "2025-06-01"}),
    ("/api/charts/daily.png", {"startDate": "2025-06-10", "endDate": "2025-06-15"}),
])
def test_charts_are_png(client, headers, sample_day, path, params):
    resp = client.get(path, params=params, headers=headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/png"
    assert resp.content.startswith(b"\x89PNG")


@pytest.mark.parametrize("value", [None, "abc", "424242"])
def test_reports_need_a_known_user(client, value):
    headers = {"X-User-Id": value} if value else {}
    resp = client.get("/api/summary", headers=headers)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
