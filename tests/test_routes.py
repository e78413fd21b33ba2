"""End-to-end tests for the JSON blueprints."""

from __future__ import annotations

import io


def _add_tx(client, **overrides):
    data = {
        "date": "2025-01-03",
        "kind": "Expense",
        "description": "Groceries",
        "category": "Food",
        "amount": 15000,
        "payment_method": "Cash",
    }
    data.update(overrides)
    return client.post("/transactions/", json=data)


def test_protected_routes_require_sign_in(client):
    for path in ("/transactions/", "/budgets/", "/debts/", "/notes/", "/todos/", "/reports/dashboard"):
        response = client.get(path)
        assert response.status_code == 401, path
        body = response.get_json()
        assert body["error"]["kind"] == "unauthenticated"
        assert body["error"]["reauthenticate"] is True


def test_signup_validation_and_duplicate(client):
    bad = client.post("/auth/signup", json={"email": "nope", "password": "123"})
    assert bad.status_code == 400
    assert set(bad.get_json()["error"]["errors"]) == {"email", "password"}

    assert client.post("/auth/signup", json={"email": "A@x.io", "password": "secret123"}).status_code == 201
    dup = client.post("/auth/signup", json={"email": "a@x.io", "password": "secret123"})
    assert dup.status_code == 400


def test_login_logout_cycle(client):
    client.post("/auth/signup", json={"email": "me@x.io", "password": "secret123"})
    client.post("/auth/logout")
    assert client.get("/auth/me").status_code == 401

    wrong = client.post("/auth/login", json={"email": "me@x.io", "password": "wrong-pass"})
    assert wrong.status_code == 401

    ok = client.post("/auth/login", json={"email": "me@x.io", "password": "secret123"})
    assert ok.status_code == 200
    assert client.get("/auth/me").get_json()["user"]["email"] == "me@x.io"


def test_transaction_crud_and_filters(auth_client):
    created = _add_tx(auth_client)
    assert created.status_code == 201
    tx_id = created.get_json()["id"]
    _add_tx(auth_client, kind="Income", category="Salary", description="Pay", amount=500000)

    expenses = auth_client.get("/transactions/?type=Expense&category=Food").get_json()["transactions"]
    assert [tx["id"] for tx in expenses] == [tx_id]
    assert expenses[0]["date"].startswith("2025-01-03T12:00")

    replaced = auth_client.put(
        f"/transactions/{tx_id}",
        json={"date": "2025-01-04", "kind": "Expense", "description": "Market",
              "category": "Food", "amount": 9000, "payment_method": "Cash"},
    )
    assert replaced.status_code == 200
    assert auth_client.get(f"/transactions/{tx_id}").get_json()["transaction"]["amount"] == 9000

    assert auth_client.delete(f"/transactions/{tx_id}").status_code == 200
    # Already gone: still a success from the caller's perspective.
    again = auth_client.delete(f"/transactions/{tx_id}")
    assert again.status_code == 200
    assert again.get_json()["ok"] is True
    assert auth_client.get(f"/transactions/{tx_id}").status_code == 404


def test_invalid_transaction_returns_field_errors(auth_client):
    response = _add_tx(auth_client, amount=0, description="")

    assert response.status_code == 400
    errors = response.get_json()["error"]["errors"]
    assert set(errors) == {"amount", "description"}


def test_export_and_import_round_trip(auth_client):
    _add_tx(auth_client, description='Lunch "deluxe"')

    export = auth_client.get("/transactions/export.csv")
    assert export.status_code == 200
    assert export.mimetype == "text/csv"
    csv_text = export.get_data(as_text=True)
    assert csv_text.splitlines()[0].startswith("Date,Type,Description")

    imported = auth_client.post(
        "/transactions/import",
        data={"file": (io.BytesIO(csv_text.encode("utf-8")), "export.csv")},
        content_type="multipart/form-data",
    )
    assert imported.status_code == 201
    assert imported.get_json()["created"] == 1

    listed = auth_client.get("/transactions/").get_json()["transactions"]
    assert [tx["description"] for tx in listed] == ['Lunch "deluxe"', 'Lunch "deluxe"']


def test_printable_export(auth_client):
    _add_tx(auth_client)

    response = auth_client.get("/transactions/export/print")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "Total Income" in html
    assert "Net Balance" in html


def test_monthly_and_yearly_reports(auth_client):
    _add_tx(auth_client, kind="Income", category="Initial Balance", description="Open",
            amount=500000, date="2025-01-01")
    _add_tx(auth_client)

    monthly = auth_client.get("/reports/monthly?month=1&year=2025").get_json()
    assert monthly["summary"]["total_income"] == 500000
    assert monthly["summary"]["balance"] == 485000
    assert monthly["weeks"][0]["label"] == "Week 1"
    assert monthly["expense_categories"][0]["category"] == "Food"

    yearly = auth_client.get("/reports/yearly?year=2025").get_json()
    assert len(yearly["months"]) == 12
    assert yearly["months"][0]["expense"] == 15000

    assert auth_client.get("/reports/monthly?month=13").status_code == 400


def test_dashboard_and_charts(auth_client):
    dashboard = auth_client.get("/reports/dashboard")
    assert dashboard.status_code == 200
    assert {"summary", "weeks", "top_categories", "recent"} <= set(dashboard.get_json())

    chart = auth_client.get("/reports/charts/weekly.png?month=1&year=2025")
    assert chart.status_code == 200
    assert chart.mimetype == "image/png"
    assert chart.data.startswith(b"\x89PNG")
    assert auth_client.get("/reports/charts/categories.png").data.startswith(b"\x89PNG")


def test_budget_and_debt_flow(auth_client):
    assert auth_client.post("/budgets/", json={"category": "Food", "amount": 50000}).status_code == 201
    budgets = auth_client.get("/budgets/").get_json()["budgets"]
    assert budgets[0]["budget"]["category"] == "Food"
    assert budgets[0]["remaining"] == budgets[0]["budget"]["amount"] - budgets[0]["spent"]

    debt = auth_client.post(
        "/debts/",
        json={"direction": "owed", "counterparty_name": "Moussa", "total_amount": 100000},
    ).get_json()
    paid = auth_client.post(f"/debts/{debt['id']}/payments", json={"amount": 30000})
    assert paid.get_json()["remaining"] == 70000
    rejected = auth_client.post(f"/debts/{debt['id']}/payments", json={"amount": 0})
    assert rejected.status_code == 400

    listed = auth_client.get("/debts/").get_json()
    assert listed["debts"][0]["status"] == "open"
    assert listed["totals"]["owed_to_user"] == 70000


def test_notes_and_todos(auth_client):
    assert auth_client.post("/notes/", json={"content": "Check statement"}).status_code == 201
    assert auth_client.post("/notes/", json={"content": " "}).status_code == 400
    assert len(auth_client.get("/notes/").get_json()["notes"]) == 1

    todo_id = auth_client.post("/todos/", json={"text": "Pay rent"}).get_json()["id"]
    assert auth_client.patch(f"/todos/{todo_id}/toggle").get_json()["completed"] is True
    assert auth_client.get("/todos/").get_json()["todos"][0]["completed"] is True


def test_users_cannot_see_each_other(app):
    first = app.test_client()
    first.post("/auth/signup", json={"email": "one@x.io", "password": "secret123"})
    tx_id = _add_tx(first).get_json()["id"]

    second = app.test_client()
    second.post("/auth/signup", json={"email": "two@x.io", "password": "secret123"})

    assert second.get("/transactions/").get_json()["transactions"] == []
    assert second.get(f"/transactions/{tx_id}").status_code == 404


def test_preferences_round_trip(client):
    initial = client.get("/preferences/").get_json()
    assert initial["dark_mode"] is False

    updated = client.patch("/preferences/", json={"dark_mode": True, "selected_month": 3})
    assert updated.status_code == 200
    assert client.get("/preferences/").get_json()["selected_month"] == 3

    assert client.patch("/preferences/", json={"selected_month": 0}).status_code == 400


def test_unknown_route_is_json_404(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.get_json()["ok"] is False


def test_import_skips_ragged_rows_and_keeps_the_rest(auth_client):
    text = (
        "Date,Type,Description,Category,Amount (FCFA),Payment Method,Notes\n"
        "01/03/2025,Expense,Lunch,Food,1500,Cash,\n"
        "01/04/2025,Expense,Taxi, airport,Transport,2000,Cash,,\n"
    )

    response = auth_client.post(
        "/transactions/import",
        data={"file": (io.BytesIO(text.encode("utf-8")), "ragged.csv")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 201
    body = response.get_json()
    assert (body["created"], body["skipped"]) == (1, 1)
    assert body["errors"][0]["line"].startswith("01/04/2025,Expense,Taxi")


def test_import_rejects_non_utf8_upload(auth_client):
    response = auth_client.post(
        "/transactions/import",
        data={"file": (io.BytesIO(b"\xff\xfe\xfa"), "binary.csv")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["kind"] == "invalid-argument"
    assert "file" in error["errors"]
    assert auth_client.get("/transactions/").get_json()["transactions"] == []
