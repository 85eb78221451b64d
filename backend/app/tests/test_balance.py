"""
Tests for balances, monthly totals and debt-adjusted balance.
"""
import random
from decimal import Decimal

import pytest

from app.core.errors import ValidationError
from app.services.balance_service import account_balance, debt_adjusted_balance, month_bounds, monthly_total


def test_balance_starts_at_zero(client, auth_headers):
    response = client.get("/api/account/balance", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"balance": 0.0}


def test_income_then_delete_balance(client, auth_headers):
    income_id = client.post("/api/income", headers=auth_headers, json={
        "amount": 1000.50, "source": "Client X", "date": "2024-01-05", "account_type": "cash"
    }).json()["id"]
    assert client.get("/api/account/balance", headers=auth_headers).json()["balance"] == 1000.50

    client.delete(f"/api/income/{income_id}", headers=auth_headers)
    assert client.get("/api/account/balance", headers=auth_headers).json()["balance"] == 0.0


def test_balance_is_exact_in_cents(client, auth_headers):
    for _ in range(3):
        client.post("/api/income", headers=auth_headers, json={
            "amount": "0.10", "source": "Coins", "date": "2024-01-05"
        })
    client.post("/api/expenses", headers=auth_headers, json={"amount": "0.20", "date": "2024-01-06"})
    assert client.get("/api/account/balance", headers=auth_headers).json()["balance"] == 0.1


def test_balance_matches_ledger_after_random_operations(client, register, db):
    """Balance equals income minus expenses over whatever survives a random sequence."""
    headers, user_id = register(client)
    rng = random.Random(20240105)
    live = {}
    for _ in range(30):
        if live and rng.random() < 0.3:
            entry_id = rng.choice(sorted(live))
            kind, _amount = live.pop(entry_id)
            path = "income" if kind == "income" else "expenses"
            client.delete(f"/api/{path}/{entry_id}", headers=headers)
            continue
        amount = Decimal(rng.randint(1, 100000)) / 100
        if rng.random() < 0.5:
            response = client.post("/api/income", headers=headers, json={
                "amount": str(amount), "source": "Random", "date": "2024-02-02"
            })
            live[response.json()["id"]] = ("income", amount)
        else:
            response = client.post("/api/expenses", headers=headers, json={
                "amount": str(amount), "date": "2024-02-02"
            })
            live[response.json()["id"]] = ("expense", amount)

    expected = sum(
        (amount if kind == "income" else -amount for kind, amount in live.values()),
        Decimal("0")
    )
    assert account_balance(db, user_id) == expected
    assert client.get("/api/account/balance", headers=headers).json()["balance"] == float(expected)


def test_balance_is_per_user(client, register):
    alice, _ = register(client, email="alice@example.com")
    bob, _ = register(client, email="bob@example.com")
    client.post("/api/income", headers=alice, json={"amount": 50, "source": "Job", "date": "2024-01-01"})
    assert client.get("/api/account/balance", headers=bob).json()["balance"] == 0.0


def test_monthly_totals(client, auth_headers):
    client.post("/api/income", headers=auth_headers, json={"amount": 100, "source": "A", "date": "2024-03-01"})
    client.post("/api/income", headers=auth_headers, json={"amount": 50.25, "source": "B", "date": "2024-03-31"})
    client.post("/api/income", headers=auth_headers, json={"amount": 999, "source": "C", "date": "2024-04-01"})
    client.post("/api/expenses", headers=auth_headers, json={"amount": 20, "date": "2024-03-15"})
    client.post("/api/expenses", headers=auth_headers, json={"amount": 7, "date": "2024-02-29"})

    income = client.get("/api/calculate/monthly-income?month=3&year=2024", headers=auth_headers)
    expenses = client.get("/api/calculate/monthly-expenses?month=3&year=2024", headers=auth_headers)
    assert income.json() == {"total": 150.25}
    assert expenses.json() == {"total": 20.0}

    february = client.get("/api/calculate/monthly-expenses?month=2&year=2024", headers=auth_headers)
    assert february.json() == {"total": 7.0}


def test_monthly_total_rejects_bad_month(client, auth_headers):
    response = client.get("/api/calculate/monthly-income?month=13&year=2024", headers=auth_headers)
    assert response.status_code == 422


def test_month_bounds():
    assert [str(day) for day in month_bounds(12, 2023)] == ["2023-12-01", "2024-01-01"]
    assert [str(day) for day in month_bounds(2, 2024)] == ["2024-02-01", "2024-03-01"]
    with pytest.raises(ValidationError):
        month_bounds(0, 2024)


def test_monthly_total_unknown_kind(db):
    with pytest.raises(ValidationError):
        monthly_total(db, "someone", "debt", 1, 2024)


def test_adjusted_balance_adds_pending_given(client, register, db):
    headers, user_id = register(client)
    client.post("/api/income", headers=headers, json={"amount": 100, "source": "Job", "date": "2024-01-01"})
    client.post("/api/debts", headers=headers, json={
        "type": "given", "amount": 30, "person_name": "Sam", "date": "2024-01-02"
    })
    client.post("/api/debts", headers=headers, json={
        "type": "received", "amount": 10, "person_name": "Kim", "date": "2024-01-03"
    })

    response = client.get("/api/account/balance/adjusted", headers=headers)
    assert response.json() == {
        "balance": 100.0,
        "pending_debts_given": 30.0,
        "pending_debts_received": 10.0,
        "adjusted_balance": 130.0,
    }


def test_adjusted_balance_subtracts_received_when_nothing_given(client, register, db):
    headers, user_id = register(client)
    client.post("/api/income", headers=headers, json={"amount": 100, "source": "Job", "date": "2024-01-01"})
    client.post("/api/debts", headers=headers, json={
        "type": "received", "amount": 40, "person_name": "Kim", "date": "2024-01-03"
    })
    client.post("/api/debts", headers=headers, json={
        "type": "given", "amount": 25, "person_name": "Sam", "date": "2024-01-02", "status": "paid"
    })

    result = debt_adjusted_balance(db, user_id)
    assert result["pending_debts_given"] == Decimal("0")
    assert result["adjusted_balance"] == Decimal("60.00")


def test_adjusted_balance_without_debts(db, client, register):
    _, user_id = register(client)
    assert debt_adjusted_balance(db, user_id)["adjusted_balance"] == Decimal("0")


def test_monthly_total_year_out_of_range(client, auth_headers):
    response = client.get("/api/calculate/monthly-income?month=12&year=9999", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    response = client.get("/api/calculate/monthly-expenses?month=1&year=10000", headers=auth_headers)
    assert response.status_code == 400


def test_month_bounds_last_representable_month():
    with pytest.raises(ValidationError):
        month_bounds(12, 9999)
    assert [str(day) for day in month_bounds(11, 9999)] == ["9999-11-01", "9999-12-01"]
