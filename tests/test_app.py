from fastapi import status
from fastapi.testclient import TestClient

from snowball.config import Settings, get_settings
from snowball.main import app

client = TestClient(app)


def debt(debt_id, balance, rate="0", minimum="0", ccj_deadline=None, status_="active"):
    payload = {
        "id": debt_id,
        "name": f"Debt {debt_id}",
        "balance": balance,
        "interest_rate": rate,
        "minimum_payment": minimum,
        "is_ccj": ccj_deadline is not None,
        "status": status_,
    }
    if ccj_deadline is not None:
        payload["ccj_deadline"] = ccj_deadline
    return payload


def test_health():
    resp = client.get("/health")
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"status": "ok"}


def test_order_puts_ccj_first_and_assigns_positions():
    payload = {
        "debts": [
            debt("card", "500.00", "15", "50"),
            debt("ccj", "2000.00", "10", "100", ccj_deadline="2026-06-01"),
            debt("old", "10.00", "0", "0", status_="paid"),
        ]
    }
    resp = client.post("/debts/order", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    ordered = resp.json()
    assert [d["id"] for d in ordered] == ["ccj", "card"]
    assert [d["snowball_position"] for d in ordered] == [1, 2]
    assert ordered[0]["ccj_deadline"] == "2026-06-01"
    assert ordered[0]["balance"] == "2000.00"


def test_debt_validation_errors():
    # CCJ without a deadline
    bad = debt("ccj", "100.00", "5", "10")
    bad["is_ccj"] = True
    resp = client.post("/debts/order", json={"debts": [bad]})
    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    # deadline on a non-CCJ debt
    bad = debt("card", "100.00", "5", "10")
    bad["ccj_deadline"] = "2026-01-01"
    resp = client.post("/debts/order", json={"debts": [bad]})
    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    # negative balance
    resp = client.post("/debts/order", json={"debts": [debt("x", "-1.00")]})
    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    # negative rate
    resp = client.post("/debts/order", json={"debts": [debt("x", "1.00", "-2")]})
    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    # more than two decimal places
    resp = client.post("/debts/order", json={"debts": [debt("x", "1.005")]})
    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_snowball_gives_surplus_to_focused_debt():
    payload = {
        "debts": [
            debt("c", "300.00", "0", "50"),
            debt("a", "100.00", "0", "100"),
            debt("b", "200.00", "0", "75"),
        ],
        "disposable_income": "500.00",
    }
    resp = client.post("/calculations/snowball", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert [d["debt_id"] for d in body["debts"]] == ["a", "b", "c"]
    assert [d["monthly_payment"] for d in body["debts"]] == ["375.00", "75.00", "50.00"]
    assert body["total_monthly_payment"] == "500.00"
    assert body["disposable_income"] == "500.00"


def test_snowball_underfunded_reports_minimums():
    # Documented quirk: total can exceed the disposable income.
    payload = {
        "debts": [debt("a", "100.00", "0", "100"), debt("b", "200.00", "0", "75")],
        "disposable_income": "-20.00",
    }
    resp = client.post("/calculations/snowball", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["total_monthly_payment"] == "175.00"
    assert body["disposable_income"] == "-20.00"


def test_snowball_without_debts():
    resp = client.post("/calculations/snowball", json={"debts": [], "disposable_income": "250"})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["debts"] == []
    assert resp.json()["total_monthly_payment"] == "0.00"


def test_debt_free_date_projection():
    payload = {
        "debts": [debt("a", "500.00", "0", "50")],
        "monthly_payment": "100.00",
        "start_date": "2026-01-31",
    }
    resp = client.post("/calculations/debt-free-date", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["months_to_debt_free"] == 5
    assert body["debt_free_date"] == "2026-05-31"
    assert body["total_interest"] == "0.00"
    assert len(body["schedule"]) == 5

    second = body["schedule"][1]
    assert (second["month"], second["year"], second["period_start"]) == (2, 2026, "2026-02-28")

    last = body["schedule"][-1]["debts"][0]
    assert last["ending_balance"] == "0.00"
    assert last["is_paid_off"] is True


def test_debt_free_date_amounts_have_two_decimal_places():
    payload = {
        "debts": [
            debt("ccj", "2000.00", "10", "100", ccj_deadline="2026-06-01"),
            debt("card", "500.00", "15", "50"),
        ],
        "monthly_payment": "333.33",
        "start_date": "2026-03-15",
    }
    resp = client.post("/calculations/debt-free-date", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["months_to_debt_free"] is not None
    assert body["schedule"][0]["debts"][0]["debt_id"] == "ccj"
    for month in body["schedule"]:
        for entry in month["debts"]:
            for field in ("starting_balance", "interest_charged", "payment_applied", "ending_balance"):
                whole, cents = entry[field].split(".")
                assert len(cents) == 2
                assert not entry[field].startswith("-")


def test_debt_free_date_infeasible():
    payload = {
        "debts": [debt("a", "500.00", "0", "50"), debt("b", "900.00", "0", "60")],
        "monthly_payment": "100.00",
    }
    resp = client.post("/calculations/debt-free-date", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["debt_free_date"] is None
    assert body["months_to_debt_free"] is None
    assert body["schedule"] == []


def test_debt_free_date_respects_configured_month_cap():
    settings = Settings()
    settings.MAX_PROJECTION_MONTHS = 12
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        payload = {
            "debts": [debt("a", "5000.00", "0", "100")],
            "monthly_payment": "100.00",
            "start_date": "2026-01-01",
        }
        resp = client.post("/calculations/debt-free-date", json=payload)
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["months_to_debt_free"] is None
    assert len(body["schedule"]) == 12


def test_disposable_income():
    payload = {
        "incomes": [{"amount": "100.00", "frequency": "weekly"}, {"amount": "1200.00", "frequency": "annual"}],
        "expenses": [
            {"amount": "150.00", "frequency": "monthly"},
            {"amount": "400.00", "frequency": "monthly", "uc_paid": True},
        ],
        "uc_deduction": "55.50",
    }
    resp = client.post("/calculations/disposable-income", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {
        "gross_income": "533.33",
        "total_expenses": "150.00",
        "uc_deduction": "55.50",
        "disposable_income": "327.83",
    }


def test_disposable_income_rejects_unknown_frequency():
    payload = {"incomes": [{"amount": "10.00", "frequency": "daily"}]}
    resp = client.post("/calculations/disposable-income", json=payload)
    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_rollover():
    resp = client.post(
        "/calculations/rollover", json={"current_payment": "120.50", "next_minimum": "35.25"}
    )
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"amount": "155.75"}


def test_debt_free_date_never_converging_returns_full_schedule():
    payload = {
        "debts": [debt("a", "1000.00", "100", "0")],
        "monthly_payment": "0.00",
        "start_date": "2026-01-01",
    }
    resp = client.post("/calculations/debt-free-date", json=payload)
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["debt_free_date"] is None
    assert body["months_to_debt_free"] is None
    assert len(body["schedule"]) == 600
    final = body["schedule"][-1]["debts"][0]["ending_balance"]
    whole, cents = final.split(".")
    assert len(whole) > 18
    assert len(cents) == 2


def test_order_accepts_very_high_apr():
    # Payday-style lenders quote four-figure APRs.
    resp = client.post("/debts/order", json={"debts": [debt("payday", "300.00", "1294", "50")]})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()[0]["interest_rate"] == "1294"
