from decimal import Decimal

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlmodel import Session

from finance_ledger.core.http import unwrap
from finance_ledger.core.results import OperationResult
from finance_ledger.database import get_session
from finance_ledger.main import app


@pytest.fixture
def client(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


def _login(client, username="dana", pin="4821"):
    client.post("/auth/register", json={"username": username, "pin": pin})
    response = client.post("/auth/login", data={"username": username, "password": pin})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth(client):
    return _login(client)


class TestAuth:

    def test_register_and_me(self, client):
        response = client.post("/auth/register", json={"username": "dana", "pin": "4821"})
        assert response.status_code == 201
        headers = _login(client)
        me = client.get("/auth/me", headers=headers).json()
        assert me["username"] == "dana"
        assert me["clearance_level"] == 1

    def test_duplicate_username(self, client):
        client.post("/auth/register", json={"username": "dana", "pin": "4821"})
        response = client.post("/auth/register", json={"username": "dana", "pin": "0000"})
        assert response.status_code == 400

    def test_wrong_pin(self, client):
        client.post("/auth/register", json={"username": "dana", "pin": "4821"})
        response = client.post("/auth/login", data={"username": "dana", "password": "1111"})
        assert response.status_code == 401

    def test_token_required(self, client):
        assert client.get("/accounts").status_code == 401
        bad = {"Authorization": "Bearer not-a-token"}
        assert client.get("/accounts", headers=bad).status_code == 401


class TestLedgerFlow:

    def test_expense_moves_balance_and_budget(self, client, auth):
        account = client.post("/accounts", json={"name": "Everyday", "balance": "200.00"}, headers=auth)
        assert account.status_code == 201
        account_id = account.json()["id"]

        client.post(
            "/budgets",
            json={"category": "Food & Dining", "amount": "100.00", "month": "2025-03"},
            headers=auth,
        )
        tx = client.post(
            "/transactions",
            json={
                "type": "expense",
                "amount": "85.00",
                "category": "Food & Dining",
                "account_id": account_id,
                "date": "2025-03-10",
            },
            headers=auth,
        )
        assert tx.status_code == 201

        accounts = client.get("/accounts", headers=auth).json()
        assert Decimal(accounts[0]["balance"]) == Decimal("115.00")

        budget = client.get("/budgets", params={"month": "2025-03"}, headers=auth).json()[0]
        assert Decimal(budget["spent"]) == Decimal("85.00")
        assert budget["utilization"]["status"] == "warning"

        page = client.get("/transactions", params={"accountId": account_id}, headers=auth).json()
        assert page["total"] == 1

        assert client.delete(f"/transactions/{tx.json()['id']}", headers=auth).status_code == 204
        accounts = client.get("/accounts", headers=auth).json()
        assert Decimal(accounts[0]["balance"]) == Decimal("200.00")

    def test_validation_maps_to_400(self, client, auth):
        account_id = client.post("/accounts", json={"name": "Everyday"}, headers=auth).json()["id"]
        response = client.post(
            "/transactions",
            json={"type": "transfer", "amount": "5.00", "account_id": account_id, "to_account_id": account_id},
            headers=auth,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot transfer to the same account"

    def test_other_users_rows_are_404(self, client, auth):
        account_id = client.post("/accounts", json={"name": "Everyday"}, headers=auth).json()["id"]
        intruder = _login(client, username="sam", pin="9999")

        response = client.post(
            "/transactions",
            json={"type": "income", "amount": "5.00", "category": "Salary", "account_id": account_id},
            headers=intruder,
        )
        assert response.status_code == 404
        assert client.get(f"/accounts/{account_id}/interest", headers=intruder).status_code == 404


class TestReports:

    def test_dashboard_summary(self, client, auth):
        account_id = client.post("/accounts", json={"name": "Everyday", "balance": "50.00"}, headers=auth).json()["id"]
        client.post(
            "/transactions",
            json={"type": "income", "amount": "1000.00", "category": "Salary", "account_id": account_id, "date": "2025-03-01"},
            headers=auth,
        )
        client.post(
            "/transactions",
            json={"type": "expense", "amount": "300.00", "category": "Shopping", "account_id": account_id, "date": "2025-03-02"},
            headers=auth,
        )

        summary = client.get("/dashboard/summary", params={"month": "2025-03"}, headers=auth).json()
        assert Decimal(summary["total_balance"]) == Decimal("750.00")
        assert Decimal(summary["monthly_income"]) == Decimal("1000.00")
        assert Decimal(summary["net"]) == Decimal("700.00")
        assert Decimal(summary["budget_health"]) == Decimal("100.00")
        assert len(summary["recent_transactions"]) == 2

    def test_reconciliation_endpoints(self, client, auth):
        client.post("/accounts", json={"name": "Everyday", "balance": "50.00"}, headers=auth)

        report = client.get("/reconciliation", headers=auth).json()
        assert report["drifts"] == []
        assert report["applied"] is False

        report = client.post("/reconciliation", params={"dry_run": True}, headers=auth).json()
        assert report["applied"] is False
        assert report["accounts_checked"] == 1


class TestErrorMapping:

    @pytest.mark.parametrize(
        "error_type, code",
        [
            ("ValidationError", 400),
            ("NotFoundError", 404),
            ("ConsistencyError", 409),
            ("StorageError", 500),
            ("SomethingElse", 500),
        ],
    )
    def test_unwrap_status_codes(self, error_type, code):
        with pytest.raises(HTTPException) as excinfo:
            unwrap(OperationResult.fail("nope", error_type))
        assert excinfo.value.status_code == code
        assert excinfo.value.detail == "nope"

    def test_out_of_range_amount_is_400(self, client, auth):
        response = client.post("/budgets", json={"category": "Shopping", "amount": "1e27", "month": "2025-03"}, headers=auth)
        assert response.status_code == 400
