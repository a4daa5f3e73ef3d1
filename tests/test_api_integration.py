"""
Integration tests for the Account Ledger API
Tests end-to-end request handling using FastAPI TestClient
"""

import pytest
from fastapi.testclient import TestClient

from account_ledger.api import CORRELATION_HEADER, create_app, status_code_for
from account_ledger.config import LedgerConfig
from account_ledger.exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    LedgerError,
    TransactionLimitExceededError,
)
from account_ledger.ledger import MAX_BALANCE
from account_ledger.store import AccountStore


@pytest.fixture
def config():
    return LedgerConfig(accounts={1: 1000, 2: 0, 3: 100_000}, log_level="WARNING")


@pytest.fixture
def client(config):
    """Create a test client backed by a fresh account store"""
    return TestClient(create_app(config=config))


def post_transaction(client, account_id, value, kind, description="test"):
    return client.post(
        f"/clientes/{account_id}/transacoes",
        json={"valor": value, "tipo": kind, "descricao": description}
    )


class TestHealthEndpoints:
    """Test health endpoint"""
    
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "healthy"
        assert data["accounts"] == 3


class TestTransactionEndpoint:
    """POST /clientes/{id}/transacoes"""
    
    def test_credit(self, client):
        r = post_transaction(client, 1, 500, "c")
        assert r.status_code == 200
        assert r.json() == {"limite": 1000, "saldo": 500}
    
    def test_worked_example(self, client):
        """Debit 400 accepted, debit 700 rejected, credit 2000 accepted"""
        r = post_transaction(client, 1, 400, "d")
        assert r.status_code == 200
        assert r.json()["saldo"] == -400
        
        r = post_transaction(client, 1, 700, "d")
        assert r.status_code == 422
        assert "limit" in r.json()["detail"]
        
        r = post_transaction(client, 1, 2000, "c")
        assert r.status_code == 200
        assert r.json() == {"limite": 1000, "saldo": 1600}
    
    def test_unknown_account(self, client):
        r = post_transaction(client, 42, 10, "c")
        assert r.status_code == 404
        assert r.json()["detail"] == "Account 42 not found"
    
    @pytest.mark.parametrize("body", [
        {"valor": 0, "tipo": "c", "descricao": "zero"},
        {"valor": -5, "tipo": "d", "descricao": "negative"},
        {"valor": 10, "tipo": "x", "descricao": "bad kind"},
        {"valor": 10, "tipo": "c", "descricao": ""},
        {"valor": 10, "tipo": "c", "descricao": "way too long"},
        {"valor": 10, "tipo": "c", "descricao": None},
        {"valor": 10, "tipo": None, "descricao": "no kind"},
    ])
    def test_invalid_requests(self, client, body):
        r = client.post("/clientes/1/transacoes", json=body)
        assert r.status_code == 422
        
        statement = client.get("/clientes/1/extrato").json()
        assert statement["saldo"]["total"] == 0
        assert statement["ultimas_transacoes"] == []
    
    @pytest.mark.parametrize("body", [
        {"valor": 1.5, "tipo": "c", "descricao": "fraction"},
        {"valor": "10", "tipo": "c", "descricao": "string"},
        {"tipo": "c", "descricao": "missing"},
    ])
    def test_malformed_body(self, client, body):
        """Bodies that do not match the schema are unprocessable"""
        r = client.post("/clientes/1/transacoes", json=body)
        assert r.status_code == 422
    
    @pytest.mark.parametrize("value", [2 ** 63, 10 ** 30])
    def test_value_beyond_64_bit_range(self, client, value):
        """Out-of-range amounts are unprocessable and leave the account untouched"""
        r = post_transaction(client, 1, value, "c", "big")
        assert r.status_code == 422
        
        statement = client.get("/clientes/1/extrato").json()
        assert statement["saldo"]["total"] == 0
        assert statement["ultimas_transacoes"] == []
    
    def test_non_integer_account_id(self, client):
        r = post_transaction(client, "abc", 10, "c")
        assert r.status_code == 422
    
    def test_overflow_is_server_error(self, config):
        """Balance overflow is not a client error"""
        client = TestClient(create_app(config=config), raise_server_exceptions=False)
        
        assert post_transaction(client, 2, MAX_BALANCE, "c").status_code == 200
        r = client.post(
            "/clientes/2/transacoes",
            json={"valor": 1, "tipo": "c", "descricao": "x"},
            headers={CORRELATION_HEADER: "req-500"}
        )
        assert r.status_code == 500
        assert r.headers[CORRELATION_HEADER] == "req-500"
        assert r.json() == {"detail": "Internal Server Error"}
        
        statement = client.get("/clientes/2/extrato").json()
        assert statement["saldo"]["total"] == MAX_BALANCE
    
    def test_correlation_id_propagated(self, client):
        r = client.post(
            "/clientes/1/transacoes",
            json={"valor": 1, "tipo": "c", "descricao": "x"},
            headers={CORRELATION_HEADER: "req-123"}
        )
        assert r.headers[CORRELATION_HEADER] == "req-123"
        
        r = client.get("/clientes/1/extrato")
        assert r.headers[CORRELATION_HEADER]


class TestStatementEndpoint:
    """GET /clientes/{id}/extrato"""
    
    def test_untouched_account(self, client):
        r = client.get("/clientes/3/extrato")
        assert r.status_code == 200
        data = r.json()
        assert data["saldo"]["total"] == 0
        assert data["saldo"]["limite"] == 100_000
        assert isinstance(data["saldo"]["data_extrato"], str)
        assert data["ultimas_transacoes"] == []
    
    def test_unknown_account(self, client):
        r = client.get("/clientes/6/extrato")
        assert r.status_code == 404
    
    def test_transactions_newest_first(self, client):
        post_transaction(client, 1, 100, "c", "salary")
        post_transaction(client, 1, 30, "d", "coffee")
        
        data = client.get("/clientes/1/extrato").json()
        assert data["saldo"]["total"] == 70
        
        transactions = data["ultimas_transacoes"]
        assert [t["descricao"] for t in transactions] == ["coffee", "salary"]
        assert transactions[0]["tipo"] == "d"
        assert transactions[0]["valor"] == 30
        assert isinstance(transactions[0]["realizada_em"], str)
    
    def test_only_last_ten_transactions(self, client):
        for n in range(1, 12):
            assert post_transaction(client, 3, n, "c", f"t{n}").status_code == 200
        
        transactions = client.get("/clientes/3/extrato").json()["ultimas_transacoes"]
        assert len(transactions) == 10
        assert [t["valor"] for t in transactions] == list(range(11, 1, -1))
    
    def test_rejected_transactions_not_listed(self, client):
        post_transaction(client, 2, 1, "d")
        data = client.get("/clientes/2/extrato").json()
        assert data["ultimas_transacoes"] == []


class TestAppFactory:
    """Test application wiring"""
    
    def test_injected_store_is_served(self, config):
        store = AccountStore([(77, 5)])
        client = TestClient(create_app(config=config, store=store))
        
        assert client.get("/clientes/77/extrato").json()["saldo"]["limite"] == 5
        assert client.get("/clientes/1/extrato").status_code == 404
    
    def test_apps_do_not_share_state(self, config):
        first = TestClient(create_app(config=config))
        second = TestClient(create_app(config=config))
        
        post_transaction(first, 1, 10, "c")
        assert second.get("/clientes/1/extrato").json()["saldo"]["total"] == 0
    
    def test_error_status_codes(self):
        assert status_code_for(AccountNotFoundError(1)) == 404
        assert status_code_for(TransactionLimitExceededError(1, 0, 0, 1)) == 422
        assert status_code_for(InvalidRequestError("bad")) == 422
        assert status_code_for(LedgerError("other")) == 400
