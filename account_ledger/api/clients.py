"""
Client account endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import get_account_store
from .schemas import BalanceResponse, StatementResponse, TransactionRequestModel
from ..store import AccountStore


router = APIRouter()


@router.post("/{account_id}/transacoes", response_model=BalanceResponse)
async def submit_transaction(
    account_id: int,
    request: TransactionRequestModel,
    store: AccountStore = Depends(get_account_store)
):
    """Submit a credit or debit against an account"""
    snapshot = await store.apply(account_id, request.to_request())
    return BalanceResponse.from_snapshot(snapshot)


@router.get("/{account_id}/extrato", response_model=StatementResponse)
async def get_statement(
    account_id: int,
    store: AccountStore = Depends(get_account_store)
):
    """Get balance, limit and the most recent transactions of an account"""
    statement = await store.statement(account_id)
    return StatementResponse.from_statement(statement)
