"""
Pydantic schemas for API requests and responses

JSON field names follow the public wire format (valor, tipo, descricao, ...);
Python attribute names are used everywhere else.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ..ledger import BalanceSnapshot
from ..store import Statement
from ..transactions import Transaction, TransactionRequest


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Transaction schemas
class TransactionRequestModel(WireModel):
    value: StrictInt = Field(..., alias="valor", description="Amount in minor units")
    kind: Optional[str] = Field(None, alias="tipo", description="'c' for credit, 'd' for debit")
    description: Optional[str] = Field(None, alias="descricao", description="Short description")
    
    def to_request(self) -> TransactionRequest:
        return TransactionRequest(
            value=self.value,
            kind=self.kind,
            description=self.description
        )


class BalanceResponse(WireModel):
    limit: int = Field(..., alias="limite")
    balance: int = Field(..., alias="saldo")
    
    @classmethod
    def from_snapshot(cls, snapshot: BalanceSnapshot) -> 'BalanceResponse':
        return cls(limit=snapshot.limit, balance=snapshot.balance)


# Statement schemas
class TransactionModel(WireModel):
    value: int = Field(..., alias="valor")
    kind: str = Field(..., alias="tipo")
    description: str = Field(..., alias="descricao")
    timestamp: datetime = Field(..., alias="realizada_em")
    
    @classmethod
    def from_transaction(cls, transaction: Transaction) -> 'TransactionModel':
        return cls(
            value=transaction.value,
            kind=transaction.kind.value,
            description=transaction.description,
            timestamp=transaction.timestamp
        )


class StatementBalanceModel(WireModel):
    total: int
    statement_date: datetime = Field(..., alias="data_extrato")
    limit: int = Field(..., alias="limite")


class StatementResponse(WireModel):
    balance: StatementBalanceModel = Field(..., alias="saldo")
    recent_transactions: List[TransactionModel] = Field(..., alias="ultimas_transacoes")
    
    @classmethod
    def from_statement(cls, statement: Statement) -> 'StatementResponse':
        return cls(
            balance=StatementBalanceModel(
                total=statement.balance,
                statement_date=statement.statement_date,
                limit=statement.limit
            ),
            recent_transactions=[
                TransactionModel.from_transaction(txn)
                for txn in statement.recent_transactions
            ]
        )
