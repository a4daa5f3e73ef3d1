"""
Transaction Model Module

Defines the transaction kinds, the immutable transaction records kept in
account history, and the unvalidated request submitted by clients.
"""

from datetime import datetime
from dataclasses import dataclass
from typing import Any
from enum import Enum

from .exceptions import InvalidRequestError


class TransactionKind(Enum):
    """Direction of a ledger movement, valued by its wire code"""
    CREDIT = "c"
    DEBIT = "d"
    
    @classmethod
    def parse(cls, raw: Any) -> 'TransactionKind':
        """Resolve a wire code (or an existing kind) to a TransactionKind"""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise InvalidRequestError(
                f"Invalid transaction kind: {raw!r}. Expected 'c' or 'd'."
            ) from None
    
    @property
    def sign(self) -> int:
        """+1 for credits, -1 for debits"""
        return 1 if self is TransactionKind.CREDIT else -1


@dataclass(frozen=True)
class Transaction:
    """
    Accepted ledger transaction
    
    Created only by the ledger engine, which stamps the acceptance time.
    """
    value: int
    kind: TransactionKind
    description: str
    timestamp: datetime
    
    @property
    def adjustment(self) -> int:
        """Signed effect of this transaction on the balance"""
        return self.kind.sign * self.value


@dataclass(frozen=True)
class TransactionRequest:
    """
    Transaction proposed by a client
    
    Fields are kept as received; the ledger engine validates them before
    any balance arithmetic happens.
    """
    value: Any
    kind: Any
    description: Any
