"""
Ledger Engine Module

Decides whether a transaction request is accepted against an account,
updates the balance and records the accepted transaction in the account
history. The engine holds no locks; callers serialize access to accounts.
"""

from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Callable, Optional

from .accounts import Account
from .exceptions import (
    BalanceOverflowError,
    InvalidRequestError,
    TransactionLimitExceededError,
)
from .transactions import Transaction, TransactionKind, TransactionRequest
from .logging_config import get_logger, log_action


# Balances are bounded to the signed 64-bit range
MAX_BALANCE = 2 ** 63 - 1
MIN_BALANCE = -(2 ** 63)

DEFAULT_MAX_DESCRIPTION_LENGTH = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balance and limit of an account after a transaction"""
    balance: int
    limit: int


class LedgerEngine:
    """
    Applies transaction requests to accounts
    
    Validation happens first, then the limit check on the post-transaction
    balance. Credits always pass the limit check since their adjustment is
    non-negative.
    """
    
    def __init__(
        self,
        max_description_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.max_description_length = max_description_length
        self._clock = clock or _utc_now
        self.logger = get_logger("account_ledger.ledger")
    
    def now(self) -> datetime:
        """Current time from the engine clock"""
        return self._clock()
    
    def validate(self, request: TransactionRequest) -> Transaction:
        """
        Validate a request and build the transaction it would record.
        
        Raises:
            InvalidRequestError: If value, kind or description is malformed
        """
        value = request.value
        # bool is an int subclass; True must not count as 1
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRequestError(f"Transaction value must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidRequestError(f"Transaction value must be positive, got {value}")
        if value > MAX_BALANCE:
            raise InvalidRequestError(f"Transaction value must not exceed {MAX_BALANCE}")
        
        kind = TransactionKind.parse(request.kind)
        
        description = request.description
        if not isinstance(description, str) or not description:
            raise InvalidRequestError("Transaction description must be a non-empty string")
        if len(description) > self.max_description_length:
            raise InvalidRequestError(
                f"Transaction description exceeds {self.max_description_length} characters"
            )
        
        return Transaction(
            value=value,
            kind=kind,
            description=description,
            timestamp=self.now()
        )
    
    def apply(self, account: Account, request: TransactionRequest) -> BalanceSnapshot:
        """
        Apply a transaction request to an account.
        
        The account is left untouched unless the transaction is accepted.
        
        Raises:
            InvalidRequestError: If the request is malformed
            TransactionLimitExceededError: If the new balance would be below -limit
            BalanceOverflowError: If the new balance leaves the 64-bit range
        """
        transaction = self.validate(request)
        candidate = account.balance + transaction.adjustment
        
        if not account.within_limit(candidate):
            log_action(
                self.logger, "warning", "Transaction rejected: limit exceeded",
                action="reject_transaction", resource=f"account:{account.id}",
                extra={
                    "balance": account.balance,
                    "limit": account.limit,
                    "value": transaction.value,
                    "kind": transaction.kind.value
                }
            )
            raise TransactionLimitExceededError(
                account.id, account.balance, account.limit, transaction.value
            )
        
        if candidate > MAX_BALANCE or candidate < MIN_BALANCE:
            raise BalanceOverflowError(
                f"Balance of account {account.id} would overflow: "
                f"{account.balance} + {transaction.adjustment}"
            )
        
        account.balance = candidate
        account.history.push(transaction)
        
        log_action(
            self.logger, "info", f"Transaction accepted: {transaction.kind.name.lower()}",
            action="apply_transaction", resource=f"account:{account.id}",
            extra={
                "value": transaction.value,
                "balance": account.balance,
                "limit": account.limit
            }
        )
        
        return BalanceSnapshot(balance=account.balance, limit=account.limit)
