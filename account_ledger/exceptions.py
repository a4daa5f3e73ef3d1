"""Exceptions raised by the account ledger."""

from typing import Optional


class LedgerError(Exception):
    """Base exception for all recoverable ledger errors"""

    def __init__(self, message: str, account_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.account_id = account_id


class AccountNotFoundError(LedgerError):
    """Raised when an account identifier is not provisioned"""

    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} not found", account_id)


class TransactionLimitExceededError(LedgerError):
    """Raised when a debit would take the balance below the overdraft floor"""

    def __init__(self, account_id: int, balance: int, limit: int, value: int):
        super().__init__(
            f"Debit of {value} would take account {account_id} from {balance} "
            f"below its limit of -{limit}",
            account_id,
        )
        self.balance = balance
        self.limit = limit
        self.value = value


class InvalidRequestError(LedgerError):
    """Raised when a transaction request is malformed"""
    pass


class BalanceOverflowError(ArithmeticError):
    """
    Raised when balance arithmetic leaves the supported integer range.

    Not a LedgerError: the HTTP layer reports it as a server error.
    """
    pass
