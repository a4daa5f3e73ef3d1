"""
Account Store Module

Owns every provisioned account and serializes all access to them through a
single asyncio lock. ``apply`` is the only way to mutate an account and
``statement`` the only way to read one.
"""

import asyncio
from datetime import datetime
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .accounts import Account
from .config import LedgerConfig
from .exceptions import AccountNotFoundError
from .history import DEFAULT_HISTORY_CAPACITY, HistoryBuffer
from .ledger import BalanceSnapshot, LedgerEngine
from .transactions import Transaction, TransactionRequest
from .logging_config import get_logger, log_action


@dataclass(frozen=True)
class Statement:
    """Point-in-time view of an account"""
    account_id: int
    balance: int
    limit: int
    statement_date: datetime
    recent_transactions: Tuple[Transaction, ...]


class AccountStore:
    """In-memory store of pre-provisioned accounts"""
    
    def __init__(
        self,
        provisioning: Iterable[Tuple[int, int]],
        engine: Optional[LedgerEngine] = None,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY
    ):
        """
        Args:
            provisioning: (account id, limit) pairs; fixed for the store's lifetime
            engine: Ledger engine used for every mutation
            history_capacity: Number of transactions kept per account
        """
        self._accounts: Dict[int, Account] = {}
        for account_id, limit in provisioning:
            if account_id in self._accounts:
                raise ValueError(f"Account {account_id} provisioned twice")
            self._accounts[account_id] = Account(
                id=account_id,
                limit=limit,
                history=HistoryBuffer(history_capacity)
            )
        
        self.engine = engine or LedgerEngine()
        self._lock = asyncio.Lock()
        self.logger = get_logger("account_ledger.store")
        
        log_action(
            self.logger, "info", f"Provisioned {len(self._accounts)} accounts",
            action="provision_accounts",
            extra={"accounts": {str(k): a.limit for k, a in self._accounts.items()}}
        )
    
    @classmethod
    def from_config(cls, config: LedgerConfig) -> 'AccountStore':
        """Build a store from the configured provisioning table"""
        engine = LedgerEngine(max_description_length=config.max_description_length)
        return cls(
            config.accounts.items(),
            engine=engine,
            history_capacity=config.history_capacity
        )
    
    def account_ids(self) -> List[int]:
        """Provisioned account identifiers, sorted"""
        return sorted(self._accounts)
    
    def _get_account(self, account_id: int) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account
    
    async def apply(self, account_id: int, request: TransactionRequest) -> BalanceSnapshot:
        """
        Apply a transaction request to an account.
        
        Returns:
            The account's balance and limit after the transaction
        
        Raises:
            AccountNotFoundError: If the account is not provisioned
            InvalidRequestError: If the request is malformed
            TransactionLimitExceededError: If a debit would breach the limit
        """
        async with self._lock:
            account = self._get_account(account_id)
            return self.engine.apply(account, request)
    
    async def statement(self, account_id: int) -> Statement:
        """
        Read balance, limit and recent transactions (newest first).
        
        Raises:
            AccountNotFoundError: If the account is not provisioned
        """
        async with self._lock:
            account = self._get_account(account_id)
            return Statement(
                account_id=account.id,
                balance=account.balance,
                limit=account.limit,
                statement_date=self.engine.now(),
                recent_transactions=account.history.snapshot()
            )
