"""
Account Module

Holds the per-account state mutated by the ledger engine.
"""

from dataclasses import dataclass, field

from .history import HistoryBuffer


@dataclass
class Account:
    """
    Pre-provisioned ledger account
    
    The balance is in minor currency units and may go negative down to
    ``-limit``. Only the ledger engine mutates ``balance`` and ``history``.
    """
    id: int
    limit: int
    balance: int = 0
    history: HistoryBuffer = field(default_factory=HistoryBuffer)
    
    def __post_init__(self):
        if self.limit < 0:
            raise ValueError(f"Account {self.id} limit must not be negative")
        if not self.within_limit(self.balance):
            raise ValueError(
                f"Account {self.id} balance {self.balance} is below its limit of -{self.limit}"
            )
    
    @property
    def floor(self) -> int:
        """Lowest balance this account may hold"""
        return -self.limit
    
    def within_limit(self, balance: int) -> bool:
        """Check whether a balance respects this account's overdraft limit"""
        return balance >= self.floor
