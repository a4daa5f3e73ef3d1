"""
Bounded transaction history kept per account.
"""

from collections import deque
from typing import Deque, Iterator, Tuple

from .transactions import Transaction


DEFAULT_HISTORY_CAPACITY = 10


class HistoryBuffer:
    """Fixed-capacity FIFO of the most recent transactions"""
    
    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._capacity = capacity
        # Oldest on the left; deque(maxlen) drops from the left in O(1)
        self._entries: Deque[Transaction] = deque(maxlen=capacity)
    
    @property
    def capacity(self) -> int:
        return self._capacity
    
    def push(self, transaction: Transaction) -> None:
        """Append a transaction, evicting the oldest one when full"""
        self._entries.append(transaction)
    
    def snapshot(self) -> Tuple[Transaction, ...]:
        """
        Copy of the contents, newest first.
        
        The returned tuple is detached from the buffer, so later pushes
        never change it and it can be iterated any number of times.
        """
        return tuple(reversed(self._entries))
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.snapshot())
    
    def __repr__(self) -> str:
        return f"HistoryBuffer(capacity={self._capacity}, size={len(self._entries)})"
