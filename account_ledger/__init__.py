"""
Account Ledger Service

An in-memory account ledger exposed over HTTP, with per-account overdraft
limits and a bounded statement history for every provisioned account.
"""

__version__ = "1.0.0"
