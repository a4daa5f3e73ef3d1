"""
Request dependencies
"""

from fastapi import Request

from ..store import AccountStore


def get_account_store(request: Request) -> AccountStore:
    """Return the account store created by the application factory"""
    return request.app.state.account_store
