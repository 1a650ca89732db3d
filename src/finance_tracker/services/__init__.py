"""Service module exports."""

from . import categories, dashboard, ledger_service, store, users
from .store import LedgerStore

__all__ = [
    "LedgerStore",
    "categories",
    "dashboard",
    "ledger_service",
    "store",
    "users",
]
