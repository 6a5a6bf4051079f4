"""
Observable State Stores.

Usage:
    from mymoney.stores import AuthStore, NavigationStore
"""

from mymoney.stores.auth_store import AuthStore
from mymoney.stores.base_store import BaseStore
from mymoney.stores.navigation_store import NavigationStore

__all__ = ["AuthStore", "BaseStore", "NavigationStore"]
