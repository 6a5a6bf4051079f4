"""
Navigation Store.

Tracks the current and previous page and persists them to local storage
so the next session can return the user to where they left off.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from mymoney.logger import StructuredLogger
from mymoney.models.navigation import NavigationState
from mymoney.services.local_storage import LocalStorageService
from mymoney.stores.base_store import BaseStore

STORAGE_KEY: str = "navigation-state"
DEFAULT_REDIRECT: str = "/dashboard"

# Pages that are never a useful post-login destination.
_ENTRY_PAGES: frozenset[str] = frozenset({"/", "/login"})


class NavigationStore(BaseStore[NavigationState]):
    """Observable navigation history backed by ``LocalStorageService``."""

    def __init__(self, storage: LocalStorageService, logger: StructuredLogger) -> None:
        super().__init__(NavigationState(), logger)
        self._storage = storage

    def _load(self) -> Optional[NavigationState]:
        raw = self._storage.get(STORAGE_KEY)
        if raw is None:
            return None
        try:
            return NavigationState.model_validate_json(raw)
        except ValidationError as exc:
            self._logger.warning(
                "Discarding unreadable %s entry: %s", STORAGE_KEY, exc,
            )
            return None

    def init(self) -> None:
        """Restore the persisted state; any stored entry means a return visit."""
        stored = self._load()
        if stored is None:
            self._set(NavigationState())
        else:
            self._set(stored.model_copy(update={"is_first_visit": False}))

    def navigate_to(self, page: str) -> None:
        state = NavigationState(
            current_page=page,
            previous_page=self.state.current_page,
            is_first_visit=False,
        )
        self._storage.set(STORAGE_KEY, state.model_dump_json())
        self._set(state)

    def clear(self) -> None:
        """Forget the persisted history and reset to the initial state."""
        self._storage.remove(STORAGE_KEY)
        self._set(NavigationState())

    def get_redirect_page(self) -> str:
        """Where to send the user after login.

        Reads local storage directly rather than the in-memory snapshot.
        """
        stored = self._load()
        if stored is None or stored.current_page in _ENTRY_PAGES:
            return DEFAULT_REDIRECT
        return stored.current_page
