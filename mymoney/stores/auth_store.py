"""
Authentication Store.

Publishes the ``AuthState`` snapshot and drives Supabase Auth.  The
snapshot changes only in response to the backend's auth-state
notifications, with two local exceptions: ``login`` toggles
``is_loading`` around the request, and ``logout`` forces the signed-out
state when the server call fails.
"""

from __future__ import annotations

from typing import Any, Optional

from mymoney.database import DatabaseManager
from mymoney.errors import (
    AuthErrorCode,
    AuthenticationError,
    BackendUnavailableError,
    classify_auth_error,
)
from mymoney.logger import StructuredLogger
from mymoney.models.auth_models import AuthState, AuthUser
from mymoney.stores.base_store import BaseStore
from mymoney.stores.navigation_store import NavigationStore


def _user_from_session(session: Any) -> AuthUser:
    user = session.user
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthUser(
        id=str(user.id),
        email=user.email or "",
        display_name=metadata.get("full_name") or None,
    )


class AuthStore(BaseStore[AuthState]):
    """Observable authentication state.

    Parameters
    ----------
    db:
        ``DatabaseManager``; offline mode leaves the store signed out.
    navigation:
        Cleared on every logout.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        db: DatabaseManager,
        navigation: NavigationStore,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(AuthState.loading(), logger)
        self._db = db
        self._navigation = navigation
        self._subscription: Optional[Any] = None
        self._initialized: bool = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """Attach to backend identity notifications.  Idempotent."""
        if self._initialized:
            return
        self._initialized = True

        if not self._db.is_online:
            self._logger.info("Auth unavailable (offline mode); signed out.")
            self._set(AuthState.signed_out())
            return

        auth = self._db.supabase.auth
        self._subscription = auth.on_auth_state_change(self._on_auth_state_change)
        session = await auth.get_session()
        self._apply_session(session)

    def dispose(self) -> None:
        """Detach the backend subscription and drop store subscribers."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        super().dispose()

    def _on_auth_state_change(self, event: str, session: Any) -> None:
        self._logger.debug("Auth state change: %s", event)
        self._apply_session(session)

    def _apply_session(self, session: Any) -> None:
        if session is None or getattr(session, "user", None) is None:
            self._set(AuthState.signed_out())
        else:
            self._set(AuthState.signed_in(_user_from_session(session)))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> None:
        """Sign in with email and password.

        The signed-in state is applied by the ``SIGNED_IN`` notification,
        not by this call; until it arrives ``is_loading`` stays set.

        Raises
        ------
        BackendUnavailableError
            Offline mode; the state is left untouched.
        AuthenticationError
            Blank input or rejected credentials; ``is_loading`` is reset.
        """
        email = email.strip()
        if not email or not password:
            raise AuthenticationError(
                "Email and password are required.",
                error_code=AuthErrorCode.VALIDATION_ERROR,
            )

        auth = self._db.supabase.auth
        self._set(self.state.model_copy(update={"is_loading": True}))
        try:
            await auth.sign_in_with_password(
                {"email": email, "password": password},
            )
        except Exception as exc:
            self._set(self.state.model_copy(update={"is_loading": False}))
            code, message = classify_auth_error(exc)
            self._logger.warning(
                "Login failed for %s: %s", email, code,
                extra={"event": "LOGIN_FAILED"},
            )
            raise AuthenticationError(message, error_code=code, original_error=exc) from exc

        self._logger.info("User logged in: %s", email, extra={"event": "LOGIN"})

    async def signup(
        self, email: str, password: str, display_name: Optional[str] = None,
    ) -> None:
        """Register a new account.  The state follows backend notifications."""
        email = email.strip()
        if not email or not password:
            raise AuthenticationError(
                "Email and password are required.",
                error_code=AuthErrorCode.VALIDATION_ERROR,
            )

        auth = self._db.supabase.auth
        credentials: dict[str, Any] = {"email": email, "password": password}
        if display_name:
            credentials["options"] = {"data": {"full_name": display_name}}
        try:
            await auth.sign_up(credentials)
        except Exception as exc:
            code, message = classify_auth_error(exc)
            raise AuthenticationError(message, error_code=code, original_error=exc) from exc
        self._logger.info("User registered: %s", email, extra={"event": "SIGNUP"})

    async def logout(self) -> None:
        """Sign out and clear navigation history.  Never raises."""
        try:
            await self._db.supabase.auth.sign_out()
        except BackendUnavailableError:
            self._logger.debug("Offline; skipping server-side sign_out.")
            self._set(AuthState.signed_out())
        except Exception as exc:
            self._logger.warning("Server-side sign_out failed: %s", exc)
            self._set(AuthState.signed_out())

        self._navigation.clear()
        self._logger.info("User logged out.", extra={"event": "LOGOUT"})
