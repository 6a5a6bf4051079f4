"""
Authentication State Models.

``AuthUser`` is the session identity reported by Supabase Auth;
``AuthState`` is the complete snapshot published by ``AuthStore``.
Snapshots are frozen so a subscriber can never observe a half-applied
transition: every change produces a new instance.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class AuthUser(BaseModel):
    """Identity of the signed-in user.

    Attributes
    ----------
    id:
        The Supabase Auth user UUID; scopes every data read.
    email:
        The user's email address (empty when the provider omits it).
    display_name:
        Optional human-readable name from ``user_metadata``.
    """

    id: str
    email: str = ""
    display_name: Optional[str] = None

    model_config = {"frozen": True}


class AuthState(BaseModel):
    """The ``{user, is_authenticated, is_loading}`` snapshot."""

    user: Optional[AuthUser] = None
    is_authenticated: bool = False
    is_loading: bool = True

    model_config = {"frozen": True}

    @classmethod
    def loading(cls) -> AuthState:
        """Initial state before the first identity notification."""
        return cls(user=None, is_authenticated=False, is_loading=True)

    @classmethod
    def signed_out(cls) -> AuthState:
        return cls(user=None, is_authenticated=False, is_loading=False)

    @classmethod
    def signed_in(cls, user: AuthUser) -> AuthState:
        return cls(user=user, is_authenticated=True, is_loading=False)
