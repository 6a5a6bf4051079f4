"""
Navigation State Model.

Persisted as JSON under the ``navigation-state`` key of local storage.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class NavigationState(BaseModel):
    """Current and previous page plus the first-visit flag."""

    current_page: str = "/"
    previous_page: Optional[str] = None
    is_first_visit: bool = True

    model_config = {"frozen": True}
