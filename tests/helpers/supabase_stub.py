"""In-memory stand-in for the Supabase ``AsyncClient``.

Implements the slice of the fluent PostgREST builder and of the auth API
that the application uses::

    await client.table("categories").select("*").eq("user_id", uid)
                .gte(...).lte(...).order("name", desc=False).execute()
    await client.table(t).insert(row).execute()
    await client.table(t).upsert(rows, on_conflict="a,b", ignore_duplicates=True).execute()
    await client.table(t).update(fields).eq("id", rid).execute()
    await client.table(t).delete().eq("id", rid).execute()

Rows are stored as plain JSON-like dicts.  Timestamps are compared as
datetimes so range filters and ordering behave like ``timestamptz``.

Failure injection: ``stub.fail("categories", "select", RuntimeError())``
and ``stub.auth.fail("sign_out", RuntimeError())`` make the next and every
later call of that operation raise.
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from types import SimpleNamespace
from typing import Any, Optional


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


@dataclass
class StubResponse:
    data: list[dict[str, Any]] = field(default_factory=list)


class StubQuery:
    def __init__(
        self,
        client: StubSupabase,
        table: str,
        action: str,
        payload: Any = None,
        **options: Any,
    ) -> None:
        self._client = client
        self._table = table
        self._action = action
        self._payload = payload
        self._options = options
        self._filters: list[tuple[str, str, Any]] = []
        self._order: Optional[tuple[str, bool]] = None

    def select(self, *_columns: str) -> StubQuery:
        return self

    def eq(self, column: str, value: Any) -> StubQuery:
        self._filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value: Any) -> StubQuery:
        self._filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value: Any) -> StubQuery:
        self._filters.append(("lte", column, value))
        return self

    def order(self, column: str, *, desc: bool = False) -> StubQuery:
        self._order = (column, desc)
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        for op, column, value in self._filters:
            actual = row.get(column)
            if op == "eq" and actual != value:
                return False
            if op in ("gte", "lte"):
                if actual is None:
                    return False
                left, right = _comparable(actual), _comparable(value)
                if op == "gte" and not left >= right:
                    return False
                if op == "lte" and not left <= right:
                    return False
        return True

    async def execute(self) -> StubResponse:
        self._client.calls.append((self._table, self._action))
        failure = self._client.failures.get((self._table, self._action))
        if failure is not None:
            raise failure

        rows = self._client.tables.setdefault(self._table, [])
        handler = getattr(self, f"_{self._action}")
        return StubResponse(data=copy.deepcopy(handler(rows)))

    def _select(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        found = [row for row in rows if self._matches(row)]
        if self._order is not None:
            column, desc = self._order
            found.sort(key=lambda row: _comparable(row.get(column)), reverse=desc)
        return found

    def _insert(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        payload = self._payload if isinstance(self._payload, list) else [self._payload]
        inserted = []
        for item in payload:
            row = {"id": str(uuid.uuid4()), **copy.deepcopy(item)}
            rows.append(row)
            inserted.append(row)
        return inserted

    def _upsert(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        columns = [c.strip() for c in self._options["on_conflict"].split(",")]
        inserted = []
        for item in self._payload:
            key = tuple(item.get(c) for c in columns)
            existing = next(
                (row for row in rows if tuple(row.get(c) for c in columns) == key),
                None,
            )
            if existing is not None:
                if not self._options.get("ignore_duplicates"):
                    existing.update(copy.deepcopy(item))
                continue
            row = {"id": str(uuid.uuid4()), **copy.deepcopy(item)}
            rows.append(row)
            inserted.append(row)
        return inserted

    def _update(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        updated = []
        for row in rows:
            if self._matches(row):
                row.update(copy.deepcopy(self._payload))
                updated.append(row)
        return updated

    def _delete(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        removed = [row for row in rows if self._matches(row)]
        rows[:] = [row for row in rows if not self._matches(row)]
        return removed


class StubTable:
    def __init__(self, client: StubSupabase, name: str) -> None:
        self._client = client
        self._name = name

    def select(self, *columns: str) -> StubQuery:
        return StubQuery(self._client, self._name, "select")

    def insert(self, payload: Any) -> StubQuery:
        return StubQuery(self._client, self._name, "insert", payload)

    def upsert(
        self, payload: list[dict[str, Any]], *, on_conflict: str, ignore_duplicates: bool = False,
    ) -> StubQuery:
        return StubQuery(
            self._client, self._name, "upsert", payload,
            on_conflict=on_conflict, ignore_duplicates=ignore_duplicates,
        )

    def update(self, payload: dict[str, Any]) -> StubQuery:
        return StubQuery(self._client, self._name, "update", payload)

    def delete(self) -> StubQuery:
        return StubQuery(self._client, self._name, "delete")


class StubAuthError(Exception):
    """Mimics ``gotrue`` API errors, which carry a machine-readable ``code``."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class StubSubscription:
    def __init__(self, auth: StubAuth, callback: Callable[[str, Any], None]) -> None:
        self._auth = auth
        self.callback = callback

    def unsubscribe(self) -> None:
        if self in self._auth.subscriptions:
            self._auth.subscriptions.remove(self)


class StubAuth:
    def __init__(self) -> None:
        self.users: dict[str, tuple[str, SimpleNamespace]] = {}
        self.session: Optional[SimpleNamespace] = None
        self.subscriptions: list[StubSubscription] = []
        self.failures: dict[str, Exception] = {}

    def add_user(
        self, email: str, password: str, full_name: Optional[str] = None,
    ) -> SimpleNamespace:
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata={"full_name": full_name} if full_name else {},
        )
        self.users[email] = (password, user)
        return user

    def fail(self, operation: str, exc: Exception) -> None:
        self.failures[operation] = exc

    def _check(self, operation: str) -> None:
        if operation in self.failures:
            raise self.failures[operation]

    def _notify(self, event: str) -> None:
        for subscription in list(self.subscriptions):
            subscription.callback(event, self.session)

    def on_auth_state_change(self, callback: Callable[[str, Any], None]) -> StubSubscription:
        subscription = StubSubscription(self, callback)
        self.subscriptions.append(subscription)
        return subscription

    async def get_session(self) -> Optional[SimpleNamespace]:
        return self.session

    async def sign_in_with_password(self, credentials: dict[str, Any]) -> SimpleNamespace:
        self._check("sign_in_with_password")
        entry = self.users.get(credentials["email"])
        if entry is None or entry[0] != credentials["password"]:
            raise StubAuthError("Invalid login credentials", code="invalid_credentials")
        self.session = SimpleNamespace(user=entry[1], access_token="token")
        self._notify("SIGNED_IN")
        return SimpleNamespace(user=entry[1], session=self.session)

    async def sign_up(self, credentials: dict[str, Any]) -> SimpleNamespace:
        self._check("sign_up")
        email = credentials["email"]
        if email in self.users:
            raise StubAuthError("User already registered", code="user_already_exists")
        full_name = credentials.get("options", {}).get("data", {}).get("full_name")
        user = self.add_user(email, credentials["password"], full_name)
        return SimpleNamespace(user=user, session=None)

    async def sign_out(self) -> None:
        self._check("sign_out")
        self.session = None
        self._notify("SIGNED_OUT")


class StubSupabase:
    """The client object handed to ``DatabaseManager``."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.auth = StubAuth()

    def table(self, name: str) -> StubTable:
        return StubTable(self, name)

    def fail(self, table: str, action: str, exc: Exception) -> None:
        self.failures[(table, action)] = exc

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])
