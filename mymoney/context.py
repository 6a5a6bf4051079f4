"""
Application Context.

Bootstraps the dependency graph via constructor injection: backend
connection, local schema, services and stores.  One ``AppContext`` per
process (or per test) replaces module-level singletons.

Usage::

    ctx = await AppContext.create()
    try:
        await ctx.auth.login(email, password)
        ...
    finally:
        await ctx.dispose()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from mymoney.config import AppConfig, get_config
from mymoney.database import DatabaseManager
from mymoney.logger import StructuredLogger, get_logger
from mymoney.schema import initialize_schema
from mymoney.services import ServiceContainer, create_services
from mymoney.stores.auth_store import AuthStore
from mymoney.stores.navigation_store import NavigationStore


class AppContext:
    """Everything a session needs, wired once."""

    def __init__(
        self,
        config: AppConfig,
        db: DatabaseManager,
        services: ServiceContainer,
        navigation: NavigationStore,
        auth: AuthStore,
    ) -> None:
        self.config = config
        self.db = db
        self.services = services
        self.navigation = navigation
        self.auth = auth

    @classmethod
    async def create(cls, config: Optional[AppConfig] = None) -> AppContext:
        """Connect, initialise local storage, wire services and start the stores."""
        config = config or get_config()

        db = await DatabaseManager.connect(
            supabase_url=config.SUPABASE_URL,
            supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
            sqlite_path=Path(config.LOCAL_DB_PATH),
            logger=StructuredLogger(name="mymoney.database"),
        )
        try:
            initialize_schema(db.sqlite, StructuredLogger(name="mymoney.schema"))
        except Exception:
            db.close()
            raise

        services = create_services(db)
        navigation = NavigationStore(
            storage=services["local_storage"],
            logger=get_logger("mymoney.navigation"),
        )
        auth = AuthStore(db=db, navigation=navigation, logger=get_logger("mymoney.auth"))

        navigation.init()
        await auth.init()
        return cls(config=config, db=db, services=services, navigation=navigation, auth=auth)

    async def dispose(self) -> None:
        """Detach store subscriptions and close the local database."""
        self.auth.dispose()
        self.navigation.dispose()
        self.db.close()
