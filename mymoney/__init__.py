"""My Money: personal budgeting on a Supabase backend."""

APP_NAME: str = "My Money"
APP_VERSION: str = "0.1.0"
