"""Shared test helpers: an in-memory Supabase client."""
