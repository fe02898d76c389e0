# app/routers/deps.py
from functools import lru_cache

from fastapi import Depends
from supabase import Client, create_client

from ..auth import SupabasePasswordVerifier
from ..config import settings
from ..invoice_store import SupabaseExecutor
from ..revalidation import ResponseRevalidator


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Shared Supabase client; invoice writes use the service role key."""
    key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
    if not settings.SUPABASE_URL or not key:
        raise RuntimeError("Supabase credentials are not configured")
    return create_client(settings.SUPABASE_URL, key)


def get_executor(supabase: Client = Depends(get_supabase)) -> SupabaseExecutor:
    return SupabaseExecutor(supabase)


def get_revalidator() -> ResponseRevalidator:
    """Fresh revalidation collector for the current request."""
    return ResponseRevalidator()


def get_verifier() -> SupabasePasswordVerifier:
    return SupabasePasswordVerifier()
