"""Supabase adapters: PostgREST collection store and GoTrue auth."""

from mrcars_admin.infrastructure.supabase._rest_client import SupabaseRESTClient
from mrcars_admin.infrastructure.supabase.auth_client import SupabaseAuthClient
from mrcars_admin.infrastructure.supabase.client import (
    close_supabase,
    get_auth_client,
    get_store_client,
    init_supabase,
)

__all__ = [
    "SupabaseAuthClient",
    "SupabaseRESTClient",
    "close_supabase",
    "get_auth_client",
    "get_store_client",
    "init_supabase",
]
