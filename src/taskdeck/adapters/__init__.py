"""Adapters - I/O implementations of ports."""

from .supabase_api import SupabaseAuthService, SupabaseTaskRepository
from .memory_store import InMemoryTaskRepository

__all__ = [
    "SupabaseAuthService",
    "SupabaseTaskRepository",
    "InMemoryTaskRepository",
]
