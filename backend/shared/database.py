"""
Database client factory for Supabase.

The client is created by the service container (the composition root) and
handed to repositories. Nothing in this module caches it.
"""

from supabase import create_client, Client

from .config import Settings
from .exceptions import ConfigurationError


def create_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the service role (bypasses RLS).

    The backend reads and writes token versions, user records and trading
    settings on behalf of users, so it needs full database access.

    Args:
        settings: Application settings holding the Supabase URL and key

    Returns:
        Supabase client configured with service role key

    Raises:
        ConfigurationError: If the URL or service role key is missing
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise ConfigurationError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )
