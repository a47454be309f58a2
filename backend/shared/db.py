from supabase import create_client, Client

from config.settings import DigestSettings


def get_supabase_client(settings: DigestSettings) -> Client:
    """Get initialized Supabase client."""
    return create_client(settings.supabase_url, settings.supabase_service_role_key)
