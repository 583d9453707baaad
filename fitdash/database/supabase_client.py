from supabase import create_client, Client
from fitdash.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Use only for cross-member aggregates."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def create_session_client(cls) -> Client:
        """Fresh anon client; sign-in/sign-up store their session on it."""
        return create_client(settings.supabase_url, settings.supabase_key)

    @classmethod
    def create_user_client(cls, access_token: str) -> Client:
        """Anon client acting as the token's user so RLS policies see auth.uid()."""
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.options.headers["Authorization"] = f"Bearer {access_token}"
        client.postgrest.auth(access_token)
        return client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def get_session_supabase() -> Client:
    return SupabaseClient.create_session_client()
