# anatomy_quiz/core/supabase_client.py
from supabase import create_client, Client, ClientOptions
from .config import settings

_supabase: Client | None = None

def get_supabase() -> Client:
    global _supabase
    if _supabase is None:
        # create_client wants plain strings, not AnyUrl
        _supabase = create_client(
            str(settings.SUPABASE_URL),
            str(settings.SUPABASE_SERVICE_ROLE_KEY),
            options=ClientOptions(schema=settings.SUPABASE_SCHEMA),
        )
    return _supabase
