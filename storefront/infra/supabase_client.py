from typing import Optional
from supabase import create_client, Client
from storefront.config import SUPABASE_URL, SUPABASE_SERVICE_KEY
from storefront.errors import StoreError

_service_supabase: Optional[Client] = None

def get_service_supabase() -> Client:
    """
    Client service-role (bypass RLS): utilisé pour les lectures/écritures du checkout,
    la requête entrante n'étant pas authentifiée.
    """
    global _service_supabase
    if _service_supabase is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
            raise StoreError("SUPABASE_URL/SUPABASE_SERVICE_KEY manquants")
        _service_supabase = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
    return _service_supabase
