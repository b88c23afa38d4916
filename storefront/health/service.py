import socket
from urllib.parse import urlparse
import storefront.infra.supabase_client as supabase_client
from storefront.config import SUPABASE_URL, STRIPE_SECRET_KEY

CHECKOUT_TABLES = ("users", "payments")

def _check_table(client, table: str) -> dict:
    try:
        client.table(table).select("id").limit(1).execute()
        return {"ok": True}
    except Exception as e:
        return {"ok": False, "error": str(e)}

def health_supabase_info() -> dict:
    """Diagnostic de connectivité: résolution DNS de SUPABASE_URL puis lecture des tables du checkout."""
    parsed = urlparse(SUPABASE_URL) if SUPABASE_URL else None
    hostname = parsed.hostname if parsed else None
    dns_ok = None
    dns_error = None
    if hostname:
        try:
            socket.getaddrinfo(hostname, 443)
            dns_ok = True
        except OSError as e:
            dns_ok = False
            dns_error = str(e)

    info = {
        "supabase_url": SUPABASE_URL,
        "hostname": hostname,
        "dns_ok": dns_ok,
        "dns_error": dns_error,
        "connect_ok": False,
        "error": None,
        "tables": {},
    }
    try:
        client = supabase_client.get_service_supabase()
        for t in CHECKOUT_TABLES:
            info["tables"][t] = _check_table(client, t)
        info["connect_ok"] = all(t["ok"] for t in info["tables"].values())
    except Exception as e:
        info["error"] = str(getattr(e, "detail", None) or e)
    return info

def health_stripe_info() -> dict:
    # Pas d'appel réseau: on indique seulement si la clé est configurée
    return {"configured": bool(STRIPE_SECRET_KEY), "mode": "test" if STRIPE_SECRET_KEY.startswith("sk_test_") else ("live" if STRIPE_SECRET_KEY else None)}
