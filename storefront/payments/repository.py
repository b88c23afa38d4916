"""
Accès aux données pour la feature 'payments'.

L'écriture du checkout passe par la fonction Postgres `fulfill_checkout`
(supabase/migrations/0001_checkout.sql): find-or-create de l'utilisateur par email
et insertion du paiement dans une seule transaction.
"""
from typing import Any, Dict, List, Optional
import logging
import storefront.infra.supabase_client as supabase_client
from storefront.errors import StoreError

logger = logging.getLogger(__name__)

# module storefront.payments.repository
def fulfill_checkout(
    *,
    user_fields: Dict[str, Any],
    amount: int,
    currency: str,
    status: str,
    license_key: str,
    payment_intent_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Appelle rpc('fulfill_checkout') et retourne la ligne payments créée (avec user_id).
    - user_fields: colonnes users (email obligatoire, déjà normalisé)
    - Soulève StoreError si l'appel échoue ou ne renvoie rien
    """
    params = {
        "p_user": user_fields,
        "p_amount": int(amount),
        "p_currency": currency,
        "p_status": status,
        "p_license_key": license_key,
        "p_payment_intent_id": payment_intent_id,
    }
    try:
        res = supabase_client.get_service_supabase().rpc("fulfill_checkout", params).execute()
    except StoreError:
        raise
    except Exception as e:
        logger.exception(
            "payments.repository.fulfill_checkout failed email=%s payment_intent=%s",
            user_fields.get("email"), payment_intent_id,
        )
        raise StoreError() from e
    data = res.data
    # Selon la version de postgrest, une fonction « returns setof » revient en liste
    if isinstance(data, list):
        data = data[0] if data else None
    if not data:
        raise StoreError("fulfill_checkout returned no row")
    return dict(data)

def list_payments_for_user(user_id: str, limit: int = 50) -> List[dict]:
    """
    Paiements d'un utilisateur, du plus récent au plus ancien.
    - Retourne [] si user_id vide ou en cas d’erreur.
    """
    if not user_id:
        return []
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("payments")
            .select("id, user_id, amount, currency, status, license_key, payment_intent_id, created_at")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("payments.repository.list_payments_for_user failed user_id=%s", user_id)
        return []
