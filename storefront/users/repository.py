"""Couche d’accès aux données (Supabase) pour le domaine Utilisateurs.
Les lectures « catchent » les erreurs et renvoient None (introuvable = erreur côté UX);
les écritures les propagent sous forme de StoreError.
"""
import logging
from typing import Any, Dict, Optional
import storefront.infra.supabase_client as supabase_client
from storefront.errors import StoreError

logger = logging.getLogger(__name__)

# Colonnes exposées: jamais password_hash
PUBLIC_COLUMNS = "id, name, email, username, address, postcode, country, phone, created_at"

def get_user_by_email(email: str) -> Optional[dict]:
    """Récupère un utilisateur par email (table users), email déjà normalisé.
    - Retour: dict utilisateur ou None si introuvable/erreur
    """
    if not email:
        return None
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("users")
            .select(PUBLIC_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.get_user_by_email failed")
        return None

def get_user_by_id(user_id: str) -> Optional[dict]:
    """Récupère un utilisateur par id (table users).
    - Retour: dict utilisateur ou None si introuvable/erreur
    """
    if not user_id:
        return None
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("users")
            .select(PUBLIC_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.get_user_by_id failed user_id=%s", user_id)
        return None

def insert_user(row: Dict[str, Any]) -> dict:
    """Insère un utilisateur et retourne la ligne créée (sans password_hash).
    - Soulève StoreError si Supabase refuse l'insertion (ex: email déjà pris, 23505)
    """
    try:
        res = supabase_client.get_service_supabase().table("users").insert(row).execute()
    except Exception as e:
        logger.exception("users.repository.insert_user failed email=%s", row.get("email"))
        raise StoreError() from e
    rows = res.data or []
    if not rows:
        raise StoreError("User insert returned no row")
    created = dict(rows[0])
    created.pop("password_hash", None)
    return created
