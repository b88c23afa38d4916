# module storefront.users.views

"""Points d'entrée API du domaine Utilisateurs.
- Inscription: POST /api/users/register (hash bcrypt, réponse sans hash)
- Historique: GET /api/users/{user_id}/payments
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException
from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import repository as payments_repo
from . import repository
from .models import RegisterRequest, UserOut
from .service import register_user

api_router = APIRouter(prefix="/api/users", tags=["Users API"])

@api_router.post(
    "/register",
    status_code=201,
    response_model=UserOut,
    dependencies=[Depends(optional_rate_limit(times=5, seconds=60))],
)
def register(req: RegisterRequest):
    """Crée un utilisateur; 409 si l'email existe déjà."""
    return register_user(req)

@api_router.get("/{user_id}/payments")
def user_payments(user_id: str) -> Dict[str, Any]:
    """Paiements de l'utilisateur, du plus récent au plus ancien; 404 si utilisateur inconnu."""
    if not repository.get_user_by_id(user_id):
        raise HTTPException(status_code=404, detail="Utilisateur introuvable")
    return {"payments": payments_repo.list_payments_for_user(user_id)}
