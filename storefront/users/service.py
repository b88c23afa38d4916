"""Couche service du domaine Utilisateurs.
- Inscription explicite (POST /api/users/register) avec hash bcrypt du mot de passe
- Find-or-create par email, sur lequel s'appuie l'inscription
"""
import logging
from typing import Any, Dict, Tuple

from storefront import config
from storefront.errors import CheckoutError, ValidationError
from storefront.utils.security import hash_password
from storefront.utils.validators import normalize_email, is_valid_postcode
from . import repository
from .models import RegisterRequest

logger = logging.getLogger(__name__)

def register_user(req: RegisterRequest) -> Dict[str, Any]:
    """Crée un compte.
    - Email normalisé; doublon -> 409 (find_or_create_user renvoie created=False)
    - Code postal contrôlé s'il est fourni (même règle que le checkout)
    - Mot de passe stocké uniquement sous forme de hash bcrypt
    Retour: la ligne users créée, sans password_hash.
    """
    if req.postcode and not is_valid_postcode(req.postcode, config.POSTCODE_LENGTH):
        raise ValidationError(f"Postcode must be {config.POSTCODE_LENGTH} characters")

    fields: Dict[str, Any] = {
        "name": req.name,
        "email": str(req.email),
        "password_hash": hash_password(req.password),
        "username": req.username,
        "address": req.address,
        "postcode": req.postcode,
        "country": req.country,
        "phone": req.phone,
    }
    user, created = find_or_create_user(fields)
    if not created:
        raise CheckoutError("User already exists", status_code=409)
    logger.info("users.register ok user=%s", user.get("id"))
    return user

def find_or_create_user(fields: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Retourne (utilisateur, created).
    - Recherche par email normalisé; crée l'utilisateur avec les champs non vides sinon.
    - Non atomique: le checkout passe par repository payments.fulfill_checkout (transaction SQL),
      l'index unique sur lower(email) tranche les courses entre deux inscriptions.
    """
    email = normalize_email(fields.get("email") or "")
    if not email:
        raise ValidationError("Email is required")
    existing = repository.get_user_by_email(email)
    if existing:
        return existing, False
    row = {k: v for k, v in fields.items() if v}
    row["email"] = email
    return repository.insert_user(row), True
