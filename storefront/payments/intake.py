"""
Validation de la saisie acheteur (étape 1 du pipeline, avant tout appel Stripe).
"""
import logging
from storefront import config
from storefront.errors import ValidationError
from storefront.utils.validators import normalize_email, is_valid_postcode
from .models import BuyerDetails

logger = logging.getLogger(__name__)

# module storefront.payments.intake
def validate_intake(buyer: BuyerDetails, *, require_postcode: bool = True) -> BuyerDetails:
    """
    Contrôle et normalise les champs acheteur.
    - name et email obligatoires (non vides après trim)
    - postcode: longueur fixe (config.POSTCODE_LENGTH, 6 par défaut); obligatoire si require_postcode
    - email normalisé (trim + minuscules) pour la recherche find-or-create
    Soulève ValidationError sinon. Retourne une copie normalisée.
    """
    name = (buyer.name or "").strip()
    email = normalize_email(str(buyer.email or ""))
    if not name:
        raise ValidationError("Name is required")
    if not email:
        raise ValidationError("Email is required")

    postcode = (buyer.postcode or "").strip() or None
    if postcode is None and require_postcode:
        raise ValidationError("Postcode is required")
    if postcode is not None and not is_valid_postcode(postcode, config.POSTCODE_LENGTH):
        logger.info("intake rejected: postcode length=%s expected=%s", len(postcode), config.POSTCODE_LENGTH)
        raise ValidationError(f"Postcode must be {config.POSTCODE_LENGTH} characters")

    return buyer.model_copy(update={"name": name, "email": email, "postcode": postcode})
