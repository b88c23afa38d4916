"""
Émission des clés de licence.

Collaborateur externe: le contrat se limite à « retourne un jeton opaque non vide ».
L'implémentation par défaut n'a aucune valeur cryptographique; un émetteur réel
peut être injecté dans payments.service.checkout(license_issuer=...).
"""
from typing import Callable
from uuid import uuid4
from storefront import config

LicenseIssuer = Callable[[], str]

def issue_license_key() -> str:
    return f"{config.LICENSE_KEY_PREFIX}-{uuid4().hex.upper()}"
