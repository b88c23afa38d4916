import re

def validate_password_strength(v: str) -> str:
    if len(v or "") < 8:
        raise ValueError('Le mot de passe doit contenir au moins 8 caractères')
    if not re.search(r'[A-Z]', v):
        raise ValueError('Le mot de passe doit contenir au moins une majuscule')
    if not re.search(r'[a-z]', v):
        raise ValueError('Le mot de passe doit contenir au moins une minuscule')
    if not re.search(r'\d', v):
        raise ValueError('Le mot de passe doit contenir au moins un chiffre')
    if not re.search(r'[!@#$%^&*()_+\-=\[\]{};:\'\"\\|,.<>\/?]', v):
        raise ValueError('Le mot de passe doit contenir au moins un caractère spécial')
    return v

def normalize_email(email: str) -> str:
    # Clé de recherche des utilisateurs: insensible à la casse
    return (email or "").strip().lower()

def is_valid_postcode(postcode: str, length: int) -> bool:
    return len((postcode or "").strip()) == length
