"""
Stockage des identifiants: hash bcrypt salé, jamais de mot de passe en clair.
"""
import bcrypt

def hash_password(password: str) -> str:
    # Génère un hash bcrypt avec salt auto
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")

def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Hash mal formé (ex: ancienne valeur en clair)
        return False
