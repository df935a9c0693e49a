"""
Hachage des mots de passe (PBKDF2-HMAC-SHA512, sel aléatoire par utilisateur)
et génération des jetons de session opaques.

Format stocké : "<sel_hex>:<hash_hex>", compatible avec les fichiers db.json existants.
"""

import hashlib
import hmac
import secrets
import uuid

from stardesk.config import settings

KEY_LENGTH = 64


def _derive(password: str, salt: str) -> bytes:
    return hashlib.pbkdf2_hmac(
        "sha512",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        settings.PBKDF2_ITERATIONS,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    return f"{salt}:{_derive(password, salt).hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Comparaison en temps constant du hash dérivé. Un hash stocké mal formé ne correspond jamais."""
    salt, _, expected_hex = (stored or "").partition(":")
    if not salt or not expected_hex:
        return False
    try:
        expected = bytes.fromhex(expected_hex)
    except ValueError:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)


def new_token() -> str:
    return secrets.token_hex(32)


def new_id() -> str:
    return str(uuid.uuid4())
