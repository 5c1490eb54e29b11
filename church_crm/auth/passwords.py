"""Password hashing with bcrypt"""

import hashlib

import bcrypt


def _to_bcrypt_secret(password: str) -> bytes:
    """
    bcrypt only uses the first 72 BYTES of the password.
    We truncate to 72 bytes to avoid ValueError and to make behavior explicit.
    """
    pw = password.encode("utf-8")
    if len(pw) > 72:
        pw = pw[:72]
    return pw


def hash_password(password: str) -> str:
    """Returns a bcrypt hash as a UTF-8 string"""
    salt = bcrypt.gensalt(rounds=10)
    return bcrypt.hashpw(_to_bcrypt_secret(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against stored bcrypt hash"""
    try:
        return bcrypt.checkpw(_to_bcrypt_secret(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def password_fingerprint(password_hash: str) -> str:
    """Short digest of a stored hash; changes whenever the password does"""
    return hashlib.sha256(password_hash.encode("utf-8")).hexdigest()[:16]
