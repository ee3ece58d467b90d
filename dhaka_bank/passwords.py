"""
Password Hashing Module

New hashes use salted scrypt, stored as ``scrypt$<salt>$<digest>``.
Unsalted SHA-256 hex digests from older data files are still accepted.
"""

import hashlib
import hmac
import secrets


SCRYPT_PREFIX = "scrypt"
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


def _generate_salt() -> str:
    """Generate random salt for password hashing"""
    return secrets.token_hex(16)


def _scrypt(password: str, salt: str) -> str:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P
    ).hex()


def hash_password_legacy(password: str) -> str:
    """Unsalted SHA-256, uppercase hex, as older data files store it"""
    return hashlib.sha256(password.encode("utf-8")).hexdigest().upper()


def hash_password(password: str, scheme: str = "scrypt") -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain-text password
        scheme: "scrypt" (salted) or "sha256" (legacy, unsalted)

    Returns:
        Encoded hash string
    """
    if scheme == "sha256":
        return hash_password_legacy(password)
    if scheme != "scrypt":
        raise ValueError(f"Unknown password scheme: {scheme}")

    salt = _generate_salt()
    return f"{SCRYPT_PREFIX}${salt}${_scrypt(password, salt)}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify password against stored hash with legacy support"""
    if not stored_hash:
        return False

    if stored_hash.startswith(SCRYPT_PREFIX + "$"):
        parts = stored_hash.split("$")
        if len(parts) != 3:
            return False
        _, salt, digest = parts
        return hmac.compare_digest(_scrypt(password, salt).encode(), digest.lower().encode())

    # Fall back to legacy SHA-256; hex case varies between writers
    return hmac.compare_digest(hash_password_legacy(password).encode(), stored_hash.upper().encode())
