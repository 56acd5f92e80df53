# clinic_booking/services/security.py
"""
Credential helpers.

Contains:
- CallerIdentity: what the booking services see of a request's user
- hash_password() / verify_password(): salted PBKDF2
- issue_token() / verify_token(): signed query-string tokens

Token format:
    id=...&name=...&role=...&auth_date=...&hash=<hex HMAC-SHA256>
The hash covers the urlencoded payload before "&hash=" byte for byte,
so values cannot smuggle extra fields. The secret key is
SHA-256(auth_secret). A token must carry exactly TOKEN_FIELDS.
"""

import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl, urlencode

ROLE_PATIENT = "patient"
ROLE_ADMIN = "admin"
ROLES = (ROLE_PATIENT, ROLE_ADMIN)

PBKDF2_ITERATIONS = 200_000

TOKEN_FIELDS = ("id", "name", "role", "auth_date")
HASH_SEPARATOR = "&hash="


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated user attached to a request."""
    id: int
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


# ============================================================
# PASSWORDS
# ============================================================

def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    """Encode as "pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>"."""
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt_hex, hash_hex = encoded.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False

    try:
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode(), bytes.fromhex(salt_hex), int(iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), hash_hex)


# ============================================================
# TOKENS
# ============================================================

def _signature(payload: str, secret: str) -> str:
    secret_key = hashlib.sha256(secret.encode()).digest()
    return hmac.new(
        secret_key,
        payload.encode(),
        hashlib.sha256
    ).hexdigest()


def issue_token(identity: CallerIdentity, secret: str, now: Optional[float] = None) -> str:
    payload = urlencode({
        "id": str(identity.id),
        "name": identity.name,
        "role": identity.role,
        "auth_date": str(int(now if now is not None else time.time())),
    })
    return f"{payload}{HASH_SEPARATOR}{_signature(payload, secret)}"


def verify_token(token: str, secret: str, ttl_sec: int = 86400) -> CallerIdentity:
    """
    Check token signature + TTL and return the identity it carries.

    Raises:
        ValueError: malformed, tampered or expired token.
    """
    payload, sep, received_hash = token.rpartition(HASH_SEPARATOR)
    if not sep:
        raise ValueError("Missing hash")

    if not hmac.compare_digest(_signature(payload, secret).encode(), received_hash.encode()):
        raise ValueError("Invalid token signature")

    try:
        pairs = parse_qsl(payload, strict_parsing=True, keep_blank_values=True)
    except ValueError:
        raise ValueError("Malformed token") from None

    data = dict(pairs)
    if len(pairs) != len(data) or set(data) != set(TOKEN_FIELDS):
        raise ValueError("Malformed token")

    try:
        auth_date = int(data["auth_date"])
        user_id = int(data["id"])
    except ValueError:
        raise ValueError("Malformed token") from None
    if auth_date == 0 or time.time() - auth_date > ttl_sec:
        raise ValueError("Token expired")

    role = data["role"]
    if role not in ROLES:
        raise ValueError("Unknown role")

    return CallerIdentity(id=user_id, name=data["name"], role=role)
