import hashlib
import hmac
import secrets

# OTP expiry time (5 minutes)
OTP_EXPIRY_MINUTES = 5
MAX_OTP_ATTEMPTS = 3

_CODE_MIN = 100000
_CODE_MAX = 999999


def generate_code() -> str:
    """Random six digit code, uniform over [100000, 999999]."""
    return str(_CODE_MIN + secrets.randbelow(_CODE_MAX - _CODE_MIN + 1))


def hash_code(code: str) -> str:
    return hashlib.sha256(code.encode("utf-8")).hexdigest()


def verify_code(code: str, stored_hash: str) -> bool:
    if code is None or stored_hash is None:
        return False
    return hmac.compare_digest(hash_code(str(code)), stored_hash)
