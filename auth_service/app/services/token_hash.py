"""
Refresh token digests.

Sessions store only a SHA-256 digest of the current refresh token; the raw
value never reaches the database.
"""

import hashlib
import hmac


def hash_token(token: str) -> str:
    """Deterministic hex digest of a token"""
    return hashlib.sha256(token.encode()).hexdigest()


def compare_token_hash(stored_hash: str, token: str) -> bool:
    """Constant-time check that ``token`` matches ``stored_hash``"""
    if not stored_hash or not token:
        return False
    return hmac.compare_digest(stored_hash.encode(), hash_token(token).encode())
