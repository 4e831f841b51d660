import jwt
import logging
from typing import Any, Dict, Optional

from config.badges_config import TOKEN_KEY
from utils.cache_utils import KeyValueStore

logger = logging.getLogger(__name__)

class IdentityError(Exception):
    """Raised when no usable user id can be read from a bearer token."""

def decode_token_claims(token: Optional[str]) -> Dict[str, Any]:
    """
    Decode a JWT payload WITHOUT verifying its signature.
    The upstream backend is the only party that validates authenticity;
    this side only reads claims for display and filtering.
    """
    if not token:
        raise IdentityError("No token available")
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        raise IdentityError(f"Undecodable token: {e}") from e
    if not isinstance(claims, dict):
        raise IdentityError("Token payload is not an object")
    return claims

def get_user_id(token: Optional[str]) -> str:
    """Extract the `id` claim as a string."""
    claims = decode_token_claims(token)
    user_id = claims.get("id")
    if user_id is None or str(user_id) == "":
        raise IdentityError("Token payload has no id")
    return str(user_id)


# ─── Session token persistence ────────────────────────────────────────────────

def store_token(store: KeyValueStore, token: str) -> bool:
    store.remove(TOKEN_KEY)
    ok = store.set(TOKEN_KEY, token)
    if not ok:
        logger.error("Error storing token")
    return ok

def get_token(store: KeyValueStore) -> Optional[str]:
    return store.get(TOKEN_KEY) or None

def remove_token(store: KeyValueStore) -> bool:
    return store.remove(TOKEN_KEY)
