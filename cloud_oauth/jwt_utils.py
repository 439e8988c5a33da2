"""
ID token parsing
"""
import base64
import json
import logging
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)


def decode_jwt(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode JWT payload without verification.

    Note: This only decodes the payload, does not verify signature. The
    token comes straight from the provider's token endpoint over TLS.

    Args:
        token: JWT (typically an OpenID Connect id_token)

    Returns:
        Decoded JWT payload as dictionary, or None if invalid
    """
    parts = token.split(".")
    if len(parts) != 3:
        logger.debug(f"Invalid JWT format: expected 3 parts, got {len(parts)}")
        return None

    payload = parts[1]

    # JWT uses base64url without padding
    padding = 4 - (len(payload) % 4)
    if padding != 4:
        payload += "=" * padding

    try:
        decoded = json.loads(base64.urlsafe_b64decode(payload).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        logger.debug(f"Error decoding JWT: {e}")
        return None

    return decoded if isinstance(decoded, dict) else None


def extract_subject(id_token: Optional[str]) -> Optional[str]:
    """
    Extract the account subject ("sub" claim) from an id_token.

    Args:
        id_token: OpenID Connect id_token, may be None

    Returns:
        Subject identifier if present, None otherwise
    """
    if not id_token:
        return None

    payload = decode_jwt(id_token)
    if not payload:
        return None

    subject = payload.get("sub")
    return str(subject) if subject else None
