# apps/api/ids.py
import secrets

from config import settings


def new_id(nbytes: int = 0) -> str:
    """Random lowercase hex id; defaults to settings.id_bytes bytes (16 chars for 8)."""
    return secrets.token_hex(nbytes or settings.id_bytes)
