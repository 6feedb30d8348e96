# apps/api/security.py
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from config import settings

_basic = HTTPBasic(auto_error=False)


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def require_basic_auth(
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
) -> None:
    if not settings.http_username:
        return
    ok = (
        credentials is not None
        and _matches(credentials.username, settings.http_username)
        and _matches(credentials.password, settings.http_password)
    )
    if not ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Basic"},
        )
