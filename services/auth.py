from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings

_ALGO = "HS256"
_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """Identity of the caller, handed explicitly to every handler."""
    user_id: str


def create_token(user_id: str, ttl_minutes: int | None = None) -> str:
    ttl = settings.jwt_ttl_minutes if ttl_minutes is None else ttl_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    payload = {"sub": user_id, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> str:
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    return payload["sub"]


def _token_from(request: Request, creds: HTTPAuthorizationCredentials | None) -> str | None:
    if creds is not None:
        return creds.credentials
    return request.cookies.get(settings.session_cookie)


def session_from_request(request: Request) -> SessionContext | None:
    """Lenient variant for navigation: None when there is no valid session."""
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    token = credentials if scheme.lower() == "bearer" and credentials else None
    token = token or request.cookies.get(settings.session_cookie)
    if not token:
        return None
    try:
        return SessionContext(user_id=verify_token(token))
    except jwt.PyJWTError:
        return None


def get_current_session(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> SessionContext:
    token = _token_from(request, creds)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    try:
        return SessionContext(user_id=verify_token(token))
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session"
        ) from exc
