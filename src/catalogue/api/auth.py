"""Bearer-token authentication for the catalogue API.

Tokens are HS256 JWTs issued by the identity service and carry ``id``,
``name`` and ``is_admin`` claims. The catalogue trusts a token that
verifies; it never looks the user up itself.
"""

from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from catalogue import settings
from catalogue.utils.logging import bind_request_context

security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str
    name: str
    is_admin: bool = False


def create_token(user: CurrentUser, ttl: timedelta | None = None) -> str:
    """Issue a token for ``user``. Used by tooling and tests; production tokens come from identity."""
    expires = datetime.now(UTC) + (ttl or timedelta(days=settings.JWT_TTL_DAYS))
    payload = {"id": user.id, "name": user.name, "is_admin": user.is_admin, "exp": expires}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired") from None
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token") from None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    payload = decode_token(credentials.credentials)
    if not payload.get("id") or not payload.get("name"):
        raise HTTPException(status_code=401, detail="Invalid token payload")

    user = CurrentUser(id=str(payload["id"]), name=payload["name"], is_admin=bool(payload.get("is_admin")))
    bind_request_context(user_id=user.id)
    return user


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return user
