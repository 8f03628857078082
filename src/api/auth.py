"""Session authentication

Bearer JWTs (PyJWT) identify the tenant user; admin routes additionally
require an admin claim.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError

ADMIN_ROLES = {
    "admin",
    "platform_admin",
    "platform-admin",
    "super_admin",
    "super-admin",
    "superadmin",
}

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionUser:
    id: str
    tenant_id: Optional[str]
    email: Optional[str]
    is_admin: bool


def _first_claim(claims: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = claims.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return False


def is_admin_claims(claims: Dict[str, Any]) -> bool:
    if _truthy(claims.get("is_admin")) or _truthy(claims.get("isAdmin")):
        return True

    role = str(claims.get("role") or "").strip().lower()
    if role in ADMIN_ROLES:
        return True

    roles = claims.get("roles")
    if isinstance(roles, str):
        roles = roles.split(",")
    if isinstance(roles, list):
        return any(str(r).strip().lower() in ADMIN_ROLES for r in roles)
    return False


def decode_session_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a session JWT

    Raises:
        ClientError: 401 on expired or invalid tokens
    """
    try:
        return jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise ClientError(Error(code="UNAUTHORIZED", message="Token expired"))
    except jwt.InvalidTokenError:
        raise ClientError(Error(code="UNAUTHORIZED", message="Invalid token"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> SessionUser:
    if not credentials or not credentials.credentials:
        raise ClientError(Error(code="UNAUTHORIZED", message="Unauthorized"))

    claims = decode_session_token(credentials.credentials.strip())

    user_id = _first_claim(claims, "sub", "user_id", "userId")
    if not user_id:
        raise ClientError(Error(code="UNAUTHORIZED", message="Invalid token payload"))

    email = _first_claim(claims, "email", "upn")
    return SessionUser(
        id=user_id,
        tenant_id=_first_claim(claims, "tenant_id", "tenantId"),
        email=email.lower() if email else None,
        is_admin=is_admin_claims(claims),
    )


async def get_tenant_user(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if not user.tenant_id:
        raise ClientError(Error(code="UNAUTHORIZED", message="Unauthorized"))
    return user


async def require_admin(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if not user.is_admin:
        raise ClientError(Error(code="FORBIDDEN", message="forbidden"))
    return user
