import secrets
from fastapi import Depends, Header, HTTPException, Request, status
from fixgeni.core.settings import Settings
from fixgeni.db import Store
from fixgeni.domain.seed.catalog import Catalog

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> Store:
    return request.app.state.store

def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog

def _presented_token(x_admin_token: str | None, authorization: str | None) -> str:
    token = (x_admin_token or "").strip()
    if token:
        return token
    scheme, _, value = (authorization or "").strip().partition(" ")
    if scheme.lower() == "bearer":
        return value.strip()
    return ""

def require_admin(
    settings: Settings = Depends(get_settings),
    x_admin_token: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
) -> None:
    """Shared-secret gate for admin routes. Fails closed when no secret is configured."""
    if not settings.has_security:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Security not configured",
        )
    token = _presented_token(x_admin_token, authorization)
    expected = settings.security_secret_key or ""
    if not token or not secrets.compare_digest(token.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
