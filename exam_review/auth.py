"""
API key authentication for the review service.
리뷰 서비스의 API 키 인증 모듈입니다.

Keys come from Settings.API_KEYS (comma-separated). When unset, the
dependency lets every request through (local development).
"""

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader, APIKeyQuery

from .config import get_settings

# Header first, then query param
_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
_api_key_query = APIKeyQuery(name="api_key", auto_error=False)


async def require_api_key(
    header_key: str | None = Security(_api_key_header),
    query_key: str | None = Security(_api_key_query),
) -> str | None:
    """FastAPI dependency: returns the accepted key, or None when auth is disabled.

    Raises HTTP 401 if auth is enabled and the key is missing or unknown.
    """
    valid_keys = get_settings().api_keys
    if not valid_keys:
        return None

    provided_key = header_key or query_key
    if not provided_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide via X-API-Key header or api_key query parameter.",
            headers={"WWW-Authenticate": "ApiKey"},
        )
    if provided_key not in valid_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
            headers={"WWW-Authenticate": "ApiKey"},
        )
    return provided_key
