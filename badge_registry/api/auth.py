"""Authentication helpers and route dependencies."""

from fastapi import Depends, Header, HTTPException, status

from badge_registry.config.settings import get_settings


def require_internal_token(
    x_internal_token: str | None = Header(default=None, alias="X-Internal-Token"),
) -> None:
    """
    Ensure that registration pushes carry the shared internal token.

    The registration system is the only writer, so a shared secret is enough
    here; end-user authentication happens elsewhere.
    """

    settings = get_settings()
    expected_token = settings.internal_api_token
    if not expected_token:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Internal API token is not configured.",
        )

    if x_internal_token != expected_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid internal token.",
        )


InternalAuthDependency = Depends(require_internal_token)
