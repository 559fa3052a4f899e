"""
Admin API Key Authentication

Validates admin API keys for the billing sync and maintenance endpoints.
"""

from fastapi import Header, status

from config import ApplicationConfig
from congregation.api.error import ClientError
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    This is used by the billing provider sync and by schedulers running the
    maintenance sweeps. Different from user JWT authentication - this is
    service-to-service auth.

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error(error_codes.UNAUTHENTICATED, "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if x_admin_api_key != ApplicationConfig.ADMIN_API_KEY:
        raise ClientError(
            Error(error_codes.UNAUTHENTICATED, "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
