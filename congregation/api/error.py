from fastapi import status

from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


CLIENT_ERROR_STATUS = {
    error_codes.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    error_codes.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    error_codes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    error_codes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    error_codes.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    error_codes.FAILED_PRECONDITION: status.HTTP_400_BAD_REQUEST,
    error_codes.RESOURCE_EXHAUSTED: status.HTTP_429_TOO_MANY_REQUESTS,
}


def raise_for_error(error: Error):
    """Raise the ClientError or ServerError a use case error maps to"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
