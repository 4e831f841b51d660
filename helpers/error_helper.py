from fastapi import HTTPException, status
from helpers.backend_client import BackendAPIError


def backend_http_exception(e: BackendAPIError, default_code: str = "BACKEND_ERROR") -> HTTPException:
    """
    Re-raise an upstream failure to our caller: same status, structured
    detail. An unreachable upstream becomes 502.
    """
    if e.is_network_error:
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "BACKEND_UNAVAILABLE", "message": "Backend is unreachable"},
        )
    code = e.status_code if e.status_code and 400 <= e.status_code < 600 else status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail={"code": default_code, "message": e.message})
