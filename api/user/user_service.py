import logging
from typing import Any, Dict

from fastapi import HTTPException, status

from api.user.user_schema import (
    LoginRequest,
    RegisterRequest,
    VerifyEmailRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
)
from helpers.backend_client import BackendClient, BackendAPIError
from helpers.error_helper import backend_http_exception

logger = logging.getLogger(__name__)


def _payload(e: BackendAPIError) -> Dict[str, Any]:
    return e.payload if isinstance(e.payload, dict) else {}


def _token_from(body: Any) -> str:
    token = body.get("token") if isinstance(body, dict) else None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "MALFORMED_RESPONSE", "message": "Backend returned no token"}
        )
    return token


def login_user(client: BackendClient, data: LoginRequest) -> str:
    """
    Exchange credentials for a bearer token and raise structured HTTPException
    for the failure cases the app handles differently.
    """
    try:
        body = client.login(data.email, data.password)
    except BackendAPIError as e:
        payload = _payload(e)

        if payload.get("requiresVerification") and payload.get("email"):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "code": "NOT_VERIFIED",
                    "message": "Please verify your email before logging in.",
                    "email": payload["email"],
                }
            )

        lowered = e.message.lower()
        if "deactivated" in lowered or "suspended" in lowered:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "code": "ACCOUNT_DEACTIVATED",
                    "message": "Your account has been deactivated. Please contact support for assistance.",
                }
            )

        raise backend_http_exception(e, "LOGIN_FAILED")

    logger.info("Login succeeded for %s", data.email)
    return _token_from(body)


def register_user(client: BackendClient, data: RegisterRequest) -> Dict[str, Any]:
    try:
        body = client.register(data.name, data.email, data.password)
    except BackendAPIError as e:
        raise backend_http_exception(e, "REGISTRATION_FAILED")
    return body if isinstance(body, dict) else {}


def verify_email(client: BackendClient, data: VerifyEmailRequest) -> None:
    try:
        body = client.verify_email(data.email, data.code)
    except BackendAPIError as e:
        raise backend_http_exception(e, "VERIFICATION_FAILED")
    if not (isinstance(body, dict) and body.get("success")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "VERIFICATION_FAILED", "message": "Verification failed"}
        )


def request_password_reset(client: BackendClient, data: ForgotPasswordRequest) -> None:
    try:
        client.forgot_password(str(data.email))
    except BackendAPIError as e:
        raise backend_http_exception(e, "RESET_REQUEST_FAILED")


def reset_password(client: BackendClient, data: ResetPasswordRequest) -> None:
    try:
        client.reset_password(data.email, data.reset_code, data.new_password)
    except BackendAPIError as e:
        raise backend_http_exception(e, "RESET_FAILED")
