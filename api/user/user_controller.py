from api.user.user_schema import (
    LoginRequest,
    RegisterRequest,
    VerifyEmailRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    TokenResponse,
    Message,
)
from api.user.user_service import (
    login_user,
    register_user,
    verify_email,
    request_password_reset,
    reset_password,
)
from helpers.backend_client import BackendClient

# Controller functions for auth operations


def login_controller(req: LoginRequest, client: BackendClient) -> TokenResponse:
    token = login_user(client, req)
    return TokenResponse(token=token, message="Login successful!")


def register_controller(req: RegisterRequest, client: BackendClient) -> TokenResponse:
    body = register_user(client, req)
    return TokenResponse(
        token=body.get("token"),
        message="Registration successful! You can now log in."
    )


def verify_email_controller(req: VerifyEmailRequest, client: BackendClient) -> Message:
    verify_email(client, req)
    return Message(message="Email verified successfully! Please log in with your credentials.")


def forgot_password_controller(req: ForgotPasswordRequest, client: BackendClient) -> Message:
    request_password_reset(client, req)
    return Message(message="A verification code has been sent to your email address.")


def reset_password_controller(req: ResetPasswordRequest, client: BackendClient) -> Message:
    reset_password(client, req)
    return Message(
        message="Your password has been reset successfully. You can now login with your new password."
    )
