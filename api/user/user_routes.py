from fastapi import APIRouter, Depends, status
from helpers.backend_client import BackendClient
from utils.deps import get_backend_client
from api.user.user_controller import (
    login_controller,
    register_controller,
    verify_email_controller,
    forgot_password_controller,
    reset_password_controller,
)
from api.user.user_schema import (
    LoginRequest,
    RegisterRequest,
    VerifyEmailRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    TokenResponse,
    Message,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# ─── Registration & Verification ───────────────────────────────────────────────
@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED
)
def register(
    req: RegisterRequest,
    client: BackendClient = Depends(get_backend_client)
):
    return register_controller(req, client)

@router.post("/verify-email", response_model=Message)
def verify(
    req: VerifyEmailRequest,
    client: BackendClient = Depends(get_backend_client)
):
    return verify_email_controller(req, client)

# ─── Login ─────────────────────────────────────────────────────────────────────
@router.post("/login", response_model=TokenResponse)
def login(
    req: LoginRequest,
    client: BackendClient = Depends(get_backend_client)
):
    return login_controller(req, client)

# ─── Password reset ────────────────────────────────────────────────────────────
@router.post("/forgot-password", response_model=Message)
def forgot_password(
    req: ForgotPasswordRequest,
    client: BackendClient = Depends(get_backend_client)
):
    return forgot_password_controller(req, client)

@router.post("/reset-password", response_model=Message)
def reset_password(
    req: ResetPasswordRequest,
    client: BackendClient = Depends(get_backend_client)
):
    return reset_password_controller(req, client)
