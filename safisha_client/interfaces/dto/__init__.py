from .auth import (
    AuthResponseDTO,
    AuthTokensDTO,
    FederatedCallbackDTO,
    ForgotPasswordDTO,
    LoginRequestDTO,
    ProfileResponseDTO,
    RefreshRequestDTO,
    RegisterRequestDTO,
    ResetPasswordDTO,
    UserDTO,
    VerifyEmailDTO,
)

__all__ = [
    "AuthResponseDTO",
    "AuthTokensDTO",
    "FederatedCallbackDTO",
    "ForgotPasswordDTO",
    "LoginRequestDTO",
    "ProfileResponseDTO",
    "RefreshRequestDTO",
    "RegisterRequestDTO",
    "ResetPasswordDTO",
    "UserDTO",
    "VerifyEmailDTO",
]
