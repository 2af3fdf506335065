from typing import Optional

from fastapi import APIRouter, Depends, status

from videoshare.api.v1.dependencies import (
    get_auth_service,
    get_access_token_from_bearer,
)
from videoshare.features.authentication.services import AuthService
from videoshare.features.authentication.schemas import (
    RegisterIn,
    SignInIn,
    AccessTokenOut,
)
from videoshare.features.users.schemas import UserOut  # pour /me & register

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Register
# -----------------------------
@router.post(
    "/register",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={409: {"description": "Email déjà utilisé"}},
)
def register(payload: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    return svc.register(payload)

# -----------------------------
# Sign-in
# -----------------------------
@router.post(
    "/sign-in",
    summary="Se connecter",
    description="Retourne un access token (bearer) et le profil de l'utilisateur.",
    response_model=AccessTokenOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def sign_in(payload: SignInIn, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_in(payload)

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={
        200: {"description": "Utilisateur courant"},
        401: {"description": "Token absent, invalide ou expiré"},
    },
)
def me(
    access_token: Optional[str] = Depends(get_access_token_from_bearer),
    svc: AuthService = Depends(get_auth_service),
):
    return svc.get_current_user(access_token=access_token)
