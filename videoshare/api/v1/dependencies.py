"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_video_service() : crée un VideoService à partir d’une session DB.

feed_pagination() : paramètres communs page et limit (tolérants).

get_caller_id() : identité de l'appelant (id ou None) depuis le bearer token.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()) et à surcharger en test (dependency_overrides).
"""

from typing import Optional

from fastapi import Depends, Query, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from videoshare.core.config import Settings
from videoshare.core.errors import AuthenticationError
from videoshare.db.session import get_session

from videoshare.db.repositories.users import UserRepository
from videoshare.db.repositories.videos import VideoRepository

from videoshare.features.authentication.services import AuthService
from videoshare.features.videos.services import VideoService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _positive_int(raw: Optional[str], default: int, maximum: Optional[int] = None) -> int:
    """Absent ou non numérique → défaut ; ≤ 0 → 1 ; > maximum → maximum."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    value = max(value, 1)
    if maximum is not None:
        value = min(value, maximum)
    return value


def feed_pagination(
    page: Optional[str] = Query(None, description="Numéro de page (défaut 1)", examples=["1"]),
    limit: Optional[str] = Query(None, description="Taille de page (défaut 12, max 100)", examples=["12"]),
    settings: Settings = Depends(get_settings),
):
    return {
        "page": _positive_int(page, settings.FEED_DEFAULT_PAGE),
        "limit": _positive_int(limit, settings.FEED_DEFAULT_LIMIT, settings.FEED_MAX_LIMIT),
    }


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_video_repository(session: Session = Depends(get_session)) -> VideoRepository:
    return VideoRepository(session)


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(user_repo=user_repo, jwt_settings=settings.jwt)


# -----------------------------
# Videos
# -----------------------------
def get_video_service(
    video_repo: VideoRepository = Depends(get_video_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> VideoService:
    return VideoService(video_repo=video_repo, user_repo=user_repo)


# -----------------------------
# Authentication data
# -----------------------------
# auto_error=False : l'absence de token est gérée par les services (401 JSON)
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Optional[str]:
    if not credentials:
        return None
    if credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Invalid auth scheme")
    return credentials.credentials


def get_caller_id(
    access_token: Optional[str] = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> Optional[str]:
    return auth_svc.get_current_user_id(access_token=access_token)
