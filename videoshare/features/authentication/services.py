import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from videoshare.core.errors import AuthenticationError, ConflictError
from videoshare.db.models.users import User, normalize_email
from videoshare.db.repositories.users import UserRepository
from videoshare.security.password import verify_password, hash_password
from videoshare.security.tokens import (
    JWTError,
    JWTSettings,
    create_access_token,
    decode_token,
)
from videoshare.features.authentication.schemas import (
    RegisterIn,
    SignInIn,
    AccessTokenOut,
)
from videoshare.features.users.schemas import UserOut

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre le repository users + tokens.
    Fournit aux autres features l'identité de l'appelant ("user id ou None").
    """

    def __init__(self, *, user_repo: UserRepository, jwt_settings: JWTSettings):
        self.user_repo = user_repo
        self.jwt = jwt_settings

    # ---------- Register ----------
    def register(self, payload: RegisterIn) -> User:
        email = normalize_email(payload.email)
        if self.user_repo.get_by_email(email):
            raise ConflictError("Email already registered")
        try:
            user = self.user_repo.create(
                email=email,
                name=payload.name.strip() if payload.name else None,
                image=payload.image,
                hashed_password=hash_password(payload.password),
            )
        except IntegrityError:
            # inscription concurrente sur le même email
            raise ConflictError("Email already registered")
        logger.info("User registered: %s", user.id)
        return user

    # ---------- Sign in ----------
    def sign_in(self, payload: SignInIn) -> AccessTokenOut:
        user = self.user_repo.get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            raise AuthenticationError("Invalid credentials")

        access = create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
            settings=self.jwt,
        )
        return AccessTokenOut(
            access_token=access,
            token_type="bearer",
            expires_in=int(self.jwt.access_ttl.total_seconds()),
            user=UserOut.model_validate(user),
        )

    # ---------- Current user depuis access token ----------
    def get_current_user(self, *, access_token: Optional[str]) -> User:
        if not access_token:
            raise AuthenticationError("Unauthorized")
        try:
            decoded = decode_token(access_token, self.jwt)
        except JWTError:
            raise AuthenticationError("Invalid token")

        if decoded.get("typ") != "access" or not decoded.get("sub"):
            raise AuthenticationError("Invalid token type")

        user = self.user_repo.get(decoded["sub"])
        if not user:
            # compte supprimé depuis l'émission du token
            raise AuthenticationError("Unknown user")
        return user

    def get_current_user_id(self, *, access_token: Optional[str]) -> Optional[str]:
        """Identité de l'appelant, ou None si pas de token."""
        if not access_token:
            return None
        return self.get_current_user(access_token=access_token).id
