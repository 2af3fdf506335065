"""
➡️ But : Contenir la logique métier des vidéos : feed paginé, détail, création.

VideoService :
  - list_feed() : page de vidéos (plus récentes d'abord) enrichies avec {name, image} du propriétaire
  - get_detail() : une vidéo enrichie, NotFoundError si absente
  - create() : validation des champs + contrôle propriétaire == appelant

L'enrichissement est "best effort" : chaque vidéo est enrichie indépendamment,
un propriétaire absent ou une lecture en erreur donne simplement user=None.
Seules les erreurs sur la vidéo elle-même remontent (StoreFailure → 500).

🔹 Avantages :

Code métier découplé du web (aucune HTTPException ici).

Test unitaire possible sans passer par FastAPI.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from videoshare.core.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    StoreFailure,
    ValidationError,
)
from videoshare.db.models.videos import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Video,
    default_transformation,
)
from videoshare.db.repositories.users import UserRepository
from videoshare.db.repositories.videos import VideoRepository
from videoshare.features.users.schemas import UserBrief
from videoshare.features.videos.schemas import EnrichedVideoOut, VideoCreateIn

logger = logging.getLogger(__name__)

MAX_OFFSET = 2**63 - 1

# Ordre des champs dans la réponse 400 (noms exposés par l'API)
REQUIRED_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("title", "title"),
    ("description", "description"),
    ("videoUrl", "video_url"),
    ("thumbnailUrl", "thumbnail_url"),
    ("userId", "user_id"),
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class VideoService:
    def __init__(self, *, video_repo: VideoRepository, user_repo: UserRepository):
        self.videos = video_repo
        self.users = user_repo

    # --------------- Helpers ---------------
    def _owner_brief(self, video: Video) -> Optional[UserBrief]:
        """Projection {name, image} du propriétaire, ou None (jamais d'exception)."""
        if not video.owner_id:
            logger.debug("Video %s has no owner reference", video.id)
            return None
        try:
            owner = self.users.get(video.owner_id)
        except SQLAlchemyError:
            logger.warning("Owner lookup failed for video %s", video.id, exc_info=True)
            return None
        if owner is None:
            return None
        return UserBrief(name=owner.name, image=owner.image)

    def _enrich(self, video: Video) -> EnrichedVideoOut:
        out = EnrichedVideoOut.model_validate(video)
        out.user = self._owner_brief(video)
        return out

    # --------------- Queries ---------------
    def list_feed(self, *, page: int, limit: int) -> Dict[str, Any]:
        skip = (page - 1) * limit
        logger.info("Fetching videos with pagination: page=%s limit=%s skip=%s", page, limit, skip)
        if skip > MAX_OFFSET:
            # au-delà d'un OFFSET SQL 64 bits : forcément après la dernière page
            return {"videos": [], "page": page, "limit": limit}
        try:
            rows = self.videos.list_recent(offset=skip, limit=limit)
        except SQLAlchemyError as e:
            logger.exception("Error fetching videos")
            raise StoreFailure("Failed to fetch videos", str(e)) from e

        logger.info("Found %s videos", len(rows))
        # Un résultat indépendant par vidéo : un échec d'enrichissement ne fait pas échouer la page
        items: List[EnrichedVideoOut] = [self._enrich(v) for v in rows]
        return {"videos": items, "page": page, "limit": limit}

    def get_detail(self, video_id: str) -> EnrichedVideoOut:
        try:
            video = self.videos.get(video_id)
        except SQLAlchemyError as e:
            logger.exception("Error fetching video %s", video_id)
            raise StoreFailure("Failed to fetch video", str(e)) from e

        if not video:
            logger.info("Video not found: %s", video_id)
            raise NotFoundError("Video not found")
        return self._enrich(video)

    # --------------- Commands ---------------
    def validate(self, payload: VideoCreateIn) -> Dict[str, str]:
        """Retourne les champs requis nettoyés, ou lève ValidationError."""
        values = {attr: _clean(getattr(payload, attr)) for _, attr in REQUIRED_FIELDS}
        received = {api_name: values[attr] is not None for api_name, attr in REQUIRED_FIELDS}
        if not all(received.values()):
            raise ValidationError(
                "Missing required fields",
                required=[api_name for api_name, _ in REQUIRED_FIELDS],
                received=received,
            )

        too_long: Dict[str, str] = {}
        if len(values["title"]) > TITLE_MAX_LENGTH:
            too_long["title"] = f"max length is {TITLE_MAX_LENGTH}"
        if len(values["description"]) > DESCRIPTION_MAX_LENGTH:
            too_long["description"] = f"max length is {DESCRIPTION_MAX_LENGTH}"
        if too_long:
            raise ValidationError("Invalid fields", fields=too_long)
        return values  # type: ignore[return-value]

    def create(self, payload: VideoCreateIn, *, caller_id: Optional[str]) -> Video:
        if not caller_id:
            raise AuthenticationError("Unauthorized")

        values = self.validate(payload)

        # Pas de création pour le compte d'un autre utilisateur (pas d'exception admin)
        if values["user_id"] != caller_id:
            raise AuthorizationError("Unauthorized: Cannot upload for another user")

        transformation = (
            payload.transformation.model_dump()
            if payload.transformation is not None
            else default_transformation()
        )
        try:
            video = self.videos.create(
                title=values["title"],
                description=values["description"],
                video_url=values["video_url"],
                thumbnail_url=values["thumbnail_url"],
                owner_id=values["user_id"],
                controls=payload.controls,
                transformation=transformation,
                tags=[t.strip() for t in payload.tags if t.strip()],
            )
        except SQLAlchemyError as e:
            logger.exception("Error creating video")
            raise StoreFailure("Failed to create video", str(e)) from e

        logger.info("Video created successfully: %s", video.id)
        return video
