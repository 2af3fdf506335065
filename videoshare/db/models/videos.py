from typing import Any, Dict, List, Optional

from sqlmodel import Field
from sqlalchemy import Column, JSON, String

from .base import BaseModelDB

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 5000

# Format portrait par défaut
VIDEO_DIMENSIONS = {"width": 1080, "height": 1920}


def default_transformation() -> Dict[str, Any]:
    return dict(VIDEO_DIMENSIONS)


class Video(BaseModelDB, table=True):
    """Vidéos référencées par URL (le stockage objet est géré côté client)."""

    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    video_url: str
    thumbnail_url: str

    # Toujours renseigné ; pas de clé étrangère, le propriétaire peut ne plus exister.
    owner_id: str = Field(
        sa_column=Column(String(32), nullable=False, index=True),
        description="Propriétaire de la vidéo",
    )

    controls: bool = Field(default=True)
    transformation: Optional[Dict[str, Any]] = Field(
        default_factory=default_transformation,
        sa_column=Column(JSON, nullable=True),
    )
    views: int = Field(default=0)
    likes: int = Field(default=0)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
