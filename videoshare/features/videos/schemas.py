from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from videoshare.db.models.base import UtcDateTime
from videoshare.db.models.videos import VIDEO_DIMENSIONS
from videoshare.features.users.schemas import UserBrief

CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Transformation(BaseModel):
    width: int = Field(VIDEO_DIMENSIONS["width"], ge=1)
    height: int = Field(VIDEO_DIMENSIONS["height"], ge=1)
    quality: Optional[int] = Field(None, ge=1, le=100)


# ---------- Inputs ----------

class VideoCreateIn(BaseModel):
    """
    Corps de POST /videos.
    Les champs requis sont optionnels ici : leur absence doit produire un 400
    listant les champs reçus, comme toute autre erreur de schéma.
    """
    model_config = CAMEL

    title: Optional[str] = None
    description: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    user_id: Optional[str] = None

    controls: bool = True
    transformation: Optional[Transformation] = None
    tags: List[str] = Field(default_factory=list)


# ---------- Outputs ----------

class VideoOut(BaseModel):
    model_config = CAMEL

    id: str
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    # ownerId côté stockage, exposé sous le même nom que le champ d'entrée
    owner_id: Optional[str] = Field(
        None,
        serialization_alias="userId",
        validation_alias=AliasChoices("owner_id", "userId"),
    )
    controls: bool = True
    transformation: Optional[Transformation] = None
    views: int = 0
    likes: int = 0
    tags: List[str] = Field(default_factory=list)
    created_at: UtcDateTime
    updated_at: UtcDateTime


class EnrichedVideoOut(VideoOut):
    user: Optional[UserBrief] = None


class VideoPageOut(BaseModel):
    videos: List[EnrichedVideoOut]
    page: int
    limit: int
