"""
➡️ But : Définir les endpoints vidéos de l’API.

Réceptionne les requêtes HTTP, appelle VideoService, retourne les schémas de sortie (response_model).

Les erreurs métier (400/401/403/404/500) sont levées par le service et rendues par le handler commun.
Les champs absents (ex: user quand le propriétaire est introuvable) sont omis du JSON.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from videoshare.api.v1.dependencies import (
    feed_pagination,
    get_caller_id,
    get_video_service,
)
from videoshare.features.videos.schemas import (
    EnrichedVideoOut,
    VideoCreateIn,
    VideoOut,
    VideoPageOut,
)
from videoshare.features.videos.services import VideoService

router = APIRouter(
    prefix="/videos",
    tags=["videos"],
    responses={404: {"description": "Not Found"}},
)

ERROR_RESPONSES = {500: {"description": "Erreur base de données : {error, details}"}}


@router.get(
    "",
    summary="Lister les vidéos (feed paginé)",
    description=(
        "Vidéos les plus récentes d'abord, enrichies avec `user: {name, image}` quand le propriétaire est trouvé. "
        "Il reste des pages tant que la taille du lot renvoyé vaut `limit`."
    ),
    response_model=VideoPageOut,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def list_videos(
    p=Depends(feed_pagination),
    svc: VideoService = Depends(get_video_service),
):
    return svc.list_feed(**p)


@router.get(
    "/{video_id}",
    summary="Récupérer une vidéo",
    response_model=EnrichedVideoOut,
    response_model_exclude_none=True,
    responses={404: {"description": "Video not found"}, **ERROR_RESPONSES},
)
def get_video(video_id: str, svc: VideoService = Depends(get_video_service)):
    return svc.get_detail(video_id)


@router.post(
    "",
    summary="Publier une vidéo (URLs déjà hébergées)",
    description="Le champ `userId` doit correspondre à l'utilisateur authentifié.",
    status_code=status.HTTP_201_CREATED,
    response_model=VideoOut,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Champs requis manquants {error, required, received} ou invalides {error, fields}"},
        401: {"description": "Non authentifié"},
        403: {"description": "userId différent de l'appelant"},
        **ERROR_RESPONSES,
    },
)
def create_video(
    payload: VideoCreateIn,
    caller_id: Optional[str] = Depends(get_caller_id),
    svc: VideoService = Depends(get_video_service),
):
    return svc.create(payload, caller_id=caller_id)
