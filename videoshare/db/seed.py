import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session

from videoshare.db.models.users import UserRole, normalize_email
from videoshare.db.models.videos import default_transformation
from videoshare.db.repositories.users import UserRepository
from videoshare.db.repositories.videos import VideoRepository
from videoshare.security.password import hash_password

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).with_name("seed_data.yaml")


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seed Users
# -----------------------------
def seed_users(session: Session, data: Dict[str, Any]) -> Dict[str, str]:
    """Insère les utilisateurs ; retourne key -> id."""
    repo = UserRepository(session)
    users: List[Dict[str, Any]] = data.get("users", [])
    if not users:
        logger.warning("Aucun utilisateur dans le YAML (clé 'users').")
        return {}

    ids: Dict[str, str] = {}
    for u in users:
        user = repo.create(
            commit=False,
            email=normalize_email(u["email"]),
            name=u.get("name"),
            image=u.get("image"),
            role=UserRole(u.get("role", "user")),
            hashed_password=hash_password(u["password"]),
        )
        ids[u["key"]] = user.id
    session.commit()
    logger.info("%s utilisateurs insérés.", len(users))
    return ids


# -----------------------------
# Seed Videos
# -----------------------------
def seed_videos(session: Session, data: Dict[str, Any], user_ids: Dict[str, str]) -> int:
    repo = VideoRepository(session)
    videos: List[Dict[str, Any]] = data.get("videos", [])
    inserted = 0
    for v in videos:
        owner_key = v.get("owner_key")
        if not owner_key:
            logger.warning("owner_key manquant → vidéo '%s' ignorée.", v.get("title"))
            continue
        if owner_key not in user_ids:
            logger.warning("owner_key inconnu '%s' → vidéo '%s' ignorée.", owner_key, v.get("title"))
            continue
        repo.create(
            commit=False,
            title=v["title"],
            description=v["description"],
            video_url=v["video_url"],
            thumbnail_url=v["thumbnail_url"],
            owner_id=user_ids[owner_key],
            transformation=v.get("transformation") or default_transformation(),
            tags=list(v.get("tags", [])),
        )
        inserted += 1
    session.commit()
    logger.info("%s vidéos insérées.", inserted)
    return inserted


# -----------------------------
# Main entrypoint
# -----------------------------
def seed_all(session: Session, seed_path: str | Path = DEFAULT_SEED_PATH) -> None:
    if UserRepository(session).exists():
        logger.info("Les utilisateurs existent déjà, aucune insertion effectuée.")
        return

    data = load_seed_yaml(seed_path)
    user_ids = seed_users(session, data)
    seed_videos(session, data, user_ids)
