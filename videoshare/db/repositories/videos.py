from typing import Sequence
from sqlmodel import select

from videoshare.db.repositories.base import BaseRepository
from videoshare.db.models.videos import Video


class VideoRepository(BaseRepository[Video]):
    """CRUD Vidéos + requêtes spécifiques."""
    model = Video

    def list_recent(self, *, offset: int = 0, limit: int = 12) -> Sequence[Video]:
        """Page de vidéos, les plus récentes d'abord."""
        statement = (
            select(self.model)
            .order_by(self.model.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return self.session.exec(statement).all()
