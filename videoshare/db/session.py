"""
➡️ But : Configurer la base et gérer les sessions de base de données.

build_engine(settings) : construit l'engine SQLAlchemy (pool de connexions partagé) au démarrage.

init_db(engine) : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session sur l'engine de l'app, la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Pas d'engine global : l'app possède son engine (app.state.engine), les tests en construisent un autre.
"""

from typing import Dict, Any, Iterator

from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine

# Import all models for creating all tables
from videoshare.db.models.users import User  # noqa: F401
from videoshare.db.models.videos import Video  # noqa: F401

from videoshare.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    engine_kwargs: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False
        # borne l'attente sur un verrou d'écriture
        connect_args["timeout"] = settings.DB_TIMEOUT_SECONDS
    else:
        engine_kwargs["pool_timeout"] = settings.DB_TIMEOUT_SECONDS

    return create_engine(
        url,
        echo=bool(settings.DB_ECHO),
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **engine_kwargs,
    )


def init_db(engine: Engine) -> None:
    """
    Crée les tables si elles n'existent pas (usage dev/demo).
    En prod avec Alembic, préfère des migrations.
    """
    SQLModel.metadata.create_all(engine)


def get_session(request: Request) -> Iterator[Session]:
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
