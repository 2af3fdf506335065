"""
➡️ But : assembler toutes les pièces du puzzle.

create_app(settings) crée l’instance FastAPI et configure :

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

handlers d'erreurs métier

l'engine DB (construit ici, stocké dans app.state, tables créées au démarrage, libéré à l'arrêt)

Inclut les routers (ex : /api/videos).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn videoshare.main:app --reload.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from videoshare.core.config import Settings
from videoshare.core.errors import register_error_handlers
from videoshare.core.logging_config import configure_logging
from videoshare.core.openapi import custom_openapi
from videoshare.db.session import build_engine, init_db

from videoshare.api.v1.routers import authentication, videos

import uvicorn

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        openapi_tags=[
            {"name": "auth", "description": "Opérations liées à l'authentification"},
            {"name": "videos", "description": "Feed, détail et publication des vidéos"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(authentication.router, prefix=settings.API_PREFIX)
    app.include_router(videos.router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health", tags=["health"], summary="État du service")
    def health():
        return {"status": "ok"}

    # Génération du schéma OpenAPI custom (facultatif, mais propre)
    app.openapi = lambda: custom_openapi(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("videoshare.main:app", host="127.0.0.1", port=8080, reload=(app.state.settings.ENV == "dev")) # http://localhost:8080
