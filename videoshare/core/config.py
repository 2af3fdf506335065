"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, URL DB, secrets, pagination du feed...)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

L'objet Settings est construit une fois au démarrage puis passé à create_app() :

from videoshare.core.config import Settings
app = create_app(Settings())


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test) : les tests construisent leur propre Settings.
"""

from datetime import timedelta
from typing import List, Optional

from pydantic_settings import BaseSettings
from videoshare.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "VideoShare-Back"
    ENV: str = "dev"  # dev | prod | test
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "videoshare.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    DB_ECHO: Optional[bool] = None  # auto selon ENV si None
    DB_TIMEOUT_SECONDS: float = 10.0

    # -----------------------------
    # Feed
    # -----------------------------
    FEED_DEFAULT_PAGE: int = 1
    FEED_DEFAULT_LIMIT: int = 12
    FEED_MAX_LIMIT: int = 100

    # -----------------------------
    # JWT / Auth
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ISSUER: str = "videoshare-api"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TTL_MINUTES: int = 30 * 24 * 60  # 30 jours, comme la session d'origine

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # echo SQL seulement en dev pour ne pas polluer les logs en prod
        if self.DB_ECHO is None:
            object.__setattr__(self, "DB_ECHO", self.ENV == "dev")

    @property
    def jwt(self) -> JWTSettings:
        """Objet JWT prêt à l'emploi pour les services."""
        return JWTSettings(
            secret=self.JWT_SECRET_KEY,
            issuer=self.JWT_ISSUER,
            algorithm=self.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=self.ACCESS_TTL_MINUTES),
        )
