"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les objets persistés. Ici on représente la table des utilisateurs
(auteurs des vidéos, affichés dans le feed via leur nom et leur avatar).

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Facile à migrer vers PostgreSQL ou MySQL plus tard.
"""

from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class User(BaseModelDB, table=True):
    name: Optional[str] = Field(default=None)
    # toujours stocké normalisé (trim + minuscules), cf. normalize_email
    email: str = Field(index=True, unique=True)
    image: Optional[str] = Field(default=None)
    role: UserRole = Field(default=UserRole.user)
    hashed_password: str


def normalize_email(email: str) -> str:
    return email.strip().lower()
