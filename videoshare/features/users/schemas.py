"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

UserOut → réponse de l’API (profil courant, inscription)

UserBrief → projection {name, image} ajoutée aux vidéos du feed

Sépare les modèles "de stockage" (ORM) de ceux "de transfert" (I/O API).

🔹 Avantages :

Empêche d’exposer par erreur des infos sensibles (ex: hash de mot de passe).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from videoshare.db.models.base import UtcDateTime
from videoshare.db.models.users import UserRole


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    role: UserRole
    created_at: UtcDateTime


class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = None
    image: Optional[str] = None
