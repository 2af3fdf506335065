from typing import Any, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, Session, select

# Type générique pour le modèle (User, Video)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, exists.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def exists(self) -> bool:
        """True si la table contient au moins un enregistrement."""
        return self.session.exec(select(self.model).limit(1)).first() is not None

    # ---------- CREATE ----------

    def create(self, *, commit: bool = True, **fields) -> ModelT:
        """
        Crée et persiste un nouvel enregistrement.
        commit=False permet d'orchestrer une transaction globale (ex: seed).
        En cas d'erreur, la session est remise dans un état propre avant de propager.
        """
        entity = self.model(**fields)
        self.session.add(entity)
        try:
            if commit:
                self.session.commit()
                self.session.refresh(entity)
            else:
                # flush pour obtenir les valeurs par défaut sans commit
                self.session.flush()
        except Exception:
            self.session.rollback()
            raise
        return entity
