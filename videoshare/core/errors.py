"""
➡️ But : Définir les erreurs métier et leur rendu HTTP.

Les services lèvent ces exceptions (aucune dépendance au web) ;
un seul handler FastAPI les convertit en JSON {"error": ...}.

🔹 Avantages :

Le format d'erreur de l'API est le même partout.

Les services restent testables sans FastAPI.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(DomainError):
    """Champs requis manquants ou invalides (400)."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Missing required fields",
        *,
        required: Optional[List[str]] = None,
        received: Optional[Dict[str, bool]] = None,
        fields: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.required = required
        self.received = received
        self.fields = fields

    @property
    def missing(self) -> List[str]:
        return [name for name, ok in (self.received or {}).items() if not ok]

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.required is not None:
            body["required"] = self.required
        if self.received is not None:
            body["received"] = self.received
        if self.fields is not None:
            body["fields"] = self.fields
        return body


class AuthenticationError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class AuthorizationError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class StoreFailure(DomainError):
    """Échec inattendu de la base sur l'enregistrement principal (500)."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str = "Unknown error"):
        super().__init__(message)
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc.to_body())
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Erreurs de schéma (types, bornes) → 400 au format {"error", "fields"}."""
    fields: Dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        fields.setdefault(".".join(loc) or "body", err.get("msg", "invalid value"))
    body = ValidationError("Invalid fields", fields=fields).to_body()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
