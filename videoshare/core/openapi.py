"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter un titre, une description détaillée,

documenter les conventions de l'API (pagination, format des erreurs).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API de partage de vidéos (FastAPI + SQLModel).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Champs JSON en camelCase (`videoUrl`, `createdAt`...).\n"
            "- Pagination du feed : query params `page` (défaut 1) & `limit` (défaut 12, max 100).\n"
            "- Erreurs : `{\"error\": ...}` (+ `details` pour les erreurs base de données, `fields` pour les erreurs de schéma).\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
