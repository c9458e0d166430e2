"""API routes for FlexData."""

from flexdata.infrastructure.api.routes.collections_router import router as collections_router
from flexdata.infrastructure.api.routes.embed_router import router as embed_router
from flexdata.infrastructure.api.routes.fields_router import router as fields_router
from flexdata.infrastructure.api.routes.files_router import router as files_router
from flexdata.infrastructure.api.routes.projects_router import router as projects_router
from flexdata.infrastructure.api.routes.proxy_router import router as proxy_router
from flexdata.infrastructure.api.routes.rows_router import router as rows_router

__all__ = [
    "collections_router",
    "embed_router",
    "fields_router",
    "files_router",
    "projects_router",
    "proxy_router",
    "rows_router",
]
