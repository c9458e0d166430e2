"""API request and response schemas."""

from flexdata.infrastructure.api.schemas.collection_schemas import (
    CollectionListResponse,
    CollectionResponse,
    CreateCollectionRequest,
    IntegrationPromptResponse,
    UpdateCollectionRequest,
)
from flexdata.infrastructure.api.schemas.embed_schemas import (
    AudioEmbedResponse,
    ClipResponse,
    TrackResponse,
)
from flexdata.infrastructure.api.schemas.field_schemas import (
    CreateFieldRequest,
    FieldListResponse,
    FieldResponse,
    UpdateFieldRequest,
)
from flexdata.infrastructure.api.schemas.file_schemas import (
    FileMetadataResponse,
    FileUploadResponse,
)
from flexdata.infrastructure.api.schemas.project_schemas import (
    CreateProjectRequest,
    ProjectListResponse,
    ProjectResponse,
    UpdateProjectRequest,
)
from flexdata.infrastructure.api.schemas.row_schemas import (
    CreateRowRequest,
    ProxyResponse,
    RowListResponse,
    RowResponse,
    UpdateRowRequest,
)

__all__ = [
    "AudioEmbedResponse",
    "ClipResponse",
    "CollectionListResponse",
    "CollectionResponse",
    "CreateCollectionRequest",
    "CreateFieldRequest",
    "CreateProjectRequest",
    "CreateRowRequest",
    "FieldListResponse",
    "FieldResponse",
    "FileMetadataResponse",
    "FileUploadResponse",
    "IntegrationPromptResponse",
    "ProjectListResponse",
    "ProjectResponse",
    "ProxyResponse",
    "RowListResponse",
    "RowResponse",
    "TrackResponse",
    "UpdateCollectionRequest",
    "UpdateFieldRequest",
    "UpdateProjectRequest",
]
