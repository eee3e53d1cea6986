"""Document domain models."""

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Uploaded document with its extracted text.

    Immutable once created; only the store hands these out.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    size_bytes: int = Field(..., ge=0)
    media_type: str
    content: str


class DocumentSummary(BaseModel):
    """Wire shape of a document. Content is never exposed."""

    id: str
    name: str
    size: int
    type: str

    @classmethod
    def from_document(cls, document: Document) -> "DocumentSummary":
        return cls(
            id=document.id,
            name=document.name,
            size=document.size_bytes,
            type=document.media_type,
        )
