"""Cross-service event contracts for document events (reserved for the document service)."""

from dataclasses import dataclass

from shared.events.base import EventPayload, wire
from shared.events.envelope import EventType


@dataclass(frozen=True)
class DocumentUploaded(EventPayload):
    event_type = EventType.DOCUMENT_UPLOADED

    document_id: str | None = wire("documentId")
    file_name: str | None = wire("fileName")
    file_size: int | float | None = wire("fileSize")  # bytes
    uploaded_by: str | None = wire("uploadedBy")


@dataclass(frozen=True)
class DocumentDeleted(EventPayload):
    event_type = EventType.DOCUMENT_DELETED

    document_id: str | None = wire("documentId")
    file_name: str | None = wire("fileName")
    deleted_by: str | None = wire("deletedBy")
