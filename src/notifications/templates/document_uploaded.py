"""Document uploaded template — file size is rendered in megabytes."""

from notifications.templates.base import PLACEHOLDER, or_placeholder
from shared.events.documents import DocumentUploaded
from shared.events.envelope import EventType


def _megabytes(size) -> str:
    try:
        return f"{float(size) / 1024 / 1024:.2f} MB"
    except (TypeError, ValueError):
        return PLACEHOLDER


class DocumentUploadedTemplate:
    event_type = EventType.DOCUMENT_UPLOADED.value
    payload_cls = DocumentUploaded

    @staticmethod
    def render(payload: DocumentUploaded) -> dict:
        return {
            "title": "Document Uploaded Successfully",
            "body": (
                "A new document has been uploaded to the system.\n\n"
                f"File Name: {or_placeholder(payload.file_name)}\n"
                f"Size: {_megabytes(payload.file_size) if payload.file_size else PLACEHOLDER}"
            ),
        }
