"""Document deleted template."""

from notifications.templates.base import or_placeholder
from shared.events.documents import DocumentDeleted
from shared.events.envelope import EventType


class DocumentDeletedTemplate:
    event_type = EventType.DOCUMENT_DELETED.value
    payload_cls = DocumentDeleted

    @staticmethod
    def render(payload: DocumentDeleted) -> dict:
        return {
            "title": "Document Deleted",
            "body": (
                "A document has been deleted from the system.\n\n"
                f"File Name: {or_placeholder(payload.file_name)}\n"
                f"Deleted By: {or_placeholder(payload.deleted_by)}"
            ),
        }
