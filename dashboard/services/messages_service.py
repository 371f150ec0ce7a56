from typing import Optional

from dashboard.models.schemas import Message, MessagePatch
from dashboard.services.mappers import map_message
from dashboard.services.store import EntitySource, ListStore


class MessageSource(EntitySource):
    doc_type = "messages"
    label = "message"
    # messages come in from the storefront contact form, never from here
    create_model = None
    patch_model = MessagePatch
    order = (("pinned", True), ("created_at", True))

    def hydrate(self, docs):
        return [map_message(doc) for doc in docs]


class MessageStore(ListStore):
    def __init__(self, backend):
        super().__init__(MessageSource(backend))

    def toggle_pin(self, message_id: str, current: Optional[bool] = None) -> Message:
        message = self.get(message_id)
        if current is None:
            current = message.pinned
        updated = self.patch_fields(message_id, {"pinned": not current}, "Failed to update pin state")
        # only the flag is taken from the answer, the rest of the card stays as loaded
        record = message.model_copy(update={"pinned": bool(updated.get("pinned"))})
        self._replace(message_id, record)
        return record
