import copy
from typing import Any, Dict, Optional

from pydantic import BaseModel

from dashboard.core.errors import FormStateError
from dashboard.services.store import ListStore

CLOSED = "closed"
CREATING = "creating"
EDITING = "editing"


def assign(buffer: Dict[str, Any], path: str, value: Any) -> None:
    """Set buffer["a"]["b"] for path "a.b", creating the nested dicts."""
    *parents, leaf = path.split(".")
    target = buffer
    for part in parents:
        if not isinstance(target.get(part), dict):
            target[part] = {}
        target = target[part]
    target[leaf] = value


class FormEditor:
    """Add/edit form of one screen: closed, creating, or editing(record_id).

    The buffer is only ever reset by open_add/open_edit/cancel, and a submit
    closes the form only once the backend accepted it.
    """

    def __init__(self, store: ListStore):
        self.store = store
        self.state = CLOSED
        self.record_id: Optional[str] = None
        self.buffer: Dict[str, Any] = {}
        self.loaded: Dict[str, Any] = {}
        self.preview_url = ""

    def open_add(self) -> None:
        self.state = CREATING
        self.record_id = None
        self.buffer = copy.deepcopy(self.store.source.form_defaults)
        self.loaded = {}
        self.preview_url = ""

    def open_edit(self, record_id: str) -> None:
        record = self.store.get(record_id)
        self.state = EDITING
        self.record_id = record_id
        self.buffer = self.store.source.to_form(record)
        self.loaded = copy.deepcopy(self.buffer)
        self.preview_url = self.store.source.preview_url(record)

    def require_open(self) -> None:
        if self.state == CLOSED:
            raise FormStateError("Open the add or edit form first")

    def change(self, field: str, value: Any) -> None:
        self.require_open()
        assign(self.buffer, field, value)

    def set_image(self, asset: Dict[str, str]) -> None:
        self.change("image", asset["ref"])
        self.preview_url = asset["url"]

    def changed_values(self) -> Dict[str, Any]:
        """Top-level fields that differ from the record as it was opened.

        Untouched fields stay out of the patch, so a stored value the request
        models would reject never blocks an unrelated edit.
        """
        return {
            field: value
            for field, value in self.buffer.items()
            if field not in self.loaded or self.loaded[field] != value
        }

    def submit(self) -> BaseModel:
        if self.state == CREATING:
            record = self.store.create(self.buffer)
        elif self.state == EDITING:
            record = self.store.update(self.record_id, self.changed_values())
        else:
            raise FormStateError("No form is open")
        self.cancel()
        return record

    def cancel(self) -> None:
        self.state = CLOSED
        self.record_id = None
        self.buffer = {}
        self.loaded = {}
        self.preview_url = ""

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "record_id": self.record_id,
            "values": self.buffer,
            "preview_url": self.preview_url,
        }
