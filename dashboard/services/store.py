"""List-and-mutate controller shared by every dashboard screen.

A ListStore owns the in-memory list for one mounted screen. After each
successful mutation the list is reconciled by id from the backend's answer;
nothing is refetched. On failure the list is left exactly as it was and an
OperationFailed (the screen's alert) is raised. There is no version check,
so concurrent editors get last-write-wins.

Handlers run on FastAPI's thread pool, so every reconcile (read the list,
build the new one, assign it) happens under the store's lock. Backend calls
are made outside it.
"""
import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, ValidationError

from dashboard.core.errors import BackendError, FormValidationError, OperationFailed, RecordNotFound

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def lookup(payload: Dict[str, Any], path: str) -> Any:
    value: Any = payload
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def missing_fields(payload: Dict[str, Any], required: Iterable[str]) -> List[str]:
    return [path for path in required if is_blank(lookup(payload, path))]


def validate_payload(model: Type[BaseModel], payload: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    try:
        parsed = model.model_validate(payload)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise FormValidationError("Please check the highlighted fields.", fields) from e
    if partial:
        return parsed.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    return parsed.model_dump(mode="json")


class EntitySource:
    """Per-entity glue between the backend collaborator and the mappers."""

    doc_type: str = ""
    label: str = ""
    create_model: Optional[Type[BaseModel]] = None
    patch_model: Optional[Type[BaseModel]] = None
    required_fields: Tuple[str, ...] = ()
    order: Sequence[Tuple[str, bool]] = ()
    form_defaults: Dict[str, Any] = {}

    def __init__(self, backend):
        self.backend = backend

    def fetch_all(self) -> List[BaseModel]:
        return self.hydrate(self.backend.fetch(self.doc_type, order=self.order))

    def hydrate(self, docs: List[Dict[str, Any]]) -> List[BaseModel]:
        raise NotImplementedError

    def new_document(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def to_form(self, record: BaseModel) -> Dict[str, Any]:
        return record.model_dump(mode="json", exclude={"id"})

    def preview_url(self, record: BaseModel) -> str:
        return ""


class ListStore:
    def __init__(self, source: EntitySource):
        self.source = source
        self.records: List[BaseModel] = []
        self.loading = False
        self.error: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def label(self) -> str:
        return self.source.label

    def load(self) -> bool:
        self.loading = True
        try:
            records = self.source.fetch_all()
        except BackendError as e:
            logger.error("Error fetching %ss: %s", self.label, e)
            self.error = e.message
            return False
        finally:
            self.loading = False
        with self._lock:
            self.records = records
        self.error = None
        return True

    def get(self, record_id: str) -> BaseModel:
        for record in self.records:
            if record.id == record_id:
                return record
        raise RecordNotFound(f"No {self.label} with id {record_id}")

    def _replace(self, record_id: str, record: BaseModel) -> None:
        with self._lock:
            self.records = [record if r.id == record_id else r for r in self.records]

    def _hydrate_saved(self, document: Dict[str, Any]) -> BaseModel:
        """Map a document the backend already accepted.

        The write is done by now, so a row the mappers cannot read is not
        reported as a failed write: the list is reloaded instead.
        """
        try:
            return self.source.hydrate([document])[0]
        except ValidationError:
            logger.exception("Saved %s %s could not be mapped", self.label, document.get("id"))
            self.load()
            raise OperationFailed(f"The {self.label} was saved but could not be displayed")

    def create(self, payload: Dict[str, Any]) -> BaseModel:
        if self.source.create_model is None:
            raise OperationFailed(f"Creating {self.label}s is not supported")
        missing = missing_fields(payload, self.source.required_fields)
        if missing:
            raise FormValidationError("Please fill in all required fields.", missing)
        document = self.source.new_document(validate_payload(self.source.create_model, payload))
        try:
            created = self.source.backend.create(self.source.doc_type, document)
        except BackendError:
            logger.exception("Failed to create %s", self.label)
            raise OperationFailed(f"Failed to create {self.label}")
        record = self._hydrate_saved(created)
        with self._lock:
            self.records = [r for r in self.records if r.id != record.id] + [record]
        return record

    def update(self, record_id: str, payload: Dict[str, Any]) -> BaseModel:
        if self.source.patch_model is None:
            raise OperationFailed(f"Editing {self.label}s is not supported")
        changes = validate_payload(self.source.patch_model, payload, partial=True)
        if not changes:
            raise FormValidationError("Nothing to update.")
        try:
            updated = self.source.backend.patch(self.source.doc_type, record_id, changes)
        except BackendError:
            logger.exception("Failed to update %s %s", self.label, record_id)
            raise OperationFailed(f"Failed to update {self.label}")
        record = self._hydrate_saved(updated)
        self._replace(record_id, record)
        return record

    def patch_fields(self, record_id: str, fields: Dict[str, Any], failure: str) -> Dict[str, Any]:
        """Send a fixed patch and hand back the raw document, for one-field toggles."""
        try:
            return self.source.backend.patch(self.source.doc_type, record_id, fields)
        except BackendError:
            logger.exception("%s (%s %s)", failure, self.label, record_id)
            raise OperationFailed(failure)

    def delete(self, record_id: str, confirm: Confirm) -> bool:
        if not confirm(f"Are you sure you want to delete this {self.label}?"):
            return False
        try:
            self.source.backend.delete(self.source.doc_type, record_id)
        except BackendError:
            logger.exception("Failed to delete %s %s", self.label, record_id)
            raise OperationFailed(f"Failed to delete {self.label}")
        with self._lock:
            self.records = [r for r in self.records if r.id != record_id]
        return True
