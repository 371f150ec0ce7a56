import logging
import os
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import httpx
from supabase import Client, PostgrestAPIError, StorageException, create_client

from dashboard.core.config import (
    SUPABASE_ANON_KEY,
    SUPABASE_ASSET_BUCKET,
    SUPABASE_SERVICE_KEY,
    SUPABASE_URL,
)
from dashboard.core.errors import BackendError

logger = logging.getLogger(__name__)

supabase = None
def get_client() -> Client:
    global supabase
    if supabase is None:
        key = SUPABASE_SERVICE_KEY or SUPABASE_ANON_KEY
        if not SUPABASE_URL or not key:
            raise RuntimeError("Supabase URL/Key not configured. See .env")
        supabase = create_client(SUPABASE_URL, key)
    return supabase


@contextmanager
def backend_call(action: str):
    try:
        yield
    except (PostgrestAPIError, StorageException, httpx.HTTPError) as e:
        raise BackendError(f"{action} failed: {e}") from e


class DocumentStore:
    """Thin document-store facade over the Supabase client.

    Every table is a document type; rows are plain dicts keyed by column name.
    Nothing is cached here, each call goes to the backend.
    """

    def __init__(self, client: Client, bucket: str = SUPABASE_ASSET_BUCKET):
        self.client = client
        self.bucket = bucket

    def fetch(
        self,
        doc_type: str,
        columns: str = "*",
        order: Sequence[Tuple[str, bool]] = (),
        ids: Optional[Iterable[str]] = None,
    ) -> List[Dict[str, Any]]:
        with backend_call(f"fetch {doc_type}"):
            q = self.client.table(doc_type).select(columns)
            if ids is not None:
                q = q.in_("id", list(ids))
            for column, desc in order:
                q = q.order(column, desc=desc)
            res = q.execute()
        return res.data or []

    def create(self, doc_type: str, document: Dict[str, Any]) -> Dict[str, Any]:
        with backend_call(f"create {doc_type}"):
            res = self.client.table(doc_type).insert(document).execute()
        if not res.data:
            raise BackendError(f"create {doc_type} returned no document")
        return res.data[0]

    def patch(self, doc_type: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        with backend_call(f"patch {doc_type} {doc_id}"):
            res = self.client.table(doc_type).update(fields).eq("id", doc_id).execute()
        if not res.data:
            raise BackendError(f"{doc_type} {doc_id} not found")
        return res.data[0]

    def delete(self, doc_type: str, doc_id: str) -> None:
        with backend_call(f"delete {doc_type} {doc_id}"):
            self.client.table(doc_type).delete().eq("id", doc_id).execute()

    def count(self, doc_type: str) -> int:
        with backend_call(f"count {doc_type}"):
            res = self.client.table(doc_type).select("id", count="exact").execute()
        return res.count or 0

    def asset_url(self, ref: str) -> str:
        return self.client.storage.from_(self.bucket).get_public_url(ref)

    def upload_asset(
        self, content: bytes, filename: Optional[str], content_type: str, folder: str = "products"
    ) -> Dict[str, str]:
        # client-supplied names may be missing or carry directories
        filename = os.path.basename((filename or "").replace("\\", "/")) or "image"
        path = f"{folder}/{uuid.uuid4().hex}-{filename}"
        with backend_call(f"upload {filename}"):
            self.client.storage.from_(self.bucket).upload(path, content, {"content-type": content_type})
            url = self.asset_url(path)
        logger.info("Uploaded asset %s to bucket %s", path, self.bucket)
        return {"ref": path, "url": url}
