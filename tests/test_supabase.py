from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from supabase import PostgrestAPIError

from dashboard.core.errors import BackendError
from dashboard.db.supabase import DocumentStore


def make_client(data=None, count=None):
    query = MagicMock()
    for method in ("select", "in_", "order", "eq", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = SimpleNamespace(data=data, count=count)
    client = MagicMock()
    client.table.return_value = query
    return client, query


def test_fetch_builds_query():
    client, query = make_client(data=[{"id": 1}])
    rows = DocumentStore(client).fetch("messages", order=[("pinned", True), ("created_at", True)])
    assert rows == [{"id": 1}]
    client.table.assert_called_once_with("messages")
    query.select.assert_called_once_with("*")
    assert [c.args for c in query.order.call_args_list] == [("pinned",), ("created_at",)]
    query.in_.assert_not_called()


def test_fetch_by_ids():
    client, query = make_client(data=[])
    assert DocumentStore(client).fetch("products", columns="id,name,image", ids=["p1", "p2"]) == []
    query.in_.assert_called_once_with("id", ["p1", "p2"])


def test_create_returns_persisted_row():
    client, query = make_client(data=[{"id": "new", "name": "x"}])
    assert DocumentStore(client).create("products", {"name": "x"}) == {"id": "new", "name": "x"}
    query.insert.assert_called_once_with({"name": "x"})


def test_patch_missing_row_is_a_backend_error():
    client, _ = make_client(data=[])
    with pytest.raises(BackendError):
        DocumentStore(client).patch("orders", "o1", {"status": "completed"})


def test_patch_filters_by_id():
    client, query = make_client(data=[{"id": "o1", "status": "completed"}])
    DocumentStore(client).patch("orders", "o1", {"status": "completed"})
    query.update.assert_called_once_with({"status": "completed"})
    query.eq.assert_called_once_with("id", "o1")


@pytest.mark.parametrize("error", [PostgrestAPIError({"message": "denied"}), httpx.ConnectError("down")])
def test_sdk_errors_become_backend_errors(error):
    client, query = make_client()
    query.execute.side_effect = error
    with pytest.raises(BackendError):
        DocumentStore(client).delete("users", "u1")


def test_count():
    client, query = make_client(data=[], count=7)
    assert DocumentStore(client).count("users") == 7
    query.select.assert_called_once_with("id", count="exact")


def test_upload_asset():
    client = MagicMock()
    bucket = client.storage.from_.return_value
    bucket.get_public_url.side_effect = lambda path: f"https://cdn/{path}"
    asset = DocumentStore(client, bucket="images").upload_asset(b"data", "chair.png", "image/png")
    client.storage.from_.assert_called_with("images")
    path = bucket.upload.call_args.args[0]
    assert path.startswith("products/") and path.endswith("-chair.png")
    assert bucket.upload.call_args.args[2] == {"content-type": "image/png"}
    assert asset == {"ref": path, "url": f"https://cdn/{path}"}


@pytest.mark.parametrize("filename, stored", [
    (None, "image"),
    ("../../etc/chair.png", "chair.png"),
    ("C:\\Users\\me\\chair.png", "chair.png"),
])
def test_upload_asset_keeps_key_flat(filename, stored):
    client = MagicMock()
    DocumentStore(client).upload_asset(b"data", filename, "image/png")
    path = client.storage.from_.return_value.upload.call_args.args[0]
    assert path.count("/") == 1
    assert path.endswith("-" + stored)
