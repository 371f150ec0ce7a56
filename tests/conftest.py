import copy
import itertools
from collections import defaultdict

import pytest
from fastapi.testclient import TestClient

from dashboard.api.deps import get_backend
from dashboard.core import config
from dashboard.core.errors import BackendError
from dashboard.core.security import create_token
from dashboard.main import app
from dashboard.services.sessions import SessionRegistry

ADMIN_EMAIL = "admin@example.com"
ASSET_BASE = "https://cdn.test/storage/v1/object/public/images/"


class FakeDocumentStore:
    """In-memory stand-in for DocumentStore.

    Put an operation name ("create") or an (operation, doc_type) pair into
    `failing` to make those calls raise BackendError.
    """

    def __init__(self):
        self.tables = defaultdict(dict)
        self.assets = {}
        self.calls = []
        self.failing = set()
        self._ids = itertools.count(1)

    def seed(self, doc_type, *docs):
        for doc in docs:
            doc = copy.deepcopy(doc)
            doc.setdefault("id", self._next_id(doc_type))
            self.tables[doc_type][str(doc["id"])] = doc

    def _next_id(self, doc_type):
        return f"{doc_type}-{next(self._ids)}"

    def _check(self, op, doc_type):
        self.calls.append((op, doc_type))
        if op in self.failing or (op, doc_type) in self.failing:
            raise BackendError(f"{op} {doc_type} failed")

    def ops(self, op):
        return [call for call in self.calls if call[0] == op]

    def fetch(self, doc_type, columns="*", order=(), ids=None):
        self._check("fetch", doc_type)
        rows = [copy.deepcopy(doc) for doc in self.tables[doc_type].values()]
        if ids is not None:
            wanted = set(ids)
            rows = [row for row in rows if str(row["id"]) in wanted]
        for column, desc in reversed(list(order)):
            rows.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        return rows

    def create(self, doc_type, document):
        self._check("create", doc_type)
        doc = copy.deepcopy(document)
        doc["id"] = self._next_id(doc_type)
        self.tables[doc_type][doc["id"]] = doc
        return copy.deepcopy(doc)

    def patch(self, doc_type, doc_id, fields):
        self._check("patch", doc_type)
        if doc_id not in self.tables[doc_type]:
            raise BackendError(f"{doc_type} {doc_id} not found")
        self.tables[doc_type][doc_id].update(copy.deepcopy(fields))
        return copy.deepcopy(self.tables[doc_type][doc_id])

    def delete(self, doc_type, doc_id):
        self._check("delete", doc_type)
        self.tables[doc_type].pop(doc_id, None)

    def count(self, doc_type):
        self._check("count", doc_type)
        return len(self.tables[doc_type])

    def asset_url(self, ref):
        return ASSET_BASE + ref

    def upload_asset(self, content, filename, content_type, folder="products"):
        self._check("upload", "assets")
        ref = f"{folder}/{filename}"
        self.assets[ref] = (content, content_type)
        return {"ref": ref, "url": self.asset_url(ref)}


@pytest.fixture(autouse=True)
def admin_email(monkeypatch):
    monkeypatch.setattr(config, "ADMIN_EMAIL", ADMIN_EMAIL)
    return ADMIN_EMAIL


@pytest.fixture
def backend():
    return FakeDocumentStore()


@pytest.fixture
def products():
    return [
        {"id": "p1", "name": "Oak Chair", "image": "products/oak.png", "price": 120.0, "description": "Solid oak",
         "discount_percentage": 10, "is_featured_product": True, "stock_level": 4, "category": "Chair"},
        {"id": "p2", "name": "Linen Sofa", "image": None, "price": 900.0, "description": "Three seats",
         "discount_percentage": 0, "is_featured_product": False, "stock_level": 1, "category": "Sofa"},
    ]


@pytest.fixture
def users():
    return [
        {"id": "u1", "name": "Ada", "email": "ada@example.com", "mobile_number": "+15550001", "password": "hunter2",
         "address": {"street": "1 Main St", "city": "Springfield", "state": "IL", "country": "US", "postal_code": "62701"},
         "is_verified": True, "role": "admin"},
    ]


@pytest.fixture
def orders():
    return [
        {"id": "o1", "full_name": "Grace Hopper", "email": "grace@example.com", "phone": "+15550002",
         "address": "2 Navy Rd", "city": "Arlington", "postal_code": "22201", "country": "US",
         "payment_method": "creditCard", "payment_status": "paid", "amount": 240.0,
         "created_at": "2024-03-01T09:00:00+00:00", "status": "pending",
         "cart_items": [{"product_id": "p1", "quantity": 2}]},
        {"id": "o2", "full_name": "Alan Turing", "email": "alan@example.com", "phone": "+15550003",
         "address": "3 Park Ln", "city": "Manchester", "postal_code": "M1", "country": "UK",
         "payment_method": "cash", "payment_status": "cash on delivery", "amount": 900.0,
         "created_at": "2024-03-02T09:00:00+00:00", "status": "completed",
         "cart_items": [{"product_id": "p2", "quantity": 1}]},
    ]


@pytest.fixture
def messages():
    return [
        {"id": "m1", "name": "Old pinned", "email": "a@example.com", "message": "first pinned message body",
         "created_at": "2024-01-01T10:00:00+00:00", "pinned": True},
        {"id": "m2", "name": "New pinned", "email": "b@example.com", "message": "second",
         "created_at": "2024-01-05T10:00:00+00:00", "pinned": True},
        {"id": "m3", "name": "Old other", "email": "c@example.com", "message": "hello",
         "created_at": "2024-01-02T10:00:00+00:00", "pinned": False},
        {"id": "m4", "name": "New other", "email": "d@example.com", "message": "where is my sofa?",
         "created_at": "2024-01-09T10:00:00+00:00", "pinned": False},
    ]


@pytest.fixture
def seeded(backend, products, users, orders, messages):
    backend.seed("products", *products)
    backend.seed("users", *users)
    backend.seed("orders", *orders)
    backend.seed("messages", *messages)
    return backend


@pytest.fixture
def client(backend):
    app.dependency_overrides[get_backend] = lambda: backend
    app.state.sessions = SessionRegistry()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {create_token(ADMIN_EMAIL)}"}
