import copy
import os
import uuid

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

# Pas de Redis pendant les tests: le lifespan désactive la limitation
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

from homedecor.app import app as fastapi_app
from homedecor.container import Container
from homedecor.deps import get_container
from homedecor.errors import PaymentProviderError


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class _Resp:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


class _Query:
    """Sous-ensemble du query builder postgrest utilisé par les repositories."""

    def __init__(self, db: "InMemorySupabase", table: str):
        self._db = db
        self._table = table
        self._op = "select"
        self._payload: Any = None
        self._filters: List = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None
        self._on_conflict = ""
        self._ignore_duplicates = False

    def select(self, *columns, count=None):
        self._op = "select"
        return self

    def insert(self, payload):
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload):
        self._op, self._payload = "update", payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def upsert(self, payload, on_conflict="", ignore_duplicates=False):
        self._op, self._payload = "upsert", payload
        self._on_conflict = on_conflict
        self._ignore_duplicates = ignore_duplicates
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def _matching(self, rows):
        return [r for r in rows if all(f(r) for f in self._filters)]

    def execute(self):
        self._db.calls.append((self._table, self._op))
        if (self._table, self._op) in self._db.failures or (self._table, "*") in self._db.failures:
            raise RuntimeError(f"simulated failure on {self._table}.{self._op}")
        rows = self._db.tables.setdefault(self._table, [])

        if self._op in ("insert", "upsert"):
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            written = []
            for item in items:
                if self._op == "upsert":
                    key = self._on_conflict
                    existing = [r for r in rows if r.get(key) == item.get(key)]
                    if existing:
                        if not self._ignore_duplicates:
                            existing[0].update(item)
                            written.append(copy.deepcopy(existing[0]))
                        continue
                row = dict(item)
                row.setdefault("id", uuid.uuid4().hex)
                rows.append(row)
                written.append(copy.deepcopy(row))
            return _Resp(data=written)

        matched = self._matching(rows)
        if self._op == "update":
            for r in matched:
                r.update(self._payload)
            return _Resp(data=copy.deepcopy(matched))
        if self._op == "delete":
            for r in matched:
                rows.remove(r)
            return _Resp(data=copy.deepcopy(matched))

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: str(r.get(column) or ""), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return _Resp(data=copy.deepcopy(matched), count=len(matched))


class InMemorySupabase:
    """Faux client Supabase: tables en mémoire, pannes injectables par (table, opération)."""

    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.failures = set()
        self.calls: List[tuple] = []

    def table(self, name: str) -> _Query:
        return _Query(self, name)

    def seed(self, name: str, *rows: dict) -> List[dict]:
        stored = []
        for row in rows:
            row = dict(row)
            row.setdefault("id", uuid.uuid4().hex)
            self.tables.setdefault(name, []).append(row)
            stored.append(row)
        return stored

    def fail(self, name: str, op: str = "*") -> None:
        self.failures.add((name, op))


class FakeStripeProvider:
    """Fournisseur Checkout factice: garde les sessions créées et permet de les marquer payées."""

    def __init__(self):
        self.sessions: Dict[str, dict] = {}
        self.created: List[dict] = []
        self.fail_create = False
        self.fail_retrieve = False

    def create_session(self, **kwargs) -> dict:
        if self.fail_create:
            raise PaymentProviderError("Stripe session creation failed")
        self.created.append(kwargs)
        session_id = f"cs_test_{len(self.created)}"
        line = kwargs["line_items"][0]
        session = {
            "id": session_id,
            "url": f"https://checkout.stripe.test/pay/{session_id}",
            "payment_status": "unpaid",
            "payment_intent": None,
            "amount_total": line["price_data"]["unit_amount"] * line["quantity"],
            "currency": line["price_data"]["currency"],
            "customer_email": kwargs["customer_email"],
            "metadata": dict(kwargs["metadata"]),
        }
        self.sessions[session_id] = session
        return dict(session)

    def add_session(self, session_id: str, **fields) -> dict:
        session = {"id": session_id, "payment_status": "unpaid", "metadata": {}}
        session.update(fields)
        self.sessions[session_id] = session
        return session

    def complete(self, session_id: str, payment_intent: str = "pi_123") -> None:
        self.sessions[session_id].update({"payment_status": "paid", "payment_intent": payment_intent})

    def retrieve_session(self, session_id: str) -> dict:
        if self.fail_retrieve or session_id not in self.sessions:
            raise PaymentProviderError("Stripe session lookup failed")
        return copy.deepcopy(self.sessions[session_id])


@pytest.fixture()
def db() -> InMemorySupabase:
    return InMemorySupabase()


@pytest.fixture()
def provider() -> FakeStripeProvider:
    return FakeStripeProvider()


@pytest.fixture()
def container(db, provider) -> Container:
    return Container.build(client_factory=lambda: db, provider=provider)


@pytest.fixture(scope="session")
def app():
    return fastapi_app


@pytest.fixture()
def client(app, container) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_container] = lambda: container
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_container, None)
