"""Test fixtures and utilities."""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from receipt_matcher.db.base import Base
from receipt_matcher.db.session import build_engine, get_db, make_session_factory
from receipt_matcher.models import Receipt, Transaction

TENANT = "tenant-a"
OTHER_TENANT = "tenant-b"


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test, shared across threads."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    """TestClient with get_db pointed at the test database."""
    from receipt_matcher.main import app

    factory = make_session_factory(engine)

    def override_get_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def build_transaction():
    """Build an unsaved Transaction for pure scoring tests."""

    def _build(
        txn_date: date,
        payee: str,
        amount: str,
        tenant_id: str = TENANT,
    ) -> Transaction:
        return Transaction(
            tenant_id=tenant_id,
            date=txn_date,
            payee=payee,
            amount=Decimal(amount),
        )

    return _build


@pytest.fixture
def add_transaction(db, build_transaction):
    """Persist a Transaction and return it."""

    def _add(
        txn_date: date,
        payee: str,
        amount: str,
        tenant_id: str = TENANT,
        category: str | None = None,
        memo: str | None = None,
    ) -> Transaction:
        txn = build_transaction(txn_date, payee, amount, tenant_id=tenant_id)
        txn.category = category
        txn.memo = memo
        db.add(txn)
        db.commit()
        db.refresh(txn)
        return txn

    return _add


@pytest.fixture
def add_receipt(db):
    """Persist a Receipt and return it."""

    def _add(
        filename: str,
        tenant_id: str = TENANT,
        transaction: Transaction | None = None,
    ) -> Receipt:
        receipt = Receipt(
            tenant_id=tenant_id,
            filename=filename,
            transaction_id=transaction.id if transaction else None,
        )
        db.add(receipt)
        db.commit()
        db.refresh(receipt)
        return receipt

    return _add
