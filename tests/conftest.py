import os

# ustawione przed importem bigbasket.utils.settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from decimal import Decimal
from unittest.mock import MagicMock, create_autospec

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bigbasket.api import create_app
from bigbasket.api.dependencies import get_repository
from bigbasket.data.database import Base
import bigbasket.data.models  # noqa: F401
from bigbasket.domain.schemas import ProductIn
from bigbasket.repos.base import Repository
from bigbasket.repos.memory_repository import InMemoryRepository
from bigbasket.repos.sql_repository import SqlRepository
from bigbasket.services.lock_service import LockService
from bigbasket.services.notification_service import NotificationService

CATALOG = [
    ProductIn(id=1, name="Basmati Rice", price=Decimal("100.00"), stock_quantity=10,
              discount_percentage=Decimal("10"), gst_percentage=Decimal("18")),
    ProductIn(id=2, name="Toor Dal", price=Decimal("33.33"), stock_quantity=5,
              discount_percentage=Decimal("0"), gst_percentage=Decimal("5")),
]


@pytest.fixture()
def mock_repository():
    return create_autospec(Repository, instance=True)


@pytest.fixture()
def client(mock_repository):
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: mock_repository
    return TestClient(app)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture()
def lock_service():
    lock = create_autospec(LockService, instance=True)
    lock.acquire_checkout_lock.return_value = True
    lock.release_checkout_lock.return_value = True
    return lock


@pytest.fixture()
def notification_service():
    return MagicMock(spec=NotificationService)


@pytest.fixture()
def sql_repository(db_session, lock_service, notification_service):
    return SqlRepository(db_session, lock_service, notification_service)


@pytest.fixture()
def catalog():
    return [p.model_copy() for p in CATALOG]


@pytest.fixture(params=["memory", "sql"])
def repository(request, catalog):
    """Obie implementacje repozytorium z tym samym katalogiem."""
    if request.param == "memory":
        repo = InMemoryRepository()
    else:
        repo = request.getfixturevalue("sql_repository")

    for product in catalog:
        repo.post_new_product(product)
    return repo
