import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.auth import create_access_token
from shared.core.database import Base, get_db
from property_service.app import models  # noqa: F401
from property_service.app.models import Property


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from property_service.app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    token = create_access_token({"user_id": 7, "account_type": "tenant"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_access_token({"user_id": 1, "account_type": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def add_property(db):
    def _add(capacity=3, owner_id=-1, for_sale=False, for_rent=False, **kwargs):
        db_property = Property(capacity=capacity, owner_id=owner_id,
                               for_sale=for_sale, for_rent=for_rent, **kwargs)
        db.add(db_property)
        db.commit()
        db.refresh(db_property)
        return db_property

    return _add
