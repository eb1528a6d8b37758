import os
from decimal import Decimal

import pytest

# Must be set before spaceledger.db.database builds its default engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

from sqlalchemy.orm import sessionmaker  # noqa: E402

from spaceledger.db.database import Base, get_db, make_engine  # noqa: E402
from spaceledger.models import UserRole  # noqa: E402
from spaceledger.schemas.logistics_space import SpaceCreate  # noqa: E402
from spaceledger.schemas.shipment import ShipmentCreate  # noqa: E402
from spaceledger.schemas.user import UserCreate  # noqa: E402
from spaceledger.services.identity import register_user  # noqa: E402
from spaceledger.services.shipment_lifecycle import create_shipment  # noqa: E402
from spaceledger.services.space_allocator import create_space  # noqa: E402


@pytest.fixture()
def session_factory(tmp_path):
    """Fresh file-backed SQLite database per test, shareable across threads."""
    engine = make_engine(f"sqlite:///{tmp_path / 'spaceledger-test.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    from fastapi.testclient import TestClient
    from spaceledger.main import app

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


@pytest.fixture()
def carrier(db):
    return register_user(db, UserCreate(
        username="carrier",
        email="carrier@example.com",
        password="s3cret",
        role=UserRole.LOGISTICS,
        wallet_address="0xcarrier",
    ))


@pytest.fixture()
def shipper(db):
    return register_user(db, UserCreate(
        username="shipper",
        email="shipper@example.com",
        password="hunter2",
        role=UserRole.USER,
    ))


def make_space_data(owner_id, token_id="T-100", source="Toronto", destination="Montreal"):
    return SpaceCreate(
        token_id=token_id,
        owner_id=owner_id,
        source=source,
        destination=destination,
        length=Decimal("12.0"),
        width=Decimal("2.4"),
        height=Decimal("2.6"),
        max_weight=Decimal("20000"),
        price=Decimal("500"),
    )


@pytest.fixture()
def space_factory(db, carrier):
    def _create(token_id="T-100", source="Toronto", destination="Montreal"):
        return create_space(db, make_space_data(carrier.id, token_id, source, destination))
    return _create


@pytest.fixture()
def space(space_factory):
    return space_factory()


@pytest.fixture()
def shipment(db, space, shipper):
    return create_shipment(db, space.id, ShipmentCreate(
        logistics_space_id=space.id,
        owner_id=shipper.id,
        goods_type="electronics",
        weight=Decimal("250"),
    ))
