"""
Script to create a demo logistics user and space for local testing.
"""
from decimal import Decimal

from spaceledger.db.database import SessionLocal, engine, Base
from spaceledger.models import LogisticsSpace, User, UserRole
from spaceledger.schemas.logistics_space import SpaceCreate
from spaceledger.schemas.user import UserCreate
from spaceledger.services.errors import LedgerError
from spaceledger.services.identity import register_user
from spaceledger.services.space_allocator import create_space


def seed_demo_data():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        carrier = db.query(User).filter(User.username == "demo-carrier").first()
        if not carrier:
            carrier = register_user(db, UserCreate(
                username="demo-carrier",
                email="carrier@example.com",
                password="demo-password",
                first_name="Demo",
                last_name="Carrier",
                role=UserRole.LOGISTICS,
            ))
            print(f"Created logistics user: {carrier.username} (ID: {carrier.id})")
        else:
            print(f"User 'demo-carrier' already exists with ID: {carrier.id}")

        existing = db.query(LogisticsSpace).filter(LogisticsSpace.token_id == "T-100").first()
        if existing:
            print(f"Space 'T-100' already exists with ID: {existing.id}")
            return

        space = create_space(db, SpaceCreate(
            token_id="T-100",
            owner_id=carrier.id,
            source="Toronto",
            destination="Montreal",
            length=Decimal("12.00"),
            width=Decimal("2.40"),
            height=Decimal("2.60"),
            max_weight=Decimal("20000"),
            price=Decimal("500"),
        ))
        print(f"Created space: {space.token_id} {space.source} -> {space.destination} (ID: {space.id})")
    except LedgerError as e:
        print(f"Error: {e.message}")
        db.rollback()
    finally:
        db.close()

if __name__ == "__main__":
    seed_demo_data()
