import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from scubarent.database import Base
import scubarent.models  # noqa: F401
from scubarent.models.customer import Customer
from scubarent.models.equipment import Equipment, EquipmentItem
from scubarent.schemas.basket import BasketCreate
import scubarent.services.basket_service as basket_svc


TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db():
    engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def customer(db):
    c = Customer(full_name="Jana Nováková", email="jana@example.com")
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture
def bcd(db):
    e = Equipment(name="BCD", category="Jackety")
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


@pytest.fixture
def make_item(db, bcd):
    def _make(code: str, **kwargs) -> EquipmentItem:
        item = EquipmentItem(equipment_id=bcd.id, inventory_code=code, **kwargs)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item
    return _make


@pytest.fixture
def make_basket(db, customer):
    def _make(start: date = date(2026, 7, 1), end: date | None = date(2026, 7, 5)):
        return basket_svc.create_basket(
            db, BasketCreate(customer_id=customer.id, checkout_date=start, expected_return_date=end)
        )
    return _make
