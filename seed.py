"""Seed script: naplní DB ukázkovým vybavením potápěčského centra."""
import os
import sys

# Ensure we're in the project root
sys.path.insert(0, os.path.dirname(__file__))

from datetime import date, timedelta

from scubarent.database import Base, engine, SessionLocal
import scubarent.models  # noqa: F401
from scubarent.models.customer import Customer
from scubarent.models.equipment import Equipment, EquipmentItem, ItemStatus, ItemHold
from scubarent.models.basket import EquipmentBasket
from scubarent.schemas.basket import BasketCreate
from scubarent.models.booking_equipment import EquipmentSource
from scubarent.schemas.booking_equipment import EquipmentSelection
from scubarent.schemas.service_history import ServiceRecordCreate
import scubarent.services.basket_service as basket_svc
import scubarent.services.service_history_service as service_svc


def seed():
    os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    # Typy vybavení
    types = {
        "BCD": "Jackety",
        "Regulátor": "Automatiky",
        "Neopren 5 mm": "Obleky",
        "Ploutve": "Výstroj",
        "Maska": "Výstroj",
    }
    existing_types = {e.name: e for e in db.query(Equipment).all()}
    for name, category in types.items():
        if name not in existing_types:
            existing_types[name] = Equipment(name=name, category=category)
            db.add(existing_types[name])
    db.commit()

    # Kusy vybavení
    items_data = [
        ("BCD", "BCD-001", "SN-AQL-1001", "M", "Aqualung", "černá", None),
        ("BCD", "BCD-002", "SN-AQL-1002", "L", "Aqualung", "černá", None),
        ("BCD", "BCD-003", "SN-SCP-2001", "S", "Scubapro", "modrá", ItemHold.maintenance),
        ("Regulátor", "REG-001", "SN-APK-3001", None, "Apeks", None, None),
        ("Regulátor", "REG-002", "SN-APK-3002", None, "Apeks", None, None),
        ("Neopren 5 mm", "NEO-001", None, "M", "Mares", "černá", None),
        ("Neopren 5 mm", "NEO-002", None, "L", "Mares", "černá", None),
        ("Ploutve", "FIN-001", None, "42-43", "Mares", "žlutá", None),
        ("Maska", "MSK-001", None, None, "Cressi", "čirá", ItemHold.retired),
    ]
    existing_codes = {i.inventory_code for i in db.query(EquipmentItem).all()}
    for type_name, code, sn, size, brand, color, hold in items_data:
        if code not in existing_codes:
            db.add(EquipmentItem(
                equipment_id=existing_types[type_name].id,
                inventory_code=code,
                serial_no=sn,
                size=size,
                brand=brand,
                color=color,
                hold_status=hold,
                status=ItemStatus(hold.value) if hold else ItemStatus.available,
            ))

    db.commit()

    # Automatiky mají roční revizi
    for code in ("REG-001", "REG-002"):
        reg = db.query(EquipmentItem).filter_by(inventory_code=code).one()
        if not reg.service_history:
            reg.requires_service = True
            reg.service_interval_days = 365
            service_svc.create_service_record(db, reg.id, ServiceRecordCreate(
                service_date=date.today() - timedelta(days=60),
                service_type="Roční revize",
                service_provider="Apeks servis",
            ))

    # Zákazníci
    customers = ["Jana Nováková", "Petr Svoboda", "Lucie Dvořáková"]
    existing_customers = {c.full_name: c for c in db.query(Customer).all()}
    for name in customers:
        if name not in existing_customers:
            existing_customers[name] = Customer(full_name=name, email=None)
            db.add(existing_customers[name])
    db.commit()

    # Jeden vydaný košík
    if not db.query(EquipmentBasket).first():
        today = date.today()
        basket = basket_svc.create_basket(db, BasketCreate(
            customer_id=existing_customers["Jana Nováková"].id,
            center_bucket_no="B-12",
            checkout_date=today,
            expected_return_date=today + timedelta(days=3),
        ))
        for code in ("BCD-001", "REG-001", "NEO-001"):
            item = db.query(EquipmentItem).filter_by(inventory_code=code).one()
            basket_svc.add_assignment(db, basket.id, EquipmentSelection(equipment_item_id=item.id))
        basket_svc.add_assignment(db, basket.id, EquipmentSelection(
            equipment_source=EquipmentSource.customer_own,
            customer_equipment_type="Počítač",
            customer_equipment_brand="Suunto",
            customer_equipment_model="Zoop",
        ))
        basket_svc.checkout_basket(db, basket.id)

    db.close()
    print("✅ Seed dokončen!")


if __name__ == "__main__":
    seed()
