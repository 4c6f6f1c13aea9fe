from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.models.basket import BasketStatus
from scubarent.schemas.basket import (
    BasketCreate, BasketUpdate, BasketResponse, BasketDetailResponse, BasketCheckoutResponse,
)
from scubarent.schemas.booking_equipment import (
    EquipmentSelection, BookingEquipmentResponse, BulkReturnRequest, BulkReturnResponse,
)
from scubarent.schemas.pagination import Page
import scubarent.services.basket_service as svc
import scubarent.services.export_service as export_svc

router = APIRouter(prefix="/api/equipment-baskets", tags=["equipment-baskets"])


@router.get("", response_model=Page[BasketResponse])
def list_baskets(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=200),
    status: BasketStatus | None = Query(None, description="Active, Returned, Lost"),
    customer_id: int | None = Query(None),
    search: str = Query(""),
    db: Session = Depends(get_db),
):
    return svc.get_baskets(db, page=page, size=size, status=status, customer_id=customer_id, search=search)


@router.post("", response_model=BasketResponse, status_code=201)
def create_basket(data: BasketCreate, db: Session = Depends(get_db)):
    return svc.create_basket(db, data)


@router.get("/{basket_id}", response_model=BasketDetailResponse)
def get_basket(basket_id: int, db: Session = Depends(get_db)):
    return svc.get_basket(db, basket_id)


@router.put("/{basket_id}", response_model=BasketResponse)
def update_basket(basket_id: int, data: BasketUpdate, db: Session = Depends(get_db)):
    return svc.update_basket(db, basket_id, data)


@router.delete("/{basket_id}", status_code=204)
def delete_basket(basket_id: int, db: Session = Depends(get_db)):
    svc.delete_basket(db, basket_id)
    return Response(status_code=204)


@router.post("/{basket_id}/items", response_model=BookingEquipmentResponse, status_code=201)
def add_item(basket_id: int, data: EquipmentSelection, db: Session = Depends(get_db)):
    return svc.add_assignment(db, basket_id, data)


@router.post("/{basket_id}/checkout", response_model=BasketCheckoutResponse)
def checkout_basket(basket_id: int, db: Session = Depends(get_db)):
    return svc.checkout_basket(db, basket_id)


@router.put("/{basket_id}/return", response_model=BulkReturnResponse)
def return_basket(basket_id: int, data: BulkReturnRequest, db: Session = Depends(get_db)):
    return svc.return_basket(db, basket_id, data)


@router.get("/{basket_id}/handout.pdf")
def basket_handout(basket_id: int, db: Session = Depends(get_db)):
    pdf_bytes = export_svc.export_basket_pdf(db, basket_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=kosik-{basket_id}.pdf"},
    )
