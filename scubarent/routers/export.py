from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from scubarent.database import get_db
from scubarent.models.booking_equipment import AssignmentStatus
import scubarent.services.export_service as svc

router = APIRouter(prefix="/api", tags=["export"])


@router.get("/export/excel/assignments")
def export_assignments_excel(
    status: AssignmentStatus | None = Query(None),
    db: Session = Depends(get_db),
):
    xlsx_bytes = svc.export_assignments_excel(db, status=status)
    return Response(
        content=xlsx_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=vypujcky.xlsx"},
    )
