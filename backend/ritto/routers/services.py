# backend/ritto/routers/services.py
# PATCH = ALLOWED, DELETE = soft-delete (is_active)

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business
from ..errors import ValidationError
from ..models import Business, Service as DBService
from ..schemas.services import ServiceCreate, ServiceRead, ServiceUpdate

router = APIRouter(prefix="/services", tags=["services"])


def _get_own_service(db: Session, business: Business, id: int) -> DBService:
    obj = db.get(DBService, id)
    if not obj or obj.business_id != business.id:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.get("/", response_model=list[ServiceRead])
def list_services(
    include_inactive: bool = False,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    query = db.query(DBService).filter(DBService.business_id == business.id)
    if not include_inactive:
        query = query.filter(DBService.is_active.is_(True))
    return query.order_by(DBService.created_at, DBService.id).all()


@router.get("/{id}", response_model=ServiceRead)
def get_service(
    id: int,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    return _get_own_service(db, business, id)


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    data: ServiceCreate,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    obj = DBService(business_id=business.id, **data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=ServiceRead)
def update_service(
    id: int,
    data: ServiceUpdate,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    obj = _get_own_service(db, business, id)

    values = data.model_dump(exclude_unset=True)
    cleared = [field for field, value in values.items() if value is None]
    if cleared:
        raise ValidationError(f"{', '.join(cleared)} cannot be empty")

    for field, value in values.items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(
    id: int,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    obj = _get_own_service(db, business, id)
    obj.is_active = False
    db.commit()
