# backend/ritto/routers/businesses.py
# One business per owner. DELETE = 405 (businesses are never hard-deleted)

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business, get_current_owner, get_redis
from ..models import Business
from ..schemas.businesses import BusinessCreate, BusinessRead, BusinessUpdate
from ..services.business import create_business, update_business

router = APIRouter(prefix="/business", tags=["business"])


@router.get("/", response_model=BusinessRead)
def get_my_business(business: Business = Depends(get_business)):
    return business


@router.post("/", response_model=BusinessRead, status_code=status.HTTP_201_CREATED)
def setup_business(
    data: BusinessCreate,
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    return create_business(db, owner_id, data.model_dump())


@router.patch("/", response_model=BusinessRead)
def update_my_business(
    data: BusinessUpdate,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    return update_business(db, business, data.model_dump(exclude_unset=True), redis)


@router.delete("/")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
