"""Equipment listing API endpoints.

These endpoints are the system of record for authorization: reads are
limited to available listings plus the caller's own, and writes to a listing
are limited to its owner, whatever the client decided to show.
"""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Query as OrmQuery
from sqlalchemy.orm import Session

from labexchange.api.dependencies import get_current_user, get_optional_user
from labexchange.database import get_db
from labexchange.models.enums import AvailabilityStatus, CertificationStatus
from labexchange.models.equipment import Equipment
from labexchange.models.user import User
from labexchange.schemas.equipment import (
    EquipmentCreate,
    EquipmentResponse,
    EquipmentUpdate,
    SellerContact,
)
from labexchange.services.realtime import EquipmentEventType, publish_equipment_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/equipment", tags=["equipment"])

SORTABLE_COLUMNS = {
    "created_at": Equipment.created_at,
    "price": Equipment.price,
    "name": Equipment.name,
}


def visible_equipment(db: Session, user: User | None) -> OrmQuery:
    """Listings the caller may read: available ones, plus their own."""
    query = db.query(Equipment)
    public = Equipment.availability_status == AvailabilityStatus.AVAILABLE.value
    if user is None:
        return query.filter(public)
    return query.filter(or_(public, Equipment.owner_id == user.id))


def get_visible_equipment(db: Session, equipment_id: int, user: User | None) -> Equipment:
    equipment = visible_equipment(db, user).filter(Equipment.id == equipment_id).first()
    if not equipment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Equipment not found")
    return equipment


def get_owned_equipment(db: Session, equipment_id: int, user: User) -> Equipment:
    """Get a listing for a write; only its owner passes."""
    equipment = get_visible_equipment(db, equipment_id, user)
    if equipment.owner_id != user.id:
        logger.warning(f"User {user.id} tried to modify listing {equipment_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to modify this equipment",
        )
    return equipment


@router.get("", response_model=list[EquipmentResponse])
def list_equipment(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
    availability_status: AvailabilityStatus | None = Query(default=None),
    owner_id: int | None = Query(default=None),
    order_by: Literal["created_at", "price", "name"] = Query(default="created_at"),
    direction: Literal["asc", "desc"] = Query(default="desc"),
):
    """List visible equipment, newest first unless asked otherwise."""
    query = visible_equipment(db, current_user)
    if availability_status is not None:
        query = query.filter(Equipment.availability_status == availability_status.value)
    if owner_id is not None:
        query = query.filter(Equipment.owner_id == owner_id)

    column = SORTABLE_COLUMNS[order_by]
    # Ties fall back to insertion order (id), in the same direction
    if direction == "desc":
        query = query.order_by(column.desc(), Equipment.id.desc())
    else:
        query = query.order_by(column.asc(), Equipment.id.asc())
    return query.all()


@router.get("/{equipment_id}", response_model=EquipmentResponse)
def get_equipment(
    equipment_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
):
    """Get a single listing with its seller summary."""
    return get_visible_equipment(db, equipment_id, current_user)


@router.post("", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
def create_equipment(
    equipment_data: EquipmentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a listing owned by the caller."""
    equipment = Equipment(
        **equipment_data.model_dump(mode="json"),
        owner_id=current_user.id,
        availability_status=AvailabilityStatus.AVAILABLE.value,
        certification_status=CertificationStatus.UNCERTIFIED.value,
        images=[],
        tags=[],
    )
    db.add(equipment)
    db.commit()
    db.refresh(equipment)

    publish_equipment_event(equipment.id, EquipmentEventType.CREATED, current_user.id)
    return equipment


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
def update_equipment(
    equipment_id: int,
    equipment_data: EquipmentUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the mutable fields of a listing (owner only)."""
    equipment = get_owned_equipment(db, equipment_id, current_user)

    for field, value in equipment_data.model_dump(mode="json", exclude_unset=True).items():
        setattr(equipment, field, value)

    db.commit()
    db.refresh(equipment)

    publish_equipment_event(equipment.id, EquipmentEventType.UPDATED, current_user.id)
    return equipment


@router.delete("/{equipment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_equipment(
    equipment_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Permanently delete a listing (owner only)."""
    equipment = get_owned_equipment(db, equipment_id, current_user)
    db.delete(equipment)
    db.commit()

    publish_equipment_event(equipment_id, EquipmentEventType.DELETED, current_user.id)


@router.post("/{equipment_id}/contact", response_model=SellerContact)
def contact_seller(
    equipment_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Reveal the seller's contact details to a signed-in buyer."""
    equipment = get_visible_equipment(db, equipment_id, current_user)
    seller = equipment.owner
    profile = seller.profile if seller else None
    logger.info(f"User {current_user.id} requested contact for listing {equipment_id}")
    return SellerContact(
        listing_id=equipment.id,
        full_name=profile.full_name if profile else None,
        email=seller.email if seller else None,
    )
