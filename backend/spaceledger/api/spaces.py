"""
Logistics space API endpoints.
"""
import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
from spaceledger.db.database import get_db
from spaceledger.schemas.logistics_space import SpaceCreate, SpaceResponse, SpaceStatusUpdate
from spaceledger.services import space_allocator
from spaceledger.services.errors import LedgerError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=SpaceResponse, status_code=status.HTTP_201_CREATED)
async def create_space(
    space_data: SpaceCreate,
    db: Session = Depends(get_db)
):
    """Offer a new logistics space."""
    try:
        logger.info(f"Creating space: token_id={space_data.token_id}, owner_id={space_data.owner_id}")
        return space_allocator.create_space(db, space_data)
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating space: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create space: {str(e)}"
        )


@router.get("/", response_model=List[SpaceResponse])
async def search_spaces(
    source: Optional[str] = None,
    destination: Optional[str] = None,
    user_id: Optional[UUID] = None,
    db: Session = Depends(get_db)
):
    """
    Search spaces by route, or list one owner's spaces.

    Omitted route fields match everything, so no filters lists all spaces.
    """
    if user_id:
        return space_allocator.list_spaces_by_owner(db, user_id)
    return list(space_allocator.find_by_route(db, source or "", destination or ""))


@router.get("/{space_id}", response_model=SpaceResponse)
async def get_space(
    space_id: UUID,
    db: Session = Depends(get_db)
):
    """Get a specific space."""
    return space_allocator.get_space(db, space_id)


@router.patch("/{space_id}/status", response_model=SpaceResponse)
async def set_space_status(
    space_id: UUID,
    update: SpaceStatusUpdate,
    db: Session = Depends(get_db)
):
    """Set a space's availability status."""
    try:
        return space_allocator.set_status(db, space_id, update.status)
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating space {space_id} status: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update space status: {str(e)}"
        )
