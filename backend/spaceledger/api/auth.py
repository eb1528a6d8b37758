"""
Identity API endpoints - registration and sign-in resolution.
"""
import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from spaceledger.db.database import get_db
from spaceledger.schemas.user import UserCreate, UserResponse, LoginRequest
from spaceledger.services.errors import LedgerError
from spaceledger.services.identity import register_user, resolve_identity

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """Register a new user."""
    try:
        logger.info(f"Registering user: username={user_data.username}, role={user_data.role.value}")
        return register_user(db, user_data)
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error registering user: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to register user: {str(e)}"
        )


@router.post("/login", response_model=UserResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Resolve credentials (wallet, or username and password) to a user."""
    try:
        return resolve_identity(
            db,
            username=credentials.username,
            password=credentials.password,
            wallet_address=credentials.wallet_address,
        )
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error resolving identity: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to sign in: {str(e)}"
        )
