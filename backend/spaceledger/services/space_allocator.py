"""
Space allocator - owns logistics space creation, search and availability.
"""
import logging
from typing import Iterator, List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spaceledger.models import LogisticsSpace, SpaceStatus, User, UserRole
from spaceledger.schemas.logistics_space import SpaceCreate
from spaceledger.services.errors import DuplicateKey, InvalidArgument
from spaceledger.services.store import compare_and_set_status, find_one, get_by_id, unit_of_work

logger = logging.getLogger(__name__)


class SpaceSequence:
    """
    Lazy, restartable view over spaces on a route.

    Nothing is queried until iteration; each new iteration re-reads the store.
    """

    def __init__(self, db: Session, source: str = "", destination: str = ""):
        self._db = db
        self.source = source or ""
        self.destination = destination or ""

    def _query(self):
        query = self._db.query(LogisticsSpace)
        # Empty strings match every route
        if self.source:
            query = query.filter(LogisticsSpace.source == self.source)
        if self.destination:
            query = query.filter(LogisticsSpace.destination == self.destination)
        return query.order_by(LogisticsSpace.created_at, LogisticsSpace.id)

    def __iter__(self) -> Iterator[LogisticsSpace]:
        return iter(self._query().all())

    def __len__(self) -> int:
        return self._query().count()


def create_space(db: Session, data: SpaceCreate) -> LogisticsSpace:
    """Create a space in `available`; token ids are unique across the store."""
    owner = get_by_id(db, User, data.owner_id, "User")
    if owner.role != UserRole.LOGISTICS:
        raise InvalidArgument(f"User {owner.id} has role '{owner.role.value}', only logistics users can offer space")

    if find_one(db, LogisticsSpace, token_id=data.token_id):
        logger.warning(f"Rejected duplicate token id: {data.token_id}")
        raise DuplicateKey(f"Token ID '{data.token_id}' already exists")

    space = LogisticsSpace(
        token_id=data.token_id,
        owner_id=data.owner_id,
        source=data.source,
        destination=data.destination,
        length=data.length,
        width=data.width,
        height=data.height,
        max_weight=data.max_weight,
        price=data.price,
        status=SpaceStatus.AVAILABLE.value,
    )
    try:
        with unit_of_work(db):
            db.add(space)
    except IntegrityError:
        # Lost a race with another insert of the same token
        raise DuplicateKey(f"Token ID '{data.token_id}' already exists")
    db.refresh(space)
    logger.info(f"Created space {space.token_id} ({space.source} -> {space.destination}): id={space.id}")
    return space


def find_by_route(db: Session, source: str = "", destination: str = "") -> SpaceSequence:
    return SpaceSequence(db, source, destination)


def get_space(db: Session, space_id: UUID) -> LogisticsSpace:
    return get_by_id(db, LogisticsSpace, space_id, "Logistics space")


def list_spaces_by_owner(db: Session, owner_id: UUID) -> List[LogisticsSpace]:
    return (
        db.query(LogisticsSpace)
        .filter(LogisticsSpace.owner_id == owner_id)
        .order_by(LogisticsSpace.created_at, LogisticsSpace.id)
        .all()
    )


def parse_space_status(value) -> SpaceStatus:
    try:
        return SpaceStatus(value)
    except ValueError:
        allowed = [s.value for s in SpaceStatus]
        raise InvalidArgument(f"Unknown space status '{value}'. Allowed: {allowed}")


def set_status(db: Session, space_id: UUID, new_status) -> LogisticsSpace:
    """
    Set a space's availability.

    Any status literal may follow any other; only the value itself is checked.
    """
    space = get_space(db, space_id)
    status_value = parse_space_status(new_status)
    with unit_of_work(db):
        compare_and_set_status(db, LogisticsSpace, space.id, status_value.value)
    db.refresh(space)
    logger.info(f"Space {space.token_id} status set to {status_value.value}")
    return space


def claim_space(db: Session, space: LogisticsSpace) -> bool:
    """
    Mark a space `booked` unless it already is.

    Joins the caller's transaction; returns False when another booking got
    there first.
    """
    return compare_and_set_status(
        db,
        LogisticsSpace,
        space.id,
        SpaceStatus.BOOKED.value,
        expected=(SpaceStatus.AVAILABLE.value, SpaceStatus.PARTIAL.value),
    )
