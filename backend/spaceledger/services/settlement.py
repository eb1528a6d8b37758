"""
Transaction settlement - the payment record for a shipment.

A transaction is accepted as given (no ledger verification). Recording it
confirms the shipment; confirming it later only stores the chain hash.
"""
import logging
from decimal import Decimal, InvalidOperation
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spaceledger.models import Shipment, ShipmentStatus, Transaction, TransactionStatus
from spaceledger.services.errors import Conflict, InvalidArgument, NotFound
from spaceledger.services.shipment_lifecycle import advance_at_least
from spaceledger.services.store import find_one, get_by_id, unit_of_work

logger = logging.getLogger(__name__)

# Numeric(12, 2): ten integer digits, two decimal places
MAX_AMOUNT = Decimal("9999999999.99")
CENT = Decimal("0.01")


def parse_amount(value) -> Decimal:
    """Coerce a payment amount, rejecting anything the amount column cannot hold."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgument(f"Transaction amount '{value}' is not a number")
    if not amount.is_finite():
        raise InvalidArgument("Transaction amount must be a finite number")
    if amount <= 0:
        raise InvalidArgument("Transaction amount must be positive")
    if amount > MAX_AMOUNT:
        raise InvalidArgument(f"Transaction amount must not exceed {MAX_AMOUNT}")
    if amount != amount.quantize(CENT):
        raise InvalidArgument("Transaction amount must have at most two decimal places")
    return amount


def get_transaction(db: Session, transaction_id: UUID) -> Transaction:
    return get_by_id(db, Transaction, transaction_id, "Transaction")


def get_transaction_for_shipment(db: Session, shipment_id: UUID) -> Transaction:
    get_by_id(db, Shipment, shipment_id, "Shipment")
    transaction = find_one(db, Transaction, shipment_id=shipment_id)
    if not transaction:
        raise NotFound(f"Transaction not found for shipment {shipment_id}")
    return transaction


def create_transaction(db: Session, shipment_id: UUID, amount) -> Transaction:
    """
    Record the payment for a shipment and confirm the shipment.

    At most one transaction exists per shipment; when two requests race,
    the unique index lets one through and the other gets Conflict.
    """
    amount = parse_amount(amount)

    shipment = get_by_id(db, Shipment, shipment_id, "Shipment")
    if find_one(db, Transaction, shipment_id=shipment.id):
        logger.warning(f"Rejected second transaction for shipment {shipment.id}")
        raise Conflict("Transaction already exists for this shipment")

    transaction = Transaction(
        shipment_id=shipment.id,
        amount=amount,
        status=TransactionStatus.PENDING.value,
    )
    try:
        with unit_of_work(db):
            db.add(transaction)
            db.flush()
            advance_at_least(db, shipment, ShipmentStatus.CONFIRMED)
    except IntegrityError:
        logger.warning(f"Concurrent transaction for shipment {shipment_id} lost the race")
        raise Conflict("Transaction already exists for this shipment")

    db.refresh(transaction)
    logger.info(f"Created transaction {transaction.id} for shipment {shipment_id}: amount={amount}")
    return transaction


def confirm_transaction(db: Session, transaction_id: UUID, blockchain_tx_hash: str) -> Transaction:
    """
    Mark a transaction `completed` with its on-chain hash.

    Leaves the shipment status alone; the shipment was confirmed when the
    transaction was created.
    """
    tx_hash = (blockchain_tx_hash or "").strip()
    if not tx_hash:
        raise InvalidArgument("Blockchain transaction hash is required")

    transaction = get_transaction(db, transaction_id)
    if transaction.status == TransactionStatus.COMPLETED:
        if transaction.blockchain_tx_hash == tx_hash:
            return transaction
        raise Conflict(f"Transaction {transaction.id} is already completed with a different hash")

    with unit_of_work(db):
        updated = (
            db.query(Transaction)
            .filter(
                Transaction.id == transaction.id,
                Transaction.status == TransactionStatus.PENDING.value,
            )
            .update(
                {
                    Transaction.status: TransactionStatus.COMPLETED.value,
                    Transaction.blockchain_tx_hash: tx_hash,
                },
                synchronize_session=False,
            )
        )
    db.refresh(transaction)
    if not updated and transaction.blockchain_tx_hash != tx_hash:
        raise Conflict(f"Transaction {transaction.id} is already completed with a different hash")

    logger.info(f"Transaction {transaction.id} completed: hash={tx_hash}")
    return transaction
