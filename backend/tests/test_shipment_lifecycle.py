"""Tests for booking and the shipment state machine."""

import uuid
from decimal import Decimal

import pytest

from spaceledger.models import Shipment, ShipmentStatus, SpaceStatus
from spaceledger.schemas.shipment import ShipmentCreate
from spaceledger.services.errors import Conflict, InvalidArgument, InvalidTransition, NotFound
from spaceledger.services.shipment_lifecycle import (
    advance_at_least,
    advance_status,
    create_shipment,
    get_shipment,
    list_shipments_by_owner,
)
from spaceledger.services.space_allocator import get_space, set_status


def _booking(space_id, owner_id, goods_type="furniture", weight="100"):
    return ShipmentCreate(
        logistics_space_id=space_id,
        owner_id=owner_id,
        goods_type=goods_type,
        weight=Decimal(weight),
    )


class TestCreateShipment:
    def test_booking_creates_pending_shipment_and_books_space(self, db, space, shipment):
        assert shipment.status == ShipmentStatus.PENDING
        assert shipment.logistics_space_id == space.id
        assert get_space(db, space.id).status == SpaceStatus.BOOKED

    def test_booked_space_rejects_second_booking_without_changes(self, db, space, shipment, shipper):
        with pytest.raises(Conflict, match="space already booked"):
            create_shipment(db, space.id, _booking(space.id, shipper.id))

        assert db.query(Shipment).count() == 1
        assert get_space(db, space.id).status == SpaceStatus.BOOKED

    def test_partial_space_can_still_be_booked(self, db, space, shipper):
        set_status(db, space.id, "partial")
        created = create_shipment(db, space.id, _booking(space.id, shipper.id))

        assert created.status == ShipmentStatus.PENDING
        assert get_space(db, space.id).status == SpaceStatus.BOOKED

    def test_missing_space(self, db, shipper):
        missing = uuid.uuid4()
        with pytest.raises(NotFound):
            create_shipment(db, missing, _booking(missing, shipper.id))
        assert db.query(Shipment).count() == 0

    def test_missing_owner_leaves_space_available(self, db, space):
        with pytest.raises(NotFound):
            create_shipment(db, space.id, _booking(space.id, uuid.uuid4()))

        assert db.query(Shipment).count() == 0
        assert get_space(db, space.id).status == SpaceStatus.AVAILABLE

    def test_failed_insert_rolls_back_space_claim(self, db, space, shipper, monkeypatch):
        def broken_add(instance, _warn=True):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(db, "add", broken_add)
        with pytest.raises(RuntimeError):
            create_shipment(db, space.id, _booking(space.id, shipper.id))
        monkeypatch.undo()

        assert db.query(Shipment).count() == 0
        assert get_space(db, space.id).status == SpaceStatus.AVAILABLE

    def test_list_by_owner(self, db, shipment, shipper, carrier):
        assert [s.id for s in list_shipments_by_owner(db, shipper.id)] == [shipment.id]
        assert list_shipments_by_owner(db, carrier.id) == []
        assert list_shipments_by_owner(db, uuid.uuid4()) == []


class TestAdvanceStatus:
    def test_forward_chain(self, db, shipment):
        assert advance_status(db, shipment.id, "confirmed").status == ShipmentStatus.CONFIRMED
        assert advance_status(db, shipment.id, "in_transit").status == ShipmentStatus.IN_TRANSIT
        assert advance_status(db, shipment.id, "delivered").status == ShipmentStatus.DELIVERED

    def test_repeating_current_status_is_noop(self, db, shipment):
        advance_status(db, shipment.id, "confirmed")
        assert advance_status(db, shipment.id, "confirmed").status == ShipmentStatus.CONFIRMED

    def test_regression_is_rejected(self, db, shipment):
        advance_status(db, shipment.id, "confirmed")
        with pytest.raises(InvalidTransition):
            advance_status(db, shipment.id, "pending")
        assert get_shipment(db, shipment.id).status == ShipmentStatus.CONFIRMED

    def test_skipping_a_step_is_rejected(self, db, shipment):
        with pytest.raises(InvalidTransition):
            advance_status(db, shipment.id, "in_transit")
        with pytest.raises(InvalidTransition):
            advance_status(db, shipment.id, "delivered")
        assert get_shipment(db, shipment.id).status == ShipmentStatus.PENDING

    def test_delivered_is_terminal(self, db, shipment):
        for status in ("confirmed", "in_transit", "delivered"):
            advance_status(db, shipment.id, status)
        for status in ("pending", "confirmed", "in_transit"):
            with pytest.raises(InvalidTransition):
                advance_status(db, shipment.id, status)

    def test_unknown_status(self, db, shipment):
        with pytest.raises(InvalidArgument):
            advance_status(db, shipment.id, "cancelled")

    def test_missing_shipment(self, db):
        with pytest.raises(NotFound):
            advance_status(db, uuid.uuid4(), "confirmed")

    def test_missing_shipment_checked_before_status_literal(self, db):
        with pytest.raises(NotFound):
            advance_status(db, uuid.uuid4(), "cancelled")


class TestAdvanceAtLeast:
    def test_skips_forward(self, db, shipment):
        advance_at_least(db, shipment, ShipmentStatus.DELIVERED)
        db.commit()
        assert get_shipment(db, shipment.id).status == ShipmentStatus.DELIVERED

    def test_never_regresses(self, db, shipment):
        advance_status(db, shipment.id, "confirmed")
        advance_status(db, shipment.id, "in_transit")

        result = advance_at_least(db, get_shipment(db, shipment.id), ShipmentStatus.CONFIRMED)
        db.commit()
        assert result.status == ShipmentStatus.IN_TRANSIT

    def test_retries_after_losing_compare_and_set(self, db, session_factory, shipment):
        # Another session confirms the shipment behind this session's back
        other = session_factory()
        try:
            advance_status(other, shipment.id, "confirmed")
        finally:
            other.close()
        assert shipment.status == ShipmentStatus.PENDING

        advance_at_least(db, shipment, ShipmentStatus.IN_TRANSIT)
        db.commit()
        assert get_shipment(db, shipment.id).status == ShipmentStatus.IN_TRANSIT

    def test_stale_read_does_not_regress_concurrent_delivery(self, db, session_factory, shipment):
        other = session_factory()
        try:
            for status in ("confirmed", "in_transit", "delivered"):
                advance_status(other, shipment.id, status)
        finally:
            other.close()
        assert shipment.status == ShipmentStatus.PENDING

        result = advance_at_least(db, shipment, ShipmentStatus.CONFIRMED)
        db.commit()
        assert result.status == ShipmentStatus.DELIVERED
