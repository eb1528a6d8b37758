"""Races on the same space or shipment from separate sessions."""

import threading
from decimal import Decimal

from spaceledger.models import LogisticsSpace, Shipment, ShipmentStatus, SpaceStatus, TrackingEvent, Transaction
from spaceledger.schemas.logistics_space import SpaceCreate
from spaceledger.schemas.shipment import ShipmentCreate
from spaceledger.services.errors import Conflict, DuplicateKey
from spaceledger.services.settlement import create_transaction
from spaceledger.services.shipment_lifecycle import create_shipment
from spaceledger.services.space_allocator import create_space
from spaceledger.services.tracking import append_event, list_events


def _race(session_factory, worker, count=2, pass_index=False):
    """Run ``worker(session)`` in parallel threads; collect results or errors.

    With ``pass_index`` each thread also gets its position, so threads can
    run different operations against the same rows.
    """
    barrier = threading.Barrier(count)
    outcomes = []
    lock = threading.Lock()

    def run(index):
        session = session_factory()
        try:
            barrier.wait()
            result = worker(session, index) if pass_index else worker(session)
            with lock:
                outcomes.append(("ok", result))
        except Exception as exc:
            with lock:
                outcomes.append(("error", exc))
        finally:
            session.close()

    threads = [threading.Thread(target=run, args=(index,)) for index in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return outcomes


def test_concurrent_transactions_exactly_one_wins(session_factory, db, shipment):
    shipment_id = shipment.id
    outcomes = _race(session_factory, lambda session: create_transaction(session, shipment_id, 500).id)

    successes = [value for kind, value in outcomes if kind == "ok"]
    errors = [value for kind, value in outcomes if kind == "error"]
    assert len(successes) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], Conflict)

    db.expire_all()
    assert db.query(Transaction).filter(Transaction.shipment_id == shipment_id).count() == 1
    assert db.get(Shipment, shipment_id).status == ShipmentStatus.CONFIRMED


def test_concurrent_bookings_exactly_one_wins(session_factory, db, space, shipper):
    space_id, owner_id = space.id, shipper.id

    def book(session):
        booking = ShipmentCreate(
            logistics_space_id=space_id,
            owner_id=owner_id,
            goods_type="steel",
            weight=Decimal("900"),
        )
        return create_shipment(session, space_id, booking).id

    outcomes = _race(session_factory, book)

    successes = [value for kind, value in outcomes if kind == "ok"]
    errors = [value for kind, value in outcomes if kind == "error"]
    assert len(successes) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], Conflict)

    db.expire_all()
    assert db.query(Shipment).filter(Shipment.logistics_space_id == space_id).count() == 1
    assert space.status == SpaceStatus.BOOKED


def test_concurrent_appends_get_distinct_sequences(session_factory, db, shipment):
    shipment_id = shipment.id
    outcomes = _race(session_factory, lambda session: append_event(session, shipment_id, "checkpoint").sequence, count=4)

    assert all(kind == "ok" for kind, _ in outcomes)
    assert sorted(value for _, value in outcomes) == [1, 2, 3, 4]
    assert [e.sequence for e in list_events(db, shipment_id)] == [1, 2, 3, 4]


def test_pickup_racing_payment_ends_in_transit(session_factory, db, shipment):
    shipment_id = shipment.id

    def pay_or_pick_up(session, index):
        if index == 0:
            return create_transaction(session, shipment_id, 500).id
        return append_event(session, shipment_id, "pickup").id

    outcomes = _race(session_factory, pay_or_pick_up, pass_index=True)

    assert [kind for kind, _ in outcomes] == ["ok", "ok"]
    db.expire_all()
    assert db.get(Shipment, shipment_id).status == ShipmentStatus.IN_TRANSIT
    assert db.query(Transaction).filter(Transaction.shipment_id == shipment_id).count() == 1
    assert db.query(TrackingEvent).filter(TrackingEvent.shipment_id == shipment_id).count() == 1


def test_concurrent_spaces_with_same_token_exactly_one_wins(session_factory, db, carrier):
    data = SpaceCreate(
        token_id="T-777",
        owner_id=carrier.id,
        source="Halifax",
        destination="Moncton",
        length=Decimal("10"),
        width=Decimal("2.5"),
        height=Decimal("2.5"),
        max_weight=Decimal("15000"),
    )
    outcomes = _race(session_factory, lambda session: create_space(session, data).id)

    successes = [value for kind, value in outcomes if kind == "ok"]
    errors = [value for kind, value in outcomes if kind == "error"]
    assert len(successes) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], DuplicateKey)

    db.expire_all()
    assert db.query(LogisticsSpace).filter(LogisticsSpace.token_id == "T-777").count() == 1
