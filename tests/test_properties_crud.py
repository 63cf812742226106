import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shared.core.database import Base
from shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from property_service.app.crud import properties_crud
from property_service.app.crud.properties_crud import NO_PROPERTY
from property_service.app.enum.property_enum import PropertyStatus
from property_service.app.models import Property
from property_service.app.schemas.properties_schemas import PropertyRequest


# ----------------------------------------------------------------------
# lookups and listing
# ----------------------------------------------------------------------


def test_get_owner_defaults_to_central_revenue_service(add_property, db):
    db_property = add_property()
    assert properties_crud.get_owner(db, db_property.id) == -1


def test_get_owner_missing_property(db):
    with pytest.raises(NotFoundError, match="Property 999 does not exist"):
        properties_crud.get_owner(db, 999)


def test_list_for_sale_is_idempotent(add_property, db):
    db_property = add_property()

    properties_crud.list_for_sale(db, db_property.id)
    listed = properties_crud.list_for_sale(db, db_property.id)

    assert listed.for_sale is True
    assert listed.status == PropertyStatus.FOR_SALE


def test_list_for_rent(add_property, db):
    db_property = add_property()
    listed = properties_crud.list_for_rent(db, db_property.id)
    assert listed.for_rent is True
    assert listed.status == PropertyStatus.FOR_RENT


def test_listing_missing_property(db):
    with pytest.raises(NotFoundError):
        properties_crud.list_for_sale(db, 5)
    with pytest.raises(NotFoundError):
        properties_crud.list_for_rent(db, 5)


def test_spawn_creates_unlisted_central_units(db):
    spawned = properties_crud.spawn_properties(db, [1, 3, 8])

    assert [p.capacity for p in spawned] == [1, 3, 8]
    assert all(p.owner_id == -1 for p in spawned)
    assert all(p.status == PropertyStatus.UNLISTED for p in spawned)


@pytest.mark.parametrize("capacity", [0, 9])
def test_spawn_rejects_bad_capacity(db, capacity):
    with pytest.raises(ValidationError):
        properties_crud.spawn_properties(db, [2, capacity])
    assert db.query(Property).count() == 0

# ----------------------------------------------------------------------
# allocation
# ----------------------------------------------------------------------


def test_find_available_returns_lowest_id(add_property, db):
    add_property(capacity=3, for_sale=True, id=50)
    add_property(capacity=3, for_sale=True, id=42)

    assert properties_crud.find_available(db, 3, False) == 42
    assert properties_crud.find_available(db, 3, False) == 50
    assert properties_crud.find_available(db, 3, False) == NO_PROPERTY


def test_find_available_matches_mode_and_size(add_property, db):
    add_property(capacity=3, for_rent=True)
    add_property(capacity=4, for_sale=True)
    add_property(capacity=3)

    assert properties_crud.find_available(db, 3, False) == NO_PROPERTY


def test_find_available_for_rent_skips_rented_units(add_property, db):
    add_property(capacity=2, for_rent=True, tenant_id=11)
    free = add_property(capacity=2, for_rent=True)

    assert properties_crud.find_available(db, 2, True) == free.id


def test_allocation_marks_property(add_property, db):
    db_property = add_property(capacity=5, for_sale=True)

    properties_crud.find_available(db, 5, False)

    db.refresh(db_property)
    assert db_property.allocated is True
    assert db_property.status == PropertyStatus.PENDING_TRANSFER


@pytest.mark.parametrize("to_rent, expected", [
    (True, PropertyStatus.PENDING_RENTAL),
    (False, PropertyStatus.PENDING_TRANSFER),
])
def test_status_follows_the_request_holding_the_claim(add_property, db, to_rent, expected):
    db_property = add_property(capacity=6, for_sale=True, for_rent=True)

    assert properties_crud.find_available(db, 6, to_rent) == db_property.id

    db.refresh(db_property)
    assert db_property.status == expected


def test_release_clears_allocation_mode(add_property, db):
    db_property = add_property(capacity=6, for_sale=True, for_rent=True)
    properties_crud.claim_property(db, db_property.id, 6, True)
    db.refresh(db_property)

    properties_crud.release_property(db, db_property)
    db.commit()
    db.refresh(db_property)

    assert db_property.allocation_mode is None
    assert db_property.status == PropertyStatus.FOR_SALE


def test_claim_of_already_claimed_property_fails(add_property, db):
    db_property = add_property(capacity=3, for_sale=True)

    assert properties_crud.claim_property(db, db_property.id, 3, False) is True
    assert properties_crud.claim_property(db, db_property.id, 3, False) is False


def test_lost_race_moves_on_to_next_candidate(add_property, db, monkeypatch):
    first = add_property(capacity=3, for_sale=True)
    second = add_property(capacity=3, for_sale=True)

    real_next = properties_crud.next_candidate
    calls = []

    def stale_next_candidate(session, size, to_rent):
        calls.append(size)
        if len(calls) == 1:
            # another request claims the unit between our read and write
            properties_crud.claim_property(session, first.id, size, to_rent)
            return first.id
        return real_next(session, size, to_rent)

    monkeypatch.setattr(properties_crud, "next_candidate", stale_next_candidate)

    assert properties_crud.find_available(db, 3, False) == second.id
    assert len(calls) == 2


def test_exhausted_retries_raise_conflict(add_property, db, monkeypatch):
    db_property = add_property(capacity=3, for_sale=True)
    monkeypatch.setattr(properties_crud, "claim_property",
                        lambda *args, **kwargs: False)

    with pytest.raises(ConflictError):
        properties_crud.find_available(db, 3, False, max_retries=2)

    db.refresh(db_property)
    assert db_property.allocated is False


def test_concurrent_allocations_are_distinct(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'allocation.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with Session() as setup:
        setup.add_all([Property(capacity=3, owner_id=-1, for_sale=True)
                       for _ in range(5)])
        setup.commit()

    results = []
    errors = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def worker():
        session = Session()
        try:
            barrier.wait()
            property_id = properties_crud.find_available(
                session, 3, False, max_retries=20)
            with lock:
                results.append(property_id)
        except Exception as exc:
            with lock:
                errors.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    engine.dispose()

    assert errors == []
    allocated = [r for r in results if r != NO_PROPERTY]
    assert len(allocated) == 5
    assert len(set(allocated)) == 5
    assert results.count(NO_PROPERTY) == 3

# ----------------------------------------------------------------------
# pagination
# ----------------------------------------------------------------------


def test_pages_concatenate_to_full_ordered_set(add_property, db):
    for capacity in [1, 2, 3, 1, 2, 3, 1]:
        add_property(capacity=capacity)

    collected = []
    page = 1
    while True:
        result = properties_crud.get_properties(
            db, PropertyRequest(page_number=page, page_size=3))
        if not result.properties:
            break
        collected += [p.id for p in result.properties]
        assert result.total == 7
        page += 1

    expected = [p.id for p in db.query(Property).order_by(Property.id).all()]
    assert collected == expected
    assert page == 4


def test_filters_are_combined(add_property, db):
    add_property(capacity=2, owner_id=5)
    match = add_property(capacity=3, owner_id=5)
    add_property(capacity=3, owner_id=6)

    result = properties_crud.get_properties(
        db, PropertyRequest(owner_id=5, capacity=3))
    assert [p.id for p in result.properties] == [match.id]

    result = properties_crud.get_properties(db, PropertyRequest(id=match.id))
    assert result.total == 1


def test_page_beyond_end_is_empty(add_property, db):
    add_property()
    result = properties_crud.get_properties(
        db, PropertyRequest(page_number=5, page_size=10))
    assert result.properties == []
    assert result.total == 1


@pytest.mark.parametrize("page_number,page_size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_bad_page_parameters(db, page_number, page_size):
    with pytest.raises(ValidationError):
        properties_crud.get_properties(
            db, PropertyRequest(page_number=page_number, page_size=page_size))
