from concurrent.futures import ThreadPoolExecutor
from datetime import time

import pytest
from sqlalchemy.orm import sessionmaker

from ritto.database import build_engine, init_db
from ritto.errors import NotFound, OverlapError, ValidationError
from ritto.models import Business, WeeklyScheduleEntry
from ritto.services.schedule import (
    add_weekly_schedule,
    entries_for,
    list_schedules,
    remove_schedule,
)


def test_add_single_weekday(db, business):
    rows = add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))

    assert len(rows) == 1
    assert rows[0].weekday == "monday"
    assert rows[0].capacity_per_slot == 1


def test_overlapping_window_is_rejected(db, business):
    add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))

    with pytest.raises(OverlapError) as exc:
        add_weekly_schedule(db, business.id, ["monday"], time(9, 30), time(10, 30))

    assert exc.value.weekday == "monday"
    assert len(entries_for(db, business.id, "monday")) == 1


def test_touching_window_is_accepted(db, business):
    add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))
    add_weekly_schedule(db, business.id, ["monday"], time(10, 0), time(11, 0))

    starts = [e.start_time for e in entries_for(db, business.id, "monday")]
    assert starts == [time(9, 0), time(10, 0)]


def test_batch_is_all_or_nothing(db, business):
    add_weekly_schedule(db, business.id, ["wednesday"], time(9, 0), time(10, 0))

    with pytest.raises(OverlapError) as exc:
        add_weekly_schedule(
            db, business.id, ["monday", "tuesday", "wednesday"], time(9, 30), time(11, 0)
        )

    assert exc.value.weekday == "wednesday"
    assert entries_for(db, business.id, "monday") == []
    assert entries_for(db, business.id, "tuesday") == []


def test_batch_creates_one_row_per_weekday(db, business):
    rows = add_weekly_schedule(
        db, business.id, ["Friday", "monday", "monday"], time(9, 0), time(13, 0), capacity=3
    )

    assert [r.weekday for r in rows] == ["monday", "friday"]
    assert all(r.capacity_per_slot == 3 for r in rows)


def test_same_window_on_other_weekday_does_not_collide(db, business):
    add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))
    add_weekly_schedule(db, business.id, ["tuesday"], time(9, 0), time(10, 0))

    assert len(list_schedules(db, business.id)) == 2


def test_windows_of_other_business_do_not_collide(db, make_business):
    first, second = make_business(), make_business()
    add_weekly_schedule(db, first.id, ["monday"], time(9, 0), time(10, 0))
    add_weekly_schedule(db, second.id, ["monday"], time(9, 0), time(10, 0))

    assert db.query(WeeklyScheduleEntry).count() == 2


@pytest.mark.parametrize(
    "weekdays, start, end, capacity",
    [
        ([], time(9, 0), time(10, 0), 1),
        (["funday"], time(9, 0), time(10, 0), 1),
        (["monday"], time(10, 0), time(10, 0), 1),
        (["monday"], time(11, 0), time(10, 0), 1),
        (["monday"], time(9, 0), time(10, 0), 0),
        (["monday"], time(9, 0, 30), time(10, 0), 1),
    ],
)
def test_invalid_windows_are_rejected(db, business, weekdays, start, end, capacity):
    with pytest.raises(ValidationError):
        add_weekly_schedule(db, business.id, weekdays, start, end, capacity)


def test_unknown_business(db):
    with pytest.raises(NotFound):
        add_weekly_schedule(db, 999, ["monday"], time(9, 0), time(10, 0))


def test_list_schedules_is_ordered_monday_first(db, business):
    add_weekly_schedule(db, business.id, ["sunday"], time(8, 0), time(9, 0))
    add_weekly_schedule(db, business.id, ["monday"], time(14, 0), time(15, 0))
    add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))

    listed = [(e.weekday, e.start_time) for e in list_schedules(db, business.id)]
    assert listed == [
        ("monday", time(9, 0)),
        ("monday", time(14, 0)),
        ("sunday", time(8, 0)),
    ]


def test_remove_schedule(db, business, make_business):
    rows = add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))

    with pytest.raises(NotFound):
        remove_schedule(db, make_business().id, rows[0].id)

    remove_schedule(db, business.id, rows[0].id)
    assert entries_for(db, business.id, "monday") == []


def test_removed_window_frees_the_range(db, business):
    rows = add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(10, 0))
    remove_schedule(db, business.id, rows[0].id)

    add_weekly_schedule(db, business.id, ["monday"], time(9, 30), time(10, 30))
    assert len(entries_for(db, business.id, "monday")) == 1


def test_concurrent_overlapping_adds_accept_exactly_one(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'guards.db'}", timeout_seconds=30)
    init_db(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with Session() as db:
        business = Business(owner_id="guard", name="Guard", slug="guard")
        db.add(business)
        db.commit()
        business_id = business.id

    def attempt(offset: int) -> bool:
        with Session() as db:
            try:
                add_weekly_schedule(
                    db, business_id, ["monday"], time(9, offset), time(10, offset)
                )
            except OverlapError:
                return False
            return True

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(attempt, [0, 10, 20, 30]))

    assert results.count(True) == 1
    with Session() as db:
        assert len(entries_for(db, business_id, "monday")) == 1

    engine.dispose()
