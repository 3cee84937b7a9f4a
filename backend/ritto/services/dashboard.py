"""Owner dashboard aggregates."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from redis import Redis
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Booking, Business
from .ledger import CONFIRMED, NO_SHOW
from .slots.occupancy import get_occupancy

RECENT_DAYS = 30
TOP_SERVICES = 3


@dataclass
class TopService:
    service_id: int
    name: str
    count: int


@dataclass
class DashboardSummary:
    date: date
    occupancy: int
    no_shows_this_month: int
    estimated_revenue: Decimal
    top_services: list[TopService] = field(default_factory=list)


def dashboard_summary(
    db: Session,
    business: Business,
    today: date | None = None,
    redis: Redis | None = None,
) -> DashboardSummary:
    today = today or date.today()
    month_start = today.replace(day=1)
    recent_start = today - timedelta(days=RECENT_DAYS)

    no_shows = (
        db.query(func.count(Booking.id))
        .filter(
            Booking.business_id == business.id,
            Booking.status == NO_SHOW,
            Booking.date >= month_start,
        )
        .scalar()
    )

    recent = (
        db.query(Booking)
        .filter(
            Booking.business_id == business.id,
            Booking.date >= recent_start,
            Booking.date <= today,
        )
        .all()
    )

    revenue = sum(
        (Decimal(b.service_price) for b in recent if b.status == CONFIRMED),
        Decimal("0"),
    )

    counts: dict[int, TopService] = {}
    for b in recent:
        entry = counts.setdefault(b.service_id, TopService(b.service_id, b.service_name, 0))
        entry.count += 1
    top = sorted(counts.values(), key=lambda s: (-s.count, s.name))[:TOP_SERVICES]

    return DashboardSummary(
        date=today,
        occupancy=get_occupancy(db, business, today, redis),
        no_shows_this_month=no_shows,
        estimated_revenue=revenue,
        top_services=top,
    )
