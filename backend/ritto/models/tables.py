from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    Time,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    email = Column(Text)
    phone = Column(Text)
    address = Column(Text)

    slot_interval_minutes = Column(Integer, nullable=False, server_default=text("30"))

    deposit_enabled = Column(Boolean, nullable=False, server_default=text("0"))
    deposit_type = Column(Text, nullable=False, server_default=text("'fixed'"))
    deposit_value = Column(Numeric(10, 2), nullable=False, server_default=text("0"))
    deposit_bank = Column(Text)
    deposit_account_name = Column(Text)
    deposit_transfer_alias = Column(Text)

    # Access gate owned by the subscription collaborator
    accepts_bookings = Column(Boolean, nullable=False, server_default=text("1"))

    created_at = Column(DateTime, server_default=func.now())

    services = relationship("Service", back_populates="business")
    schedules = relationship("WeeklyScheduleEntry", back_populates="business")
    exception_dates = relationship("ExceptionDate", back_populates="business")
    bookings = relationship("Booking", back_populates="business")

    def __repr__(self):
        return f"<Business(id={self.id}, slug={self.slug})>"


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    business_id = Column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, server_default=text("0"))
    duration = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, server_default=text("1"))
    created_at = Column(DateTime, server_default=func.now())

    business = relationship("Business", back_populates="services")
    bookings = relationship("Booking", back_populates="service")


class WeeklyScheduleEntry(Base):
    __tablename__ = "schedules"
    __table_args__ = (
        Index("ix_schedules_business_weekday", "business_id", "weekday"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    weekday = Column(Text, nullable=False)  # "monday" .. "sunday"
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    capacity_per_slot = Column(Integer, nullable=False, server_default=text("1"))

    business = relationship("Business", back_populates="schedules")


class ScheduleGuard(Base):
    """Lock row per (business, weekday); bumped before overlap validation."""

    __tablename__ = "schedule_guards"

    business_id = Column(
        ForeignKey("businesses.id", ondelete="CASCADE"), primary_key=True
    )
    weekday = Column(Text, primary_key=True)
    version = Column(Integer, nullable=False, server_default=text("0"))


class ExceptionDate(Base):
    __tablename__ = "exception_dates"
    __table_args__ = (
        UniqueConstraint("business_id", "date", name="uq_exception_business_date"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    reason = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    business = relationship("Business", back_populates="exception_dates")


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # seat is NULL once the booking stops consuming capacity
        UniqueConstraint(
            "business_id", "date", "slot_start", "seat", name="uq_booking_seat"
        ),
        Index("ix_bookings_business_date", "business_id", "date"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(ForeignKey("services.id"), nullable=False)
    service_name = Column(Text, nullable=False)
    service_price = Column(Numeric(10, 2), nullable=False)

    date = Column(Date, nullable=False)
    slot_start = Column(Time, nullable=False)
    seat = Column(Integer)

    customer_name = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False)
    customer_phone = Column(Text, nullable=False)

    status = Column(Text, nullable=False, server_default=text("'pending'"))
    deposit_paid = Column(Boolean, nullable=False, server_default=text("0"))
    deposit_amount = Column(Numeric(10, 2), nullable=False, server_default=text("0"))
    deposit_receipt_ref = Column(Text)
    payment_reference = Column(Text, unique=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="bookings")
    service = relationship("Service", back_populates="bookings")
