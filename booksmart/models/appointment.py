"""Appointment model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from booksmart.database import Base


class Appointment(Base):
    """A booked service appointment stored in the ``appointment1`` table."""
    __tablename__ = "appointment1"

    id = Column("Id", Integer, primary_key=True)
    name = Column("Name", String, nullable=False)
    email = Column("email", String, nullable=False)
    phone = Column("phone", String, default="")
    service = Column("service", String, nullable=False)
    date = Column("date", String(10), nullable=False)
    time = Column("time", String(5), nullable=False)
    notes = Column("notes", String, default="")
    status = Column("status", String, default="confirmed")
    created_on = Column("CreatedOn", DateTime, default=lambda: datetime.now(timezone.utc))
