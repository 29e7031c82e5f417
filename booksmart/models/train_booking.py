"""Train booking model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from booksmart.database import Base


class TrainBooking(Base):
    """A train reservation stored in the ``train_booking`` table."""
    __tablename__ = "train_booking"

    id = Column("Id", Integer, primary_key=True)
    name = Column("Name", String)
    origin = Column("origin", String, nullable=False)
    destination = Column("destination", String, nullable=False)
    date = Column("date", String(10), nullable=False)
    time = Column("time", String(5), nullable=False)
    passenger_name = Column("passenger_name", String, nullable=False)
    passenger_count = Column("passenger_count", Integer, default=1)
    class_type = Column("class_type", String, default="economy")
    contact_number = Column("contact_number", String, default="")
    created_on = Column("CreatedOn", DateTime, default=lambda: datetime.now(timezone.utc))
