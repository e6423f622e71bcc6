from sqlalchemy import Column, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from jobboard.database import Base
import uuid


class Location(Base):
    """
    City/state side index used for browse pages.

    Not referenced by jobs; rows are created opportunistically as jobs
    with a resolvable city and state are saved.
    """

    __tablename__ = "locations"
    __table_args__ = (UniqueConstraint("city", "state", name="uq_locations_city_state"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    city = Column(String(255), nullable=False)
    state = Column(String(2), nullable=False, index=True)
    state_full = Column(String(100), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
