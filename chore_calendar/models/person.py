from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from chore_calendar.db.session import Base
from chore_calendar.utils.datetime_utils import utc_now


class Person(Base):
    __tablename__ = "people"
    __table_args__ = (UniqueConstraint("family_id", "email", name="uq_person_family_email"),)

    id = Column(String, primary_key=True, index=True)
    family_id = Column(String, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    color = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)
