from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from chore_calendar.db.session import Base
from chore_calendar.utils.datetime_utils import utc_now


class Family(Base):
    __tablename__ = "families"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)
