from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from chore_calendar.db.session import Base
from chore_calendar.utils.datetime_utils import utc_now


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)

    family_id = Column(String, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)

    # Who acted: an admin id or a person id, depending on the role
    principal_id = Column(String, nullable=False)
    principal_role = Column(String, nullable=False)

    action = Column(String, nullable=False)  # CREATE, UPDATE, DELETE, LOGIN
    description = Column(Text, nullable=False)
    table_name = Column(String, nullable=True)
    record_id = Column(String, nullable=True)

    details = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)
