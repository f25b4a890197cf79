from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index
from sqlalchemy.sql import func

from chore_calendar.db.session import Base
from chore_calendar.utils.datetime_utils import utc_now


class Assignment(Base):
    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint(
            "family_id", "person_id", "week_start_iso", "day_index", "chore_id",
            name="uq_assignment_person_day_chore",
        ),
        CheckConstraint("day_index >= 0 AND day_index <= 6", name="ck_assignment_day_index"),
        Index("idx_assignments_family_week", "family_id", "week_start_iso"),
    )

    id = Column(String, primary_key=True, index=True)
    family_id = Column(String, ForeignKey("families.id", ondelete="CASCADE"), nullable=False)
    person_id = Column(String, ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    chore_id = Column(String, ForeignKey("chores.id", ondelete="CASCADE"), nullable=False)
    # Sunday of the week, YYYY-MM-DD
    week_start_iso = Column(String(10), nullable=False)
    # 0 = Sunday ... 6 = Saturday
    day_index = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)
