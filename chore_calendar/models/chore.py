from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from chore_calendar.db.session import Base
from chore_calendar.utils.datetime_utils import utc_now


def chore_label_key(label: str) -> str:
    return label.casefold()


class Chore(Base):
    __tablename__ = "chores"
    __table_args__ = (UniqueConstraint("family_id", "label_key", name="uq_chore_family_label"),)

    id = Column(String, primary_key=True, index=True)
    family_id = Column(String, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String, nullable=False)
    # Case folded label; unique per family
    label_key = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)
