from sqlalchemy.orm import relationship

from .family import Family
from .admin import Admin
from .person import Person
from .chore import Chore
from .assignment import Assignment
from .activity_log import ActivityLog

# Everything a family owns goes with it
Family.admins = relationship("Admin", back_populates="family", cascade="all, delete", order_by=Admin.created_at)
Family.people = relationship("Person", back_populates="family", cascade="all, delete", order_by=Person.created_at)
Family.chores = relationship("Chore", back_populates="family", cascade="all, delete", order_by=Chore.created_at)
Family.assignments = relationship("Assignment", back_populates="family", cascade="all, delete")
Family.activity_logs = relationship("ActivityLog", back_populates="family", cascade="all, delete")

Admin.family = relationship("Family", back_populates="admins")
Person.family = relationship("Family", back_populates="people")
Chore.family = relationship("Family", back_populates="chores")
ActivityLog.family = relationship("Family", back_populates="activity_logs")

# Removing a person or a chore removes its assignments
Person.assignments = relationship("Assignment", back_populates="person", cascade="all, delete")
Chore.assignments = relationship("Assignment", back_populates="chore", cascade="all, delete")
Assignment.family = relationship("Family", back_populates="assignments")
Assignment.person = relationship("Person", back_populates="assignments")
Assignment.chore = relationship("Chore", back_populates="assignments")

__all__ = ["Family", "Admin", "Person", "Chore", "Assignment", "ActivityLog"]
