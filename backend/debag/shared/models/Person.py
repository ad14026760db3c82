# debag/shared/models/Person.py
"""
Person - a member of the DeBag roster.

Created via quick-add, never mutated. Inactive people drop out of the
listings but keep their observations.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from debag.core.database import Base as _Base


class Person(_Base):
    __tablename__ = "people"

    id            = Column(Integer, primary_key=True, index=True)
    name          = Column(String(100), nullable=True)
    employee_code = Column(String(50), nullable=True, unique=True)
    active        = Column(Boolean, nullable=False, default=True, server_default="true")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # ── Relations ────────────────────────────────────────────
    observations = relationship("Observation", back_populates="person")

    def __repr__(self):
        return f"<Person id={self.id} name={self.name!r} code={self.employee_code!r}>"
