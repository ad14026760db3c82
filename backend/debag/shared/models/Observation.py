# debag/shared/models/Observation.py
"""
Observation - one timed DeBag measurement.

Immutable fact record: avg_seconds_per_bag is computed once at creation
(total_seconds / bags_timed, 2 dp) and never recomputed on read.
"""
from sqlalchemy import Column, Integer, Float, String, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from debag.core.database import Base as _Base
from debag.shared.enums import Role, Belt, ShiftWindow, FlowCondition


class Observation(_Base):
    __tablename__ = "observations"

    id        = Column(Integer, primary_key=True, index=True)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)

    role           = Column(SAEnum(Role, name="role"), nullable=False)
    belt           = Column(SAEnum(Belt, name="belt"), nullable=False)
    shift_window   = Column(SAEnum(ShiftWindow, name="shiftwindow"), nullable=False)
    flow_condition = Column(
        SAEnum(FlowCondition, name="flowcondition"),
        nullable=False, default=FlowCondition.NORMAL, server_default=FlowCondition.NORMAL.value,
    )

    bags_timed          = Column(Integer, nullable=False)    # 1..500
    total_seconds       = Column(Integer, nullable=False)    # 1..100000
    avg_seconds_per_bag = Column(Float, nullable=False)

    quality_issue = Column(Boolean, nullable=False, default=False, server_default="false")
    safety_issue  = Column(Boolean, nullable=False, default=False, server_default="false")
    notes         = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # ── Relations ────────────────────────────────────────────
    person = relationship("Person", back_populates="observations", lazy="joined")

    def __repr__(self):
        return (
            f"<Observation id={self.id} person={self.person_id} "
            f"role={self.role} avg={self.avg_seconds_per_bag}>"
        )
