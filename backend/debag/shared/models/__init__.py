# debag/shared/models/__init__.py
"""
Single entry point for every SQLAlchemy model.

ALWAYS import the models from here:
  from debag.shared.models import Person, Observation

→ Guarantees both models are registered in Base.metadata before the
  tables are created (Alembic, create_all) and before the string-based
  relationship() targets are resolved.
"""

from debag.shared.models.Person      import Person
from debag.shared.models.Observation import Observation

__all__ = [
    "Person",
    "Observation",
]
