# debag/shared/enums.py
"""
All enumerations of the DeBag project.

Single source of truth for roles, belts, shift windows and flow conditions.
Imported by the models, schemas, services and engine.
"""

from enum import Enum

class Role(str, Enum):
    # Declaration order is the order of the report's byRole section.
    DUMPER   = "DUMPER"
    UNZIPPER = "UNZIPPER"


class Belt(str, Enum):
    DEBAG1 = "DEBAG1"
    DEBAG2 = "DEBAG2"


class ShiftWindow(str, Enum):
    EARLY = "EARLY"
    MID   = "MID"
    LATE  = "LATE"


class FlowCondition(str, Enum):
    NORMAL = "NORMAL"
    PEAK   = "PEAK"
    JAM    = "JAM"      # Belt stopped or backed up during the timing
