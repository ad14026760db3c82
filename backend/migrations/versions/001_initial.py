"""initial schema - people + observations

Revision ID: 001_initial
Create Date: 18/10/2026
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '001_initial'
down_revision = None

# Enum values (names == values, see debag.shared.enums)
ROLE = ('DUMPER', 'UNZIPPER')
BELT = ('DEBAG1', 'DEBAG2')
SHIFT_WINDOW = ('EARLY', 'MID', 'LATE')
FLOW_CONDITION = ('NORMAL', 'PEAK', 'JAM')

def upgrade() -> None:
    # ── 1. ENUM TYPES (idempotent) ──
    enums = {
        "role": ROLE,
        "belt": BELT,
        "shiftwindow": SHIFT_WINDOW,
        "flowcondition": FLOW_CONDITION,
    }

    for name, values in enums.items():
        vals_str = ", ".join([f"'{v}'" for v in values])
        op.execute(f"""
            DO $$
            BEGIN
                IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = '{name}') THEN
                    CREATE TYPE {name} AS ENUM ({vals_str});
                END IF;
            END $$;
        """)

    # ── 2. TABLES ──
    # postgresql.ENUM(..., create_type=False): the types exist already.

    op.create_table("people",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("employee_code", sa.String(50), nullable=True, unique=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_people_id", "people", ["id"])

    op.create_table("observations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("person_id", sa.Integer, sa.ForeignKey("people.id"), nullable=False),
        sa.Column("role", postgresql.ENUM(*ROLE, name='role', create_type=False), nullable=False),
        sa.Column("belt", postgresql.ENUM(*BELT, name='belt', create_type=False), nullable=False),
        sa.Column("shift_window", postgresql.ENUM(*SHIFT_WINDOW, name='shiftwindow', create_type=False), nullable=False),
        sa.Column("flow_condition", postgresql.ENUM(*FLOW_CONDITION, name='flowcondition', create_type=False), nullable=False, server_default="NORMAL"),
        sa.Column("bags_timed", sa.Integer, nullable=False),
        sa.Column("total_seconds", sa.Integer, nullable=False),
        sa.Column("avg_seconds_per_bag", sa.Float, nullable=False),
        sa.Column("quality_issue", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("safety_issue", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("bags_timed >= 1", name="ck_observations_bags_timed"),
        sa.CheckConstraint("total_seconds >= 1", name="ck_observations_total_seconds"),
    )
    op.create_index("ix_observations_id", "observations", ["id"])
    op.create_index("ix_observations_person_id", "observations", ["person_id"])
    op.create_index("ix_observations_created_at", "observations", ["created_at"])


def downgrade() -> None:
    for table in ["observations", "people"]:
        op.drop_table(table)

    for e in ["role", "belt", "shiftwindow", "flowcondition"]:
        op.execute(f"DROP TYPE IF EXISTS {e}")
