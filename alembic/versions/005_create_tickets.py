"""005: create tickets table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE tickets (
            id          VARCHAR(64)     PRIMARY KEY,
            user_id     VARCHAR(64)     NOT NULL,
            state       VARCHAR(20)     NOT NULL DEFAULT 'ON_MARKET',
            valid_from  TIMESTAMPTZ     NOT NULL,
            valid_to    TIMESTAMPTZ     NOT NULL,
            event_name  VARCHAR(255)    NOT NULL,
            address     VARCHAR(500)    NOT NULL,
            cost_cents  BIGINT          NOT NULL,
            version     BIGINT          NOT NULL DEFAULT 0,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_tickets_state         CHECK (state IN ('ON_MARKET', 'OFF_MARKET')),
            CONSTRAINT ck_tickets_window        CHECK (valid_from <= valid_to),
            CONSTRAINT ck_tickets_cost_gte_0    CHECK (cost_cents >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_tickets_owner ON tickets (user_id, created_at DESC);")
    op.execute("""
        CREATE INDEX idx_tickets_on_market
        ON tickets (valid_to)
        WHERE state = 'ON_MARKET';
    """)
    op.execute("""
        CREATE TRIGGER trg_tickets_updated_at
            BEFORE UPDATE ON tickets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE tickets IS 'Resale tickets — cost in cents, version guards concurrent sales';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tickets CASCADE;")
