"""006: create transfers table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19

No foreign key to tickets: the ORIGIN transfer is written before the
ticket row inside the import transaction.
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transfers (
            seq         BIGSERIAL       NOT NULL,
            id          VARCHAR(64)     PRIMARY KEY,
            ticket_id   VARCHAR(64)     NOT NULL,
            buyer_id    VARCHAR(64)     NOT NULL,
            seller_id   VARCHAR(64),
            cost_cents  BIGINT          NOT NULL,
            kind        VARCHAR(10)     NOT NULL,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transfers_kind        CHECK (kind IN ('ORIGIN', 'SALE')),
            CONSTRAINT ck_transfers_cost_gte_0  CHECK (cost_cents >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_transfers_ticket ON transfers (ticket_id, created_at, seq);")
    op.execute("""
        CREATE TRIGGER trg_transfers_append_only
            BEFORE UPDATE OR DELETE ON transfers
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute("COMMENT ON TABLE transfers IS 'Ticket ownership/payment history — append-only';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transfers CASCADE;")
