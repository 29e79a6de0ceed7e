"""Initial schema: transactions and receipts

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from receipt_matcher.db.compat import UUID

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create transactions table
    op.create_table(
        'transactions',
        sa.Column('id', UUID(), primary_key=True),
        sa.Column('tenant_id', sa.String(64), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('payee', sa.String(255), nullable=False),
        sa.Column('amount', sa.Numeric(15, 2), nullable=False),
        sa.Column('category', sa.String(255), nullable=True),
        sa.Column('memo', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index('ix_transactions_tenant_date', 'transactions', ['tenant_id', 'date'])

    # Create receipts table; one receipt per transaction at most
    op.create_table(
        'receipts',
        sa.Column('id', UUID(), primary_key=True),
        sa.Column('tenant_id', sa.String(64), nullable=False),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('transaction_id', UUID(),
                  sa.ForeignKey('transactions.id'), nullable=True),
        sa.UniqueConstraint('transaction_id', name='uq_receipts_transaction_id'),
    )
    op.create_index('ix_receipts_tenant_id', 'receipts', ['tenant_id'])


def downgrade() -> None:
    op.drop_index('ix_receipts_tenant_id', table_name='receipts')
    op.drop_table('receipts')
    op.drop_index('ix_transactions_tenant_date', table_name='transactions')
    op.drop_table('transactions')
