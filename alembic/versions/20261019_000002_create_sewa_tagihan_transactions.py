"""Create sewa, tagihan and transactions tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Leases, their monthly bills and the gateway transactions that pay them.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000002'
down_revision: Union[str, None] = '20261019_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the rent-and-pay tables."""
    op.create_table(
        'sewa',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('kos_id', sa.String(36), nullable=False),
        sa.Column('user_penyewa_id', sa.String(36), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('monthly_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['kos_id'], ['kos.id'], name='fk_sewa_kos_id'),
        sa.ForeignKeyConstraint(['user_penyewa_id'], ['users.id'], name='fk_sewa_user_penyewa_id'),
        sa.CheckConstraint('end_date IS NULL OR end_date >= start_date', name='ck_sewa_period'),
    )
    op.create_index('ix_sewa_kos_id', 'sewa', ['kos_id'])
    op.create_index('ix_sewa_user_penyewa_id', 'sewa', ['user_penyewa_id'])

    op.create_table(
        'tagihan',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('sewa_id', sa.String(36), nullable=False),
        sa.Column('billing_month', sa.Integer(), nullable=False),
        sa.Column('billing_year', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('unpaid', 'paid', name='tagihan_status'),
            nullable=False,
            server_default='unpaid'
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sewa_id'], ['sewa.id'], name='fk_tagihan_sewa_id', ondelete='CASCADE'),
    )
    op.create_index('ix_tagihan_sewa_id', 'tagihan', ['sewa_id'])
    op.create_index('ix_tagihan_due_date', 'tagihan', ['due_date'])
    op.create_index('ix_tagihan_status', 'tagihan', ['status'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('tagihan_id', sa.String(36), nullable=True),
        sa.Column('kos_id', sa.String(36), nullable=True),
        sa.Column('user_penyewa_id', sa.String(36), nullable=False),
        sa.Column('user_penyedia_id', sa.String(36), nullable=True),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('invoice_number', sa.String(64), nullable=False),
        sa.Column('mitrans_id', sa.String(100), nullable=True),
        sa.Column('mitrans_status', sa.String(50), nullable=True),
        sa.Column('snap_token', sa.String(255), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('duration_months', sa.Integer(), nullable=True),
        sa.Column('ktp_number', sa.String(32), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['tagihan_id'], ['tagihan.id'], name='fk_transactions_tagihan_id', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['kos_id'], ['kos.id'], name='fk_transactions_kos_id', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_penyewa_id'], ['users.id'], name='fk_transactions_user_penyewa_id'),
        sa.ForeignKeyConstraint(['user_penyedia_id'], ['users.id'], name='fk_transactions_user_penyedia_id'),
    )
    op.create_index('ix_transactions_invoice_number', 'transactions', ['invoice_number'], unique=True)
    op.create_index('ix_transactions_tagihan_id', 'transactions', ['tagihan_id'])
    op.create_index('ix_transactions_kos_id', 'transactions', ['kos_id'])
    op.create_index('ix_transactions_user_penyewa_id', 'transactions', ['user_penyewa_id'])
    op.create_index('ix_transactions_user_penyedia_id', 'transactions', ['user_penyedia_id'])
    op.create_index('ix_transactions_payment_status', 'transactions', ['payment_status'])


def downgrade() -> None:
    """Drop the rent-and-pay tables."""
    op.drop_table('transactions')
    op.drop_index('ix_tagihan_status', table_name='tagihan')
    op.drop_index('ix_tagihan_due_date', table_name='tagihan')
    op.drop_index('ix_tagihan_sewa_id', table_name='tagihan')
    op.drop_table('tagihan')
    op.drop_index('ix_sewa_user_penyewa_id', table_name='sewa')
    op.drop_index('ix_sewa_kos_id', table_name='sewa')
    op.drop_table('sewa')

    sa.Enum(name='tagihan_status').drop(op.get_bind(), checkfirst=True)
