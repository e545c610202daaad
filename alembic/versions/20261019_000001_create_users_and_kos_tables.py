"""Create users, roles and kos listing tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Accounts with their roles, kos listings, listing images, likes and
tenant profiles.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLE_NAMES = ('admin', 'pemilik', 'user', 'penyewa')


def upgrade() -> None:
    """Create account and listing tables and seed the role catalogue."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(200), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('pending_otp', sa.String(10), nullable=True),
        sa.Column('otp_expires_at', sa.DateTime(), nullable=True),
        sa.Column('otp_attempts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    roles = op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.bulk_insert(roles, [{'name': name} for name in ROLE_NAMES])

    op.create_table(
        'user_role',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_user_role_user_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], name='fk_user_role_role_id', ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'role_id', name='uq_user_role_user_role'),
    )
    op.create_index('ix_user_role_user_id', 'user_role', ['user_id'])

    op.create_table(
        'kos',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('location', sa.String(500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('nomor_pemilik', sa.String(20), nullable=True),
        sa.Column(
            'gender_type',
            sa.Enum('putra', 'putri', 'campur', name='kos_gender_type'),
            nullable=False,
            server_default='campur'
        ),
        sa.Column('room_type', sa.String(100), nullable=True),
        sa.Column('total_rooms', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('available_rooms', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('room_size', sa.String(50), nullable=True),
        sa.Column('monthly_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('yearly_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('deposit_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('admin_fee', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('min_stay_duration', sa.Integer(), nullable=True),
        sa.Column('electricity_type', sa.String(50), nullable=True),
        sa.Column('water_type', sa.String(50), nullable=True),
        sa.Column(
            'property_status',
            sa.Enum('active', 'inactive', 'maintenance', 'full', name='kos_status'),
            nullable=False,
            server_default='active'
        ),
        sa.Column('fasilitas_kos', sa.Text(), nullable=True),
        sa.Column('fasilitas_kamar', sa.Text(), nullable=True),
        sa.Column('fasilitas_kamar_mandi', sa.Text(), nullable=True),
        sa.Column('fasilitas_parkir', sa.Text(), nullable=True),
        sa.Column('peraturan_kos', sa.Text(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('nearest_campus', sa.String(255), nullable=True),
        sa.Column('distance_to_campus', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_kos_user_id', ondelete='CASCADE'),
        sa.CheckConstraint('available_rooms <= total_rooms', name='ck_kos_available_rooms'),
    )
    op.create_index('ix_kos_user_id', 'kos', ['user_id'])
    op.create_index('ix_kos_city', 'kos', ['city'])
    op.create_index('ix_kos_property_status', 'kos', ['property_status'])

    op.create_table(
        'tipe_gambar',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'gambar_kos',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('kos_id', sa.String(36), nullable=False),
        sa.Column('tipe_gambar_id', sa.Integer(), nullable=True),
        sa.Column('nama_file', sa.String(500), nullable=False),
        sa.Column('url_gambar', sa.String(1000), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['kos_id'], ['kos.id'], name='fk_gambar_kos_kos_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tipe_gambar_id'], ['tipe_gambar.id'], name='fk_gambar_kos_tipe_gambar_id'),
    )
    op.create_index('ix_gambar_kos_kos_id', 'gambar_kos', ['kos_id'])

    op.create_table(
        'user_likes',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('kos_id', sa.String(36), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        # NO ACTION on user_id: SQL Server rejects two cascade paths from users
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_user_likes_user_id'),
        sa.ForeignKeyConstraint(['kos_id'], ['kos.id'], name='fk_user_likes_kos_id', ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'kos_id', name='uq_user_likes_user_kos'),
    )
    op.create_index('ix_user_likes_user_id', 'user_likes', ['user_id'])
    op.create_index('ix_user_likes_kos_id', 'user_likes', ['kos_id'])

    op.create_table(
        'profile_penyewa',
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=False),
        sa.Column('gender', sa.String(10), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('emergency_contact', sa.String(100), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('user_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_profile_penyewa_user_id', ondelete='CASCADE'),
        sa.CheckConstraint("gender IN ('male', 'female')", name='ck_profile_penyewa_gender'),
    )


def downgrade() -> None:
    """Drop account and listing tables."""
    op.drop_table('profile_penyewa')
    op.drop_index('ix_user_likes_kos_id', table_name='user_likes')
    op.drop_index('ix_user_likes_user_id', table_name='user_likes')
    op.drop_table('user_likes')
    op.drop_index('ix_gambar_kos_kos_id', table_name='gambar_kos')
    op.drop_table('gambar_kos')
    op.drop_table('tipe_gambar')
    op.drop_index('ix_kos_property_status', table_name='kos')
    op.drop_index('ix_kos_city', table_name='kos')
    op.drop_index('ix_kos_user_id', table_name='kos')
    op.drop_table('kos')
    op.drop_index('ix_user_role_user_id', table_name='user_role')
    op.drop_table('user_role')
    op.drop_table('roles')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    # Drop enum types (PostgreSQL only; no-op elsewhere)
    sa.Enum(name='kos_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='kos_gender_type').drop(op.get_bind(), checkfirst=True)
