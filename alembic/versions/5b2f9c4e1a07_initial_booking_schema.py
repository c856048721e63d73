"""initial booking schema

Revision ID: 5b2f9c4e1a07
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5b2f9c4e1a07'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

vendor_status = postgresql.ENUM(
    'PENDING_APPROVAL', 'ACTIVE', 'SUSPENDED', 'REJECTED',
    name='vendorstatus', create_type=False
)
appointment_status = postgresql.ENUM(
    'PENDING', 'CONFIRMED', 'CANCELLED_BY_USER', 'CANCELLED_BY_VENDOR', 'REJECTED', 'COMPLETED', 'NO_SHOW',
    name='appointmentstatus', create_type=False
)


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    vendor_status.create(bind, checkfirst=True)
    appointment_status.create(bind, checkfirst=True)

    # 1. vendors
    op.create_table(
        'vendors',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('phone_number', sa.String(20), nullable=True),
        sa.Column('status', vendor_status, nullable=False, server_default='ACTIVE'),
        sa.Column('timezone', sa.String(50), nullable=True),
        sa.Column('operating_hours', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_vendors_status', 'vendors', ['status'])

    # 2. services
    op.create_table(
        'services',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('duration > 0', name='ck_services_duration_positive')
    )
    op.create_index('ix_services_vendor_id', 'services', ['vendor_id'])
    op.create_index('ix_services_active', 'services', ['active'])

    # 3. workers and the services they perform
    op.create_table(
        'workers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('phone_number', sa.String(20), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('vendor_id', 'user_id', name='uq_worker_vendor_user')
    )
    op.create_index('ix_workers_vendor_id', 'workers', ['vendor_id'])
    op.create_index('ix_workers_user_id', 'workers', ['user_id'])

    op.create_table(
        'worker_services',
        sa.Column('worker_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workers.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('service_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('services.id', ondelete='CASCADE'), primary_key=True)
    )

    # 4. weekly templates and date overrides
    op.create_table(
        'worker_availabilities',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('worker_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.UniqueConstraint('worker_id', 'day_of_week', name='uq_worker_availability_day'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_worker_availability_day')
    )
    op.create_index('ix_worker_availabilities_worker_id', 'worker_availabilities', ['worker_id'])

    op.create_table(
        'worker_schedule_overrides',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('worker_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=True),
        sa.Column('end_time', sa.String(5), nullable=True),
        sa.Column('is_day_off', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('notes', sa.String(), nullable=True),
        sa.UniqueConstraint('worker_id', 'date', name='uq_worker_override_date')
    )
    op.create_index('ix_worker_schedule_overrides_worker_id', 'worker_schedule_overrides', ['worker_id'])

    # 5. appointments
    op.create_table(
        'appointments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('vendor_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('worker_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workers.id', ondelete='SET NULL'), nullable=True),
        sa.Column('service_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', appointment_status, nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_appointments_vendor_start', 'appointments', ['vendor_id', 'start_time'])
    op.create_index('ix_appointments_worker_start', 'appointments', ['worker_id', 'start_time'])
    op.create_index('ix_appointments_user', 'appointments', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_appointments_user', table_name='appointments')
    op.drop_index('ix_appointments_worker_start', table_name='appointments')
    op.drop_index('ix_appointments_vendor_start', table_name='appointments')
    op.drop_table('appointments')

    op.drop_index('ix_worker_schedule_overrides_worker_id', table_name='worker_schedule_overrides')
    op.drop_table('worker_schedule_overrides')
    op.drop_index('ix_worker_availabilities_worker_id', table_name='worker_availabilities')
    op.drop_table('worker_availabilities')

    op.drop_table('worker_services')
    op.drop_index('ix_workers_user_id', table_name='workers')
    op.drop_index('ix_workers_vendor_id', table_name='workers')
    op.drop_table('workers')

    op.drop_index('ix_services_active', table_name='services')
    op.drop_index('ix_services_vendor_id', table_name='services')
    op.drop_table('services')

    op.drop_index('ix_vendors_status', table_name='vendors')
    op.drop_table('vendors')

    bind = op.get_bind()
    appointment_status.drop(bind, checkfirst=True)
    vendor_status.drop(bind, checkfirst=True)
