"""Create company_staff, cash_advances and cash_advance_attachments

Revision ID: a1c4e7f20b31
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7f20b31'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'company_staff',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('staff_id', sa.String(50), nullable=False, unique=True),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('job_role', sa.String(100), nullable=False),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_company_staff_is_active', 'company_staff', ['is_active'])
    op.create_index('ix_company_staff_created_at', 'company_staff', ['created_at'])

    # staff_id / approved_by carry no FK: staff deletion leaves them dangling
    op.create_table(
        'cash_advances',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('staff_id', sa.Uuid(), nullable=False),
        sa.Column('staff_name', sa.String(101), nullable=False),
        sa.Column('staff_email', sa.String(255), nullable=False),
        sa.Column('purpose', sa.String(200), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('needed_by', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('project_code', sa.String(50), nullable=True),
        sa.Column('payment_method', sa.String(20), nullable=False, server_default='bank_transfer'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('approved_by', sa.Uuid(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.String(500), nullable=True),
        sa.Column('disbursed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('retired_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('retirement_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_cash_advances_staff_id', 'cash_advances', ['staff_id'])
    op.create_index('ix_cash_advances_status', 'cash_advances', ['status'])
    op.create_index('ix_cash_advances_created_at', 'cash_advances', ['created_at'])
    op.create_index('idx_cash_advances_staff_status', 'cash_advances', ['staff_id', 'status'])
    op.create_index('idx_cash_advances_staff_email', 'cash_advances', ['staff_email'])

    op.create_table(
        'cash_advance_attachments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'cash_advance_id', sa.Uuid(),
            sa.ForeignKey('cash_advances.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('filename', sa.String(255), nullable=True),
        sa.Column('original_name', sa.String(255), nullable=True),
        sa.Column('mimetype', sa.String(100), nullable=True),
        sa.Column('size', sa.Integer(), nullable=True),
        sa.Column('url', sa.String(1000), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        'ix_cash_advance_attachments_cash_advance_id',
        'cash_advance_attachments', ['cash_advance_id'],
    )


def downgrade() -> None:
    op.drop_table('cash_advance_attachments')
    op.drop_table('cash_advances')
    op.drop_table('company_staff')
