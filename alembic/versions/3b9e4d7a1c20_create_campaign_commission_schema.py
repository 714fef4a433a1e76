"""Create users, campaigns, orders and counters

Revision ID: 3b9e4d7a1c20
Revises:
Create Date: 2026-10-19 12:40:02.117345

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b9e4d7a1c20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('name', sa.String(), nullable=False),
    sa.Column('username', sa.String(), nullable=False),
    sa.Column('role', sa.Enum('admin', 'sales', name='userrole'), server_default=sa.text("'sales'"), nullable=False),
    sa.Column('commission_rate', sa.Numeric(precision=5, scale=2), nullable=False),
    sa.Column('status', sa.Enum('active', 'inactive', name='userstatus'), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('username', name=op.f('uq_users_username'))
    )
    op.create_table('counters',
    sa.Column('id', sa.String(), nullable=False),
    sa.Column('seq', sa.Integer(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('campaigns',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('reference_id', sa.String(), nullable=False),
    sa.Column('title', sa.String(), nullable=False),
    sa.Column('url', sa.String(), nullable=False),
    sa.Column('platform', sa.Enum('facebook', 'instagram', name='platform'), nullable=False),
    sa.Column('type', sa.Enum('post', 'live', 'event', name='campaigntype'), nullable=False),
    sa.Column('status', sa.Enum('active', 'paused', 'completed', name='campaignstatus'), nullable=False),
    sa.Column('sales_person_id', sa.UUID(), nullable=False),
    sa.Column('start_date', sa.DateTime(), nullable=True),
    sa.Column('end_date', sa.DateTime(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['sales_person_id'], ['users.id'], name=op.f('fk_campaigns_sales_person_id_users')),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('reference_id', name=op.f('uq_campaigns_reference_id'))
    )
    op.create_index(op.f('ix_campaigns_sales_person_id'), 'campaigns', ['sales_person_id'], unique=False)
    op.create_table('orders',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('reference_id', sa.String(), nullable=False),
    sa.Column('campaign_id', sa.UUID(), nullable=False),
    sa.Column('products', sa.JSON(), nullable=False),
    sa.Column('order_total', sa.Numeric(precision=12, scale=2), nullable=False),
    sa.Column('snapshot_rate', sa.Numeric(precision=5, scale=2), nullable=False),
    sa.Column('commission_amount', sa.Numeric(precision=12, scale=2), nullable=False),
    sa.Column('status', sa.Enum('active', 'cancelled', name='orderstatus'), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['campaign_id'], ['campaigns.id'], name=op.f('fk_orders_campaign_id_campaigns'), ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('reference_id', name=op.f('uq_orders_reference_id'))
    )
    op.create_index(op.f('ix_orders_campaign_id'), 'orders', ['campaign_id'], unique=False)
    op.create_index(op.f('ix_orders_created_at'), 'orders', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_orders_created_at'), table_name='orders')
    op.drop_index(op.f('ix_orders_campaign_id'), table_name='orders')
    op.drop_table('orders')
    op.drop_index(op.f('ix_campaigns_sales_person_id'), table_name='campaigns')
    op.drop_table('campaigns')
    op.drop_table('counters')
    op.drop_table('users')
    sa.Enum(name='orderstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='campaignstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='campaigntype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='platform').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='userstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
