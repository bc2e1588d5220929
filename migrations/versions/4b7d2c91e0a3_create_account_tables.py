"""create_account_tables

Revision ID: 4b7d2c91e0a3
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7d2c91e0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles and credentials tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=20), server_default='USER', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('USER', 'ADMIN')", name='ck_profiles_role'),
        sa.PrimaryKeyConstraint('id'),
    )
    # Unique indexes are the authoritative guard against concurrent sign-ups
    op.create_index('ix_profiles_username', 'profiles', ['username'], unique=True)
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)

    op.create_table('credentials',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('login', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='USER', nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('USER', 'ADMIN')", name='ck_credentials_role'),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_credentials_login', 'credentials', ['login'], unique=True)
    op.create_index('ix_credentials_profile_id', 'credentials', ['profile_id'], unique=True)


def downgrade() -> None:
    """Drop credentials before profiles (FK order)."""
    op.drop_index('ix_credentials_profile_id', table_name='credentials')
    op.drop_index('ix_credentials_login', table_name='credentials')
    op.drop_table('credentials')
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_index('ix_profiles_username', table_name='profiles')
    op.drop_table('profiles')
