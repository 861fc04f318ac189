"""initial schema: users, cats, missions, targets

Revision ID: 7d1e4b2a9c10
Revises:
Create Date: 2025-01-15 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7d1e4b2a9c10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return (
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='user', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )

    op.create_table(
        'cats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('breed', sa.String(length=50), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('salary', sa.Float(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('experience >= 0 AND experience <= 50', name=op.f('ck_cats_experience_range')),
        sa.CheckConstraint('salary >= 0', name=op.f('ck_cats_salary_non_negative')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_cats')),
    )
    op.create_index('ix_cats_breed', 'cats', ['breed'], unique=False)

    op.create_table(
        'missions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cat_id', sa.Integer(), nullable=True),
        sa.Column('complete', sa.Boolean(), server_default='false', nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['cat_id'], ['cats.id'], name=op.f('fk_missions_cat_id_cats'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_missions')),
    )
    op.create_index('ix_missions_cat_id', 'missions', ['cat_id'], unique=False)

    op.create_table(
        'targets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('mission_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=50), nullable=False),
        sa.Column('notes', sa.String(length=500), server_default='', nullable=False),
        sa.Column('complete', sa.Boolean(), server_default='false', nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['mission_id'], ['missions.id'], name=op.f('fk_targets_mission_id_missions'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_targets')),
    )
    op.create_index('ix_targets_mission_id', 'targets', ['mission_id'], unique=False)


def downgrade():
    op.drop_index('ix_targets_mission_id', table_name='targets')
    op.drop_table('targets')
    op.drop_index('ix_missions_cat_id', table_name='missions')
    op.drop_table('missions')
    op.drop_index('ix_cats_breed', table_name='cats')
    op.drop_table('cats')
    op.drop_table('users')
