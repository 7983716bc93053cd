"""create open house tables

Revision ID: 3f2a9c1d8e47
Revises: 
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d8e47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RATING_COLUMNS = (
    'overall_activity', 'interest_activity', 'received_faculty_info_clearly',
    'would_recommend_next_time', 'activity_diversity', 'perceived_crowd_density',
    'has_full_booth_access', 'facility_convenience_rating', 'campus_navigation_rating',
    'hesitation_level_after_disaster', 'line_oa_signup_rating', 'design_beauty_rating',
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('uid', sa.String(length=10), nullable=False),
        sa.Column('role', sa.Enum('MEMBER', 'STUDENT', 'STAFF', 'ADMIN', name='role'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('other_status', sa.String(), nullable=True),
        sa.Column('province', sa.String(), nullable=True),
        sa.Column('school', sa.String(), nullable=True),
        sa.Column('first_interest', sa.String(), nullable=True),
        sa.Column('second_interest', sa.String(), nullable=True),
        sa.Column('third_interest', sa.String(), nullable=True),
        sa.Column('selected_sources', sa.JSON(), nullable=True),
        sa.Column('other_source', sa.String(), nullable=True),
        sa.Column('objective', sa.String(), nullable=True),
        sa.Column('faculty', sa.String(), nullable=True),
        sa.Column('is_central_staff', sa.Boolean(), nullable=True),
        sa.Column('staff_kind', sa.Enum('CENTRAL', 'FACULTY', name='staffkind'), nullable=True),
        sa.Column('student_id', sa.String(), nullable=True),
        sa.Column('nickname', sa.String(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('registered_at', sa.DateTime(), nullable=True),
        sa.Column('last_entered', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_uid'), 'users', ['uid'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)
    op.create_index(op.f('ix_users_name'), 'users', ['name'], unique=False)
    op.create_index(op.f('ix_users_phone'), 'users', ['phone'], unique=True)

    op.create_table(
        'student_transactions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('student_registration_id', sa.String(), nullable=False),
        sa.Column('faculty', sa.String(), nullable=False),
        sa.Column('registered_at', sa.DateTime(), nullable=False),
        sa.Column('entered_on', sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(['student_registration_id'], ['users.id'], onupdate='CASCADE', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_registration_id', 'faculty', 'entered_on',
                            name='uq_student_transactions_student_faculty_day'),
    )
    op.create_index(op.f('ix_student_transactions_student_registration_id'), 'student_transactions',
                    ['student_registration_id'], unique=False)
    op.create_index(op.f('ix_student_transactions_faculty'), 'student_transactions', ['faculty'], unique=False)
    op.create_index(op.f('ix_student_transactions_entered_on'), 'student_transactions', ['entered_on'], unique=False)

    op.create_table(
        'student_evaluations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.String(), nullable=False),
        sa.Column('new_sources', sa.JSON(), nullable=True),
        *[sa.Column(name, sa.Integer(), nullable=False) for name in RATING_COLUMNS],
        sa.Column('favorite_booth', sa.String(), nullable=True),
        sa.Column('website_improvement_suggestions', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], onupdate='CASCADE', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_student_evaluations_id'), 'student_evaluations', ['id'], unique=False)
    op.create_index(op.f('ix_student_evaluations_student_id'), 'student_evaluations', ['student_id'], unique=True)

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    for column in ('id', 'ts', 'user_id', 'action', 'resource', 'status'):
        op.create_index(op.f(f'ix_logs_{column}'), 'logs', [column], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('logs')
    op.drop_table('student_evaluations')
    op.drop_table('student_transactions')
    op.drop_table('users')
    sa.Enum(name='staffkind').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='role').drop(op.get_bind(), checkfirst=True)
