"""initial_schema

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 10:12:41.508317

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_status = sa.Enum('active', 'blocked', 'pending', name='user_status')
session_status = sa.Enum('scheduled', 'ongoing', 'completed', 'cancelled', name='session_status')
enrollment_status = sa.Enum('pending', 'confirmed', 'cancelled', name='enrollment_status')
payment_status = sa.Enum('unpaid', 'paid', name='payment_status')
attachment_type = sa.Enum(
    'video', 'image', 'pdf', 'word', 'excel', 'powerpoint', 'archive',
    'youtube', 'google_drive', 'tiktok', 'vimeo', 'dropbox', 'onedrive', 'other',
    name='attachment_type',
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('status', user_status, server_default='active', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'roles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'user_roles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('role_id', sa.UUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'role_id', name='uq_user_role_user_role'),
    )

    op.create_table(
        'formations',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'modules',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('formation_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['formation_id'], ['formations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_modules_formation_id', 'modules', ['formation_id'])

    # module_id is nulled, not cascaded, when a module goes away
    op.create_table(
        'lessons',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('module_id', sa.UUID(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_lessons_module_id', 'lessons', ['module_id'])

    op.create_table(
        'attachments',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('type', attachment_type, server_default='other', nullable=False),
        sa.Column('attachable_type', sa.String(length=50), nullable=False),
        sa.Column('attachable_id', sa.UUID(), nullable=False),
        sa.Column('mime_type', sa.String(length=255), nullable=True),
        sa.Column('size_bytes', sa.BigInteger(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_attachments_attachable', 'attachments', ['attachable_type', 'attachable_id'])

    op.create_table(
        'course_sessions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('formation_id', sa.UUID(), nullable=False),
        sa.Column('instructor_id', sa.UUID(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', session_status, server_default='scheduled', nullable=False),
        sa.Column('max_students', sa.Integer(), server_default='30', nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['formation_id'], ['formations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['instructor_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_course_sessions_formation_id', 'course_sessions', ['formation_id'])
    op.create_index('ix_course_sessions_instructor_id', 'course_sessions', ['instructor_id'])

    op.create_table(
        'module_session_instructors',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('module_id', sa.UUID(), nullable=False),
        sa.Column('course_session_id', sa.UUID(), nullable=False),
        sa.Column('instructor_id', sa.UUID(), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_session_id'], ['course_sessions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['instructor_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_module_session_instructors_module_id', 'module_session_instructors', ['module_id'])
    op.create_index(
        'ix_module_session_instructors_course_session_id',
        'module_session_instructors',
        ['course_session_id'],
    )
    op.create_index(
        'ix_module_session_instructors_instructor_id',
        'module_session_instructors',
        ['instructor_id'],
    )

    op.create_table(
        'enrollments',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('student_id', sa.UUID(), nullable=False),
        sa.Column('course_session_id', sa.UUID(), nullable=False),
        sa.Column('enrollment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', enrollment_status, server_default='pending', nullable=False),
        sa.Column('payment_status', payment_status, server_default='unpaid', nullable=False),
        sa.Column('payment_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_session_id'], ['course_sessions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'course_session_id', name='uq_enrollments_student_session'),
    )
    op.create_index('ix_enrollments_student_id', 'enrollments', ['student_id'])
    op.create_index('ix_enrollments_course_session_id', 'enrollments', ['course_session_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('enrollments')
    op.drop_table('module_session_instructors')
    op.drop_table('course_sessions')
    op.drop_table('attachments')
    op.drop_table('lessons')
    op.drop_table('modules')
    op.drop_table('formations')
    op.drop_table('user_roles')
    op.drop_table('roles')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (attachment_type, payment_status, enrollment_status, session_status, user_status):
        enum_type.drop(bind, checkfirst=True)
