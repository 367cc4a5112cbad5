"""create_skinroutine_tables

Revision ID: 5d2e8c1a9b47
Revises:
Create Date: 2026-10-18 09:12:03.511204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5d2e8c1a9b47'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    existing_tables = sa.inspect(bind).get_table_names()

    # init_db may already have created some of these
    if 'users' not in existing_tables:
        op.create_table('users',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('username', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('allergies', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if 'assessments' not in existing_tables:
        op.create_table('assessments',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('skin_type', sa.String(length=20), nullable=False),
            sa.Column('concerns', sa.JSON(), nullable=False),
            sa.Column('age_range', sa.String(length=20), nullable=False),
            sa.Column('budget', sa.String(length=50), nullable=False),
            sa.Column('time_available', sa.String(length=20), nullable=False),
            sa.Column('lifestyle', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_assessments_user_id'), 'assessments', ['user_id'], unique=False)

    if 'routines' not in existing_tables:
        op.create_table('routines',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('assessment_id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('season', sa.String(length=10), nullable=False),
            sa.Column('preference_type', sa.String(length=20), nullable=False),
            sa.Column('morning_steps', sa.JSON(), nullable=False),
            sa.Column('evening_steps', sa.JSON(), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
            sa.ForeignKeyConstraint(['assessment_id'], ['assessments.id']),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_routines_user_id'), 'routines', ['user_id'], unique=False)

    if 'products' not in existing_tables:
        op.create_table('products',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('brand', sa.String(length=100), nullable=False),
            sa.Column('category', sa.String(length=50), nullable=False),
            sa.Column('skin_types', sa.JSON(), nullable=False),
            sa.Column('concerns', sa.JSON(), nullable=False),
            sa.Column('ingredients', sa.JSON(), nullable=False),
            sa.Column('price', sa.Integer(), nullable=True),
            sa.Column('rating', sa.Integer(), nullable=True),
            sa.Column('is_home_remedy', sa.Boolean(), nullable=False),
            sa.Column('instructions', sa.Text(), nullable=True),
            sa.Column('warnings', sa.JSON(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_products_category'), 'products', ['category'], unique=False)

    if 'ingredients' not in existing_tables:
        op.create_table('ingredients',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('name_key', sa.String(length=200), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('benefits', sa.JSON(), nullable=True),
            sa.Column('warnings', sa.JSON(), nullable=True),
            sa.Column('safety_level', sa.String(length=10), nullable=False),
            sa.Column('common_allergens', sa.JSON(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_ingredients_name_key'), 'ingredients', ['name_key'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_ingredients_name_key'), table_name='ingredients')
    op.drop_table('ingredients')
    op.drop_index(op.f('ix_products_category'), table_name='products')
    op.drop_table('products')
    op.drop_index(op.f('ix_routines_user_id'), table_name='routines')
    op.drop_table('routines')
    op.drop_index(op.f('ix_assessments_user_id'), table_name='assessments')
    op.drop_table('assessments')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
