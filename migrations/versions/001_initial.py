"""Initial migration - create aqi_readings

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # One row per city; city_name is the upsert conflict target
    op.create_table(
        'aqi_readings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('city_name', sa.String(200), nullable=False),
        sa.Column('pincode', sa.String(20), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('aqi', sa.Float(), nullable=False),
        sa.Column('pm25', sa.Float(), nullable=True),
        sa.Column('pm10', sa.Float(), nullable=True),
        sa.Column('no2', sa.Float(), nullable=True),
        sa.Column('so2', sa.Float(), nullable=True),
        sa.Column('o3', sa.Float(), nullable=True),
        sa.Column('temperature', sa.Float(), nullable=True),
        sa.Column('humidity', sa.Float(), nullable=True),
        sa.Column('visibility', sa.Float(), nullable=True),
        sa.Column('wind_speed', sa.Float(), nullable=True),
        sa.Column('pressure', sa.Float(), nullable=True),
        sa.Column('weather_condition', sa.String(100), nullable=True),
        sa.Column('wind_direction', sa.String(20), nullable=True),
        sa.Column('status', sa.String(30), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('city_name', name='uq_aqi_readings_city_name'),
    )
    op.create_index('ix_aqi_readings_updated_at', 'aqi_readings', ['updated_at'])


def downgrade() -> None:
    op.drop_index('ix_aqi_readings_updated_at', table_name='aqi_readings')
    op.drop_table('aqi_readings')
