"""areas, households e users

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
import geoalchemy2

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # geoalchemy2 cria o índice espacial (spatial_index=True) junto com a tabela
    op.create_table(
        "areas",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("community_name", sa.String(), nullable=False),
        sa.Column("area_type", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("geometry", sa.Text(), nullable=False),
        sa.Column("geom", geoalchemy2.Geometry("POLYGON", srid=4326, spatial_index=True), nullable=True),
        sa.Column("last_update", sa.DateTime(timezone=True), nullable=True),
        sa.Column("editor_username", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("municipality", sa.String(), nullable=True),
        sa.Column("parish", sa.String(), nullable=True),
    )
    op.create_index("ix_areas_id", "areas", ["id"])
    op.create_index("ix_areas_community_name", "areas", ["community_name"])

    op.create_table(
        "households",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("community_name", sa.String(), nullable=False),
        sa.Column("member_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("geom", geoalchemy2.Geometry("POINT", srid=4326, spatial_index=True), nullable=True),
        sa.Column("head_name", sa.String(), nullable=True),
        sa.Column("wall_material", sa.String(), nullable=True),
        sa.Column("landslide_risk", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("municipality", sa.String(), nullable=True),
        sa.Column("parish", sa.String(), nullable=True),
    )
    op.create_index("ix_households_id", "households", ["id"])
    op.create_index("ix_households_community_name", "households", ["community_name"])


def downgrade() -> None:
    op.drop_table("households")
    op.drop_table("areas")
    op.drop_table("users")
