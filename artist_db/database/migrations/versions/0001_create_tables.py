"""create artists, locations, events and invited_artists

Revision ID: 0001_create_tables
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_create_tables"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        "artists",
        sa.Column("id", postgresql.UUID(), primary_key=True),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("artist_name", sa.Text()),
        sa.Column("pronouns", postgresql.ARRAY(sa.Text())),
        sa.Column("date_of_birth", sa.DateTime(timezone=True)),
        sa.Column("place_of_birth", sa.Text()),
        sa.Column("nationality", sa.Text()),
        sa.Column("language", sa.Text()),
        sa.Column("facebook", sa.Text()),
        sa.Column("instagram", sa.Text()),
        sa.Column("bandcamp", sa.Text()),
        sa.Column("bio_ger", sa.Text()),
        sa.Column("bio_en", sa.Text()),
        sa.Column("email", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_artists_last_name", "artists", ["last_name"])
    op.create_index("ix_artists_artist_name", "artists", ["artist_name"])

    op.create_table(
        "locations",
        sa.Column("id", postgresql.UUID(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "events",
        sa.Column("id", postgresql.UUID(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True)),
        sa.Column(
            "location_id",
            postgresql.UUID(),
            sa.ForeignKey("locations.id", ondelete="SET NULL"),
        ),
        *_timestamps(),
    )
    op.create_index("ix_events_name", "events", ["name"])

    op.create_table(
        "invited_artists",
        sa.Column(
            "artist_id",
            postgresql.UUID(),
            sa.ForeignKey("artists.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "event_id",
            postgresql.UUID(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("confirmed", sa.Boolean(), server_default=sa.false(), nullable=False),
    )
    op.create_index("ix_invited_artists_event_id", "invited_artists", ["event_id"])


def downgrade():
    op.drop_table("invited_artists")
    op.drop_table("events")
    op.drop_table("locations")
    op.drop_table("artists")
