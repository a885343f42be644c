"""
Artist database handler.

This module owns the SQL statements and the row mapping for artists.
"""

from datetime import datetime
from typing import Any, Sequence

from ..constants import TABLE_ARTISTS
from ..models import Artist, Origin, RecordMetadata, Socials
from .connection import Transaction
from .context import Context
from .filters import COLUMN_ARTIST_NAME, COLUMN_ID, COLUMN_LAST_NAME
from .handler import EntityHandler, text

ENTITY_ARTIST = "artist"

UPSERT_ARTIST_SQL = f"""
    INSERT INTO {TABLE_ARTISTS} (
        id, first_name, last_name, artist_name, pronouns,
        date_of_birth, place_of_birth, nationality, language,
        facebook, instagram, bandcamp, bio_ger, bio_en, email,
        created_at, updated_at
    )
    VALUES (
        %(id)s, %(first_name)s, %(last_name)s, %(artist_name)s, %(pronouns)s,
        %(date_of_birth)s, %(place_of_birth)s, %(nationality)s, %(language)s,
        %(facebook)s, %(instagram)s, %(bandcamp)s, %(bio_ger)s, %(bio_en)s, %(email)s,
        %(now)s, %(now)s
    )
    ON CONFLICT (id) DO UPDATE SET
        first_name = EXCLUDED.first_name,
        last_name = EXCLUDED.last_name,
        artist_name = EXCLUDED.artist_name,
        pronouns = EXCLUDED.pronouns,
        date_of_birth = EXCLUDED.date_of_birth,
        place_of_birth = EXCLUDED.place_of_birth,
        nationality = EXCLUDED.nationality,
        language = EXCLUDED.language,
        facebook = EXCLUDED.facebook,
        instagram = EXCLUDED.instagram,
        bandcamp = EXCLUDED.bandcamp,
        bio_ger = EXCLUDED.bio_ger,
        bio_en = EXCLUDED.bio_en,
        email = EXCLUDED.email,
        updated_at = EXCLUDED.updated_at,
        deleted_at = NULL
"""


class ArtistHandler(EntityHandler[Artist]):
    """Upsert, retrieval and soft deletion of artists."""

    entity = ENTITY_ARTIST
    table = TABLE_ARTISTS
    columns = (
        "id",
        "first_name",
        "last_name",
        "artist_name",
        "pronouns",
        "date_of_birth",
        "place_of_birth",
        "nationality",
        "language",
        "facebook",
        "instagram",
        "bandcamp",
        "bio_ger",
        "bio_en",
        "email",
        "created_at",
        "updated_at",
    )
    filter_columns = frozenset({COLUMN_ID, COLUMN_LAST_NAME, COLUMN_ARTIST_NAME})

    def _write_row(self, tx: Transaction, artist: Artist, now: datetime, ctx: Context) -> None:
        tx.exec(
            UPSERT_ARTIST_SQL,
            {
                "id": artist.id,
                "first_name": artist.first_name,
                "last_name": artist.last_name,
                "artist_name": artist.artist_name,
                "pronouns": list(artist.pronouns),
                "date_of_birth": artist.origin.date_of_birth,
                "place_of_birth": artist.origin.place_of_birth,
                "nationality": artist.origin.nationality,
                "language": artist.language,
                "facebook": artist.socials.facebook,
                "instagram": artist.socials.instagram,
                "bandcamp": artist.socials.bandcamp,
                "bio_ger": artist.bio_german,
                "bio_en": artist.bio_english,
                "email": artist.email,
                "now": now,
            },
            ctx=ctx,
        )

    def _from_row(self, row: Sequence[Any], ctx: Context) -> Artist:
        (
            artist_id,
            first_name,
            last_name,
            artist_name,
            pronouns,
            date_of_birth,
            place_of_birth,
            nationality,
            language,
            facebook,
            instagram,
            bandcamp,
            bio_ger,
            bio_en,
            email,
            created_at,
            updated_at,
        ) = row

        return Artist(
            id=str(artist_id),
            first_name=first_name,
            last_name=last_name,
            artist_name=text(artist_name),
            pronouns=list(pronouns or []),
            origin=Origin(
                date_of_birth=date_of_birth,
                place_of_birth=text(place_of_birth),
                nationality=text(nationality),
            ),
            language=text(language),
            socials=Socials(
                instagram=text(instagram),
                facebook=text(facebook),
                bandcamp=text(bandcamp),
            ),
            bio_german=text(bio_ger),
            bio_english=text(bio_en),
            email=text(email),
            metadata=RecordMetadata.from_row(created_at, updated_at),
        )
