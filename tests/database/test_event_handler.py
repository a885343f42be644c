#!/usr/bin/env python3
"""
Tests for the event handler and its invitations.
"""

import logging
import os
import sys
import unittest
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import psycopg

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from helpers.fakes import FakeConnection, FakeTransaction

from artist_db.database import EventHandler, by_id, by_name
from artist_db.database.event import (
    SELECT_INVITED_ARTISTS_SQL,
    UPSERT_EVENT_SQL,
    UPSERT_INVITED_ARTIST_SQL,
)
from artist_db.errors import AggregatedWriteError, InvalidIdentifierError, ResourceNotFoundError
from artist_db.models import Event, InvitedArtist

EVENT_1 = "a3c5e7f9-1b2d-4c6e-8f0a-1b2c3d4e5f01"
EVENT_2 = "a3c5e7f9-1b2d-4c6e-8f0a-1b2c3d4e5f02"
LOCATION = "0d9e7c2b-5a41-4f63-9b8e-2f4c1a7d3e01"
ARTIST_1 = "6f8b3a4e-1c2d-4e5f-8a9b-0c1d2e3f4a51"
ARTIST_2 = "6f8b3a4e-1c2d-4e5f-8a9b-0c1d2e3f4a52"
UNKNOWN_ARTIST = "6f8b3a4e-1c2d-4e5f-8a9b-0c1d2e3f4aff"

START = datetime(2024, 6, 21, 22, 0, tzinfo=timezone.utc)


def make_event(event_id=EVENT_1, invited=(), **kwargs):
    defaults = dict(
        id=event_id,
        name="Fête de la Musique",
        start_time=START,
        location_id=LOCATION,
        invited_artists=list(invited),
    )
    defaults.update(kwargs)
    return Event(**defaults)


class TestEventUpsert(unittest.TestCase):
    """Test cases for writing events with their invitations."""

    def setUp(self):
        self.tx = FakeTransaction()
        self.conn = FakeConnection(tx=self.tx)
        self.handler = EventHandler(self.conn, logger=MagicMock(spec=logging.Logger))

    def test_event_and_invitations_written_in_order(self):
        event = make_event(invited=[InvitedArtist(ARTIST_1, True), InvitedArtist(ARTIST_2)])

        self.handler.upsert(event)

        self.assertEqual(
            [sql for sql, _ in self.tx.statements],
            [UPSERT_EVENT_SQL, UPSERT_INVITED_ARTIST_SQL, UPSERT_INVITED_ARTIST_SQL],
        )
        event_params = self.tx.statements[0][1]
        self.assertEqual(event_params["location_id"], LOCATION)
        self.assertEqual(event_params["start_time"], START)
        self.assertEqual(
            [(p["artist_id"], p["event_id"], p["confirmed"]) for _, p in self.tx.statements[1:]],
            [(ARTIST_1, EVENT_1, True), (ARTIST_2, EVENT_1, False)],
        )
        self.assertEqual(self.tx.savepoints, 1)

    def test_existing_invitation_updates_only_confirmation(self):
        self.assertIn("ON CONFLICT (artist_id, event_id) DO UPDATE", UPSERT_INVITED_ARTIST_SQL)
        self.assertIn("confirmed = EXCLUDED.confirmed", UPSERT_INVITED_ARTIST_SQL)

    def test_event_without_location(self):
        self.handler.upsert(make_event(location_id=None))

        self.assertIsNone(self.tx.statements[0][1]["location_id"])

    def test_unknown_artist_rejects_whole_event(self):
        self.tx.fail_on[UNKNOWN_ARTIST] = psycopg.errors.ForeignKeyViolation(
            'insert or update on table "invited_artists" violates foreign key constraint'
        )
        broken = make_event(EVENT_1, invited=[InvitedArtist(ARTIST_1), InvitedArtist(UNKNOWN_ARTIST)])
        fine = make_event(EVENT_2, invited=[InvitedArtist(ARTIST_2)])

        with self.assertRaises(AggregatedWriteError) as cm:
            self.handler.upsert(broken, fine)

        self.assertEqual(cm.exception.indexes(), [0])
        self.assertTrue(cm.exception.contains(psycopg.errors.IntegrityError))
        written_events = {p.get("id") or p.get("event_id") for _, p in self.tx.statements}
        self.assertEqual(written_events, {EVENT_2})
        self.assertTrue(self.tx.committed)

    def test_empty_name_rejected(self):
        with self.assertRaises(AggregatedWriteError) as cm:
            self.handler.upsert(make_event(name=""))

        self.assertIsInstance(cm.exception.failures[0].cause, ValueError)
        self.assertEqual(self.tx.statements, [])

    def test_invalid_references_rejected_before_io(self):
        with self.assertRaises(AggregatedWriteError) as cm:
            self.handler.upsert(
                make_event(EVENT_1, location_id="not-a-uuid"),
                make_event(EVENT_2, invited=[InvitedArtist("foo")]),
            )

        self.assertEqual(cm.exception.indexes(), [0, 1])
        self.assertTrue(all(isinstance(f.cause, InvalidIdentifierError) for f in cm.exception))
        self.assertEqual(self.tx.statements, [])


class TestEventGet(unittest.TestCase):
    """Test cases for reading events with their invitations."""

    def setUp(self):
        self.conn = FakeConnection()
        self.handler = EventHandler(self.conn, logger=MagicMock(spec=logging.Logger))

    def test_get_loads_invitations(self):
        self.conn.results = [
            [(uuid.UUID(EVENT_1), "Fête de la Musique", START, uuid.UUID(LOCATION), START, START)],
            [(uuid.UUID(ARTIST_1), True), (uuid.UUID(ARTIST_2), False)],
        ]

        events = self.handler.get(by_id(EVENT_1))

        expected = make_event(invited=[InvitedArtist(ARTIST_1, True), InvitedArtist(ARTIST_2, False)])
        self.assertEqual(events, [expected])
        self.assertEqual(self.conn.queries[1], (SELECT_INVITED_ARTISTS_SQL, (EVENT_1,)))

    def test_missing_location_reads_back_as_none(self):
        self.conn.results = [[(EVENT_1, "Fête de la Musique", None, None, START, START)], []]

        event = self.handler.get(by_name("Fête de la Musique"))[0]

        self.assertIsNone(event.location_id)
        self.assertIsNone(event.start_time)
        self.assertEqual(event.invited_artists, [])

    def test_start_time_normalized_to_utc(self):
        cest = timezone(timedelta(hours=2))
        local = datetime(2024, 6, 22, 0, 0, tzinfo=cest)
        self.conn.results = [[(EVENT_1, "Fête de la Musique", local, LOCATION, START, START)], []]

        event = self.handler.get(by_id(EVENT_1))[0]

        self.assertEqual(event.start_time, START)
        self.assertEqual(event.start_time.tzinfo, timezone.utc)

    def test_not_found(self):
        with self.assertRaises(ResourceNotFoundError):
            self.handler.get(by_name("Nope"))


if __name__ == "__main__":
    unittest.main()
