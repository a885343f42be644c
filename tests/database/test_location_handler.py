#!/usr/bin/env python3
"""
Tests for the location handler.
"""

import logging
import os
import sys
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import psycopg

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from helpers.fakes import FakeConnection, FakeTransaction, sample_value

from artist_db.database import LocationHandler, by_id, by_last_name, by_name
from artist_db.errors import AggregatedWriteError, ResourceNotFoundError
from artist_db.models import Location

LOCATION_1 = "0d9e7c2b-5a41-4f63-9b8e-2f4c1a7d3e01"
LOCATION_2 = "0d9e7c2b-5a41-4f63-9b8e-2f4c1a7d3e02"

STAMP = datetime(2024, 5, 17, 20, 30, tzinfo=timezone.utc)


class TestLocationHandler(unittest.TestCase):
    def setUp(self):
        self.tx = FakeTransaction()
        self.conn = FakeConnection(tx=self.tx)
        self.handler = LocationHandler(self.conn, logger=MagicMock(spec=logging.Logger))

    def test_upsert_binds_name(self):
        self.handler.upsert(Location(id=LOCATION_1, name="Berghain"))

        sql, params = self.tx.statements[0]
        self.assertIn("INSERT INTO locations", sql)
        self.assertEqual(params["id"], LOCATION_1)
        self.assertEqual(params["name"], "Berghain")
        self.assertTrue(self.tx.committed)

    def test_generated_ids_are_valid(self):
        location = Location(name="Tresor")

        self.handler.upsert(location)

        self.assertEqual(self.tx.statements[0][1]["id"], location.id)

    def test_failing_row_does_not_block_others(self):
        self.tx.fail_on[LOCATION_1] = psycopg.errors.NotNullViolation("violates not-null constraint")

        with self.assertRaises(AggregatedWriteError) as cm:
            self.handler.upsert(Location(id=LOCATION_1, name=None), Location(id=LOCATION_2, name="Tresor"))

        self.assertEqual(cm.exception.indexes(), [0])
        self.assertEqual([p["id"] for _, p in self.tx.statements], [LOCATION_2])
        self.assertTrue(self.tx.committed)

    def test_get_by_name(self):
        self.conn.results.append([(LOCATION_1, "Berghain", STAMP, STAMP)])

        locations = self.handler.get(by_name("Berghain"))

        self.assertEqual(locations, [Location(id=LOCATION_1, name="Berghain")])
        self.assertEqual(locations[0].metadata.created_at, STAMP)
        sql, params = self.conn.queries[0]
        self.assertIn("SELECT id, name, created_at, updated_at FROM locations", sql)
        self.assertIn("name = %s", sql)
        self.assertEqual(params, ("Berghain",))

    def test_get_by_id_not_found(self):
        with self.assertRaises(ResourceNotFoundError) as cm:
            self.handler.get(by_id(LOCATION_1))

        self.assertIn(LOCATION_1, str(cm.exception))

    def test_unsupported_filter(self):
        with self.assertRaises(ValueError):
            self.handler.get(by_last_name("Berghain"))

    def test_delete_is_idempotent(self):
        self.conn.row = (LOCATION_1,)

        self.handler.delete_by_id(LOCATION_1)
        self.handler.delete_by_id(LOCATION_1)

        self.assertEqual(
            sample_value(
                self.conn.metrics,
                "artist_db_database_objects_changed_total",
                {"entity": "location", "operation": "delete"},
            ),
            2.0,
        )


if __name__ == "__main__":
    unittest.main()
