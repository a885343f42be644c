#!/usr/bin/env python3
"""
Tests for the error taxonomy.
"""

import unittest

import psycopg

from artist_db.errors import (
    AggregatedWriteError,
    DatabaseError,
    InvalidIdentifierError,
    ResourceNotFoundError,
    RowFailure,
    StorageError,
)


class TestAggregatedWriteError(unittest.TestCase):
    """Test cases for the per-row failure accumulator."""

    def setUp(self):
        self.error = AggregatedWriteError(
            "artist",
            [
                RowFailure(1, "foo", InvalidIdentifierError("foo")),
                RowFailure(3, "b7c1e0a4-0000-4000-8000-000000000003", psycopg.errors.ForeignKeyViolation("fk")),
            ],
        )

    def test_is_a_database_error(self):
        self.assertIsInstance(self.error, DatabaseError)

    def test_iterates_failures_in_order(self):
        self.assertEqual(len(self.error), 2)
        self.assertEqual(self.error.indexes(), [1, 3])
        self.assertEqual([f.entity_id for f in self.error][0], "foo")

    def test_contains_checks_kind_of_causes(self):
        self.assertTrue(self.error.contains(InvalidIdentifierError))
        self.assertTrue(self.error.contains(psycopg.errors.IntegrityError))
        self.assertFalse(self.error.contains(ResourceNotFoundError))

    def test_message_mentions_every_row(self):
        message = str(self.error)
        self.assertIn("2 row(s)", message)
        self.assertIn("[1] foo", message)
        self.assertIn("[3]", message)


class TestErrorMessages(unittest.TestCase):
    def test_not_found_message(self):
        self.assertEqual(str(ResourceNotFoundError("event")), "event not found")
        self.assertEqual(str(ResourceNotFoundError("event", "id=x")), "event not found: id=x")

    def test_storage_error_names_entity_and_operation(self):
        error = StorageError("location", "get", "query failed")
        self.assertEqual(error.entity, "location")
        self.assertEqual(error.operation, "get")
        self.assertEqual(str(error), "location get: query failed")


if __name__ == "__main__":
    unittest.main()
