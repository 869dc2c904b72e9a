import unittest

from backend.db import PostgresDbClient
from shared.types import CreationType


class PostgresDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the Postgres client logic.
    """

    def setUp(self):
        self.db = PostgresDbClient("sqlite+pysqlite:///:memory:")

    def test_create_and_get_creation(self):
        creation = self.db.create_creation("u1", "write about tea", "Tea is...", CreationType.ARTICLE)
        self.assertFalse(creation.publish)
        self.assertEqual(creation.likes, set())

        fetched = self.db.get_creation(creation.id)
        self.assertIsNotNone(fetched)
        self.assertEqual(fetched.type, CreationType.ARTICLE)
        self.assertEqual(fetched.prompt, "write about tea")

    def test_get_missing_creation(self):
        self.assertIsNone(self.db.get_creation("nope"))

    def test_listing_order_and_filters(self):
        self.db.create_creation("u1", "old", "x", CreationType.IMAGE, publish=True, created_at=1.0)
        self.db.create_creation("u1", "new", "x", CreationType.IMAGE, publish=True, created_at=2.0)
        self.db.create_creation("u2", "hidden", "x", CreationType.RESUME_REVIEW, created_at=3.0)

        published = self.db.list_published_creations()
        self.assertEqual([c.prompt for c in published], ["new", "old"])

        mine = self.db.list_user_creations("u1")
        self.assertEqual([c.prompt for c in mine], ["new", "old"])
        self.assertEqual([c.prompt for c in self.db.list_user_creations("u2")], ["hidden"])

    def test_toggle_like(self):
        creation = self.db.create_creation("u1", "p", "x", CreationType.IMAGE, publish=True)

        self.assertTrue(self.db.toggle_like(creation.id, "u2"))
        self.assertTrue(self.db.toggle_like(creation.id, "u3"))
        self.assertEqual(self.db.get_creation(creation.id).likes, {"u2", "u3"})

        self.assertFalse(self.db.toggle_like(creation.id, "u2"))
        self.assertEqual(self.db.get_creation(creation.id).likes, {"u3"})

    def test_set_like_state(self):
        creation = self.db.create_creation("u1", "p", "x", CreationType.IMAGE, publish=True)

        self.assertFalse(self.db.toggle_like(creation.id, "u2", liked=False))
        self.assertTrue(self.db.toggle_like(creation.id, "u2", liked=True))
        self.assertTrue(self.db.toggle_like(creation.id, "u2", liked=True))
        self.assertEqual(self.db.get_creation(creation.id).likes, {"u2"})

    def test_toggle_like_missing_creation(self):
        self.assertIsNone(self.db.toggle_like("nope", "u2"))


if __name__ == "__main__":
    unittest.main()
