# tests for the database connection manager

from unittest.mock import AsyncMock, MagicMock

from hopeocd.services.db import ROW_COLLECTIONS, Database


class TestIndexes:
    async def test_row_ids_are_unique(self):
        database = Database()
        collections = {}

        def collection(name):
            collections.setdefault(name, MagicMock(create_index=AsyncMock()))
            return collections[name]

        database.db = MagicMock()
        database.db.__getitem__.side_effect = collection

        await database.ensure_indexes()

        for name in ROW_COLLECTIONS:
            collections[name].create_index.assert_awaited_once_with("id", unique=True)
        collections["user_preferences"].create_index.assert_awaited_once_with("user_id", unique=True)
