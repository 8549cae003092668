import os
import tempfile
import unittest

from session_client.stores.memory_store import MemoryLocalStore
from session_client.stores.sqlite_store import SQLiteLocalStore


class LocalStoreContract:
    async def make_store(self):
        raise NotImplementedError

    async def test_set_get_delete(self):
        store = await self.make_store()

        self.assertIsNone(await store.get("flag"))
        await store.set("flag", "1")
        self.assertEqual(await store.get("flag"), "1")
        await store.set("flag", "0")
        self.assertEqual(await store.get("flag"), "0")
        await store.delete("flag")
        self.assertIsNone(await store.get("flag"))

    async def test_delete_missing_key_is_noop(self):
        store = await self.make_store()

        await store.delete("missing")
        self.assertIsNone(await store.get("missing"))


class TestMemoryLocalStore(LocalStoreContract, unittest.IsolatedAsyncioTestCase):
    async def make_store(self):
        return MemoryLocalStore()


class TestSQLiteLocalStore(LocalStoreContract, unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self._tmp.name, "local.db")

    def tearDown(self):
        self._tmp.cleanup()

    async def make_store(self):
        return SQLiteLocalStore(self.db_path)

    async def test_values_survive_new_instances(self):
        await SQLiteLocalStore(self.db_path).set("salmar_has_passkey", "1")

        self.assertEqual(await SQLiteLocalStore(self.db_path).get("salmar_has_passkey"), "1")


if __name__ == "__main__":
    unittest.main()
