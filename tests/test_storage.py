"""
Tests for the local storage backends.
"""

import pytest

from memorial.core.errors import StorageError
from memorial.services.content import ContentService
from memorial.storage import (
    InMemoryMetadataStorage,
    JsonFileMetadataStorage,
    StorageProvider,
    create_local_storage,
)


class TestInMemoryMetadataStorage:
    @pytest.mark.asyncio
    async def test_save_get_delete(self):
        store = InMemoryMetadataStorage()
        await store.save("poems", "a", {"title": "A"})

        assert await store.get("poems", "a") == {"title": "A"}
        assert await store.delete("poems", "a")
        assert not await store.delete("poems", "a")
        assert await store.get("poems", "a") is None

    @pytest.mark.asyncio
    async def test_query_keeps_insertion_order(self):
        store = InMemoryMetadataStorage()
        for n in (3, 1, 2):
            await store.save("poems", str(n), {"n": n})
        await store.save("poems", "1", {"n": 10})

        assert [d["n"] for d in await store.query("poems")] == [3, 10, 2]
        assert await store.query("missing") == []

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self):
        store = InMemoryMetadataStorage()
        await store.save("poems", "a", {"title": "A"})

        doc = await store.get("poems", "a")
        doc["title"] = "changed"
        assert (await store.get("poems", "a"))["title"] == "A"


class TestJsonFileMetadataStorage:
    @pytest.mark.asyncio
    async def test_survives_reopen(self, tmp_path):
        path = tmp_path / "content.json"
        first = ContentService(StorageProvider(metadata=JsonFileMetadataStorage(path)))
        item = await first.create_item("readings", {"title": "Wisdom 3", "content": "The souls"})

        second = ContentService(StorageProvider(metadata=JsonFileMetadataStorage(path)))
        items = await second.list_items("readings")

        assert [i.id for i in items] == [item.id]
        assert items[0].created_at == item.created_at

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileMetadataStorage(tmp_path / "nested" / "content.json")
        assert await store.query("poems") == []
        assert not await store.delete("poems", "x")

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "content.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            await JsonFileMetadataStorage(path).query("poems")


class TestFactory:
    def test_backends(self, tmp_path):
        assert isinstance(create_local_storage("memory").metadata, InMemoryMetadataStorage)

        json_storage = create_local_storage("json", tmp_path)
        assert isinstance(json_storage.metadata, JsonFileMetadataStorage)
        assert json_storage.metadata.path == tmp_path / "content.json"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_local_storage("mongodb")
