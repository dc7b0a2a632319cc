"""
Tests for content management: categories, validation, ordering, deletion.
"""

import pytest

from memorial.core.categories import RequiredField, get_categories
from memorial.core.errors import NotFoundError, ValidationError
from memorial.core.utils import generate_id, is_valid_id


# =============================================================================
# Categories
# =============================================================================


class TestCategoryRegistry:
    def test_fixed_order(self):
        assert get_categories().keys() == ["readings", "gospels", "music", "prayers", "poems"]

    def test_music_requires_link(self):
        categories = get_categories()
        assert categories.get("music").required_field == RequiredField.LINK
        assert categories.get("poems").required_field == RequiredField.CONTENT

    def test_lookup_is_case_insensitive(self):
        assert get_categories().get("Readings").key == "readings"

    def test_unknown_category(self):
        with pytest.raises(NotFoundError, match="Content type 'hymns' not found."):
            get_categories().get("hymns")


class TestIds:
    def test_generated_ids_are_valid(self):
        item_id = generate_id()
        assert len(item_id) == 24
        assert is_valid_id(item_id)

    @pytest.mark.parametrize(
        "value",
        ["", "xyz", "65A1F0C2B3D4E5F60718293A", "1" * 25, "1" * 24 + "\n", None, 42],
    )
    def test_malformed_ids(self, value):
        assert not is_valid_id(value)


# =============================================================================
# ContentService
# =============================================================================


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_text_item(self, content_service):
        item = await content_service.create_item(
            "readings", {"title": "  Isaiah 25:6-9 ", "content": "On this mountain..."}
        )

        assert item.title == "Isaiah 25:6-9"
        assert item.content == "On this mountain..."
        assert item.link is None
        assert is_valid_id(item.id)
        assert item.created_at == item.updated_at

    @pytest.mark.asyncio
    async def test_create_music_item(self, content_service):
        item = await content_service.create_item(
            "music", {"title": "Ave Maria", "link": " https://youtu.be/abc12345678 "}
        )

        assert item.link == "https://youtu.be/abc12345678"
        assert item.content is None

    @pytest.mark.asyncio
    async def test_payload_not_required_by_category_is_dropped(self, content_service):
        item = await content_service.create_item(
            "prayers", {"title": "Eternal rest", "content": "Grant unto them", "link": "x"}
        )
        assert item.link is None

        music = await content_service.create_item(
            "music", {"title": "Hymn", "link": "https://example.com/a.mp3", "content": "x"}
        )
        assert music.content is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", "   ", 7])
    async def test_title_required(self, content_service, title):
        with pytest.raises(ValidationError, match="Missing required field: title"):
            await content_service.create_item("poems", {"title": title, "content": "text"})

    @pytest.mark.asyncio
    async def test_content_required_for_text(self, content_service):
        with pytest.raises(ValidationError, match="Missing required field: content"):
            await content_service.create_item("gospels", {"title": "John 14", "content": " "})

    @pytest.mark.asyncio
    async def test_link_required_for_music(self, content_service):
        with pytest.raises(ValidationError, match="Missing required field: link"):
            await content_service.create_item("music", {"title": "Hymn", "content": "words"})

    @pytest.mark.asyncio
    async def test_link_length_bound(self, storage):
        from memorial.services.content import ContentService

        service = ContentService(storage, max_link_length=30)
        with pytest.raises(ValidationError, match="too long"):
            await service.create_item("music", {"title": "Hymn", "link": "https://" + "a" * 40})

    @pytest.mark.asyncio
    async def test_unknown_category(self, content_service):
        with pytest.raises(NotFoundError):
            await content_service.create_item("hymns", {"title": "x", "content": "y"})


class TestList:
    @pytest.mark.asyncio
    async def test_list_in_creation_order(self, content_service):
        created = []
        for n in range(4):
            item = await content_service.create_item(
                "poems", {"title": f"Poem {n}", "content": "verse"}
            )
            created.append(item.id)

        items = await content_service.list_items("poems")
        assert [i.id for i in items] == created

    @pytest.mark.asyncio
    async def test_categories_are_partitioned(self, content_service):
        await content_service.create_item("poems", {"title": "Poem", "content": "verse"})

        assert await content_service.list_items("prayers") == []
        assert len(await content_service.list_items("poems")) == 1


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_exactly_that_item(self, content_service):
        keep = await content_service.create_item("prayers", {"title": "A", "content": "a"})
        drop = await content_service.create_item("prayers", {"title": "B", "content": "b"})

        assert await content_service.delete_item("prayers", drop.id) == drop.id

        items = await content_service.list_items("prayers")
        assert [i.id for i in items] == [keep.id]

    @pytest.mark.asyncio
    async def test_repeated_delete_is_not_found(self, content_service):
        item = await content_service.create_item("prayers", {"title": "A", "content": "a"})
        await content_service.delete_item("prayers", item.id)

        with pytest.raises(NotFoundError, match=f"prayers item with ID {item.id} not found."):
            await content_service.delete_item("prayers", item.id)

    @pytest.mark.asyncio
    async def test_malformed_id(self, content_service):
        with pytest.raises(ValidationError, match="Invalid ID format: not-an-id"):
            await content_service.delete_item("prayers", "not-an-id")

    @pytest.mark.asyncio
    async def test_item_in_other_category_is_not_found(self, content_service):
        item = await content_service.create_item("prayers", {"title": "A", "content": "a"})

        with pytest.raises(NotFoundError):
            await content_service.delete_item("poems", item.id)
