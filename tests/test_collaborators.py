import pytest

from heritage_folders.services.collaborators import ConfiguredSiteRegistry, InMemoryDocumentStore


@pytest.mark.asyncio
async def test_registry_with_sites():
    registry = ConfiguredSiteRegistry([1, 2])

    assert await registry.site_exists(1)
    assert not await registry.site_exists(3)

    registry.register(3)
    assert await registry.site_exists(3)


@pytest.mark.asyncio
async def test_empty_registry_accepts_any_site():
    assert await ConfiguredSiteRegistry().site_exists(12345)


def test_unknown_policy():
    with pytest.raises(ValueError):
        InMemoryDocumentStore(policy="shred")


@pytest.mark.asyncio
async def test_counts():
    store = InMemoryDocumentStore()
    store.file_document("d1", "f1")
    store.file_document("d2", "f1")
    store.file_document("d3", "f2")

    assert await store.count_documents(["f1", "f3"]) == {"f1": 2, "f3": 0}


@pytest.mark.asyncio
async def test_reassign_policy():
    store = InMemoryDocumentStore("reassign")
    store.file_document("d1", "f1")
    store.file_document("d2", "other")

    assert not await store.deletion_blocked(["f1"])
    assert await store.folders_deleted(["f1"], None) == 1
    assert store.folder_of("d1") is None
    assert store.folder_of("d2") == "other"


@pytest.mark.asyncio
async def test_delete_policy():
    store = InMemoryDocumentStore("delete")
    store.file_document("d1", "f1")

    await store.folders_deleted(["f1"], "parent")

    assert len(store) == 0


@pytest.mark.asyncio
async def test_reject_policy():
    store = InMemoryDocumentStore("reject")
    store.file_document("d1", "f1")

    assert await store.deletion_blocked(["f1", "f2"])
    assert not await store.deletion_blocked(["f2"])
