"""Unit tests for the in-memory asset store."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from asset_catalog.repositories.memory_asset_repository import InMemoryAssetRepository


def _policy_fields(**overrides):
    fields = {
        "asset_type": "Policy",
        "name": "Home Policy",
        "owner_id": "user-1",
        "creation_date": "2024-01-01T00:00:00.000Z",
        "pii_tag": False,
        "reg_tag": "None",
    }
    fields.update(overrides)
    return fields


class TestInMemoryAssetRepository:
    @pytest.mark.asyncio
    async def test_create_generates_unique_ids(self):
        store = InMemoryAssetRepository()

        first = await store.create_asset(_policy_fields())
        second = await store.create_asset(_policy_fields(name="Other"))

        assert first.id != second.id
        assert [asset.id for asset in await store.list_assets()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_returned_assets_are_copies(self, memory_store):
        asset = await memory_store.get_asset("P1")
        asset.name = "Mutated"

        assert (await memory_store.get_asset("P1")).name == "Home Policy"

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, memory_store):
        updated = await memory_store.update_asset("C1", {"claim_amount": 42.5})

        assert updated.claim_amount == 42.5
        assert updated.policy_id == "P1"

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_record_unchanged(self, memory_store):
        with pytest.raises(PydanticValidationError):
            await memory_store.update_asset("C1", {"claim_amount": -5})

        assert (await memory_store.get_asset("C1")).claim_amount == 10000

    @pytest.mark.asyncio
    async def test_update_missing(self, memory_store):
        assert await memory_store.update_asset("nope", {"name": "x"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, memory_store):
        assert await memory_store.delete_asset("P2") is True
        assert await memory_store.delete_asset("P2") is False
        assert await memory_store.get_asset("P2") is None

    @pytest.mark.asyncio
    async def test_clear(self, memory_store):
        await memory_store.clear()
        assert await memory_store.list_assets() == []

    @pytest.mark.asyncio
    async def test_health_check(self):
        health = await InMemoryAssetRepository().health_check()
        assert health == {"status": "healthy", "backend": "memory"}
