"""Unit tests for AssetCatalogService."""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError as PydanticValidationError

from asset_catalog.core.exceptions import (
    AppError,
    AssetNotFoundError,
    DatabaseError,
    ImmutableFieldError,
    ReadOnlyCatalogError,
    ValidationError,
)
from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.schemas.assets import (
    AssetType,
    AssetUpdate,
    CatalogFilter,
    ClaimCreate,
    ModelCreate,
    PolicyCreate,
    RegTag,
)
from asset_catalog.schemas.events import CatalogEventType
from asset_catalog.services.catalog_service import AssetCatalogService


@pytest.fixture
def catalog_service(memory_store, change_feed) -> AssetCatalogService:
    return AssetCatalogService(memory_store, change_feed)


class TestListAssets:
    @pytest.mark.asyncio
    async def test_no_filters_returns_store_order(self, catalog_service):
        assets = await catalog_service.list_assets()
        assert [asset.id for asset in assets] == ["P1", "P2", "C1", "C2", "M1"]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_substring(self, catalog_service):
        assets = await catalog_service.list_assets(CatalogFilter(search="pOLIcy"))
        assert [asset.id for asset in assets] == ["P1", "P2"]

    @pytest.mark.asyncio
    async def test_filter_by_type(self, catalog_service):
        assets = await catalog_service.list_assets(CatalogFilter(asset_type=AssetType.CLAIM))
        assert [asset.id for asset in assets] == ["C1", "C2"]

    @pytest.mark.asyncio
    async def test_filter_by_reg_tag(self, catalog_service):
        assets = await catalog_service.list_assets(CatalogFilter(reg_tag=RegTag.GDPR))
        assert [asset.id for asset in assets] == ["P1"]

    @pytest.mark.asyncio
    async def test_combined_filters(self, catalog_service):
        filters = CatalogFilter(search="home", asset_type=AssetType.POLICY, reg_tag=RegTag.NONE)
        assert await catalog_service.list_assets(filters) == []

    @pytest.mark.asyncio
    async def test_snapshot_is_full_collection(self, catalog_service):
        assert len(await catalog_service.snapshot()) == 5


class TestGetAsset:
    @pytest.mark.asyncio
    async def test_existing(self, catalog_service):
        asset = await catalog_service.get_asset("M1")
        assert asset.asset_type == "Model"
        assert asset.source_claim_ids == ["C1", "C-missing"]

    @pytest.mark.asyncio
    async def test_missing(self, catalog_service):
        with pytest.raises(AssetNotFoundError):
            await catalog_service.get_asset("nope")


class TestCreateAsset:
    @pytest.mark.asyncio
    async def test_create_policy_stamps_owner_and_date(self, catalog_service, change_feed):
        asset = await catalog_service.create_asset(PolicyCreate(name="  Travel Policy "), owner_id="user-9")

        assert asset.id
        assert asset.name == "Travel Policy"
        assert asset.owner_id == "user-9"
        assert asset.data_type == "Record"
        assert asset.creation_date.endswith("Z")
        assert change_feed.version == 1

    @pytest.mark.asyncio
    async def test_create_keeps_client_creation_date(self, catalog_service):
        payload = ClaimCreate(
            name="Hail", claim_amount=7000, policy_id="P1", creation_date="2024-02-01T10:00:00.000Z"
        )
        asset = await catalog_service.create_asset(payload, owner_id="user-1")

        assert asset.creation_date == "2024-02-01T10:00:00.000Z"
        assert asset.status == "New"

    @pytest.mark.asyncio
    async def test_create_model(self, catalog_service):
        asset = await catalog_service.create_asset(
            ModelCreate(name="Severity Model", source_claim_ids=["C1", "C2"]), owner_id="user-1"
        )

        assert asset.data_type == "Result"
        assert asset.source_claim_ids == ["C1", "C2"]
        assert len(await catalog_service.snapshot()) == 6

    @pytest.mark.asyncio
    async def test_create_publishes_event(self, catalog_service, change_feed):
        async with change_feed.subscribe() as subscription:
            asset = await catalog_service.create_asset(PolicyCreate(name="Boat"), owner_id="user-1")
            event = await subscription.get(timeout=1)

        assert event.event_type == CatalogEventType.ASSET_CREATED
        assert event.asset_id == asset.id
        assert event.asset_type == "Policy"
        assert event.version == 1


class TestUpdateAsset:
    @pytest.mark.asyncio
    async def test_partial_update_preserves_other_fields(self, catalog_service):
        updated = await catalog_service.update_asset("C1", AssetUpdate(status="In Review"))

        assert updated.status == "In Review"
        assert updated.claim_amount == 10000
        assert updated.creation_date == "2024-01-31T00:00:00Z"
        assert updated.owner_id == "user-1"

    @pytest.mark.asyncio
    async def test_changing_asset_type_is_rejected(self, catalog_service, change_feed):
        with pytest.raises(ImmutableFieldError):
            await catalog_service.update_asset("P1", AssetUpdate(asset_type="Claim"))

        assert change_feed.version == 0
        assert (await catalog_service.get_asset("P1")).asset_type == "Policy"

    @pytest.mark.asyncio
    async def test_echoing_same_asset_type_is_allowed(self, catalog_service):
        updated = await catalog_service.update_asset(
            "P1", AssetUpdate(asset_type="Policy", name="Renamed")
        )
        assert updated.name == "Renamed"

    @pytest.mark.asyncio
    async def test_fields_of_other_variants_are_ignored(self, catalog_service, change_feed):
        updated = await catalog_service.update_asset("P1", AssetUpdate(claim_amount=99))

        assert not hasattr(updated, "claim_amount")
        assert change_feed.version == 0

    @pytest.mark.asyncio
    async def test_description_can_be_cleared(self, catalog_service):
        await catalog_service.update_asset("P1", AssetUpdate(description="Primary residence"))
        cleared = await catalog_service.update_asset("P1", AssetUpdate(description=None))

        assert cleared.description is None

    @pytest.mark.asyncio
    async def test_update_publishes_event(self, catalog_service, change_feed):
        await catalog_service.update_asset("M1", AssetUpdate(source_claim_ids=["C2"]))

        assert change_feed.version == 1

    @pytest.mark.asyncio
    async def test_missing_asset(self, catalog_service):
        with pytest.raises(AssetNotFoundError):
            await catalog_service.update_asset("nope", AssetUpdate(name="x"))


class TestDeleteAsset:
    @pytest.mark.asyncio
    async def test_delete(self, catalog_service, change_feed):
        async with change_feed.subscribe() as subscription:
            await catalog_service.delete_asset("C2")
            event = await subscription.get(timeout=1)

        assert event.event_type == CatalogEventType.ASSET_DELETED
        assert event.asset_type == "Claim"
        with pytest.raises(AssetNotFoundError):
            await catalog_service.get_asset("C2")

    @pytest.mark.asyncio
    async def test_delete_missing(self, catalog_service, change_feed):
        with pytest.raises(AssetNotFoundError):
            await catalog_service.delete_asset("nope")
        assert change_feed.version == 0


class TestReadOnlyMode:
    @pytest.mark.asyncio
    async def test_writes_are_rejected(self, memory_store, change_feed):
        service = AssetCatalogService(memory_store, change_feed, read_only=True)

        with pytest.raises(ReadOnlyCatalogError):
            await service.create_asset(PolicyCreate(name="Blocked"), owner_id="user-1")
        with pytest.raises(ReadOnlyCatalogError):
            await service.update_asset("P1", AssetUpdate(name="Blocked"))
        with pytest.raises(ReadOnlyCatalogError):
            await service.delete_asset("P1")

        assert len(await service.snapshot()) == 5

    @pytest.mark.asyncio
    async def test_reads_are_allowed(self, memory_store, change_feed):
        service = AssetCatalogService(memory_store, change_feed, read_only=True)
        assert (await service.get_asset("P1")).name == "Home Policy"


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_store_errors_propagate(self, change_feed):
        store = AsyncMock(spec=AssetStore)
        store.list_assets.side_effect = DatabaseError("connection lost")
        service = AssetCatalogService(store, change_feed)

        with pytest.raises(DatabaseError):
            await service.snapshot()

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_wrapped(self, change_feed):
        store = AsyncMock(spec=AssetStore)
        store.get_asset.side_effect = RuntimeError("boom")
        service = AssetCatalogService(store, change_feed)

        with pytest.raises(AppError) as exc_info:
            await service.get_asset("P1")

        assert isinstance(exc_info.value.original_error, RuntimeError)

    @pytest.mark.asyncio
    async def test_pydantic_errors_become_validation_errors(self, change_feed):
        with pytest.raises(PydanticValidationError) as invalid:
            PolicyCreate(name="   ")

        store = AsyncMock(spec=AssetStore)
        store.create_asset.side_effect = invalid.value
        service = AssetCatalogService(store, change_feed)

        with pytest.raises(ValidationError):
            await service.create_asset(PolicyCreate(name="Valid"), owner_id="user-1")
        assert change_feed.version == 0
