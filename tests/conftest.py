"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; tests always run against the in-memory store
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["AUTH_ALLOW_ANONYMOUS"] = "true"
os.environ.pop("AUTH_JWT_SECRET", None)

from typing import List

import pytest
from fastapi.testclient import TestClient

from asset_catalog.core.dependencies import get_asset_store, get_change_feed
from asset_catalog.main import app
from asset_catalog.repositories.memory_asset_repository import InMemoryAssetRepository
from asset_catalog.schemas.assets import Asset, ClaimAsset, ModelAsset, PolicyAsset
from asset_catalog.services.change_feed import ChangeFeed


def make_policy(
    asset_id: str,
    name: str = "Home Policy",
    creation_date: str = "2024-01-01T00:00:00Z",
    **kwargs,
) -> PolicyAsset:
    return PolicyAsset(
        id=asset_id,
        name=name,
        owner_id=kwargs.pop("owner_id", "user-1"),
        creation_date=creation_date,
        **kwargs,
    )


def make_claim(
    asset_id: str,
    policy_id: str,
    claim_amount: float = 1000,
    creation_date: str = "2024-02-01T00:00:00Z",
    name: str = "Water Damage",
    **kwargs,
) -> ClaimAsset:
    return ClaimAsset(
        id=asset_id,
        name=name,
        owner_id=kwargs.pop("owner_id", "user-1"),
        creation_date=creation_date,
        claim_amount=claim_amount,
        policy_id=policy_id,
        **kwargs,
    )


def make_model(
    asset_id: str, source_claim_ids: List[str], name: str = "Risk Model", **kwargs
) -> ModelAsset:
    return ModelAsset(
        id=asset_id,
        name=name,
        owner_id=kwargs.pop("owner_id", "user-1"),
        creation_date=kwargs.pop("creation_date", "2024-03-01T00:00:00Z"),
        source_claim_ids=source_claim_ids,
        **kwargs,
    )


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture
def sample_assets() -> List[Asset]:
    """A small catalog with one resolvable chain and one dangling reference.

    Returns:
        List[Asset]: Policies, claims and a model in insertion order
    """
    return [
        make_policy("P1", name="Home Policy", creation_date="2024-01-01T00:00:00Z", reg_tag="GDPR"),
        make_policy("P2", name="Auto Policy", creation_date="2024-01-01T00:00:00Z"),
        make_claim("C1", "P1", claim_amount=10000, creation_date="2024-01-31T00:00:00Z"),
        make_claim("C2", "P2", claim_amount=1200, creation_date="2024-01-10T00:00:00Z", name="Fender Bender"),
        make_model("M1", ["C1", "C-missing"], pii_tag=True),
    ]


@pytest.fixture
def memory_store(sample_assets: List[Asset]) -> InMemoryAssetRepository:
    return InMemoryAssetRepository(sample_assets)


@pytest.fixture
def change_feed() -> ChangeFeed:
    return ChangeFeed(queue_size=10)


@pytest.fixture
def api_client(
    test_client: TestClient, memory_store: InMemoryAssetRepository, change_feed: ChangeFeed
) -> TestClient:
    """Test client wired to a fresh in-memory store and change feed.

    Returns:
        TestClient: Client whose requests hit the seeded catalog
    """
    app.dependency_overrides[get_asset_store] = lambda: memory_store
    app.dependency_overrides[get_change_feed] = lambda: change_feed
    return test_client


@pytest.fixture
def policy_factory():
    return make_policy


@pytest.fixture
def claim_factory():
    return make_claim


@pytest.fixture
def model_factory():
    return make_model
