"""Persistence contract for the catalog.

The catalog service only talks to an ``AssetStore``; the concrete
integration (relational or in-process) is picked from settings.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from asset_catalog.schemas.assets import Asset


class AssetStore(ABC):
    """Keyed CRUD over the canonical asset collection."""

    backend_name: str = "unknown"

    @abstractmethod
    async def list_assets(self) -> List[Asset]:
        """Return the full collection in insertion order."""

    @abstractmethod
    async def get_asset(self, asset_id: str) -> Optional[Asset]:
        """Return one asset or None."""

    @abstractmethod
    async def create_asset(self, fields: Dict[str, Any]) -> Asset:
        """Persist a new asset and return it with its generated id.

        Args:
            fields: Complete asset fields except ``id``
        """

    @abstractmethod
    async def update_asset(self, asset_id: str, fields: Dict[str, Any]) -> Optional[Asset]:
        """Replace the given fields; return the updated asset or None if absent."""

    @abstractmethod
    async def delete_asset(self, asset_id: str) -> bool:
        """Delete by id; return False if the id does not exist."""

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "backend": self.backend_name}
