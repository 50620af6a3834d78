"""Lineage graph schemas."""

from typing import List

from pydantic import BaseModel, Field

from asset_catalog.schemas.assets import AssetType


class LineageNode(BaseModel):
    """A positioned asset in the lineage diagram."""

    id: str = Field(..., description="Asset identifier")
    name: str = Field(..., description="Full asset name")
    label: str = Field(..., description="Name shortened for the node label")
    asset_type: AssetType
    x: int = Field(..., description="Left edge of the node")
    y: int = Field(..., description="Top edge of the node")
    pii_tag: bool = False


class LineageEdge(BaseModel):
    """Directed "derived from" relationship between two nodes."""

    source: str = Field(..., description="Upstream node id")
    target: str = Field(..., description="Downstream node id")


class LineageGraph(BaseModel):
    """Lineage layout of a catalog snapshot."""

    nodes: List[LineageNode] = Field(default_factory=list)
    edges: List[LineageEdge] = Field(default_factory=list)
    width: int = Field(..., description="Canvas width")
    height: int = Field(..., description="Canvas height")
    node_width: int
    node_height: int
    is_empty: bool = Field(..., description="No assets to draw; callers show an empty state")
