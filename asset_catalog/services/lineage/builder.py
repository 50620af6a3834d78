"""Lineage graph construction.

Lays a catalog snapshot out in three fixed columns (Policy, Claim, Model)
and connects each asset to the upstream assets it was derived from:

    Policy --> Claim --> Model

The layout is a pure function of the input order. Nothing is moved to avoid
overlaps; row ``i`` of a column is always at ``MARGIN + i * ROW_GAP``.
References that do not resolve to a node of the expected variant produce no
edge.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from asset_catalog.schemas.assets import Asset, AssetType, ClaimAsset, ModelAsset, PolicyAsset
from asset_catalog.schemas.lineage import LineageEdge, LineageGraph, LineageNode

MARGIN = 50
COLUMN_GAP = 250
ROW_GAP = 120
NODE_WIDTH = 160
NODE_HEIGHT = 80
LABEL_MAX_CHARS = 18

COLUMN_ORDER = (AssetType.POLICY, AssetType.CLAIM, AssetType.MODEL)

CANVAS_WIDTH = MARGIN + COLUMN_GAP * (len(COLUMN_ORDER) - 1) + NODE_WIDTH + MARGIN
MIN_CANVAS_HEIGHT = MARGIN + NODE_HEIGHT + MARGIN


def truncate_label(name: str, max_chars: int = LABEL_MAX_CHARS) -> str:
    """Shorten a name for a node label, appending an ellipsis when cut."""
    if len(name) > max_chars:
        return name[:max_chars] + "..."
    return name


def column_x(asset_type: AssetType) -> int:
    """Left edge of the column holding the given variant."""
    return MARGIN + COLUMN_ORDER.index(AssetType(asset_type)) * COLUMN_GAP


def row_y(index: int) -> int:
    """Top edge of the ``index``-th node within a column."""
    return MARGIN + index * ROW_GAP


def _make_node(asset: Asset, index: int) -> LineageNode:
    return LineageNode(
        id=asset.id,
        name=asset.name,
        label=truncate_label(asset.name),
        asset_type=AssetType(asset.asset_type),
        x=column_x(asset.asset_type),
        y=row_y(index),
        pii_tag=bool(asset.pii_tag),
    )


def partition_assets(assets: Iterable[Asset]):
    """Split a snapshot into policies, claims and models, keeping input order."""
    policies: List[PolicyAsset] = []
    claims: List[ClaimAsset] = []
    models: List[ModelAsset] = []

    for asset in assets:
        if asset.asset_type == AssetType.POLICY:
            policies.append(asset)
        elif asset.asset_type == AssetType.CLAIM:
            claims.append(asset)
        elif asset.asset_type == AssetType.MODEL:
            models.append(asset)
        else:
            raise ValueError(f"Unknown asset type: {asset.asset_type}")

    return policies, claims, models


def build_lineage(assets: Sequence[Asset]) -> LineageGraph:
    """Build the lineage layout and edge set for a snapshot.

    Args:
        assets: Catalog snapshot in the order it was received

    Returns:
        LineageGraph with one node per asset, Policy->Claim and Claim->Model
        edges, and the canvas extent
    """
    policies, claims, models = partition_assets(assets)

    nodes: List[LineageNode] = []
    edges: List[LineageEdge] = []

    policy_nodes: Dict[str, LineageNode] = {}
    for index, policy in enumerate(policies):
        node = _make_node(policy, index)
        nodes.append(node)
        policy_nodes.setdefault(node.id, node)

    claim_nodes: Dict[str, LineageNode] = {}
    for index, claim in enumerate(claims):
        node = _make_node(claim, index)
        nodes.append(node)
        claim_nodes.setdefault(node.id, node)

        policy_node = policy_nodes.get(claim.policy_id)
        if policy_node is not None:
            edges.append(LineageEdge(source=policy_node.id, target=node.id))

    for index, model in enumerate(models):
        node = _make_node(model, index)
        nodes.append(node)

        for claim_id in model.source_claim_ids or []:
            claim_node = claim_nodes.get(claim_id)
            if claim_node is not None:
                edges.append(LineageEdge(source=claim_node.id, target=node.id))

    if nodes:
        height = max(node.y for node in nodes) + NODE_HEIGHT + MARGIN
    else:
        height = MIN_CANVAS_HEIGHT

    return LineageGraph(
        nodes=nodes,
        edges=edges,
        width=CANVAS_WIDTH,
        height=height,
        node_width=NODE_WIDTH,
        node_height=NODE_HEIGHT,
        is_empty=not nodes,
    )


def find_asset(assets: Iterable[Asset], node_id: str) -> Optional[Asset]:
    """Look up the full asset behind a clicked lineage node."""
    for asset in assets:
        if asset.id == node_id:
            return asset
    return None
