"""Lineage graph builder."""

from asset_catalog.services.lineage.builder import build_lineage, find_asset, truncate_label

__all__ = ["build_lineage", "find_asset", "truncate_label"]
