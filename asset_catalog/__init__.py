"""Insurance metadata catalog: asset CRUD, lineage graph and fraud heuristic."""

__version__ = "0.1.0"
