"""
Tower/link graph with invariant enforcement and cascading invalidation.
"""
from rf_link_planner.graph.store import (
    LinkGraphStore,
    LinkRejection,
    LinkResult,
)

__all__ = [
    'LinkGraphStore',
    'LinkRejection',
    'LinkResult',
]
