"""
Quiz Funnel Screens

Post-quiz screen order and the merge-only session metadata.
"""

from .sequence import (
    FUNNEL_SCREEN_ORDER,
    FunnelScreen,
    get_next_screen,
    get_previous_screen,
)
from .metadata import (
    FunnelMetadata,
    FunnelUpdateRequest,
    MicroCommitments,
    merge_funnel_metadata,
    extract_funnel_state,
    build_metadata_update,
)

__all__ = [
    "FUNNEL_SCREEN_ORDER",
    "FunnelScreen",
    "get_next_screen",
    "get_previous_screen",
    "FunnelMetadata",
    "FunnelUpdateRequest",
    "MicroCommitments",
    "merge_funnel_metadata",
    "extract_funnel_state",
    "build_metadata_update",
]
