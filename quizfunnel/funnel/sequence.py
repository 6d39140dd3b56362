"""
Funnel Screen Sequencer

Post-quiz screens in their fixed order. Strictly linear: no branching and
no skipping.
"""

from typing import Literal, Optional, Tuple

FunnelScreen = Literal["A", "B", "C1", "C2", "C3", "D", "E", "F", "complete"]

FUNNEL_SCREEN_ORDER: Tuple[str, ...] = (
    "A",         # stress state
    "B",         # time commitment
    "C1",        # micro-commitment: completer
    "C2",        # micro-commitment: prioritize self
    "C3",        # micro-commitment: learn stress
    "D",         # email capture
    "E",         # name capture
    "F",         # projection graph
    "complete",
)


def get_next_screen(current: str) -> Optional[str]:
    if current not in FUNNEL_SCREEN_ORDER:
        return None
    index = FUNNEL_SCREEN_ORDER.index(current)
    if index == len(FUNNEL_SCREEN_ORDER) - 1:
        return None
    return FUNNEL_SCREEN_ORDER[index + 1]


def get_previous_screen(current: str) -> Optional[str]:
    if current not in FUNNEL_SCREEN_ORDER:
        return None
    index = FUNNEL_SCREEN_ORDER.index(current)
    if index == 0:
        return None
    return FUNNEL_SCREEN_ORDER[index - 1]
