"""
Anchor question configuration.

Card order here is the order shown to the user.
"""

from typing import List

from .models import AnchorCardConfig

# Selected option texts joined per card
MAX_OPTIONS_PER_CARD = 2

INSIGHT_CARD_CONFIG: List[AnchorCardConfig] = [
    AnchorCardConfig(
        type="main_challenge",
        question_key="q26",
        label="Hlavní výzva",
        icon="target",
        fallback="Vnitřní klid",
    ),
    AnchorCardConfig(
        type="trigger",
        question_key="q02",
        label="Spouštěč",
        icon="lightning",
        fallback="Každodenní stres",
    ),
    AnchorCardConfig(
        type="tough_period",
        question_key="q05",
        label="Náročné období",
        icon="calendar",
        fallback="Nedávné období",
    ),
    AnchorCardConfig(
        type="energy_level",
        question_key="q10",
        label="Hladina energie",
        icon="battery",
        fallback="Proměnlivá",
    ),
]


def anchor_question_keys() -> List[str]:
    return [card.question_key for card in INSIGHT_CARD_CONFIG]
