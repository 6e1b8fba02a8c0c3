from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Tuple, TypeAlias

Position: TypeAlias = int
SlotIndex: TypeAlias = int
Frequency: TypeAlias = int
Color: TypeAlias = Tuple[int, int, int]


@dataclass(frozen=True)
class MachineConfig:
    NO_BEAN_IN_YPOS: Final[int] = -1
    # Odd spacings keep the pegs of adjacent rows interleaved.
    X_SPACING: Final[int] = 3

    LUCK_RIGHT_PROBABILITY: Final[float] = 0.5
    SKILL_SPREAD_FACTOR: Final[float] = 0.5
    SKILL_DEVIATE_MU: Final[float] = 0.0
    SKILL_DEVIATE_SIGMA: Final[float] = 1.0

    HISTOGRAM_WIDTH: Final[int] = 700
    HISTOGRAM_HEIGHT: Final[int] = 500
    HISTOGRAM_BAR_MIN_WIDTH: Final[int] = 1
    BACKGROUND_COLOR: Final[Color] = (102, 51, 153)
    LEFT_COLOR: Final[Color] = (122, 122, 244)
    RIGHT_COLOR: Final[Color] = (122, 244, 122)
    DEFAULT_IMAGE_BASENAME: Final[str] = "bean_counter"

    LOG_FORMAT: Final[str] = "%(levelname)s: %(message)s"
    USAGE: Final[str] = (
        "Usage: bean-counter slot_count bean_count <luck | skill> [debug]\n"
        "Example: bean-counter 10 400 luck\n"
        "Example: bean-counter 20 1000 skill debug"
    )
    PLOT_USAGE: Final[str] = (
        "Usage: bean-counter-plot slot_count bean_count <luck | skill> [output.png]\n"
        "Example: bean-counter-plot 10 400 luck histogram.png"
    )
