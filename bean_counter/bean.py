from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import List

from .config import MachineConfig, Position, SlotIndex


class Mode(Enum):
    LUCK = "luck"
    SKILL = "skill"

    @classmethod
    def parse(cls, text: str) -> Mode:
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"Unknown mode '{text}'. Must be one of "
                f"{[m.value for m in cls]}."
            ) from None


@dataclass(eq=False)
class Bean:
    """A single bean and its trajectory policy.

    Luck beans flip a fair coin at every peg. Skill beans pick a landing slot
    once, from a normal deviate centred on the middle slot, and walk right
    until they reach it.
    """

    slot_count: int
    mode: Mode
    rng: Random = field(repr=False)
    x_pos: Position = field(init=False, default=0)
    y_pos: Position = field(init=False, default=0)
    skill: SlotIndex = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.mode is Mode.SKILL:
            self.skill = self._draw_skill()

    def _draw_skill(self) -> SlotIndex:
        cfg = MachineConfig
        deviate = self.rng.gauss(cfg.SKILL_DEVIATE_MU, cfg.SKILL_DEVIATE_SIGMA)
        spread = math.sqrt(self.slot_count * cfg.SKILL_SPREAD_FACTOR)
        center = (self.slot_count - 1) / 2.0
        # Round half up: a zero deviate on 10 slots lands on slot 5.
        target = math.floor(deviate * spread + center + 0.5)
        return max(0, min(self.slot_count - 1, target))

    def reset(self) -> None:
        self.x_pos = 0
        self.y_pos = 0

    def advance(self, row: int) -> Position:
        if self.mode is Mode.LUCK:
            if self.rng.random() < MachineConfig.LUCK_RIGHT_PROBABILITY:
                self.x_pos += 1
        elif self.x_pos < self.skill:
            self.x_pos += 1
        self.y_pos = row + 1
        return self.x_pos

    def get_x_pos(self) -> Position:
        return self.x_pos


def create_bean(slot_count: int, mode: Mode, rng: Random) -> Bean:
    if slot_count < 1:
        raise ValueError(f"Slot count must be at least 1, got {slot_count}.")
    return Bean(slot_count, mode, rng)


def create_beans(
    slot_count: int, bean_count: int, mode: Mode, rng: Random
) -> List[Bean]:
    if bean_count < 0:
        raise ValueError(f"Bean count cannot be negative, got {bean_count}.")
    return [create_bean(slot_count, mode, rng) for _ in range(bean_count)]
