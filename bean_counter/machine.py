from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, MutableSequence, Sequence
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from .bean import Bean
from .config import Frequency, MachineConfig, Position, SlotIndex

NO_BEAN_IN_YPOS: int = MachineConfig.NO_BEAN_IN_YPOS


@dataclass
class BeanMachine:
    """Logical model of a bean counter (quincunx).

    Beans live in one of three places: the waiting queue, one of the
    ``slot_count`` peg rows, or one of the ``slot_count`` slots at the
    bottom. Coordinates are logical; for a 4-slot machine::

                         (0, 0)
                  (0, 1)        (1, 1)
           (0, 2)        (1, 2)        (2, 2)
     (0, 3)       (1, 3)        (2, 3)       (3, 3)
    [Slot0]       [Slot1]       [Slot2]      [Slot3]
    """

    slot_count: int
    _beans: List[Bean] = field(init=False, repr=False, default_factory=list)
    _waiting: Deque[Bean] = field(init=False, repr=False, default_factory=deque)
    _in_flight: MutableSequence[Optional[Bean]] = field(
        init=False, repr=False, default_factory=list
    )
    _slots: List[Deque[Bean]] = field(init=False, repr=False, default_factory=list)

    def __post_init__(self) -> None:
        self._clear_state()

    def _clear_state(self) -> None:
        self._waiting = deque()
        self._in_flight = [None] * self.slot_count
        self._slots = [deque() for _ in range(self.slot_count)]

    def _drop_first_waiting(self) -> bool:
        if not self._waiting:
            return False
        self._in_flight[0] = self._waiting.popleft()
        return True

    def reset(self, beans: Iterable[Bean]) -> None:
        """Hard reset: load ``beans`` and start with the first one at the top."""
        self._clear_state()
        self._beans = list(beans)
        for bean in self._beans:
            bean.reset()
            self._waiting.append(bean)
        self._drop_first_waiting()
        logging.debug(
            f"Machine reset with {len(self._beans)} beans "
            f"on {self.slot_count} slots."
        )

    def repeat(self) -> None:
        """Scoop up landed and in-flight beans and run the experiment again.

        Landed beans are queued first (slot 0 upward, landing order within a
        slot), then in-flight beans from row 0 downward.
        """
        for slot in self._slots:
            while slot:
                bean = slot.popleft()
                bean.reset()
                self._waiting.append(bean)
        for row, bean in enumerate(self._in_flight):
            if bean is not None:
                bean.reset()
                self._waiting.append(bean)
                self._in_flight[row] = None
        queued = len(self._waiting)
        self._drop_first_waiting()
        logging.debug(f"Machine repeat with {queued} beans queued.")

    def advance_step(self) -> bool:
        """Drop every in-flight bean one row and feed a new one at the top.

        Rows are visited bottom-up so a bean moved into row ``y + 1`` is not
        visited again in the same tick. Returns False once nothing moved,
        which means the experiment is over.
        """
        changed = False
        bottom = self.slot_count - 1
        for row in range(bottom, -1, -1):
            bean = self._in_flight[row]
            if bean is None:
                continue
            if row == bottom:
                self._slots[bean.get_x_pos()].append(bean)
            else:
                bean.advance(row)
                self._in_flight[row + 1] = bean
            self._in_flight[row] = None
            changed = True
        if self._drop_first_waiting():
            changed = True
        return changed

    def run(self) -> int:
        ticks = 0
        while self.advance_step():
            ticks += 1
        logging.debug(f"Machine settled after {ticks} steps.")
        return ticks

    def _remove_half(self, order: Sequence[SlotIndex]) -> Frequency:
        to_remove = self.get_in_slot_bean_count() // 2
        removed = to_remove
        for index in order:
            if to_remove == 0:
                break
            slot = self._slots[index]
            if len(slot) <= to_remove:
                to_remove -= len(slot)
                slot.clear()
            else:
                for _ in range(to_remove):
                    slot.popleft()
                to_remove = 0
        return removed

    def lower_half(self) -> None:
        """Keep the lower half of the landed beans (rounding the kept half up)."""
        removed = self._remove_half(range(self.slot_count - 1, -1, -1))
        logging.debug(f"Lower half kept; removed {removed} beans.")

    def upper_half(self) -> None:
        """Keep the upper half of the landed beans (rounding the kept half up)."""
        removed = self._remove_half(range(self.slot_count))
        logging.debug(f"Upper half kept; removed {removed} beans.")

    def _check_index(self, index: int, what: str) -> None:
        if not 0 <= index < self.slot_count:
            raise IndexError(
                f"{what} {index} out of range for {self.slot_count} slots."
            )

    def get_slot_count(self) -> int:
        return self.slot_count

    def get_remaining_bean_count(self) -> Frequency:
        return len(self._waiting)

    def get_in_flight_bean_x_pos(self, y_pos: Position) -> Position:
        self._check_index(y_pos, "Row")
        bean = self._in_flight[y_pos]
        if bean is None:
            return NO_BEAN_IN_YPOS
        return bean.get_x_pos()

    def get_in_flight_bean_count(self) -> Frequency:
        return sum(1 for bean in self._in_flight if bean is not None)

    def get_slot_bean_count(self, index: SlotIndex) -> Frequency:
        self._check_index(index, "Slot")
        return len(self._slots[index])

    def get_in_slot_bean_count(self) -> Frequency:
        return sum(len(slot) for slot in self._slots)

    def slot_counts(self) -> List[Frequency]:
        return [len(slot) for slot in self._slots]

    def get_average_slot_bean_count(self) -> float:
        """Mean slot index over landed beans, 0.0 when nothing has landed."""
        total = self.get_in_slot_bean_count()
        if total == 0:
            return 0.0
        weighted = sum(i * len(slot) for i, slot in enumerate(self._slots))
        return weighted / total


def create_machine(slot_count: int) -> BeanMachine:
    if slot_count < 1:
        raise ValueError(f"Slot count must be at least 1, got {slot_count}.")
    return BeanMachine(slot_count)
