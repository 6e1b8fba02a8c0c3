from __future__ import annotations

from .config import MachineConfig
from .machine import BeanMachine

FIELD_WIDTH: int = MachineConfig.X_SPACING + 1


def row_indent(slot_count: int, y_pos: int) -> int:
    root_indent = (slot_count - 1) * FIELD_WIDTH // 2 + FIELD_WIDTH
    return root_indent - FIELD_WIDTH // 2 * y_pos


def slot_string(machine: BeanMachine) -> str:
    return "".join(f"{count:{FIELD_WIDTH}d}" for count in machine.slot_counts())


def board_string(machine: BeanMachine) -> str:
    """Triangle of pegs with ``1`` above the peg holding a bean, slots last."""
    slot_count = machine.get_slot_count()
    lines = []
    for y_pos in range(slot_count):
        bean_x = machine.get_in_flight_bean_x_pos(y_pos)
        line = ""
        for x_pos in range(y_pos + 1):
            width = row_indent(slot_count, y_pos) if x_pos == 0 else FIELD_WIDTH
            line += f"{int(x_pos == bean_x):{width}d}"
        lines.append(line)
    return "\n".join(lines) + "\n" + slot_string(machine)
