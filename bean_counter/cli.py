from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from random import Random
from typing import List, Optional, Sequence, TextIO

from .bean import Mode, create_beans
from .config import MachineConfig
from .histogram import SlotHistogram
from .machine import BeanMachine, create_machine
from .render import board_string, slot_string

EXIT_USAGE: int = 2


@dataclass(frozen=True)
class Arguments:
    slot_count: int
    bean_count: int
    mode: Mode
    extra: Optional[str] = None


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=MachineConfig.LOG_FORMAT,
        force=True,
    )


def parse_arguments(argv: Sequence[str]) -> Optional[Arguments]:
    """Returns None when ``argv`` does not match ``slot bean mode [extra]``."""
    if len(argv) not in (3, 4):
        return None
    try:
        slot_count = int(argv[0])
        bean_count = int(argv[1])
        mode = Mode.parse(argv[2])
    except ValueError:
        return None
    if slot_count < 1 or bean_count < 0:
        return None
    extra = argv[3] if len(argv) == 4 else None
    return Arguments(slot_count, bean_count, mode, extra)


def run_experiment(
    slot_count: int,
    bean_count: int,
    mode: Mode,
    rng: Optional[Random] = None,
    debug: bool = False,
    out: Optional[TextIO] = None,
) -> BeanMachine:
    out = out if out is not None else sys.stdout
    rng = rng if rng is not None else Random()
    machine = create_machine(slot_count)
    machine.reset(create_beans(slot_count, bean_count, mode, rng))
    if debug:
        print(board_string(machine), file=out)
    ticks = 0
    while machine.advance_step():
        ticks += 1
        if debug:
            print(board_string(machine), file=out)
    logging.info(
        f"Dropped {bean_count} {mode.value} beans on {slot_count} slots "
        f"in {ticks} steps; average slot {machine.get_average_slot_bean_count():.3f}."
    )
    return machine


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = parse_arguments(argv)
    if args is None:
        print(MachineConfig.USAGE)
        return EXIT_USAGE
    debug = args.extra == "debug"
    setup_logging(debug)
    try:
        machine = run_experiment(
            args.slot_count, args.bean_count, args.mode, debug=debug
        )
    except Exception as exc:
        logging.exception(f"Fatal error: {exc}.")
        raise
    print("Slot bean counts:")
    print(slot_string(machine))
    return 0


def plot_main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = parse_arguments(argv)
    if args is None:
        print(MachineConfig.PLOT_USAGE)
        return EXIT_USAGE
    setup_logging()
    try:
        machine = run_experiment(args.slot_count, args.bean_count, args.mode)
        saved_path = SlotHistogram(machine).save_image(args.extra)
    except (OSError, ValueError) as exc:
        logging.error(f"Histogram export failed: {exc}")
        return 1
    print(saved_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
