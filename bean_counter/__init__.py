"""Bean counter (quincunx / Galton box) simulation."""

from .bean import Bean, Mode, create_bean, create_beans
from .machine import NO_BEAN_IN_YPOS, BeanMachine, create_machine

__version__ = "0.1.0"

__all__ = [
    "Bean",
    "BeanMachine",
    "Mode",
    "NO_BEAN_IN_YPOS",
    "create_bean",
    "create_beans",
    "create_machine",
]
