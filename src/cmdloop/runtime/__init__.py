"""Interactive session runtime."""

from .history import History, should_record
from .virtual_input import InputActor, LineSource, VirtualStdin, active_input, virtual_input

__all__ = [
    "History",
    "InputActor",
    "LineSource",
    "VirtualStdin",
    "active_input",
    "should_record",
    "virtual_input",
]
