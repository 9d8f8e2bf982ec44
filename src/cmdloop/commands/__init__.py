"""Command registration."""

from .registry import NO_OUTPUT, CommandContext, CommandDescriptor, CommandRegistry, NoOutput

__all__ = [
    "NO_OUTPUT",
    "CommandContext",
    "CommandDescriptor",
    "CommandRegistry",
    "NoOutput",
]
