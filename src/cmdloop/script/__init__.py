"""Script files."""

from .parser import echo_lines, parse_script

__all__ = ["echo_lines", "parse_script"]
