"""Runtime values of the Lox virtual machine.

Values are plain Python objects: ``None`` is nil, ``bool`` is a boolean
and ``float`` is a number.
"""

from __future__ import annotations

from typing import Union

Value = Union[None, bool, float]


def is_number(value: object) -> bool:
    """Return True if *value* is a Lox number (booleans are not numbers)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_value(value: Value) -> str:
    """Render a value the way the VM prints it; numbers use ``%g``."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    return "%g" % value