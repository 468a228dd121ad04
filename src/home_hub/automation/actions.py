"""
Action expression parser.

An action expression encodes one command invocation as text:

    turnOff(1)
    setTemp(2, 68)

The first argument is always the target device id; any further arguments
are passed to the command in order.
"""

from dataclasses import dataclass
from typing import Tuple

from home_hub.core.errors import MalformedAction


@dataclass(frozen=True)
class ParsedAction:
    """A parsed action expression."""

    command: str
    device_id: int
    args: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.command}({', '.join((str(self.device_id),) + self.args)})"


def parse_action(text: str) -> ParsedAction:
    """
    Parse an action expression.

    Args:
        text: Expression such as "setTemp(2, 68)"

    Returns:
        The parsed command, device id and remaining arguments

    Raises:
        MalformedAction: If the parentheses, command name or device id
            are missing, or the device id is not an integer
    """
    action = text.strip()
    open_idx = action.find("(")
    if open_idx < 0:
        raise MalformedAction(text, "missing '('")
    if not action.endswith(")"):
        raise MalformedAction(text, "missing closing ')'")

    command = action[:open_idx].strip()
    if not command:
        raise MalformedAction(text, "missing command name")

    interior = action[open_idx + 1 : -1].strip()
    if not interior:
        raise MalformedAction(text, "missing device id")

    tokens = [token.strip() for token in interior.split(",")]
    try:
        device_id = int(tokens[0])
    except ValueError:
        raise MalformedAction(text, f"device id {tokens[0]!r} is not an integer") from None

    return ParsedAction(command=command, device_id=device_id, args=tuple(tokens[1:]))
