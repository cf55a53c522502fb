"""Message channel between the date picker and the timeline window.

The picker posts plain dicts such as ``{"type": "from", "dateStr": ...}``;
the window drains them with :func:`apply_pending`, which applies each
through :func:`handle_message`.
"""

from __future__ import annotations

import enum
import logging
import queue
from dataclasses import dataclass
from typing import Callable

from settings import WidgetState
from timeline_logic import InvalidDateError, parse_date

logger = logging.getLogger(__name__)

END_BEFORE_START = "Please choose an end date after the start date."


class MessageError(ValueError):
    """Raised for a message with an unknown tag or malformed fields."""


class MessageType(enum.Enum):
    RESIZE = "resize"
    FROM = "from"
    TO = "to"


@dataclass(frozen=True)
class Message:
    type: MessageType
    width: int | None = None
    height: int | None = None
    date_str: str | None = None

    @classmethod
    def from_dict(cls, raw: dict) -> "Message":
        if not isinstance(raw, dict):
            raise MessageError(f"Message must be a mapping, got {type(raw).__name__}")
        try:
            kind = MessageType(raw.get("type"))
        except ValueError:
            raise MessageError(f"Unknown message type {raw.get('type')!r}") from None

        if kind is MessageType.RESIZE:
            width, height = raw.get("width"), raw.get("height")
            for name, value in (("width", width), ("height", height)):
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    raise MessageError(f"resize needs a positive integer {name}")
            return cls(kind, width=width, height=height)

        date_str = raw.get("dateStr")
        if not isinstance(date_str, str):
            raise MessageError(f"{kind.value} needs a dateStr string")
        return cls(kind, date_str=date_str)


class MessageChannel:
    """Thread-safe FIFO of raw messages."""

    def __init__(self) -> None:
        self._queue: queue.Queue[dict] = queue.Queue()

    def post(self, raw: dict) -> None:
        self._queue.put(raw)

    def drain(self) -> list[dict]:
        """Return every pending message, oldest first."""
        pending: list[dict] = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending


def handle_message(
    msg: Message,
    state: WidgetState,
    notify: Callable[..., None],
    resize: Callable[[int, int], None],
) -> bool:
    """Apply *msg* to *state*; return True when the state changed.

    *notify* is called as ``notify(text, error=True)`` when a date is
    rejected.  A start date is taken as-is; an end date before the stored
    start is refused.
    """
    if msg.type is MessageType.RESIZE:
        resize(msg.width, msg.height)
        return False

    try:
        value = parse_date(msg.date_str)
    except InvalidDateError as exc:
        notify(str(exc), error=True)
        return False

    if msg.type is MessageType.FROM:
        state.set("from", value)
        return True

    start, _end = state.date_range()
    if start > value:
        logger.info("Rejected end date %s before start %s", value, start)
        notify(END_BEFORE_START, error=True)
        return False
    state.set("to", value)
    return True


def apply_pending(
    channel: MessageChannel,
    state: WidgetState,
    notify: Callable[..., None],
    resize: Callable[[int, int], None],
) -> bool:
    """Drain *channel* and apply each message; return True if state changed.

    Malformed messages are logged and dropped; the rest of the batch
    still applies.
    """
    changed = False
    for raw in channel.drain():
        try:
            msg = Message.from_dict(raw)
        except MessageError as exc:
            logger.warning("Dropping message %r: %s", raw, exc)
            continue
        changed |= handle_message(msg, state, notify, resize)
    return changed
