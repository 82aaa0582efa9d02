"""Configuration for the screen loop."""

from __future__ import annotations

import os
from dataclasses import dataclass

from termgrid.errors import InvalidParameterError
from termgrid.style import DEFAULT_STYLE, Style


@dataclass
class ScreenConfig:
    """Screen loop settings.

    ``redraw_delay`` is the pause after every flush to the terminal, in
    seconds.  A ``key_queue_size`` of 0 leaves the key queue unbounded.
    """

    bg_style: Style = DEFAULT_STYLE
    origin_x: int = 0
    origin_y: int = 0
    redraw_delay: float = 0.1
    key_queue_size: int = 0
    close_timeout: float = 1.0
    enable_mouse: bool = True

    def __post_init__(self) -> None:
        if self.redraw_delay < 0:
            raise InvalidParameterError("redraw_delay", "must be non-negative")
        if self.key_queue_size < 0:
            raise InvalidParameterError("key_queue_size", "must be non-negative")
        if self.close_timeout <= 0:
            raise InvalidParameterError("close_timeout", "must be positive")

    @classmethod
    def from_env(cls, **overrides: object) -> ScreenConfig:
        """Build a config from ``TERMGRID_*`` environment variables.

        Keyword arguments win over the environment.
        """
        values: dict[str, object] = {}

        delay = os.environ.get("TERMGRID_REDRAW_DELAY")
        if delay:
            values["redraw_delay"] = float(delay)

        queue_size = os.environ.get("TERMGRID_KEY_QUEUE_SIZE")
        if queue_size:
            values["key_queue_size"] = int(queue_size)

        if os.environ.get("TERMGRID_NO_MOUSE"):
            values["enable_mouse"] = False

        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
