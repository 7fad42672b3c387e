# colorizer/core/ports/colorizer.py
from typing import Any, Optional, Protocol

from colorizer.core.domain.events import ChangeListener
from colorizer.core.domain.models import Color

class IColorizer(Protocol):
    """
    The read side consumed by renderers (table cells, detail panes).
    RuleColorizer is the rule-driven implementation.
    """

    def get_background_color(self, event: Any) -> Optional[Color]:
        """Returns the background for `event`, or None to keep the default."""
        ...

    def get_foreground_color(self, event: Any) -> Optional[Color]:
        """Returns the foreground for `event`, or None to keep the default."""
        ...

    def add_change_listener(self, listener: ChangeListener) -> None:
        ...

    def remove_change_listener(self, listener: ChangeListener) -> None:
        ...
