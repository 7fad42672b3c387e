# colorizer/core/domain/events.py
from datetime import datetime, timezone
from enum import Enum
from typing import Callable
import uuid

from pydantic import BaseModel, ConfigDict, Field

class EventType(str, Enum):
    """
    Registry of the notifications published by the colorizer.
    """
    # Rule content changed: rules replaced or added, find/logger rule swapped.
    # Switching the active rule set and removing a rule do not publish it.
    COLOR_RULES_CHANGED = "colorrule"

class ColorizerEvent(BaseModel):
    """
    The envelope delivered to change listeners.

    Attributes:
        id: Unique UUID, handy when a listener de-duplicates repaints.
        type: The classification of the event.
        rule_set: The active rule set name when the change happened.
        timestamp: When the event occurred (UTC).
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: EventType = EventType.COLOR_RULES_CHANGED
    rule_set: str
    timestamp: float = Field(default_factory=lambda: datetime.now(timezone.utc).timestamp())

    model_config = ConfigDict(use_enum_values=True, frozen=True)

# Subscribers receive one event per notifying call.
ChangeListener = Callable[[ColorizerEvent], None]
