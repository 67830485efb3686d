"""
Events module - logowanie rozstrzygnięć targetingu do formatu JSON.

Zawiera:
- TraceEvent: Dataclass reprezentująca zdarzenie
- EventType: Enum typów zdarzeń
- EventLogger: Klasa logująca zdarzenia
"""

from .event_logger import TraceEvent, EventType, EventLogger

__all__ = ["TraceEvent", "EventType", "EventLogger"]
