"""Domain Events emitted while a question fetch moves through its states.

Consumers (logging, tests, a future metrics sink) subscribe by passing an
event sink callable to the orchestrator.
"""

from dataclasses import dataclass, field
import time
from typing import Callable, Optional

# Base Event Class
@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass

EventSink = Callable[[DomainEvent], None]

# --- Question Fetch Events ---

@dataclass
class RequestDeferred(DomainEvent):
    """The rate gate is holding a dispatch back."""
    endpoint: str
    wait_time_seconds: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class RequestDispatched(DomainEvent):
    """A question request is about to go out."""
    endpoint: str
    attempt: int
    with_token: bool
    timestamp: float = field(default_factory=time.time)

@dataclass
class ResponseReceived(DomainEvent):
    """A question request completed with a decoded payload."""
    endpoint: str
    attempt: int
    response_code: object # Raw value, may lie outside the known taxonomy
    latency_ms: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class RecoveryTriggered(DomainEvent):
    """A recoverable code started the single corrective action."""
    response_code: int
    action: str # 'acquire' or 'reset'
    timestamp: float = field(default_factory=time.time)

@dataclass
class FetchCompleted(DomainEvent):
    """A logical fetch reached Done."""
    question_count: int
    attempts: int
    timestamp: float = field(default_factory=time.time)

@dataclass
class FetchFailed(DomainEvent):
    """A logical fetch reached Failed."""
    error_type: str
    error_message: str
    response_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)
