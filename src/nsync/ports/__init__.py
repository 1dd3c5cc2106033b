from .event_emitter import IEventEmitter
from .loop import ILoopScheduler
from .scheduler import IJobScheduler, ProcessFn

__all__ = [
    "IEventEmitter",
    "IJobScheduler",
    "ILoopScheduler",
    "ProcessFn",
]
