from __future__ import annotations

from nsync.events import EventEmitter
from nsync.ports import IEventEmitter, IJobScheduler, ILoopScheduler
from nsync.primitives import ShortIdGenerator, UUID4Generator
from nsync.scheduling import JobScheduler, LoopScheduler


def test_implementations_satisfy_their_ports() -> None:
    assert isinstance(EventEmitter(), IEventEmitter)
    assert isinstance(LoopScheduler(), ILoopScheduler)
    assert isinstance(JobScheduler(), IJobScheduler)


def test_id_generators_produce_distinct_ids() -> None:
    short = ShortIdGenerator(length=8)
    ids = {short.next_id() for _ in range(100)}

    assert len(ids) == 100
    assert all(len(i) == 8 and i.isalnum() for i in ids)
    assert len(UUID4Generator().next_id()) == 36


def test_scheduler_uses_injected_id_generator() -> None:
    class Sequential:
        def __init__(self) -> None:
            self.count = 0

        def next_id(self) -> str:
            self.count += 1
            return f"job-{self.count}"

    generator = Sequential()
    scheduler = JobScheduler(id_generator=generator)
    scheduler.add("a")
    scheduler.add("b")

    assert generator.count == 2
