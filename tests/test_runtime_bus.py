from __future__ import annotations

from runtime_bus import topics
from runtime_bus.bus import RuntimeBus


def test_publish_reaches_subscribers_in_order() -> None:
    bus = RuntimeBus()
    seen: list[str] = []
    bus.subscribe(topics.WORKSPACE_CREATED, lambda env: seen.append(f"a:{env.get('name')}"))
    bus.subscribe(topics.WORKSPACE_CREATED, lambda env: seen.append(f"b:{env.get('name')}"))
    bus.subscribe(topics.WORKSPACE_KILLED, lambda env: seen.append("killed"))

    envelope = bus.publish(topics.WORKSPACE_CREATED, {"name": "temp"}, "test")

    assert seen == ["a:temp", "b:temp"]
    assert envelope.type == topics.WORKSPACE_CREATED
    assert envelope.source == "test"


def test_failing_handler_does_not_stop_others() -> None:
    bus = RuntimeBus()
    seen: list[int] = []

    def _boom(_env) -> None:
        raise RuntimeError("boom")

    bus.subscribe(topics.WORKSPACE_SWITCHED, _boom)
    bus.subscribe(topics.WORKSPACE_SWITCHED, lambda env: seen.append(env.seq))
    bus.publish(topics.WORKSPACE_SWITCHED, None, "test")
    assert len(seen) == 1


def test_unsubscribe_and_counts() -> None:
    bus = RuntimeBus()
    sub_ids = bus.subscribe_many(topics.WORKSPACE_MUTATION_TOPICS, lambda env: None)
    assert len(sub_ids) == len(topics.WORKSPACE_MUTATION_TOPICS)
    assert bus.subscriber_count(topics.WORKSPACE_RENAMED) == 1
    for sub_id in sub_ids:
        bus.unsubscribe(sub_id)
    assert bus.subscriber_count(topics.WORKSPACE_RENAMED) == 0
    bus.unsubscribe("missing")


def test_sequence_numbers_increase_and_replay_last() -> None:
    bus = RuntimeBus()
    first = bus.publish(topics.WORKSPACE_NEXT, {"name": "a"}, "test")
    second = bus.publish(topics.WORKSPACE_NEXT, {"name": "b"}, "test")
    assert second.seq > first.seq

    replayed: list[object] = []
    bus.subscribe(topics.WORKSPACE_NEXT, lambda env: replayed.append(env.get("name")), replay_last=True)
    assert replayed == ["b"]
    assert second.to_dict()["payload"] == {"name": "b"}
