"""Tests for the event bus."""

from __future__ import annotations

import unittest

from aichat.events import (
    MESSAGE_APPENDED,
    PENDING_CHANGED,
    SESSION_STATE_CHANGED,
    Event,
    EventBus,
)


class EventBusTests(unittest.IsolatedAsyncioTestCase):
    async def test_sync_and_async_handlers_run_in_subscription_order(self) -> None:
        bus = EventBus()
        received: list[tuple[str, Event]] = []

        async def async_handler(event: Event) -> None:
            received.append(("async", event))

        bus.subscribe(PENDING_CHANGED, lambda event: received.append(("sync", event)))
        bus.subscribe(PENDING_CHANGED, async_handler)
        published = await bus.publish(PENDING_CHANGED, {"value": 1}, source="test")

        self.assertEqual([kind for kind, _ in received], ["sync", "async"])
        self.assertIs(received[0][1], published)
        self.assertEqual(published.data, {"value": 1})
        self.assertEqual(published.source, "test")

    async def test_event_data_is_a_copy(self) -> None:
        bus = EventBus()
        payload = {"value": 1}
        event = await bus.publish(PENDING_CHANGED, payload)
        payload["value"] = 2
        self.assertEqual(event.data, {"value": 1})

    async def test_failing_handler_is_isolated(self) -> None:
        bus = EventBus()
        received: list[Event] = []

        def broken(event: Event) -> None:
            raise RuntimeError("nope")

        bus.subscribe(MESSAGE_APPENDED, broken)
        bus.subscribe(MESSAGE_APPENDED, received.append)
        with self.assertLogs("aichat.events.bus", level="ERROR") as logs:
            await bus.publish(MESSAGE_APPENDED, {})
        self.assertEqual(len(received), 1)
        self.assertTrue(any("event.handler.failed" in line for line in logs.output))

    async def test_unsubscribe_callable_is_idempotent(self) -> None:
        bus = EventBus()
        received: list[Event] = []
        unsubscribe = bus.subscribe(SESSION_STATE_CHANGED, received.append)

        unsubscribe()
        unsubscribe()
        await bus.publish(SESSION_STATE_CHANGED, {})

        self.assertEqual(received, [])

    async def test_unknown_event_names_are_rejected(self) -> None:
        bus = EventBus()
        with self.assertRaises(ValueError):
            bus.subscribe("conversation.typo", print)
        with self.assertRaises(ValueError):
            await bus.publish("conversation.typo", {})

    async def test_open_bus_accepts_any_name(self) -> None:
        bus = EventBus(known_events=None)
        received: list[Event] = []
        bus.subscribe("custom", received.append)
        await bus.publish("custom", {})
        self.assertEqual(len(received), 1)

    async def test_instances_are_independent(self) -> None:
        first, second = EventBus(), EventBus()
        received: list[Event] = []
        first.subscribe(MESSAGE_APPENDED, received.append)
        await second.publish(MESSAGE_APPENDED, {})
        self.assertEqual(received, [])


if __name__ == "__main__":
    unittest.main()
