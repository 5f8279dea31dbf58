import logging
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from duel.application.services.event_bus import EventBus, log_event
from duel.domain.events import OpponentDefeated, PlayerFell


class EventBusTests(unittest.TestCase):
    def test_handlers_receive_matching_events_and_wildcards_receive_all(self) -> None:
        bus = EventBus()
        typed: list[object] = []
        everything: list[object] = []
        bus.subscribe(OpponentDefeated, typed.append)
        bus.subscribe_all(everything.append)

        bus.publish(OpponentDefeated("Ayla", "Draco", 3))
        bus.publish(PlayerFell("Ayla", "Bellatrix", 5))

        self.assertEqual(1, len(typed))
        self.assertEqual(2, len(everything))

    def test_failing_handler_is_isolated_and_logged(self) -> None:
        bus = EventBus()
        received: list[object] = []

        def _boom(_event) -> None:
            raise RuntimeError("handler failed")

        bus.subscribe(OpponentDefeated, _boom)
        bus.subscribe(OpponentDefeated, received.append)

        with self.assertLogs("duel.application.services.event_bus", level=logging.ERROR):
            failures = bus.publish(OpponentDefeated("Ayla", "Draco", 3))

        self.assertEqual(1, len(received))
        self.assertEqual(["handler failed"], [str(exc) for exc in failures])
        self.assertEqual([], bus.publish(PlayerFell("Ayla", "Draco", 2)))

    def test_log_event_writes_event_fields(self) -> None:
        with self.assertLogs("duel.events", level=logging.INFO) as captured:
            log_event(PlayerFell("Ayla", "Bellatrix", 5))

        self.assertIn("PlayerFell", captured.output[0])
        self.assertIn("Bellatrix", captured.output[0])


if __name__ == "__main__":
    unittest.main()
