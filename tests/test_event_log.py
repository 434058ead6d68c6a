"""Unit tests for EventLog."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wavespawn.utils.event_log import EventLog, SimEvent


def _ev(tick, category="spawn"):
    return SimEvent(tick=tick, category=category, message=f"{category}@{tick}")


class TestEventLog:
    def test_since_tick(self):
        log = EventLog()
        log.append_many([_ev(1), _ev(2), _ev(3)])
        assert [e.tick for e in log.since_tick(2)] == [2, 3]

    def test_by_category(self):
        log = EventLog()
        log.append(_ev(1, "spawn"))
        log.append(_ev(2, "retire"))
        assert [e.category for e in log.by_category("retire")] == ["retire"]

    def test_bounded(self):
        log = EventLog(maxlen=3)
        for t in range(5):
            log.append(_ev(t))
        assert len(log) == 3
        assert [e.tick for e in log.latest()] == [2, 3, 4]

    def test_latest_and_clear(self):
        log = EventLog()
        log.append_many([_ev(t) for t in range(10)])
        assert [e.tick for e in log.latest(2)] == [8, 9]
        log.clear()
        assert len(log) == 0

    def test_for_entity_and_counts(self):
        log = EventLog()
        log.append(SimEvent(tick=0, category="spawn", message="s", entity_ids=(1,)))
        log.append(SimEvent(tick=0, category="spawn", message="s", entity_ids=(2,)))
        log.append(SimEvent(tick=5, category="retire", message="r", entity_ids=(1,)))
        assert [e.category for e in log.for_entity(1)] == ["spawn", "retire"]
        assert log.counts() == {"spawn": 2, "retire": 1}
