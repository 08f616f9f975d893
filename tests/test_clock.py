# tests/test_clock.py

import pytest

from simulation.clock import SimulationClock


def test_fires_once_per_interval() -> None:
    clock = SimulationClock(interval=2.0)
    assert clock.update(1.0) is False
    assert clock.update(0.5) is False
    assert clock.update(0.5) is True
    assert clock.pending == pytest.approx(0.0)


def test_backlog_drains_one_tick_per_poll() -> None:
    clock = SimulationClock(interval=2.0)
    assert clock.update(5.0) is True
    assert clock.pending == pytest.approx(3.0)
    assert clock.update(0.0) is True
    assert clock.pending == pytest.approx(1.0)
    assert clock.update(0.0) is False


def test_reset() -> None:
    clock = SimulationClock()
    clock.update(1.5)
    clock.reset()
    assert clock.pending == 0.0


@pytest.mark.parametrize("interval", [0.0, -1.0])
def test_rejects_non_positive_interval(interval: float) -> None:
    with pytest.raises(ValueError):
        SimulationClock(interval=interval)
