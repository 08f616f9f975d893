# tests/test_io_worker.py

from pathlib import Path

from game_state.io_worker import PersistenceWorker
from game_state.persistence import PlanetOpenError
from game_state.planet import Planet
from world.terrain import Biome


def test_save_then_load_in_order(tmp_path: Path) -> None:
    worker = PersistenceWorker()
    planet = Planet.new(6, 6)
    planet.set_biome((0, 0), Biome.DESERT)
    path = str(tmp_path / "planet.npz")
    try:
        worker.submit_save(planet.copy(), path)
        worker.submit_load(path)
        assert worker.busy
        worker.wait(timeout=10)

        results = worker.poll()
        assert [r.op for r in results] == ["save", "load"]
        assert all(r.ok for r in results)
        assert results[1].planet == planet
        assert not worker.busy
        assert worker.poll() == []
    finally:
        worker.shutdown()


def test_failed_load_is_reported(tmp_path: Path) -> None:
    worker = PersistenceWorker()
    try:
        worker.submit_load(str(tmp_path / "missing.npz"))
        worker.wait(timeout=10)
        (result,) = worker.poll()
        assert not result.ok
        assert result.planet is None
        assert isinstance(result.error, PlanetOpenError)
    finally:
        worker.shutdown()
