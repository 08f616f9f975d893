"""Simulation timing."""

from simulation.clock import SimulationClock

__all__ = ["SimulationClock"]
