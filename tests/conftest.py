import random

import pytest

from grid import Grid
from simulation import SnakeSimulation


@pytest.fixture
def sim():
    """A running 40x30 game with no obstacles and food parked far from the snake."""
    simulation = SnakeSimulation(Grid(40, 30), rng=random.Random(1234))
    simulation.start("Tester")
    simulation.run.obstacles = set()
    simulation.run.food = (30, 25)
    return simulation
