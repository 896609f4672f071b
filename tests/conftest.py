import numpy as np
import pytest

from scene.particle_field import ParticleField, ParticleFieldGenerator


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(7)


@pytest.fixture
def small_field() -> ParticleField:
    return ParticleFieldGenerator(
        np.random.default_rng(11), leaf_count=300, ornament_count=60, ribbon_count=90,
    ).generate()


@pytest.fixture(scope="module")
def full_field() -> ParticleField:
    return ParticleFieldGenerator(np.random.default_rng(3)).generate()
