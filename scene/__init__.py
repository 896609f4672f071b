"""
Generación y animación del campo de partículas
"""

from .backdrop import StarShell, build_backdrop
from .particle_field import ParticleField, ParticleFieldGenerator, ParticleSet
from .particle_animator import ParticleAnimator
from .renderer import InstanceRenderer
from .snowfall import Snowfall
from .top_star import TopStar

__all__ = [
    'StarShell',
    'build_backdrop',
    'ParticleField',
    'ParticleFieldGenerator',
    'ParticleSet',
    'ParticleAnimator',
    'InstanceRenderer',
    'Snowfall',
    'TopStar',
]
