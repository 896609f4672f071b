from enum import Enum


class Gesture(str, Enum):
    """Discrete hand pose reported by the classifier."""
    NONE  = "NONE"
    PINCH = "PINCH"
    OPEN  = "OPEN"


class SceneMode(str, Enum):
    """Target configuration of the particle field."""
    ASSEMBLED = "ASSEMBLED"
    EXPLODED  = "EXPLODED"

    @property
    def target_blend(self) -> float:
        return 1.0 if self is SceneMode.EXPLODED else 0.0

    def toggled(self) -> "SceneMode":
        return SceneMode.ASSEMBLED if self is SceneMode.EXPLODED else SceneMode.EXPLODED


class ParticleCategory(str, Enum):
    """Particle populations, each drawn as its own instanced mesh."""
    LEAF     = "LEAF"
    ORNAMENT = "ORNAMENT"
    RIBBON   = "RIBBON"
