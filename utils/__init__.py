"""
Utilidades compartidas: geometría y constantes de ajuste
"""

from .geometry import approach_factor, clamp, damp, dist3, lerp

__all__ = [
    'approach_factor',
    'clamp',
    'damp',
    'dist3',
    'lerp',
]
