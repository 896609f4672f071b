import numpy as np
import pytest

from domain.enums import ParticleCategory
from domain.models import ParticleRecord
from scene.particle_field import ParticleFieldGenerator, cone_radius, sample_sphere
from utils import constants as C

H, R = C.TREE_HEIGHT, C.TREE_RADIUS


def _radial(points):
    return np.hypot(points[:, 0], points[:, 2])


def test_default_population_sizes(full_field):
    assert len(full_field[ParticleCategory.LEAF]) == 5000
    assert len(full_field[ParticleCategory.ORNAMENT]) == 1000
    assert len(full_field[ParticleCategory.RIBBON]) == 1500
    assert full_field.total == 7500


def test_same_seed_same_field():
    a = ParticleFieldGenerator(np.random.default_rng(5), 50, 20, 30).generate()
    b = ParticleFieldGenerator(np.random.default_rng(5), 50, 20, 30).generate()
    for sa, sb in zip(a, b):
        np.testing.assert_array_equal(sa.assembled, sb.assembled)
        np.testing.assert_array_equal(sa.exploded, sb.exploded)
        np.testing.assert_array_equal(sa.colors, sb.colors)


def test_leaves_fill_the_cone(full_field):
    leaves = full_field[ParticleCategory.LEAF]
    y = leaves.assembled[:, 1]
    assert y.min() >= -H / 2 and y.max() <= H / 2
    assert np.all(_radial(leaves.assembled) <= cone_radius(y, H, R) + 1e-9)


def test_leaves_disk_sampling_is_uniform(full_field):
    # uniform in a disk → r/R_y ~ sqrt(U), so half the points lie beyond 0.707
    leaves = full_field[ParticleCategory.LEAF]
    y = leaves.assembled[:, 1]
    ratio = _radial(leaves.assembled) / cone_radius(y, H, R)
    assert np.median(ratio) == pytest.approx(np.sqrt(0.5), abs=0.03)


def test_ornaments_sit_on_inner_cone_surface(full_field):
    ornaments = full_field[ParticleCategory.ORNAMENT]
    y = ornaments.assembled[:, 1]
    np.testing.assert_allclose(_radial(ornaments.assembled), cone_radius(y, H, R) * 0.9, atol=1e-9)
    assert np.all(ornaments.phases[:, 2] == 0.0)


def test_ribbon_spirals_up(full_field):
    ribbon = full_field[ParticleCategory.RIBBON]
    n = len(ribbon)
    t = np.arange(n) / n
    jitter = C.RIBBON_JITTER / 2
    assert np.all(np.abs(ribbon.assembled[:, 1] - (-H / 2 + t * H)) <= jitter)

    angle = t * 2 * np.pi * C.RIBBON_TURNS
    radius = R * (1 - t) + C.RIBBON_OFFSET
    expected_x = radius * np.cos(angle)
    expected_z = radius * np.sin(angle)
    assert np.all(np.abs(ribbon.assembled[:, 0] - expected_x) <= jitter)
    assert np.all(np.abs(ribbon.assembled[:, 2] - expected_z) <= jitter)


@pytest.mark.parametrize("category, radius", [
    (ParticleCategory.LEAF, 25.0),
    (ParticleCategory.ORNAMENT, 30.0),
    (ParticleCategory.RIBBON, 35.0),
])
def test_exploded_positions_inside_sphere(full_field, category, radius):
    norms = np.linalg.norm(full_field[category].exploded, axis=1)
    assert norms.max() <= radius


def test_sphere_sampling_is_volume_uniform():
    pts = sample_sphere(np.random.default_rng(1), 20000, 10.0)
    r = np.linalg.norm(pts, axis=1)
    # uniform volume → P(r < R/2) = 1/8
    assert np.mean(r < 5.0) == pytest.approx(0.125, abs=0.01)


@pytest.mark.parametrize("category, bounds", [
    (ParticleCategory.LEAF, C.LEAF_SCALE),
    (ParticleCategory.ORNAMENT, C.ORNAMENT_SCALE),
    (ParticleCategory.RIBBON, C.RIBBON_SCALE),
])
def test_scales_within_category_range(full_field, category, bounds):
    scales = full_field[category].scales
    assert scales.min() >= bounds[0] > 0
    assert scales.max() < bounds[1]


@pytest.mark.parametrize("category, palette", [
    (ParticleCategory.LEAF, {C.HOT_PINK, C.LIGHT_PINK}),
    (ParticleCategory.ORNAMENT, {C.LAVENDER, C.WHITE}),
    (ParticleCategory.RIBBON, {C.WHITE}),
])
def test_colors_come_from_palette(full_field, category, palette):
    colors = {tuple(int(c) for c in rgb) for rgb in full_field[category].colors}
    assert colors == palette


def test_arrays_are_read_only(small_field):
    leaves = small_field[ParticleCategory.LEAF]
    with pytest.raises(ValueError):
        leaves.assembled[0, 0] = 99.0
    with pytest.raises(ValueError):
        leaves.scales[:] = 1.0


def test_record_view(small_field):
    ribbon = small_field[ParticleCategory.RIBBON]
    rec = ribbon.record(3)
    assert isinstance(rec, ParticleRecord)
    assert rec.category is ParticleCategory.RIBBON
    assert rec.anchor_assembled == tuple(ribbon.assembled[3])
    assert rec.scale == ribbon.scales[3]
    assert len(list(ribbon)) == len(ribbon)
