"""Unit tests for the SDF scene model.

Tests cover:
- Sphere and point distances
- Union selection and tie-breaking
- Recoloring
- Flattening for the GPU renderer
- Serialization
"""

import json
import math

import pytest

from sdf_marcher.core.color import BLUE, GREEN, RED, WHITE
from sdf_marcher.core.vector import Vec3, normalize, scale
from sdf_marcher.errors import ConfigError
from sdf_marcher.scene.sdf import (
    DEFAULT_MATERIAL,
    Material,
    PointMarker,
    PrimitiveKind,
    Recolor,
    SceneNode,
    Sphere,
    Union,
    colorize,
    flatten_scene,
    merge_all,
    merge_scenes,
    point_to_scene,
    scene_from_dict,
    scene_to_dict,
    sphere,
)


def _surface_points(center, radius):
    directions = [
        Vec3(1.0, 0.0, 0.0),
        Vec3(0.0, -1.0, 0.0),
        Vec3(0.0, 0.0, 1.0),
        normalize(Vec3(1.0, 1.0, 1.0)),
        normalize(Vec3(-0.3, 0.7, -2.0)),
    ]
    return [center + scale(radius, d) for d in directions]


class TestSphere:
    """Tests for the sphere primitive."""

    def test_distance_outside(self):
        distance, _ = sphere(Vec3(0.0, 0.0, 0.0), 1.0)(Vec3(0.0, 0.0, 5.0))
        assert distance == 4.0

    def test_distance_inside_is_negative(self):
        distance, _ = sphere(Vec3(0.0, 0.0, 0.0), 1.0)(Vec3(0.0, 0.5, 0.0))
        assert distance == -0.5

    @pytest.mark.parametrize(
        ("center", "radius"),
        [
            (Vec3(0.0, 0.0, 0.0), 1.0),
            (Vec3(1.0, -2.0, 3.0), 0.25),
            (Vec3(-10.0, 4.0, -3.0), 7.5),
        ],
    )
    def test_distance_on_surface_is_zero(self, center, radius):
        scene = sphere(center, radius)
        for point in _surface_points(center, radius):
            distance, _ = scene(point)
            assert abs(distance) < 1e-9

    def test_default_material(self):
        _, material = sphere((0, 0, 0), 1.0)(Vec3(3.0, 0.0, 0.0))
        assert material == DEFAULT_MATERIAL
        assert material.color == WHITE
        assert material.specular_lighting == 20.0
        assert material.gloss == 0.5

    def test_builder_coerces_sequences(self):
        s = sphere((1, 2, 3), 2)
        assert s == Sphere(Vec3(1.0, 2.0, 3.0), 2.0)

    def test_call_and_evaluate_agree(self):
        s = sphere((1, 2, 3), 2)
        p = Vec3(0.5, -1.0, 2.0)
        assert s(p) == s.evaluate(p)


class TestPointToScene:
    """Tests for the point marker."""

    def test_distance_is_euclidean(self):
        distance, material = point_to_scene((1.0, 2.0, 2.0))(Vec3(0.0, 0.0, 0.0))
        assert distance == 3.0
        assert material == DEFAULT_MATERIAL

    def test_distance_at_point_is_zero(self):
        distance, _ = point_to_scene((4.0, 5.0, 6.0))(Vec3(4.0, 5.0, 6.0))
        assert distance == 0.0


class TestMergeScenes:
    """Tests for CSG union."""

    def test_picks_nearer_first(self):
        a = colorize(RED, sphere((0, 0, 0), 1.0))
        b = colorize(BLUE, sphere((10, 0, 0), 1.0))
        distance, material = merge_scenes(a, b)(Vec3(2.0, 0.0, 0.0))
        assert distance == 1.0
        assert material.color == RED

    def test_picks_nearer_second(self):
        a = colorize(RED, sphere((0, 0, 0), 1.0))
        b = colorize(BLUE, sphere((10, 0, 0), 1.0))
        distance, material = merge_scenes(a, b)(Vec3(8.0, 0.0, 0.0))
        assert distance == 1.0
        assert material.color == BLUE

    def test_tie_favors_second(self):
        a = colorize(RED, sphere((-1, 0, 0), 0.5))
        b = colorize(BLUE, sphere((1, 0, 0), 0.5))
        point = Vec3(0.0, 3.0, 0.0)
        assert merge_scenes(a, b)(point) == b(point)
        assert merge_scenes(b, a)(point) == a(point)

    @pytest.mark.parametrize(
        "point",
        [
            Vec3(0.0, 0.0, 0.0),
            Vec3(3.0, -1.0, 2.0),
            Vec3(-5.0, 0.2, 0.1),
            Vec3(0.5, 0.5, 0.5),
        ],
    )
    def test_result_is_one_of_the_operands(self, point):
        a = colorize(GREEN, sphere((1, 1, 1), 0.7))
        b = sphere((-2, 0, 1), 1.5)
        result = merge_scenes(a, b)(point)
        da, db = a(point), b(point)
        expected = da if da[0] < db[0] else db
        assert result == expected

    def test_merge_all_matches_left_fold(self):
        scenes = [
            colorize(RED, sphere((0, 0, 0), 1.0)),
            colorize(GREEN, sphere((3, 0, 0), 1.0)),
            colorize(BLUE, sphere((6, 0, 0), 1.0)),
            colorize(WHITE, sphere((3, 0, 0), 1.0)),
            point_to_scene((1.5, 0, 0)),
        ]
        folded = scenes[0]
        for s in scenes[1:]:
            folded = merge_scenes(folded, s)
        balanced = merge_all(*scenes)
        for x in [-2.0, 0.0, 1.5, 2.9, 3.0, 4.5, 7.0]:
            point = Vec3(x, 0.5, 0.0)
            assert balanced(point) == folded(point)

    def test_merge_all_single_scene(self):
        s = sphere((0, 0, 0), 1.0)
        assert merge_all(s) is s

    def test_merge_all_empty_raises(self):
        with pytest.raises(ValueError):
            merge_all()


class TestColorize:
    """Tests for recoloring."""

    def test_replaces_color_keeps_other_fields(self):
        original = sphere((0, 0, 0), 1.0)
        for point in _surface_points(Vec3(0.0, 0.0, 0.0), 1.0):
            distance, material = colorize(BLUE, original)(point)
            _, original_material = original(point)
            assert abs(distance) < 1e-9
            assert material.color == BLUE
            assert material.specular_lighting == original_material.specular_lighting
            assert material.gloss == original_material.gloss

    def test_geometry_unchanged(self):
        original = sphere((1, 2, 3), 0.5)
        point = Vec3(4.0, -1.0, 0.0)
        assert colorize(RED, original)(point)[0] == original(point)[0]

    def test_keeps_custom_material_fields(self):
        shiny = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, Material(WHITE, 80.0, 0.9))
        _, material = colorize(GREEN, shiny)(Vec3(0.0, 0.0, 2.0))
        assert material == Material(GREEN, 80.0, 0.9)

    def test_outer_colorize_wins(self):
        scene = colorize(RED, colorize(BLUE, sphere((0, 0, 0), 1.0)))
        _, material = scene(Vec3(0.0, 0.0, 2.0))
        assert material.color == RED

    def test_recolors_whole_union(self):
        scene = colorize(GREEN, merge_scenes(sphere((0, 0, 0), 1.0), sphere((5, 0, 0), 1.0)))
        assert scene(Vec3(-2.0, 0.0, 0.0))[1].color == GREEN
        assert scene(Vec3(7.0, 0.0, 0.0))[1].color == GREEN


class TestFlattenScene:
    """Tests for flattening a scene tree into primitives."""

    def test_leaves_in_order(self):
        scene = merge_scenes(
            merge_scenes(sphere((0, 0, 0), 1.0), point_to_scene((1, 1, 1))),
            sphere((2, 0, 0), 0.5),
        )
        primitives = flatten_scene(scene)
        assert [p.kind for p in primitives] == [
            PrimitiveKind.SPHERE,
            PrimitiveKind.POINT,
            PrimitiveKind.SPHERE,
        ]
        assert primitives[1].center == Vec3(1.0, 1.0, 1.0)
        assert primitives[1].radius == 0.0
        assert primitives[2].radius == 0.5

    def test_recolor_applied_to_leaves(self):
        scene = merge_scenes(
            colorize(RED, sphere((0, 0, 0), 1.0)),
            colorize(BLUE, merge_scenes(sphere((3, 0, 0), 1.0), colorize(GREEN, sphere((6, 0, 0), 1.0)))),
        )
        colors = [p.material.color for p in flatten_scene(scene)]
        assert colors == [RED, BLUE, BLUE]

    def test_min_over_leaves_matches_tree(self):
        """Test that the last leaf with the minimal distance is what the tree returns."""
        scene = merge_scenes(
            colorize(RED, sphere((0, 0, 0), 1.0)),
            merge_scenes(colorize(GREEN, sphere((0, 0, 0), 1.0)), colorize(BLUE, sphere((4, 0, 0), 1.0))),
        )
        primitives = flatten_scene(scene)
        for point in [Vec3(0.0, 3.0, 0.0), Vec3(2.0, 0.0, 0.0), Vec3(5.0, 1.0, 0.0)]:
            best = None
            for p in primitives:
                d = math.sqrt(sum((a - b) ** 2 for a, b in zip(p.center, point))) - p.radius
                if best is None or d <= best[0]:
                    best = (d, p.material)
            distance, material = scene(point)
            assert abs(distance - best[0]) < 1e-12
            assert material == best[1]

    def test_unknown_node_raises(self):
        class Custom(SceneNode):
            def evaluate(self, position):
                return 0.0, DEFAULT_MATERIAL

        with pytest.raises(TypeError):
            flatten_scene(merge_scenes(sphere((0, 0, 0), 1.0), Custom()))


class TestSerialization:
    """Tests for scene_to_dict / scene_from_dict."""

    def test_json_round_trip(self):
        scene = merge_scenes(
            colorize(RED, sphere((0, 0, -3), 1.0)),
            merge_scenes(Sphere(Vec3(1.0, 1.0, -2.0), 0.1, Material(BLUE, 5.0, 0.1)), point_to_scene((10, 10, 7))),
        )
        data = json.loads(json.dumps(scene_to_dict(scene)))
        assert scene_from_dict(data) == scene

    def test_dict_layout(self):
        data = scene_to_dict(colorize(RED, sphere((0, 0, 0), 2.0)))
        assert data["type"] == "recolor"
        assert data["color"] == [1.0, 0.0, 0.0]
        assert data["child"]["type"] == "sphere"
        assert data["child"]["radius"] == 2.0

    def test_material_is_optional(self):
        scene = scene_from_dict({"type": "sphere", "center": [0, 0, 0], "radius": 1})
        assert scene == Sphere(Vec3(0.0, 0.0, 0.0), 1.0, DEFAULT_MATERIAL)

    def test_unknown_type_raises(self):
        with pytest.raises(ConfigError, match="Unknown scene node type"):
            scene_from_dict({"type": "torus"})

    def test_missing_key_raises(self):
        with pytest.raises(ConfigError, match="missing key"):
            scene_from_dict({"type": "union", "left": {"type": "point", "position": [0, 0, 0]}})

    def test_node_types(self):
        data = scene_to_dict(merge_scenes(point_to_scene((0, 0, 0)), sphere((1, 1, 1), 1.0)))
        scene = scene_from_dict(data)
        assert isinstance(scene, Union)
        assert isinstance(scene.left, PointMarker)
        assert isinstance(scene.right, Sphere)
        assert isinstance(colorize(RED, scene), Recolor)
