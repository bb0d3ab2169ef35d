import pytest

from preview_plotly import create_scene_preview, rgb, sphere_surface
from scene import default_scene

def test_sphere_surface_points_lie_on_sphere():
    center = (1.0, -2.0, 3.0)
    x, y, z = sphere_surface(center, 2.0, steps=6)
    assert len(x) == 7 and len(x[0]) == 7
    for row in range(7):
        for col in range(7):
            d2 = (x[row][col] - 1.0) ** 2 + (y[row][col] + 2.0) ** 2 + (z[row][col] - 3.0) ** 2
            assert d2 == pytest.approx(4.0)

def test_rgb_clamps():
    assert rgb((1.0, 0.0, 2.0)) == "rgb(255, 0, 255)"

def test_preview_has_trace_per_sphere_and_light():
    scene = default_scene()
    fig = create_scene_preview(scene)

    names = [trace.name for trace in fig.data]
    assert names == [
        "Sphere 1", "Sphere 2", "Sphere 3", "Sphere 4",
        "Light 1", "Light 2", "Light 3",
        "Camera", "Camera Look",
    ]
    assert [trace.type for trace in fig.data[:4]] == ["surface"] * 4
    # Only the glass sphere is translucent
    assert [trace.opacity for trace in fig.data[:4]] == [1.0, 0.4, 1.0, 1.0]
