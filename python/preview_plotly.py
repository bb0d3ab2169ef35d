"""
Interactive 3D preview of the scene using Plotly.
Helps verify geometry before rendering.
"""
import math
import os

import plotly.graph_objects as go

from geometry import to_byte
from scene import Scene, build_scene, default_scene, load_scene, validate_scene

def sphere_surface(center, radius, steps: int = 24):
    """Grid of points on a sphere for go.Surface."""
    x, y, z = [], [], []
    for i in range(steps + 1):
        theta = math.pi * i / steps
        row_x, row_y, row_z = [], [], []
        for j in range(steps + 1):
            phi = 2 * math.pi * j / steps
            row_x.append(center[0] + radius * math.sin(theta) * math.cos(phi))
            row_y.append(center[1] + radius * math.cos(theta))
            row_z.append(center[2] + radius * math.sin(theta) * math.sin(phi))
        x.append(row_x)
        y.append(row_y)
        z.append(row_z)
    return x, y, z

def rgb(color) -> str:
    r, g, b = (to_byte(c) for c in color)
    return f"rgb({r}, {g}, {b})"

def create_scene_preview(scene: Scene):
    """Create interactive 3D plot of scene."""
    fig = go.Figure()

    # Spheres
    for i, obj in enumerate(scene.objects):
        material = obj.get_material()
        x, y, z = sphere_surface(obj.get_position(), obj.radius)
        color = rgb(material.color)
        fig.add_trace(go.Surface(
            x=x, y=y, z=z,
            colorscale=[[0, color], [1, color]],
            showscale=False,
            # Glass reads as translucent
            opacity=0.4 if material.refractive_index != 1.0 else 1.0,
            name=f'Sphere {i+1}'
        ))

    # Lights
    for i, light in enumerate(scene.lights):
        pos = light.position
        fig.add_trace(go.Scatter3d(
            x=[pos[0]],
            y=[pos[1]],
            z=[pos[2]],
            mode='markers',
            marker=dict(size=5 + 5 * light.intensity, color='yellow', symbol='circle'),
            name=f'Light {i+1}'
        ))

    # Camera is fixed at the origin looking down -Z
    fig.add_trace(go.Scatter3d(
        x=[0.0],
        y=[0.0],
        z=[0.0],
        mode='markers',
        marker=dict(size=10, color='red', symbol='diamond'),
        name='Camera'
    ))

    fig.add_trace(go.Scatter3d(
        x=[0.0, 0.0],
        y=[0.0, 0.0],
        z=[0.0, -5.0],
        mode='lines',
        line=dict(color='red', width=3, dash='dash'),
        name='Camera Look'
    ))

    fig.update_layout(
        title="Scene Preview (Interactive 3D)",
        scene=dict(
            xaxis_title="X",
            yaxis_title="Y",
            zaxis_title="Z",
            aspectmode='data'
        ),
        width=1000,
        height=800
    )

    return fig

if __name__ == "__main__":
    if os.path.exists("../scene.json"):
        scene_data = load_scene("../scene.json")
        validate_scene(scene_data)
        scene = build_scene(scene_data)
    else:
        scene = default_scene()
    fig = create_scene_preview(scene)
    fig.show()
