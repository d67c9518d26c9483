"""Basic usage example for the voxel ray tracer."""

import math
from pathlib import Path

from voxel_raytracer import Box, Camera, FrameRenderer, Material, RayTracer, RenderConfig, Scene, sun_light
from voxel_raytracer.scene import build_demo_scene
from voxel_raytracer.tracing import save_image


def example_custom_scene():
    """Render a small hand-built scene."""
    # Materials are shared between boxes
    floor = Material(diffuse=(0.5, 0.5, 0.5), albedo=(0.8, 0.2), specular=8.0)
    mirror = Material(diffuse=(0.9, 0.9, 0.9), albedo=(0.1, 0.9), specular=200.0, reflectivity=0.8)
    lamp = Material(diffuse=(1.0, 0.8, 0.3), albedo=(0.3, 0.1), specular=10.0,
                    emission=(2.0, 1.5, 0.5))

    boxes = [Box((-4.0, -1.0, -4.0), (4.0, 0.0, 4.0), floor)]
    boxes += [Box.cube((x, 0.5, 0.0), 1.0, mirror) for x in (-1.5, 1.5)]
    boxes.append(Box.cube((0.0, 0.3, 1.5), 0.3, lamp))

    config = RenderConfig(
        width=320,
        height=240,
        output_path=Path("output/custom_scene.png")
    )

    scene = Scene(boxes)
    print(f"Built {scene}")

    renderer = FrameRenderer(RayTracer(scene, config))
    camera = Camera(eye=(0.0, 3.0, 6.0), center=(0.0, 0.5, 0.0))
    buffer = renderer.render(config.width, config.height, camera, sun_light(1.0))

    path = save_image(buffer, config.width, config.height, config.output_path)
    print(f"Saved {path}")


def example_day_night_cycle():
    """Render the demo landscape at several times of day."""
    config = RenderConfig(width=160, height=120)
    tracer = RayTracer(Scene(build_demo_scene()), config)
    renderer = FrameRenderer(tracer)
    camera = Camera(eye=(0.0, 10.0, 13.0), center=(0.0, 2.0, 0.0))

    for step in range(4):
        time_of_day = step * math.pi / 2.0
        buffer = renderer.render(config.width, config.height, camera, sun_light(time_of_day))
        path = save_image(buffer, config.width, config.height,
                          Path("output/day_night") / f"frame_{step}.png")
        print(f"time_of_day={time_of_day:.2f} -> {path}")


if __name__ == "__main__":
    print("=== Custom scene ===")
    example_custom_scene()

    print("\n=== Day/night cycle ===")
    example_day_night_cycle()
