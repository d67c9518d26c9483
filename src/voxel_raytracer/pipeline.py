"""Command line entry point: render one frame of the demo landscape."""

import math
import time
from pathlib import Path
from typing import List, Optional

from .scene.camera import Camera
from .scene.presets import build_materials, build_demo_scene, load_material_textures
from .scene.scene import Scene
from .shading.light import sun_light
from .shading.textures import SkyboxTextures, TextureManager
from .tracing.renderer import FrameRenderer, save_image
from .tracing.tracer import RayTracer
from .utils.config import RenderConfig

DEFAULT_EYE = (0.0, 10.0, 13.0)
DEFAULT_CENTER = (0.0, 2.0, 0.0)


def render_demo(
    config: RenderConfig,
    time_of_day: float = math.pi / 4.0,
    eye=DEFAULT_EYE,
    center=DEFAULT_CENTER,
    assets_dir: Optional[Path] = None,
    skybox_dir: Optional[Path] = None,
) -> Path:
    """Build the demo scene, render a frame and save it to ``config.output_path``.

    Args:
        config: Render configuration
        time_of_day: Sun angle in radians
        eye: Camera position
        center: Camera target
        assets_dir: Directory with block textures (flat colors if None)
        skybox_dir: Directory with the six skybox faces (gradient sky if None)

    Returns:
        Path of the written image
    """
    textures = TextureManager()
    materials = build_materials(assets_dir)
    if assets_dir is not None:
        n_loaded = load_material_textures(materials, textures)
        print(f"Loaded {n_loaded} textures from {assets_dir}")
    if skybox_dir is not None:
        textures.load_skybox(SkyboxTextures.from_directory(skybox_dir))
        print(f"Loaded skybox from {skybox_dir}")

    start = time.perf_counter()
    scene = Scene(build_demo_scene(materials), textures=textures)
    print(f"Built {scene} in {(time.perf_counter() - start) * 1000:.1f}ms")

    tracer = RayTracer(scene, config)
    renderer = FrameRenderer(tracer)
    camera = Camera(eye, center)
    light = sun_light(time_of_day)
    phase = "Day" if math.sin(time_of_day) > 0.0 else "Night"

    print(f"Rendering {config.width}x{config.height} ({phase}, sun intensity {light.intensity:.2f})...")
    start = time.perf_counter()
    buffer = renderer.render(config.width, config.height, camera, light)
    render_ms = (time.perf_counter() - start) * 1000
    print(f"Render time: {render_ms:.0f}ms")

    path = save_image(buffer, config.width, config.height, config.output_path)
    print(f"Saved {path}")
    return path


def main(argv: Optional[List[str]] = None):
    """Parse arguments and render the demo scene."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Ray trace the demo voxel landscape to an image"
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels"
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Image height in pixels"
    )
    parser.add_argument(
        "--time-of-day",
        type=float,
        default=math.pi / 4.0,
        help="Sun angle in radians (sin > 0 is day)"
    )
    parser.add_argument(
        "--eye",
        type=float,
        nargs=3,
        default=list(DEFAULT_EYE),
        help="Camera position"
    )
    parser.add_argument(
        "--center",
        type=float,
        nargs=3,
        default=list(DEFAULT_CENTER),
        help="Camera target"
    )
    parser.add_argument(
        "--assets-dir",
        type=Path,
        default=None,
        help="Directory with block textures (<name>.png)"
    )
    parser.add_argument(
        "--skybox",
        type=Path,
        default=None,
        help="Directory with skybox faces (front/back/left/right/top/bottom.png)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render processes (default: all CPUs)"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("render.png"),
        help="Output image path"
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar"
    )

    args = parser.parse_args(argv)

    config = RenderConfig(
        width=args.width,
        height=args.height,
        workers=args.workers,
        show_progress=not args.no_progress,
        output_path=args.output,
    )

    render_demo(
        config,
        time_of_day=args.time_of_day,
        eye=tuple(args.eye),
        center=tuple(args.center),
        assets_dir=args.assets_dir,
        skybox_dir=args.skybox,
    )


if __name__ == "__main__":
    main()
