"""Frame rendering: one primary ray per pixel, spread over worker processes."""

import os
import warnings
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image
from tqdm import tqdm

from ..geometry.vectors import normalize
from ..scene.camera import Camera
from ..shading.light import Light
from .tracer import RayTracer

# Color written for samples that came out non-finite
FALLBACK_COLOR = np.zeros(3, dtype=np.float64)

# Tracer installed in each worker process by the pool initializer
_WORKER_TRACER: Optional[RayTracer] = None


def _init_worker(tracer: RayTracer) -> None:
    global _WORKER_TRACER
    _WORKER_TRACER = tracer


def _render_chunk(args):
    """Worker entry point: render rows [y_start, y_end)."""
    y_start, y_end, width, height, camera, light = args
    return y_start, render_rows(_WORKER_TRACER, camera, light, width, height, y_start, y_end)


def render_rows(
    tracer: RayTracer,
    camera: Camera,
    light: Light,
    width: int,
    height: int,
    y_start: int,
    y_end: int
) -> np.ndarray:
    """Trace the primary rays of rows [y_start, y_end).

    Screen coordinates span [-1, 1] from the left/top edge, scaled by the
    aspect ratio and tan(fov / 2); the camera looks down -z in its own space.

    Returns:
        Colors of shape (y_end - y_start, width, 3)
    """
    aspect_ratio = width / height
    scale = tracer.config.perspective_scale
    eye = camera.eye

    out = np.empty((y_end - y_start, width, 3), dtype=np.float64)
    for y in range(y_start, y_end):
        screen_y = (-(2.0 * y) / height + 1.0) * scale
        for x in range(width):
            screen_x = ((2.0 * x) / width - 1.0) * aspect_ratio * scale
            direction = normalize(np.array([screen_x, screen_y, -1.0]))
            direction = camera.basis_change(direction)
            out[y - y_start, x] = tracer.cast_ray(eye, direction, light, 0)
    return out


class FrameRenderer:
    """Renders whole frames with a ray tracer.

    Pixels are independent: rows are split into chunks and traced in a
    process pool (or in-process when ``config.workers == 1``). Every worker
    gets its own copy of the frozen tracer and writes a distinct slice of
    the output, so no locking is involved. ``render`` returns once every
    chunk has finished.

    Args:
        tracer: Ray tracer holding the frozen scene and configuration
    """

    def __init__(self, tracer: RayTracer):
        self.tracer = tracer
        self.config = tracer.config

    def _num_workers(self) -> int:
        return self.config.workers or os.cpu_count() or 1

    def render(self, width: int, height: int, camera: Camera, light: Light) -> np.ndarray:
        """Render one frame.

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            camera: Camera for this frame
            light: Primary light for this frame

        Returns:
            Flat row-major color buffer of shape (width * height, 3),
            unclamped
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame size must be positive, got {width}x{height}")

        rows = self.config.rows_per_task
        chunks = [(y, min(y + rows, height)) for y in range(0, height, rows)]
        frame = np.empty((height, width, 3), dtype=np.float64)
        workers = min(self._num_workers(), len(chunks))

        pbar = tqdm(total=height, desc="Rendering rows", unit="row",
                    disable=not self.config.show_progress)

        if workers == 1:
            for y_start, y_end in chunks:
                frame[y_start:y_end] = render_rows(
                    self.tracer, camera, light, width, height, y_start, y_end
                )
                pbar.update(y_end - y_start)
        else:
            with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                     initargs=(self.tracer,)) as pool:
                futures = [
                    pool.submit(_render_chunk, (y_start, y_end, width, height, camera, light))
                    for y_start, y_end in chunks
                ]
                for future in as_completed(futures):
                    y_start, block = future.result()
                    frame[y_start:y_start + block.shape[0]] = block
                    pbar.update(block.shape[0])
        pbar.close()

        buffer = frame.reshape(width * height, 3)
        bad = ~np.all(np.isfinite(buffer), axis=1)
        if bad.any():
            warnings.warn(
                f"{int(bad.sum())} pixels produced non-finite colors, using fallback color",
                UserWarning
            )
            buffer[bad] = FALLBACK_COLOR
        return buffer


def to_rgb8(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Clamp a flat color buffer to [0, 1] and convert it to an (H, W, 3) uint8 image."""
    buffer = np.asarray(buffer, dtype=np.float64)
    if buffer.shape != (width * height, 3):
        raise ValueError(f"Expected buffer of shape {(width * height, 3)}, got {buffer.shape}")
    clean = np.nan_to_num(buffer, nan=0.0, posinf=1.0, neginf=0.0)
    return (np.clip(clean, 0.0, 1.0) * 255.0).astype(np.uint8).reshape(height, width, 3)


def save_image(buffer: np.ndarray, width: int, height: int, path: Union[str, Path]) -> Path:
    """Write a flat color buffer as an 8-bit RGB image."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(to_rgb8(buffer, width, height)).save(path)
    return path
