"""Parallel render dispatcher.

The Renderer turns a Scene and a Camera into an Image. It snapshots the
scene and camera into device storage, then launches one kernel whose outer
loop runs over every pixel in parallel. Each pixel:

1. generates its camera ray,
2. seeds a fresh sampler from its (x, y) coordinate,
3. averages samples_per_pixel path estimates, threading the same sampler
   state through all of them,
4. gamma encodes and quantizes the mean into its own slot of the image.

Pixels share nothing but read-only scene data, so no synchronisation is
needed and the output does not depend on how pixels are scheduled.

Example:
    >>> from tracer.core.renderer import Renderer, RendererConfig
    >>> from tracer.scene.cornell_box import create_cornell_box_scene
    >>> renderer = Renderer(RendererConfig(force_host_cpu=True))
    >>> scene, camera = create_cornell_box_scene()
    >>> image = renderer.render(scene, camera, samples_per_pixel=16, width=64, height=64)
"""

import logging
import time
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from tracer.camera.pinhole import CameraBuffers, generate_ray
from tracer.core.errors import RenderConfigurationError
from tracer.core.execution import ExecutionContext
from tracer.core.image import Image, quantize_channel
from tracer.core.integrator import trace_path
from tracer.core.sampler import make_sampler
from tracer.scene.buffers import SceneBuffers

logger = logging.getLogger(__name__)

vec3 = tm.vec3

# Pixels per parallel work group
WORKGROUP_SIZE = 64


@dataclass(frozen=True)
class RendererConfig:
    """Execution settings for a Renderer.

    Attributes:
        force_host_cpu: Render on the CPU even if a GPU is available.
        cpu_max_num_threads: Cap on CPU worker threads; None lets Taichi
            decide.
        debug: Enable Taichi debug mode (bounds checks, assertions).
        fast_math: Allow unsafe floating point optimisations. Off by default
            because they can defeat the NaN/Inf checks in quantization.
    """

    force_host_cpu: bool = False
    cpu_max_num_threads: int | None = None
    debug: bool = False
    fast_math: bool = False

    def init_kwargs(self) -> dict:
        """Keyword arguments for ti.init()."""
        kwargs = {"debug": self.debug, "fast_math": self.fast_math}
        if self.cpu_max_num_threads is not None:
            kwargs["cpu_max_num_threads"] = self.cpu_max_num_threads
        return kwargs


def _validate_dimension(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RenderConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 2:
        raise RenderConfigurationError(f"{name} must be at least 2, got {value}")


def _validate_samples(samples_per_pixel) -> None:
    if isinstance(samples_per_pixel, bool) or not isinstance(samples_per_pixel, int):
        raise RenderConfigurationError(f"samples_per_pixel must be an integer, got {samples_per_pixel!r}")
    if samples_per_pixel < 1:
        raise RenderConfigurationError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")


@ti.data_oriented
class Renderer:
    """Renders scenes on the device selected at construction."""

    def __init__(self, config: RendererConfig | None = None):
        self.config = config if config is not None else RendererConfig()
        self.context = ExecutionContext(
            force_host_cpu=self.config.force_host_cpu, **self.config.init_kwargs()
        )
        self.scene_buffers = SceneBuffers()
        self.camera_buffers = CameraBuffers()

    @property
    def device_name(self) -> str:
        """Name of the Taichi backend used for rendering."""
        return self.context.device_name

    def render(self, scene, camera, samples_per_pixel: int, width: int, height: int) -> Image:
        """Render a scene into a new image.

        Args:
            scene: The Scene to render.
            camera: The Camera to render from.
            samples_per_pixel: Path estimates averaged per pixel (>= 1).
            width: Image width in pixels (>= 2).
            height: Image height in pixels (>= 2).

        Returns:
            The rendered Image.

        Raises:
            RenderConfigurationError: If a parameter is out of range.
            RenderError: If the backend fails while rendering.
        """
        _validate_dimension("width", width)
        _validate_dimension("height", height)
        _validate_samples(samples_per_pixel)
        return self.render_into(scene, camera, samples_per_pixel, Image.blank(width, height))

    def render_into(self, scene, camera, samples_per_pixel: int, image: Image) -> Image:
        """Render a scene into an existing image, overwriting every pixel.

        Returns:
            The same image.
        """
        _validate_dimension("width", image.width)
        _validate_dimension("height", image.height)
        _validate_samples(samples_per_pixel)
        if image.pixels.shape != (image.width * image.height, 3):
            raise RenderConfigurationError(
                f"Image buffer shape {image.pixels.shape} does not match "
                f"{image.width}x{image.height}"
            )
        if not image.pixels.flags.c_contiguous:
            raise RenderConfigurationError("Image buffer must be C-contiguous")

        self.scene_buffers.upload(scene)
        self.camera_buffers.upload(camera)

        logger.debug(
            "Rendering %dx%d at %d spp on %s (%d primitives)",
            image.width,
            image.height,
            samples_per_pixel,
            self.device_name,
            len(scene),
        )
        start = time.perf_counter()
        self.context.submit(self._render_kernel, image.pixels, image.width, image.height, samples_per_pixel)
        logger.debug("Render finished in %.3f s", time.perf_counter() - start)
        return image

    @ti.kernel
    def _render_kernel(
        self,
        pixels: ti.types.ndarray(dtype=ti.u8, ndim=2),
        width: ti.i32,
        height: ti.i32,
        samples_per_pixel: ti.i32,
    ):
        """Render every pixel of a width x height image into pixels."""
        ti.loop_config(block_dim=WORKGROUP_SIZE)
        for idx in range(width * height):
            x = idx % width
            y = idx // width

            ray = generate_ray(self.camera_buffers, x, y, width, height)
            state = make_sampler(x, y)

            total = vec3(0.0, 0.0, 0.0)
            for _ in range(samples_per_pixel):
                radiance, bounces, new_state = trace_path(self.scene_buffers, ray, state)
                state = new_state
                total += radiance
            mean = total / ti.cast(samples_per_pixel, ti.f32)

            for c in ti.static(range(3)):
                pixels[idx, c] = quantize_channel(mean[c])
