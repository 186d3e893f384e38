"""Core rendering module.

This module contains the fundamental building blocks for path tracing:

Components:
    ray: Ray data structure and vector utilities
    sampler: Deterministic per-pixel pseudorandom numbers
    integrator: Path tracing light transport
    image: 8-bit RGB image buffer and quantization
    execution: Device selection and kernel dispatch
    renderer: Parallel per-pixel render dispatcher
    errors: Exceptions raised by the pipeline

All compute-intensive operations use Taichi kernels for GPU acceleration.
"""

from .errors import RenderConfigurationError, RenderError
from .image import Image, quantize_channel
from .ray import (
    Ray,
    build_onb_from_normal,
    cross,
    local_to_world,
    make_ray,
    multiply,
    normalize,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)
from .sampler import SamplerState, make_sampler, next_uniform, reference_sequence

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from tracer.core.renderer when needed:
#   from tracer.core.renderer import Renderer, RendererConfig

__all__ = [
    "Ray",
    "make_ray",
    "vec3",
    "normalize",
    "cross",
    "multiply",
    "reflect",
    "refract",
    "schlick_fresnel",
    "build_onb_from_normal",
    "local_to_world",
    "SamplerState",
    "make_sampler",
    "next_uniform",
    "reference_sequence",
    "Image",
    "quantize_channel",
    "RenderConfigurationError",
    "RenderError",
]
