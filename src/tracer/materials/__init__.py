"""Materials module for light-transport rules.

Components:
    material: Material description, material store and kind dispatch
    diffuse: Ideal diffuse (cosine-weighted) reflection
    specular: Perfect mirror reflection
    refractive: Glass with Fresnel-weighted reflection and refraction

All scattering functions are Taichi functions that take and return the
pixel's sampler state explicitly.
"""

from .diffuse import scatter_diffuse
from .material import Material, MaterialKind, MaterialNotFoundError, MaterialStore, scatter
from .refractive import INSIDE_IOR, OUTSIDE_IOR, reflection_probability, scatter_refractive
from .specular import scatter_specular

__all__ = [
    "Material",
    "MaterialKind",
    "MaterialNotFoundError",
    "MaterialStore",
    "scatter",
    "scatter_diffuse",
    "scatter_specular",
    "scatter_refractive",
    "reflection_probability",
    "INSIDE_IOR",
    "OUTSIDE_IOR",
]
