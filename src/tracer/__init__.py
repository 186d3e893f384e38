"""Monte Carlo path tracer for sphere scenes, built on Taichi.

This package renders scenes made of spheres and three idealised materials
(diffuse, mirror, glass) into 8-bit RGB images, tracing every pixel in
parallel on the CPU or GPU.

Subpackages:
    core: Rays, sampler, integrator, image buffer, execution and rendering
    geometry: Sphere primitive and ray-sphere intersection
    materials: Material descriptions, material store and scattering rules
    scene: Scene container, device storage and scene intersection
    camera: Pinhole camera with explicit image plane
"""

__version__ = "0.1.0"
