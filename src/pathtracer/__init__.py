"""Offline Monte Carlo path tracer.

This package renders scenes of spheres with diffuse, metallic and glass
materials by tracing light paths through a thin-lens camera. Rendering runs
on a single thread or on a pool of worker threads with interleaved rows.

Subpackages:
    core: Vectors, intervals, rays, sampling, the integrator and render drivers
    geometry: Hittable contract, spheres, lists, bounding boxes and the BVH
    materials: Textures and scattering models (Lambertian, metal, dielectric)
    camera: Thin-lens camera and viewport derivation
    scene: Scene construction helpers and the named scene registry
    preview: Gamma correction and image file output (PPM, PNG)
"""

__version__ = "0.1.0"
