"""Materials module for light scattering models.

Components:
    material: Base Material interface and ScatterResult
    texture: Solid color and 3D checker textures
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance

Each material implements ``scatter(ray_in, record)``, returning either a
scattered ray with its RGB attenuation or None when the ray is absorbed.
"""

from .dielectric import Dielectric, schlick_reflectance
from .lambertian import Lambertian
from .material import Material, ScatterResult
from .metal import Metal
from .texture import CheckerTexture, SolidColor, Texture

__all__ = [
    "CheckerTexture",
    "Dielectric",
    "Lambertian",
    "Material",
    "Metal",
    "ScatterResult",
    "SolidColor",
    "Texture",
    "schlick_reflectance",
]
