"""Sphere-tracing renderer for scenes described by signed distance fields.

This package renders a scene defined implicitly as a signed distance field
(SDF) into an RGB image by marching rays through the field, with support for:
- Composable scenes built from spheres, points, unions and recolors
- Central-difference surface normals
- Hard shadows from a single point light
- A pure-Python reference path and a Taichi kernel for parallel rendering

Subpackages:
    core: Vectors, rays, settings, the marcher, shading and image assembly
    camera: Pinhole ray grid generation
    scene: SDF node tree, default scene and GPU primitive storage
    preview: PNG/PPM export and Matplotlib previews
"""

__version__ = "0.1.0"
