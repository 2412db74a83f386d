"""Taichi-based ray tracer with Phong shading and hard shadows.

This package renders scenes of transformed spheres lit by a point light,
tracing one primary ray per pixel and evaluating a local Phong model with
hard shadows:
- Ray-sphere intersection with arbitrary affine object transforms
- Phong ambient/diffuse/specular lighting with a stripe pattern
- Shadow rays against the whole scene
- 8-bit image output

Subpackages:
    core: Ray and transform utilities, color quantization, lighting, render loop
    geometry: Sphere primitive and intersection algorithms
    materials: Phong material and stripe pattern
    scene: World description, scene storage, shading pipeline
    camera: Pinhole camera with view transform
    preview: Image export
"""

__version__ = "0.1.0"
