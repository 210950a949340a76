'''
Solid shapes (`Sphere`, triangulated `Mesh`) which provide the volume, centroid and inertia of a `FREEBODY.Motion.RigidBody`.
Standard meshes are created by the functions in `Meshes`.
'''
# Make the classes in all submodules importable directly from FREEBODY.Geometry
from .Meshes import *
from .Solids import *

subModules = [ Meshes, Solids ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
