'''
Rigid body motion: algebra, mass properties, dynamics and time integration.
Main class is `FREEBODY.Motion.RigidBodies.RigidBody`.
Fundamental data types used throughout the simulator are defined in:

* `Vector`
* `Matrix3` - also defines the `crossOp` and `mmoi` operators
* `Quaternion` - represents orientation
* `Vector33` - spatial vector, stores twists (motion) and wrenches (loading, momentum)
* `Pose` - position + orientation

Body states are defined in `RigidBodyStates`, their derived dynamics in `BodyDynamics`.

Generalized explicit Runge-Kutta integrators are defined in `Integration`
'''
from .vector import *
from .Matrix import *
from .quaternion import *
from .SpatialVector import *
from .pose import *
from .RigidBodies import *
from .RigidBodyStates import *
from .bodyDynamics import *
from .Integration import *

subModules = [ vector, Matrix, quaternion, SpatialVector, pose, RigidBodies, RigidBodyStates, bodyDynamics, Integration ]
__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
