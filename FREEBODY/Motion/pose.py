'''
Position + orientation of a body frame, relative to its parent (world) frame.
'''
from FREEBODY.Motion.quaternion import Quaternion
from FREEBODY.Motion.vector import Vector

__all__ = [ "Pose" ]

class Pose():
    '''
        Pose(position=Vector.zero(), orientation=Quaternion.identity())

        fromLocal / toLocal map Vectors, Quaternions or whole Poses between the local (body) frame and the parent frame.

        +, -, * scalar and / scalar act on each component separately (orientations are added as raw quaternions).
        These are only meant for combining Runge-Kutta stages, and are not rigid-transform compositions.
        Call normalize() afterwards to project the orientation back onto the unit sphere.
    '''
    __slots__ = [ "position", "orientation" ]

    def __init__(self, position=None, orientation=None):
        # Poses are immutable, __setattr__ is disabled
        object.__setattr__(self, "position", position if position is not None else Vector.zero())
        object.__setattr__(self, "orientation", orientation if orientation is not None else Quaternion.identity())

    def __setattr__(self, name, value):
        raise AttributeError("Pose is immutable, can't set attribute: {}".format(name))

    def __delattr__(self, name):
        raise AttributeError("Pose is immutable, can't delete attribute: {}".format(name))

    def __reduce__(self):
        return (Pose, (self.position, self.orientation))

    @staticmethod
    def identity():
        return Pose(Vector.zero(), Quaternion.identity())

    @staticmethod
    def zero():
        ''' Zero pose (zero quaternion). Only meaningful as a rate or stage increment '''
        return Pose(Vector.zero(), Quaternion.zero())

    #### Frame transformations ####
    def fromLocal(self, local):
        if isinstance(local, Vector):
            return self.position + self.orientation.rotate(local)
        elif isinstance(local, Quaternion):
            return self.orientation * local
        elif isinstance(local, Pose):
            return Pose(self.fromLocal(local.position), self.fromLocal(local.orientation))
        raise TypeError("Can't transform object of type {} from local coordinates".format(type(local)))

    def fromLocalDirection(self, direction):
        return self.orientation.rotate(direction)

    def toLocal(self, world):
        if isinstance(world, Vector):
            return self.orientation.rotate(world - self.position, inverse=True)
        elif isinstance(world, Quaternion):
            return self.orientation.inverse() * world
        elif isinstance(world, Pose):
            return Pose(self.toLocal(world.position), self.toLocal(world.orientation))
        raise TypeError("Can't transform object of type {} to local coordinates".format(type(world)))

    def toLocalDirection(self, direction):
        return self.orientation.rotate(direction, inverse=True)

    def normalize(self):
        return Pose(self.position, self.orientation.normalize())

    #### Stage-combination algebra ####
    def __add__(self, other):
        return Pose(self.position + other.position, self.orientation + other.orientation)

    def __sub__(self, other):
        return Pose(self.position - other.position, self.orientation - other.orientation)

    def __neg__(self):
        return Pose(-self.position, -self.orientation)

    def __mul__(self, scalar):
        if isinstance(scalar, (int, float)):
            return Pose(self.position*scalar, self.orientation*scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return self * (1 / scalar)

    def __eq__(self, other):
        try:
            return self.position == other.position and self.orientation == other.orientation
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __iter__(self):
        yield self.position
        yield self.orientation

    def __str__(self):
        return "Pose({}, {})".format(self.position, self.orientation)

    __repr__ = __str__
