'''
Six-component spatial vectors (screws). The same (translational, rotational) pair stores both:

* Twists: (linear velocity at a point, angular velocity) - the rotational part is the "direction", the translational part the moment of it
* Wrenches: (force, moment about a point) - the translational part is the "direction", the rotational part the moment of it

Which convention a quantity uses is carried by the factory that built it (`Vector33.twistAt` / `Vector33.wrenchAt`) and by the
`Coordinates` arguments passed to `Vector33.cross`.
'''
from enum import Enum

from FREEBODY.Motion.vector import Vector

__all__ = [ "Vector33", "Coordinates" ]

class Coordinates(Enum):
    ''' AXIS: line coordinates of a twist (moment, direction). RAY: ray coordinates of a wrench (direction, moment) '''
    AXIS = 0
    RAY = 1

class Vector33():
    __slots__ = [ "translational", "rotational" ]

    def __init__(self, translational, rotational):
        # Spatial vectors are immutable, __setattr__ is disabled
        object.__setattr__(self, "translational", translational)
        object.__setattr__(self, "rotational", rotational)

    def __setattr__(self, name, value):
        raise AttributeError("Vector33 is immutable, can't set attribute: {}".format(name))

    def __delattr__(self, name):
        raise AttributeError("Vector33 is immutable, can't delete attribute: {}".format(name))

    def __reduce__(self):
        return (Vector33, (self.translational, self.rotational))

    #### Factories ####
    @staticmethod
    def zero():
        return Vector33(Vector.zero(), Vector.zero())

    @staticmethod
    def twistAt(value, position, pitch=0.0):
        '''
            Twist of a rotation 'value' (angular velocity) about an axis passing through 'position'
            pitch can also be a Vector, in which case it is added directly to the translational part
        '''
        if isinstance(pitch, Vector):
            return Vector33(position.crossProduct(value) + pitch, value)
        return Vector33(position.crossProduct(value) + value*pitch, value)

    @staticmethod
    def wrenchAt(value, position, pitch=0.0):
        '''
            Wrench of a force 'value' acting along a line passing through 'position'
            pitch can also be a Vector (a pure moment), in which case it is added directly to the rotational part
        '''
        if isinstance(pitch, Vector):
            return Vector33(value, position.crossProduct(value) + pitch)
        return Vector33(value, position.crossProduct(value) + value*pitch)

    @staticmethod
    def pureTwist(value):
        ''' Pure translation '''
        return Vector33(value, Vector.zero())

    @staticmethod
    def pureWrench(value):
        ''' Pure moment '''
        return Vector33(Vector.zero(), value)

    @staticmethod
    def addScale(a, b, factor):
        ''' Returns a + factor*b '''
        return Vector33(a.translational + b.translational*factor, a.rotational + b.rotational*factor)

    @staticmethod
    def cross(a, b, aCoordinates, bCoordinates):
        '''
            Spatial cross product. The result depends on the coordinate convention of each operand:
                AXIS x AXIS: (rotA x traB + traA x rotB, rotA x rotB)
                AXIS x RAY:  (rotA x traB, traA x traB + rotA x rotB)
                RAY x AXIS:  (traA x rotB, traA x traB + rotA x rotB)
                RAY x RAY:   (rotA x traB + traA x rotB, traA x traB)
        '''
        traA, rotA = a.translational, a.rotational
        traB, rotB = b.translational, b.rotational

        if aCoordinates == Coordinates.AXIS and bCoordinates == Coordinates.AXIS:
            return Vector33(rotA.crossProduct(traB) + traA.crossProduct(rotB), rotA.crossProduct(rotB))
        elif aCoordinates == Coordinates.AXIS and bCoordinates == Coordinates.RAY:
            return Vector33(rotA.crossProduct(traB), traA.crossProduct(traB) + rotA.crossProduct(rotB))
        elif aCoordinates == Coordinates.RAY and bCoordinates == Coordinates.AXIS:
            return Vector33(traA.crossProduct(rotB), traA.crossProduct(traB) + rotA.crossProduct(rotB))
        elif aCoordinates == Coordinates.RAY and bCoordinates == Coordinates.RAY:
            return Vector33(rotA.crossProduct(traB) + traA.crossProduct(rotB), traA.crossProduct(traB))
        else:
            raise NotImplementedError("Unsupported coordinate combination: {}, {}".format(aCoordinates, bCoordinates))

    #### Algebra ####
    def dot(self, other) -> float:
        return self.translational.dot(other.translational) + self.rotational.dot(other.rotational)

    def __add__(self, other):
        return Vector33(self.translational + other.translational, self.rotational + other.rotational)

    def __sub__(self, other):
        return Vector33(self.translational - other.translational, self.rotational - other.rotational)

    def __neg__(self):
        return Vector33(-self.translational, -self.rotational)

    def __mul__(self, other):
        ''' Vector33 * Vector33 -> dot product, Vector33 * scalar -> scaled Vector33 '''
        if isinstance(other, Vector33):
            return self.dot(other)
        elif isinstance(other, (int, float)):
            return Vector33(self.translational*other, self.rotational*other)
        return NotImplemented

    def __rmul__(self, scalar):
        if isinstance(scalar, (int, float)):
            return Vector33(self.translational*scalar, self.rotational*scalar)
        return NotImplemented

    def __truediv__(self, scalar):
        return self * (1 / scalar)

    def __eq__(self, other):
        try:
            return self.translational == other.translational and self.rotational == other.rotational
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __iter__(self):
        yield self.translational
        yield self.rotational

    def __str__(self):
        return "[{}|{}]".format(self.translational, self.rotational)

    def __repr__(self):
        return "Vector33({!r}, {!r})".format(self.translational, self.rotational)

    def __format__(self, formatSpec):
        if formatSpec == "":
            return str(self)
        return "{} {}".format(format(self.translational, formatSpec), format(self.rotational, formatSpec))
