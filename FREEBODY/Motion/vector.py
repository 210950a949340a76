'''
Immutable three-component vector. Base value type for positions, velocities, forces and moments.
'''
import math
import re

from FREEBODY.Utilities import Axis, tiny

__all__ = [ "Vector" ]

class Vector():
    '''
        Vector(1, 2, 3) or Vector("(1 2 3)")
        Strings may separate components with spaces, commas or semicolons, as in simulation definition files.

        Operators:
            v1 + v2, v1 - v2, -v1
            v1 * scalar, scalar * v1, v1 / scalar
            v1 * v2 -> dot product
        Equality is tolerance-based: components must match within `FREEBODY.Utilities.tiny`
    '''
    __slots__ = [ "X", "Y", "Z" ]

    def __init__(self, *args):
        if len(args) == 3:
            components = args
        elif len(args) == 1 and isinstance(args[0], str):
            components = re.split("[ ,;]+", args[0].strip().strip("()").strip())
            if len(components) != 3:
                raise ValueError("Unable to parse a Vector from: {}".format(args[0]))
        else:
            raise ValueError("Vector requires three components or a string like '(1 2 3)', got: {}".format(args))

        # Vectors are immutable, __setattr__ is disabled
        object.__setattr__(self, "X", float(components[0]))
        object.__setattr__(self, "Y", float(components[1]))
        object.__setattr__(self, "Z", float(components[2]))

    def __setattr__(self, name, value):
        raise AttributeError("Vector is immutable, can't set attribute: {}".format(name))

    def __delattr__(self, name):
        raise AttributeError("Vector is immutable, can't delete attribute: {}".format(name))

    def __reduce__(self):
        return (Vector, (self.X, self.Y, self.Z))

    #### Factories ####
    @staticmethod
    def zero():
        return Vector(0, 0, 0)

    @staticmethod
    def unitX():
        return Vector(1, 0, 0)

    @staticmethod
    def unitY():
        return Vector(0, 1, 0)

    @staticmethod
    def unitZ():
        return Vector(0, 0, 1)

    @staticmethod
    def fromAxis(axis):
        if axis == Axis.X:
            return Vector.unitX()
        elif axis == Axis.Y:
            return Vector.unitY()
        elif axis == Axis.Z:
            return Vector.unitZ()
        else:
            raise NotImplementedError("Invalid axis: {}".format(axis))

    #### Magnitude ####
    def lengthSquared(self) -> float:
        return self.X*self.X + self.Y*self.Y + self.Z*self.Z

    def length(self) -> float:
        return math.sqrt(self.lengthSquared())

    def normalize(self):
        ''' Returns a unit vector. Vectors with length below tiny are returned unchanged '''
        m2 = self.lengthSquared()
        if m2 > tiny*tiny:
            return self * (1 / math.sqrt(m2))
        return self

    #### Products ####
    def dot(self, other) -> float:
        return self.X*other.X + self.Y*other.Y + self.Z*other.Z

    def crossProduct(self, other):
        if not isinstance(other, Vector):
            raise TypeError("Can only take the cross product of two Vectors, got: {}".format(type(other)))
        return Vector(
            self.Y*other.Z - self.Z*other.Y,
            self.Z*other.X - self.X*other.Z,
            self.X*other.Y - self.Y*other.X
        )

    def outer(self, other):
        ''' Returns the outer product self * other^T as a `FREEBODY.Motion.Matrix.Matrix3` '''
        from FREEBODY.Motion.Matrix import Matrix3
        return Matrix3(
            self.X*other.X, self.X*other.Y, self.X*other.Z,
            self.Y*other.X, self.Y*other.Y, self.Y*other.Z,
            self.Z*other.X, self.Z*other.Y, self.Z*other.Z
        )

    def crossOp(self):
        ''' Skew-symmetric matrix [v]x such that v.crossOp() * w == v.crossProduct(w) '''
        from FREEBODY.Motion.Matrix import crossOp
        return crossOp(self)

    def angle(self, other) -> float:
        ''' Angle between two vectors, in radians '''
        return math.acos(self.dot(other) / math.sqrt(self.lengthSquared() * other.lengthSquared()))

    #### Rotations ####
    def rotateAboutX(self, angle):
        c, s = math.cos(angle), math.sin(angle)
        return Vector(self.X, c*self.Y - s*self.Z, s*self.Y + c*self.Z)

    def rotateAboutY(self, angle):
        c, s = math.cos(angle), math.sin(angle)
        return Vector(c*self.X + s*self.Z, self.Y, -s*self.X + c*self.Z)

    def rotateAboutZ(self, angle):
        c, s = math.cos(angle), math.sin(angle)
        return Vector(c*self.X - s*self.Y, s*self.X + c*self.Y, self.Z)

    def rotateAbout(self, axis, angle):
        ''' axis can be an `FREEBODY.Utilities.Axis` or a Vector (normalized internally) '''
        if isinstance(axis, Axis):
            if axis == Axis.X:
                return self.rotateAboutX(angle)
            elif axis == Axis.Y:
                return self.rotateAboutY(angle)
            else:
                return self.rotateAboutZ(angle)
        elif isinstance(axis, Vector):
            # Rodrigues' formula
            axis = axis.normalize()
            kxp = axis.crossProduct(self)
            kxkxp = axis.crossProduct(kxp)
            return self + kxp*math.sin(angle) + kxkxp*(1 - math.cos(angle))
        else:
            raise NotImplementedError("Invalid axis: {}".format(axis))

    #### Operators ####
    def __add__(self, other):
        return Vector(self.X + other.X, self.Y + other.Y, self.Z + other.Z)

    def __sub__(self, other):
        return Vector(self.X - other.X, self.Y - other.Y, self.Z - other.Z)

    def __neg__(self):
        return Vector(-self.X, -self.Y, -self.Z)

    def __mul__(self, other):
        '''
            Vector * Vector -> dot product, Vector * scalar -> scaled Vector
            Vector * Matrix3 and Vector * Quaternion are handled by the right-hand operand
        '''
        if isinstance(other, Vector):
            return self.dot(other)
        elif isinstance(other, (int, float)):
            return Vector(self.X*other, self.Y*other, self.Z*other)
        return NotImplemented

    def __rmul__(self, scalar):
        if isinstance(scalar, (int, float)):
            return Vector(self.X*scalar, self.Y*scalar, self.Z*scalar)
        return NotImplemented

    def __truediv__(self, scalar):
        return self * (1 / scalar)

    def __abs__(self):
        return Vector(abs(self.X), abs(self.Y), abs(self.Z))

    def __eq__(self, other):
        try:
            return abs(self.X - other.X) < tiny and abs(self.Y - other.Y) < tiny and abs(self.Z - other.Z) < tiny
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    #### Container / String functions ####
    def __getitem__(self, index):
        return (self.X, self.Y, self.Z)[index]

    def __iter__(self):
        yield self.X
        yield self.Y
        yield self.Z

    def __len__(self):
        return 3

    def __str__(self):
        return "({} {} {})".format(self.X, self.Y, self.Z)

    def __repr__(self):
        return "Vector({}, {}, {})".format(self.X, self.Y, self.Z)

    def __format__(self, formatSpec):
        ''' "{:>10.3f}".format(Vector(1,2,3)) applies the format spec to each component. An empty spec gives str(vector) '''
        if formatSpec == "":
            return str(self)
        return " ".join([ format(x, formatSpec) for x in self ])
