'''
Quaternions represent orientations (unit quaternions) and, during integration, their rates of change (not normalized).
'''
import math

from FREEBODY.Motion.Matrix import Matrix3, crossOp, mmoi
from FREEBODY.Motion.vector import Vector
from FREEBODY.Utilities import tiny

__all__ = [ "Quaternion" ]

class Quaternion():
    '''
        Stored as a vector part (V) and a scalar part (S)

        Constructors:
            Quaternion(Vector(1,2,3), 4)
            Quaternion(components=[ s, x, y, z ])
            Quaternion(axisOfRotation=Vector(0,0,1), angle=pi/2)

        Operators:
            q1 + q2, q1 - q2, -q1
            q * scalar, scalar * q, q / scalar
            q1 * q2 -> Hamilton product, rotations apply right to left: (q1*q2).rotate(v) == q1.rotate(q2.rotate(v))
            q1 / q2 -> q1 * q2.inverse()
            Vector * q -> the vector is treated as the pure quaternion (v, 0)
    '''
    __slots__ = [ "V", "S" ]

    def __init__(self, vector=None, scalar=None, components=None, axisOfRotation=None, angle=None):
        if components is not None:
            scalar = components[0]
            vector = Vector(components[1], components[2], components[3])
        elif axisOfRotation is not None and angle is not None:
            halfAngle = angle / 2
            vector = axisOfRotation.normalize() * math.sin(halfAngle)
            scalar = math.cos(halfAngle)
        elif vector is None or scalar is None:
            raise ValueError("Quaternion requires (vector, scalar), components=[s,x,y,z] or (axisOfRotation, angle)")

        # Quaternions are immutable, __setattr__ is disabled
        object.__setattr__(self, "V", vector)
        object.__setattr__(self, "S", float(scalar))

    def __setattr__(self, name, value):
        raise AttributeError("Quaternion is immutable, can't set attribute: {}".format(name))

    def __delattr__(self, name):
        raise AttributeError("Quaternion is immutable, can't delete attribute: {}".format(name))

    def __reduce__(self):
        return (Quaternion, (self.V, self.S))

    #### Factories ####
    @staticmethod
    def identity():
        return Quaternion(Vector.zero(), 1)

    @staticmethod
    def zero():
        return Quaternion(Vector.zero(), 0)

    @staticmethod
    def fromAxisAngle(axis, angle):
        return Quaternion(axisOfRotation=axis, angle=angle)

    @staticmethod
    def fromRotation(R):
        ''' Extracts the orientation from rotation matrix R, using its trace '''
        x = R.a32 - R.a23
        y = R.a13 - R.a31
        z = R.a21 - R.a12
        t = R.a11 + R.a22 + R.a33
        if 3 - t < tiny:
            return Quaternion.identity()

        s = 0.5 * math.sqrt((x*x + y*y + z*z) / (3 - t))
        if s < tiny:
            # Half-turn: R = 2kk^T - I, recover the axis from the largest diagonal entry
            diagonal = R.getDiagonal()
            i = max(range(3), key=lambda j: diagonal[j])
            ki = math.sqrt(max(0.0, (diagonal[i] + 1) / 2))
            row = R.getRow(i)
            axis = [ row[j] / (2*ki) for j in range(3) ]
            axis[i] = ki
            return Quaternion(Vector(*axis), 0)

        f = 1 / (4*s)
        return Quaternion(Vector(f*x, f*y, f*z), s)

    @staticmethod
    def rotationBetweenVectors(a, b):
        ''' Shortest rotation that takes the direction of a onto the direction of b. Returns identity for parallel vectors '''
        n = a.crossProduct(b)
        m = n.length()
        if m < tiny:
            return Quaternion.identity()

        cosAngle = a.dot(b) / math.sqrt(a.lengthSquared() * b.lengthSquared())
        sinHalf = math.sqrt(max(0.0, (1 - cosAngle) / 2))
        cosHalf = math.sqrt(max(0.0, (1 + cosAngle) / 2))
        return Quaternion(n * (sinHalf / m), cosHalf)

    #### Properties ####
    def normSquared(self) -> float:
        return self.S*self.S + self.V.lengthSquared()

    def norm(self) -> float:
        return math.sqrt(self.normSquared())

    def normalize(self):
        m2 = self.normSquared()
        if m2 > 0 and m2 != 1:
            return self * (1 / math.sqrt(m2))
        return self

    def isUnit(self) -> bool:
        return abs(self.normSquared() - 1) < tiny

    def dot(self, other) -> float:
        return self.S*other.S + self.V.dot(other.V)

    def conjugate(self):
        return Quaternion(-self.V, self.S)

    def inverse(self):
        return self.conjugate() * (1 / self.normSquared())

    def getAxisAngle(self):
        ''' Returns (unit axis, angle in radians). Returns (Vector.zero(), 0) for the identity rotation '''
        vm = self.V.length()
        if vm < tiny:
            return Vector.zero(), 0.0
        angle = math.atan2(2*self.S*vm, self.S*self.S - vm*vm)
        return self.V / vm, angle

    def rotationAxis(self):
        return self.getAxisAngle()[0]

    def rotationAngle(self):
        return self.getAxisAngle()[1]

    def scaleRotation(self, fraction):
        ''' Returns a rotation about the same axis, by fraction * the rotation angle of this quaternion '''
        axis, angle = self.normalize().getAxisAngle()
        if angle == 0:
            return Quaternion.identity()
        return Quaternion(axisOfRotation=axis, angle=angle*fraction)

    def slerp(self, other, fraction):
        '''
            Spherical linear interpolation, fraction in [0, 1]
            Returns the delta rotation to apply to self: fraction=0 -> identity, fraction=1 -> self.inverse() * other
        '''
        delta = self.normalize().conjugate() * other.normalize()
        return delta.scaleRotation(fraction)

    #### Rotations ####
    def rotate(self, vector, inverse=False):
        ''' Rotates vector by this (unit) quaternion. inverse=True applies the opposite rotation '''
        sign = -1 if inverse else 1
        vxv = self.V.crossProduct(vector)
        return vector + (vxv*(sign*self.S) + self.V.crossProduct(vxv)) * 2

    def toRotation(self, inverse=False):
        ''' Returns the equivalent rotation matrix (or its transpose, if inverse=True) '''
        sign = -1 if inverse else 1
        return Matrix3.identity() + (crossOp(self.V)*(sign*self.S) - mmoi(self.V)) * 2

    #### Operators ####
    def __add__(self, other):
        return Quaternion(self.V + other.V, self.S + other.S)

    def __sub__(self, other):
        return Quaternion(self.V - other.V, self.S - other.S)

    def __neg__(self):
        return Quaternion(-self.V, -self.S)

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            return Quaternion(
                other.V*self.S + self.V*other.S + self.V.crossProduct(other.V),
                self.S*other.S - self.V.dot(other.V)
            )
        elif isinstance(other, (int, float)):
            return Quaternion(self.V*other, self.S*other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Vector):
            return Quaternion(other, 0) * self
        elif isinstance(other, (int, float)):
            return Quaternion(self.V*other, self.S*other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Quaternion):
            return self * other.inverse()
        return self * (1 / other)

    def __eq__(self, other):
        try:
            return abs(self.S - other.S) < tiny and self.V == other.V
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    #### Container / String functions ####
    def __iter__(self):
        yield self.S
        yield self.V.X
        yield self.V.Y
        yield self.V.Z

    def __len__(self):
        return 4

    def __getitem__(self, index):
        return tuple(self)[index]

    def __str__(self):
        return "<{}, {}, {}, {}>".format(self.S, self.V.X, self.V.Y, self.V.Z)

    def __repr__(self):
        return "Quaternion(components=[{}, {}, {}, {}])".format(self.S, self.V.X, self.V.Y, self.V.Z)

    def __format__(self, formatSpec):
        if formatSpec == "":
            return str(self)
        return " ".join([ format(x, formatSpec) for x in self ])
