'''
Immutable 3x3 matrix, plus the two matrix-valued building blocks used by all inertia and rotation math:

* `crossOp` - skew-symmetric cross product operator [v]x
* `mmoi` - point-mass moment of inertia operator -[v]x[v]x
'''
import math

from FREEBODY.Motion.vector import Vector
from FREEBODY.Utilities import Axis, tiny

__all__ = [ "Matrix3", "crossOp", "mmoi" ]

class Matrix3():
    '''
        Row-major 3x3 matrix: Matrix3(a11, a12, a13, a21, a22, a23, a31, a32, a33)

        Operators:
            M1 + M2, M1 - M2, -M1
            M * scalar, scalar * M, M / scalar
            M * Vector, Vector * M (row vector product), M1 * M2
        Equality is tolerance-based, like `FREEBODY.Motion.vector.Vector`
    '''
    __slots__ = [ "a11", "a12", "a13", "a21", "a22", "a23", "a31", "a32", "a33" ]

    def __init__(self, a11, a12, a13, a21, a22, a23, a31, a32, a33):
        # Matrices are immutable, __setattr__ is disabled
        for name, value in zip(Matrix3.__slots__, (a11, a12, a13, a21, a22, a23, a31, a32, a33)):
            object.__setattr__(self, name, float(value))

    def __setattr__(self, name, value):
        raise AttributeError("Matrix3 is immutable, can't set attribute: {}".format(name))

    def __delattr__(self, name):
        raise AttributeError("Matrix3 is immutable, can't delete attribute: {}".format(name))

    def __reduce__(self):
        return (Matrix3, tuple(self))

    #### Factories ####
    @staticmethod
    def zero():
        return Matrix3(0, 0, 0, 0, 0, 0, 0, 0, 0)

    @staticmethod
    def identity():
        return Matrix3(1, 0, 0, 0, 1, 0, 0, 0, 1)

    @staticmethod
    def scalar(a):
        return Matrix3(a, 0, 0, 0, a, 0, 0, 0, a)

    @staticmethod
    def diagonal(a11, a22=None, a33=None):
        ''' Pass in either three diagonal values or a single Vector of diagonal values '''
        if a22 is None and a33 is None:
            a11, a22, a33 = a11
        return Matrix3(a11, 0, 0, 0, a22, 0, 0, 0, a33)

    @staticmethod
    def symmetric(a11, a22, a33, a12, a13, a23):
        return Matrix3(
            a11, a12, a13,
            a12, a22, a23,
            a13, a23, a33
        )

    @staticmethod
    def fromRows(row1, row2, row3):
        return Matrix3(*row1, *row2, *row3)

    @staticmethod
    def fromColumns(column1, column2, column3):
        return Matrix3(
            column1.X, column2.X, column3.X,
            column1.Y, column2.Y, column3.Y,
            column1.Z, column2.Z, column3.Z
        )

    @staticmethod
    def rotationAboutX(angle):
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(
            1, 0, 0,
            0, c, -s,
            0, s, c
        )

    @staticmethod
    def rotationAboutY(angle):
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(
            c, 0, s,
            0, 1, 0,
            -s, 0, c
        )

    @staticmethod
    def rotationAboutZ(angle):
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(
            c, -s, 0,
            s, c, 0,
            0, 0, 1
        )

    @staticmethod
    def rotationAbout(axis, angle):
        ''' axis can be an `FREEBODY.Utilities.Axis` or a Vector (normalized internally) '''
        if isinstance(axis, Axis):
            if axis == Axis.X:
                return Matrix3.rotationAboutX(angle)
            elif axis == Axis.Y:
                return Matrix3.rotationAboutY(angle)
            else:
                return Matrix3.rotationAboutZ(angle)
        elif isinstance(axis, Vector):
            axis = axis.normalize()
            return Matrix3.identity() + crossOp(axis)*math.sin(angle) - mmoi(axis)*(1 - math.cos(angle))
        else:
            raise NotImplementedError("Invalid axis: {}".format(axis))

    #### Properties ####
    def determinant(self) -> float:
        return self.a11*(self.a22*self.a33 - self.a23*self.a32) \
            + self.a12*(self.a23*self.a31 - self.a21*self.a33) \
            + self.a13*(self.a21*self.a32 - self.a22*self.a31)

    def isSingular(self) -> bool:
        return self.determinant() == 0

    def isZero(self) -> bool:
        return self == Matrix3.zero()

    def isIdentity(self) -> bool:
        return self == Matrix3.identity()

    def getRow(self, row: int) -> Vector:
        if row == 0:
            return Vector(self.a11, self.a12, self.a13)
        elif row == 1:
            return Vector(self.a21, self.a22, self.a23)
        elif row == 2:
            return Vector(self.a31, self.a32, self.a33)
        raise IndexError("Matrix3 row index out of range: {}".format(row))

    def getColumn(self, column: int) -> Vector:
        if column == 0:
            return Vector(self.a11, self.a21, self.a31)
        elif column == 1:
            return Vector(self.a12, self.a22, self.a32)
        elif column == 2:
            return Vector(self.a13, self.a23, self.a33)
        raise IndexError("Matrix3 column index out of range: {}".format(column))

    def getDiagonal(self) -> Vector:
        return Vector(self.a11, self.a22, self.a33)

    #### Algebra ####
    def transpose(self):
        return Matrix3(
            self.a11, self.a21, self.a31,
            self.a12, self.a22, self.a32,
            self.a13, self.a23, self.a33
        )

    def inverse(self):
        ''' Cofactor inverse. Raises ZeroDivisionError for singular matrices, check isSingular() first '''
        invD = 1 / self.determinant()
        return Matrix3(*[ c*invD for c in self._cofactorsTransposed() ])

    def _cofactorsTransposed(self):
        return (
            self.a22*self.a33 - self.a23*self.a32,
            self.a13*self.a32 - self.a12*self.a33,
            self.a12*self.a23 - self.a13*self.a22,
            self.a23*self.a31 - self.a21*self.a33,
            self.a11*self.a33 - self.a13*self.a31,
            self.a13*self.a21 - self.a11*self.a23,
            self.a21*self.a32 - self.a22*self.a31,
            self.a12*self.a31 - self.a11*self.a32,
            self.a11*self.a22 - self.a12*self.a21
        )

    def solve(self, other):
        ''' Returns x such that self * x == other. other can be a Vector or a Matrix3 '''
        return self.inverse() * other

    #### Operators ####
    def __add__(self, other):
        return Matrix3(*[ a + b for a, b in zip(self, other) ])

    def __sub__(self, other):
        return Matrix3(*[ a - b for a, b in zip(self, other) ])

    def __neg__(self):
        return Matrix3(*[ -a for a in self ])

    def __mul__(self, other):
        if isinstance(other, Vector):
            return Vector(
                self.a11*other.X + self.a12*other.Y + self.a13*other.Z,
                self.a21*other.X + self.a22*other.Y + self.a23*other.Z,
                self.a31*other.X + self.a32*other.Y + self.a33*other.Z
            )
        elif isinstance(other, Matrix3):
            return Matrix3(
                self.a11*other.a11 + self.a12*other.a21 + self.a13*other.a31,
                self.a11*other.a12 + self.a12*other.a22 + self.a13*other.a32,
                self.a11*other.a13 + self.a12*other.a23 + self.a13*other.a33,
                self.a21*other.a11 + self.a22*other.a21 + self.a23*other.a31,
                self.a21*other.a12 + self.a22*other.a22 + self.a23*other.a32,
                self.a21*other.a13 + self.a22*other.a23 + self.a23*other.a33,
                self.a31*other.a11 + self.a32*other.a21 + self.a33*other.a31,
                self.a31*other.a12 + self.a32*other.a22 + self.a33*other.a32,
                self.a31*other.a13 + self.a32*other.a23 + self.a33*other.a33
            )
        elif isinstance(other, (int, float)):
            return Matrix3(*[ a*other for a in self ])
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Vector):
            # Row vector * matrix
            return Vector(
                other.X*self.a11 + other.Y*self.a21 + other.Z*self.a31,
                other.X*self.a12 + other.Y*self.a22 + other.Z*self.a32,
                other.X*self.a13 + other.Y*self.a23 + other.Z*self.a33
            )
        elif isinstance(other, (int, float)):
            return Matrix3(*[ a*other for a in self ])
        return NotImplemented

    def __truediv__(self, scalar):
        return self * (1 / scalar)

    def __eq__(self, other):
        try:
            return all([ abs(a - b) < tiny for a, b in zip(self, other) ]) and len(other) == 9
        except TypeError:
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    #### Container / String functions ####
    def __iter__(self):
        yield from (self.a11, self.a12, self.a13, self.a21, self.a22, self.a23, self.a31, self.a32, self.a33)

    def __len__(self):
        return 9

    def __getitem__(self, index):
        ''' M[i] -> flat (row-major) element, M[i,j] -> element in row i, column j '''
        if isinstance(index, tuple):
            row, column = index
            return self.getRow(row)[column]
        return tuple(self)[index]

    def __str__(self):
        return "[{} | {} | {}]".format(self.getRow(0), self.getRow(1), self.getRow(2))

    def __repr__(self):
        return "Matrix3({})".format(", ".join([ str(a) for a in self ]))

def crossOp(v):
    ''' Skew-symmetric cross product operator: crossOp(a) * b == a.crossProduct(b) '''
    return Matrix3(
        0, -v.Z, v.Y,
        v.Z, 0, -v.X,
        -v.Y, v.X, 0
    )

def mmoi(v, scale=1.0):
    '''
        Point-mass moment of inertia operator: scale * -[v]x[v]x
        mmoi(r, m) is the inertia of a point mass m located at r, about the origin
    '''
    xx, yy, zz = scale*v.X*v.X, scale*v.Y*v.Y, scale*v.Z*v.Z
    xy, yz, zx = scale*v.X*v.Y, scale*v.Y*v.Z, scale*v.Z*v.X
    return Matrix3(
        yy + zz, -xy, -zx,
        -xy, xx + zz, -yz,
        -zx, -yz, xx + yy
    )
