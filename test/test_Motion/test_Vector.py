#To run tests:
#In this file: [test_Vector.py]
#In all files in the current directory: [python -m unittest discover]
#Add [-v] for verbose output (displays names of all test functions)

import pickle
import unittest
from copy import deepcopy
from math import acos, pi, sqrt
from test.testUtilities import assertVectorsAlmostEqual

from FREEBODY.Motion import Vector
from FREEBODY.Utilities import Axis, tiny


class TestVector(unittest.TestCase):
    def setUp(self):
        #Define Vectors to be used in the checks below
        self.v1 = Vector(1.0,2.0,3.0)
        self.v2 = Vector(-1.0,-2.0,-3.0)
        self.v3 = Vector(2.0,2.0,2.0)
        self.v4 = Vector(1.0,-3.0,4.0)
        self.v5 = Vector(3.0,4.0,0.0)
        self.v6 = Vector(4.0,4.0,2.0)
        self.v7 = Vector(1.0,0.0,3.0)
        self.v8 = Vector(5.0,5.0,0.0)

    def test_format(self):
        formattedVector = "{:1.2f}".format(self.v1)
        self.assertEqual(formattedVector, "1.00 2.00 3.00")
        # An empty format spec matches str()
        self.assertEqual("{}".format(self.v1), "(1.0 2.0 3.0)")
        self.assertEqual("Position: {}".format(self.v2), "Position: " + str(self.v2))

    def test_immutable(self):
        with self.assertRaises(AttributeError):
            self.v1.X = 5
        with self.assertRaises(AttributeError):
            del self.v1.Y
        with self.assertRaises(AttributeError):
            self.v1.W = 1
        self.assertEqual(self.v1, Vector(1,2,3))

        # Copies and pickles come back as equal Vectors
        copied = deepcopy(self.v1)
        self.assertEqual(copied, self.v1)
        self.assertEqual(pickle.loads(pickle.dumps(self.v4)), self.v4)

    def test_getItem(self):
        self.assertEqual(self.v1[0], 1)
        self.assertEqual(self.v1[1], 2)
        self.assertEqual(self.v1[2], 3)

    def test_iter(self):
        x, y, z = self.v1
        self.assertEqual(x, 1)
        self.assertEqual(y, 2)
        self.assertEqual(z, 3)

    def test_constructorParsing(self):
        self.assertEqual(Vector("(1,2,3)"), self.v1)
        self.assertEqual(Vector("(1, 2, 3)"), self.v1)
        self.assertEqual(Vector("(1;2;3)"), self.v1)
        self.assertEqual(Vector("(1 2 3)"), self.v1)
        self.assertEqual(Vector(" (694.25 200 3) "), Vector(694.25, 200, 3))
        self.assertEqual(Vector("(0.0  0.0  0.0)"), Vector(0,0,0))

        with self.assertRaises(ValueError):
            Vector("(1 2)")
        with self.assertRaises(ValueError):
            Vector(1, 2)

    def test_factories(self):
        self.assertEqual(Vector.zero(), Vector(0,0,0))
        self.assertEqual(Vector.fromAxis(Axis.X), Vector.unitX())
        self.assertEqual(Vector.fromAxis(Axis.Y), Vector(0,1,0))
        self.assertEqual(Vector.fromAxis(Axis.Z), Vector(0,0,1))

        with self.assertRaises(NotImplementedError):
            Vector.fromAxis(3)

    def test_Multiplication(self):
        self.assertEqual(self.v1*0.0,Vector(0,0,0))
        self.assertEqual(self.v1*1.0, self.v1)
        self.assertEqual(self.v1*(-1), self.v2)

    def test_rMul(self):
        assertVectorsAlmostEqual(self, 0.0*self.v1,Vector(0,0,0))
        assertVectorsAlmostEqual(self, 1.0*self.v1, self.v1)
        assertVectorsAlmostEqual(self, (-1)*self.v1, self.v2)

    #Test == operator
    def test_equal(self):
        self.assertEqual(self.v1, Vector(1,2,3))
        self.assertNotEqual(self.v1, Vector(1,2,4))
        # Equality is tolerance-based
        self.assertEqual(self.v1, Vector(1, 2, 3 + tiny/2))
        self.assertNotEqual(self.v1, "(1 2 3)")

    #Test + operator
    def test_add(self):
        self.assertEqual(self.v1 + self.v2, Vector(0,0,0))
        self.assertEqual(self.v1 + self.v3, Vector(3,4,5))
        self.assertEqual(self.v2 + self.v3, Vector(1,0,-1))

    #Test - operator
    def test_subtract(self):
        self.assertEqual(self.v1 - self.v2, Vector(2,4,6))
        self.assertEqual(self.v2 - self.v1, Vector(-2,-4,-6))

    def test_neg(self):
        self.assertEqual(-self.v1, Vector(-1,-2,-3))

    def test_str(self):
        self.assertEqual(str(self.v1), "(1.0 2.0 3.0)")
        self.assertEqual(Vector(str(self.v4)), self.v4)

    def test_dotProduct(self):
        self.assertEqual(self.v1 * self.v2, -14)
        self.assertEqual(self.v2 * self.v1, -14)
        self.assertEqual(self.v1.dot(self.v3), 12)
        self.assertEqual(self.v5 * self.v6, 28)

    def test_scalarMult(self):
        self.assertEqual(self.v1 * 3, Vector(3,6,9))
        self.assertEqual(self.v3 * 2, Vector(4,4,4))

    #Test getting the magnitude of the vector
    def test_length(self):
        self.assertAlmostEqual(self.v1.length(), sqrt(14))
        self.assertAlmostEqual(self.v3.length(), sqrt(12))
        self.assertEqual(self.v5.length(), 5)
        self.assertEqual(self.v6.length(), 6)
        self.assertEqual(self.v5.lengthSquared(), 25)

    #Test turning vector into a unit vector
    def test_normalize(self):
        self.assertEqual(self.v4.normalize(), Vector(1/sqrt(26), -3/sqrt(26), 4/sqrt(26)))
        self.assertAlmostEqual(self.v6.normalize().length(), 1.0, 14)
        # Zero vectors can't be normalized, returned unchanged
        self.assertEqual(Vector.zero().normalize(), Vector.zero())

    #Test getting the angle between two vectors
    def test_angle(self):
        self.assertAlmostEqual(self.v5.angle(self.v6), acos(14.0/15))
        self.assertAlmostEqual(self.v6.angle(self.v5), acos(14.0/15))
        self.assertAlmostEqual(self.v7.angle(self.v8), acos(0.1 * sqrt(5)))

    def test_crossProduct(self):
        self.assertEqual(self.v1.crossProduct(self.v1), Vector(0,0,0))
        self.assertEqual(self.v1.crossProduct(self.v3), Vector(-2,4,-2))
        #Can only take the cross product with another vector
        with self.assertRaises(TypeError):
            self.v1.crossProduct(33)

    def test_crossOp(self):
        assertVectorsAlmostEqual(self, self.v1.crossOp() * self.v4, self.v1.crossProduct(self.v4))

    def test_outer(self):
        M = self.v1.outer(self.v3)
        assertVectorsAlmostEqual(self, M * self.v5, self.v1 * (self.v3 * self.v5))

    def test_rotations(self):
        assertVectorsAlmostEqual(self, Vector(0,1,0).rotateAboutX(pi/2), Vector(0,0,1))
        assertVectorsAlmostEqual(self, Vector(0,0,1).rotateAboutY(pi/2), Vector(1,0,0))
        assertVectorsAlmostEqual(self, Vector(1,0,0).rotateAboutZ(pi/2), Vector(0,1,0))
        assertVectorsAlmostEqual(self, Vector(1,0,0).rotateAbout(Axis.Z, pi/2), Vector(0,1,0))

        # Rotation about an arbitrary axis agrees with the single-axis rotations
        assertVectorsAlmostEqual(self, self.v1.rotateAbout(Vector(0,0,5), 0.3), self.v1.rotateAboutZ(0.3))
        # Components along the axis are unchanged
        assertVectorsAlmostEqual(self, self.v3.rotateAbout(self.v3, 1.234), self.v3)

        with self.assertRaises(NotImplementedError):
            self.v1.rotateAbout("X", 1)

    #Test / operator
    def test_Division(self):
        self.assertEqual(self.v1 / 2, Vector(0.5,1,1.5))
        self.assertEqual(self.v2 / 2, Vector(-0.5,-1,-1.5))

    def test_unsupportedOperand(self):
        with self.assertRaises(TypeError):
            self.v1 * "3"

#If this file is run by itself, run the tests above
if __name__ == '__main__':
    unittest.main()
