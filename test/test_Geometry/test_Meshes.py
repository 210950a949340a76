import unittest
from test.testUtilities import (assertMatricesAlmostEqual,
                                assertVectorsAlmostEqual)

from FREEBODY.Geometry import createBox, createCube, createPyramid
from FREEBODY.Motion import Matrix3, Vector


class TestMeshes(unittest.TestCase):
    def test_box(self):
        a, b, c, m = 4, 0.4, 2.6, 0.12
        box = createBox(a, b, c)
        self.assertEqual(len(box.faces), 6)
        self.assertEqual(len(box.nodes), 8)
        self.assertAlmostEqual(box.volume, a*b*c)
        assertVectorsAlmostEqual(self, box.center, Vector.zero())

        expected = Matrix3.diagonal(m*(b*b + c*c)/12, m*(a*a + c*c)/12, m*(a*a + b*b)/12)
        assertMatricesAlmostEqual(self, box.getInertiaAboutCenter(m), expected, 6)

    def test_boxFacesPointOutwards(self):
        box = createBox(1, 2, 3)
        for polygon in box.polygons():
            self.assertGreater(polygon.normal.dot(polygon.center), 0)

    def test_cube(self):
        cube = createCube(2)
        self.assertAlmostEqual(cube.volume, 8)
        assertMatricesAlmostEqual(self, cube.getInertiaAboutCenter(3), Matrix3.scalar(2))

    def test_pyramid(self):
        side, height, mass = 2, 3, 1.5
        pyramid = createPyramid(side, height)
        self.assertEqual(len(pyramid.faces), 5)
        self.assertEqual(len(pyramid.nodes), 5)
        self.assertAlmostEqual(pyramid.volume, side*side*height/3)
        assertVectorsAlmostEqual(self, pyramid.center, Vector(0, 0, height/4))

        Ixx = mass*(side*side/20 + 3*height*height/80)
        Izz = mass*side*side/10
        assertMatricesAlmostEqual(self, pyramid.getInertiaAboutCenter(mass), Matrix3.diagonal(Ixx, Ixx, Izz))

    def test_pyramidBaseFacesDown(self):
        pyramid = createPyramid(1, 1)
        assertVectorsAlmostEqual(self, pyramid.getPolygon(0).normal, Vector(0,0,-1))

if __name__ == '__main__':
    unittest.main()
