import unittest
from test.testUtilities import (assertMatricesAlmostEqual,
                                assertQuaternionsAlmostEqual,
                                assertSpatialVectorsAlmostEqual,
                                assertVectorsAlmostEqual)

from FREEBODY.Motion import (BodyDynamics, BodyState, Matrix3, Pose,
                             Quaternion, RigidBody, Vector, Vector33)


class OffsetSolid():
    def __init__(self, center, principalInertias=(1, 2, 3)):
        self.center = center
        self.principalInertias = principalInertias
        self.volume = 1.0

    def getInertiaAboutCenter(self, mass):
        return Matrix3.diagonal(*self.principalInertias) * mass

class TestBodyDynamics(unittest.TestCase):
    def setUp(self):
        self.body = RigidBody(1.5, OffsetSolid(Vector(0.2,0.1,-0.4)))
        orientation = Quaternion(axisOfRotation=Vector(0.3,-1,0.2), angle=1.2)
        self.motion = Vector33(Vector(1,0.5,-2), Vector(0.4,-0.3,1.5))
        momentum = self.body.getMomentum(orientation, self.motion)
        self.state = BodyState(Pose(Vector(1,2,3), orientation), momentum)
        self.dynamics = BodyDynamics(self.body, self.state)

    def test_derivedProperties(self):
        orientation = self.state.pose.orientation
        self.assertEqual(self.dynamics.mass, 1.5)
        assertVectorsAlmostEqual(self, self.dynamics.cg, orientation.rotate(self.body.cg))
        assertSpatialVectorsAlmostEqual(self, self.dynamics.motion, self.motion)
        self.assertEqual(self.dynamics.pose, self.state.pose)
        self.assertEqual(self.dynamics.momentum, self.state.momentum)
        self.assertEqual(self.dynamics.IC, self.body.getInertiaMatrix(orientation))
        assertMatricesAlmostEqual(self, self.dynamics.IC * self.dynamics.MC, Matrix3.identity())

    def test_momentumRate(self):
        loading = Vector33(Vector(0,0,-10), Vector(1,0,0))
        rate = self.dynamics.getMomentumRate(loading)
        assertVectorsAlmostEqual(self, rate.pose.position, self.motion.translational)
        expectedQDot = Quaternion(self.motion.rotational, 0) * self.state.pose.orientation * 0.5
        assertVectorsAlmostEqual(self, rate.pose.orientation.V, expectedQDot.V)
        self.assertAlmostEqual(rate.pose.orientation.S, expectedQDot.S)
        self.assertEqual(rate.momentum, loading)

        # Quaternion rate is tangent to the unit sphere
        self.assertAlmostEqual(rate.pose.orientation.dot(self.state.pose.orientation), 0)

    def test_transportLoading(self):
        transport = self.dynamics.getTransportLoading()
        self.assertEqual(transport.translational, Vector.zero())
        v = self.motion.translational
        p = self.state.momentum.translational
        assertVectorsAlmostEqual(self, transport.rotational, -v.crossProduct(p))

    def test_forwardInverseRoundTrip(self):
        loading = Vector33(Vector(3,-1,2), Vector(0.5,0.1,-0.3))
        success, acceleration = self.dynamics.solveForAcceleration(loading)
        self.assertTrue(success)
        success, recoveredLoading = self.dynamics.solveForLoading(acceleration)
        self.assertTrue(success)
        assertSpatialVectorsAlmostEqual(self, recoveredLoading, loading)

    def test_forwardDynamicsMatchesRigidBody(self):
        loading = Vector33(Vector(3,-1,2), Vector(0.5,0.1,-0.3))
        _, acceleration = self.dynamics.solveForAcceleration(loading)
        expected = self.body.getAcceleration(loading, self.motion, self.dynamics.MC, self.dynamics.IC, self.dynamics.cg)
        assertSpatialVectorsAlmostEqual(self, acceleration, expected)

    def test_pin(self):
        a = Vector(0,0,-1)
        momentAboutPin = Vector(0.2,0.3,-0.1)
        success, angularAcceleration, force = self.dynamics.solveForPin(a, momentAboutPin)
        self.assertTrue(success)

        # The pin result is a consistent free-body solution: inverse dynamics gives back the known quantities
        _, loading = self.dynamics.solveForLoading(Vector33(a, angularAcceleration))
        assertVectorsAlmostEqual(self, loading.translational, force)
        assertVectorsAlmostEqual(self, loading.rotational, momentAboutPin)

    def test_slider(self):
        angularAcceleration = Vector(0.1,-0.2,0.3)
        force = Vector(1,2,3)
        success, a, moment = self.dynamics.solveForSlider(angularAcceleration, force)
        self.assertTrue(success)

        _, acceleration = self.dynamics.solveForAcceleration(Vector33(force, moment))
        assertVectorsAlmostEqual(self, acceleration.translational, a)
        assertVectorsAlmostEqual(self, acceleration.rotational, angularAcceleration)

    def test_degenerateBody(self):
        massless = RigidBody(0, OffsetSolid(Vector.zero()))
        dynamics = BodyDynamics(massless, BodyState(Pose(), Vector33(Vector(1,0,0), Vector.zero())))
        self.assertEqual(dynamics.motion, Vector33.zero())

        success, acceleration = dynamics.solveForAcceleration(Vector33(Vector(1,1,1), Vector.zero()))
        self.assertFalse(success)
        self.assertEqual(acceleration, Vector33.zero())

        success, a, moment = dynamics.solveForSlider(Vector.zero(), Vector(1,0,0))
        self.assertFalse(success)

        noInertia = RigidBody(1, OffsetSolid(Vector.zero(), principalInertias=(0,0,0)))
        dynamics = BodyDynamics(noInertia, BodyState(Pose(), Vector33.zero()))
        success, loading = dynamics.solveForLoading(Vector33(Vector(1,0,0), Vector.zero()))
        self.assertFalse(success)
        success, angularAcceleration, force = dynamics.solveForPin(Vector.zero(), Vector(1,0,0))
        self.assertFalse(success)
        self.assertEqual(force, Vector.zero())

    def test_pureSpinIsStationary(self):
        # Spinning about a principal axis through the CG: no angular acceleration, no translation
        body = RigidBody(2, OffsetSolid(Vector.zero()))
        motion = Vector33(Vector.zero(), Vector(0,0,3))
        state = BodyState(Pose(), body.getMomentum(Quaternion.identity(), motion))
        success, acceleration = BodyDynamics(body, state).solveForAcceleration(Vector33.zero())
        self.assertTrue(success)
        self.assertEqual(acceleration, Vector33.zero())

        rate = BodyDynamics(body, state).getMomentumRate(Vector33.zero())
        assertQuaternionsAlmostEqual(self, rate.pose.orientation * 2, Quaternion(Vector(0,0,3), 0))

if __name__ == '__main__':
    unittest.main()
