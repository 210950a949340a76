'''
Read-only snapshot of the world-frame dynamic properties of a rigid body in a particular state.
Solves the forward (loading -> acceleration) and inverse (acceleration -> loading) Newton-Euler equations,
    as well as the mixed pin and slider joint problems.
'''
from FREEBODY.Motion.Matrix import mmoi
from FREEBODY.Motion.pose import Pose
from FREEBODY.Motion.RigidBodyStates import BodyState
from FREEBODY.Motion.SpatialVector import Vector33
from FREEBODY.Motion.vector import Vector

__all__ = [ "BodyDynamics" ]

class BodyDynamics():
    '''
        Computed from a `FREEBODY.Motion.RigidBodies.RigidBody` and a `FREEBODY.Motion.RigidBodyStates.BodyState`:
            .rotation = body to world rotation matrix
            .mass
            .IC / .MC = world frame inertia matrix about the CG, and its inverse
            .cg = world frame offset from the body origin to the CG
            .pose, .momentum = copied from the state
            .motion = (velocity of the body origin, angular velocity), derived from momentum

        All solve* functions return a tuple, the first element of which is a bool indicating success.
        On failure (massless body / singular inertia), the remaining elements are zero.
    '''
    __slots__ = [ "rotation", "mass", "IC", "MC", "cg", "pose", "momentum", "motion" ]

    def __init__(self, body, state):
        self.pose = state.pose
        self.momentum = state.momentum
        self.rotation = state.pose.orientation.toRotation()
        self.mass = body.mass
        self.IC = body.getInertiaMatrix(self.rotation)
        self.MC = body.getInertiaMatrix(self.rotation, inverse=True)
        self.cg = state.pose.fromLocalDirection(body.cg)
        self.motion = body.getMotionFrom(state.momentum, self.MC, self.cg)

    def getMomentumRate(self, loading):
        ''' Returns the state time derivative: (velocity, 0.5*ω*q), loading '''
        q = self.pose.orientation
        v = self.motion.translational
        omega = self.motion.rotational
        qDot = 0.5 * omega * q
        return BodyState(Pose(v, qDot), loading)

    def getTransportLoading(self):
        '''
            Momentum is summed about the body origin, which moves at v.
            Its rate of change picks up a -v x p term, returned here as a pure moment
        '''
        v = self.motion.translational
        p = self.momentum.translational
        return Vector33.pureWrench(-v.crossProduct(p))

    def solveForAcceleration(self, loading):
        '''
            Forward dynamics. loading is a wrench about the body origin.
                ω' = MC (τ - ω x IC ω - c x F)
                v' = F/m + c x ω' - ω x (ω x c)
            Returns (success, Vector33 acceleration)
        '''
        if self.mass <= 0 or self.MC.isZero():
            return False, Vector33.zero()

        omega = self.motion.rotational
        F = loading.translational
        tau = loading.rotational
        c = self.cg

        omegaDot = self.MC * (tau - omega.crossProduct(self.IC*omega) - c.crossProduct(F))
        vDot = F/self.mass + c.crossProduct(omegaDot) - omega.crossProduct(omega.crossProduct(c))
        return True, Vector33(vDot, omegaDot)

    def solveForLoading(self, acceleration):
        '''
            Inverse dynamics, returns the loading (about the body origin) that produces 'acceleration'
                F = m(v' - c x ω' + ω x (ω x c))
                τ = IC ω' + ω x IC ω + c x F
            Returns (success, Vector33 loading)
        '''
        if self.mass <= 0 or self.IC.isZero():
            return False, Vector33.zero()

        omega = self.motion.rotational
        vDot = acceleration.translational
        omegaDot = acceleration.rotational
        c = self.cg

        F = (vDot - c.crossProduct(omegaDot) + omega.crossProduct(omega.crossProduct(c))) * self.mass
        tau = self.IC*omegaDot + omega.crossProduct(self.IC*omega) + c.crossProduct(F)
        return True, Vector33(F, tau)

    def solveForPin(self, translationalAcceleration, momentAboutPin):
        '''
            Body pinned at its origin: the origin's acceleration and the moment about it are known.
            Solves for the angular acceleration and the force transmitted through the pin, using the inertia about the pin:
                I_A = IC + mmoi(c, m)
                ω' = I_A^-1 (τ - ω x IC ω - c x m(a + ω x (ω x c)))
                F = m(a - c x ω' + ω x (ω x c))
            Returns (success, angularAcceleration, force)
        '''
        I_A = self.IC + mmoi(self.cg, self.mass)
        if I_A.isSingular():
            return False, Vector.zero(), Vector.zero()

        omega = self.motion.rotational
        a = translationalAcceleration
        c = self.cg
        centripetal = omega.crossProduct(omega.crossProduct(c))

        omegaDot = I_A.inverse() * (momentAboutPin - omega.crossProduct(self.IC*omega) - c.crossProduct((a + centripetal) * self.mass))
        F = (a - c.crossProduct(omegaDot) + centripetal) * self.mass
        return True, omegaDot, F

    def solveForSlider(self, angularAcceleration, force):
        '''
            Body on a slider: the angular acceleration and the applied force are known.
                a = F/m + c x ω' - ω x (ω x c)
                τ = IC ω' + ω x IC ω + c x F
            Returns (success, translationalAcceleration, momentAboutPin)
        '''
        if self.mass <= 0:
            return False, Vector.zero(), Vector.zero()

        omega = self.motion.rotational
        omegaDot = angularAcceleration
        c = self.cg

        a = force/self.mass + c.crossProduct(omegaDot) - omega.crossProduct(omega.crossProduct(c))
        tau = self.IC*omegaDot + omega.crossProduct(self.IC*omega) + c.crossProduct(force)
        return True, a, tau
