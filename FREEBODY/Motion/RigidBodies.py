"""
Rigid body mass properties and the Newton-Euler relations between motion, momentum, acceleration and applied loading.

Conventions used throughout:

* Motion (twist): (velocity of the body origin A, angular velocity)
* Momentum: (linear momentum p, angular momentum L_A about the body origin)
* Loading (wrench): (force F, moment τ_A about the body origin)
* c: offset from the body origin to the center of gravity. Expressed in the same (world or body) frame as the other inputs
* I_C / M_C: mass moment of inertia matrix about the CG and its inverse, in the same frame as the other inputs
"""
from FREEBODY.Motion.Matrix import Matrix3
from FREEBODY.Motion.pose import Pose
from FREEBODY.Motion.quaternion import Quaternion
from FREEBODY.Motion.SpatialVector import Vector33

__all__ = [ "RigidBody" ]

class RigidBody():
    """
        Interface:
            Mass properties (body frame):
                .mass, .volume, .density
                .cg = offset from the body origin to the CG
                .mmoi = inertia matrix about the CG
                .invMmoi = inverse inertia matrix, Matrix3.zero() if .mmoi is singular

            Initial conditions (used by `FREEBODY.SimulationRunners.Simulation.reset`):
                .initialPose = Pose
                .initialMotion = Vector33 twist

            .loading = None or a function, called with:
                1) Simulation Time
                2) Pose of the body
                3) Motion (Vector33 twist) of the body
            Expected to return a Vector33 wrench (world frame force, moment about the body origin)
    """
    def __init__(self, mass, solid, initialPose=None, initialMotion=None, name=None, loading=None):
        ''' solid must provide .volume, .center and .getInertiaAboutCenter(mass), see `FREEBODY.Geometry.Solids` '''
        self.mass = float(mass)
        self.solid = solid
        self.initialPose = initialPose if initialPose is not None else Pose.identity()
        self.initialMotion = initialMotion if initialMotion is not None else Vector33.zero()
        self.name = name
        self.loading = loading

        self.volume = solid.volume
        self.cg = solid.center
        self.mmoi = solid.getInertiaAboutCenter(self.mass)

        if not self.mmoi.isSingular():
            self.invMmoi = self.mmoi.inverse()
        else:
            self.invMmoi = Matrix3.zero()

    @property
    def density(self):
        if self.volume == 0:
            return 0.0
        return self.mass / self.volume

    def isDegenerate(self) -> bool:
        ''' True for bodies with no mass or no finite (invertible) inertia. These never accelerate '''
        return self.mass <= 0 or self.invMmoi.isZero()

    #### Frame conversions ####
    def getInertiaMatrix(self, orientation, inverse=False):
        '''
            Returns the inertia (or inverse inertia) matrix about the CG, in the world frame: R * I * R^T
            orientation can be a Quaternion or a rotation Matrix3
        '''
        R = orientation.toRotation() if isinstance(orientation, Quaternion) else orientation
        I = self.invMmoi if inverse else self.mmoi
        return R * I * R.transpose()

    #### Motion <-> Momentum ####
    def getMomentum(self, orientation, motion):
        return self.getMomentumFrom(motion, self.getInertiaMatrix(orientation), orientation.rotate(self.cg))

    def getMomentumFrom(self, motion, I_C, cg):
        '''
            Momentum of a body moving with 'motion', summed about the body origin:
                p = m(v_A + ω x c)
                L_A = I_C ω + c x p
        '''
        v_A = motion.translational
        omega = motion.rotational
        p = (v_A + omega.crossProduct(cg)) * self.mass
        L_A = I_C*omega + cg.crossProduct(p)
        return Vector33(p, L_A)

    def getMotion(self, orientation, momentum):
        return self.getMotionFrom(momentum, self.getInertiaMatrix(orientation, inverse=True), orientation.rotate(self.cg))

    def getMotionFrom(self, momentum, M_C, cg):
        '''
            Motion of the body origin, given momentum summed about the body origin:
                ω = M_C (L_A - c x p)
                v_A = p/m - ω x c
            Massless bodies don't move
        '''
        if self.mass <= 0:
            return Vector33.zero()

        p = momentum.translational
        L_A = momentum.rotational
        omega = M_C*(L_A - cg.crossProduct(p))
        v_A = p/self.mass - omega.crossProduct(cg)
        return Vector33(v_A, omega)

    #### Acceleration <-> Loading ####
    def getNetLoad(self, acceleration, motion, I_C, cg):
        '''
            Loading required to produce 'acceleration' of the body origin:
                F = m(a_A + α x c + ω x (ω x c))
                τ_A = I_C α + ω x I_C ω + c x F
        '''
        omega = motion.rotational
        a_A = acceleration.translational
        alpha = acceleration.rotational

        F = (a_A + alpha.crossProduct(cg) + omega.crossProduct(omega.crossProduct(cg))) * self.mass
        tau_A = I_C*alpha + omega.crossProduct(I_C*omega) + cg.crossProduct(F)
        return Vector33(F, tau_A)

    def getAcceleration(self, netLoad, motion, M_C, I_C, cg):
        '''
            Inverse of getNetLoad:
                α = M_C (τ_A - c x F - ω x I_C ω)
                a_A = F/m - α x c - ω x (ω x c)
        '''
        if self.mass <= 0 or M_C.isZero():
            return Vector33.zero()

        omega = motion.rotational
        F = netLoad.translational
        tau_A = netLoad.rotational

        alpha = M_C*(tau_A - cg.crossProduct(F) - omega.crossProduct(I_C*omega))
        a_A = F/self.mass - alpha.crossProduct(cg) - omega.crossProduct(omega.crossProduct(cg))
        return Vector33(a_A, alpha)

    def getAccelerationFromMomentum(self, netLoad, momentum, M_C, cg):
        '''
            Momentum-driven variant of getAcceleration:
                G = F - ω x p
                α = M_C (τ_A - ω x L_A - v_A x p - c x G)
                a_A = G/m - α x c - v_A x ω
        '''
        if self.mass <= 0 or M_C.isZero():
            return Vector33.zero()

        motion = self.getMotionFrom(momentum, M_C, cg)
        v_A = motion.translational
        omega = motion.rotational
        p = momentum.translational
        L_A = momentum.rotational
        F = netLoad.translational
        tau_A = netLoad.rotational

        G = F - omega.crossProduct(p)
        alpha = M_C*(tau_A - omega.crossProduct(L_A) - v_A.crossProduct(p) - cg.crossProduct(G))
        a_A = G/self.mass - alpha.crossProduct(cg) - v_A.crossProduct(omega)
        return Vector33(a_A, alpha)

    def __str__(self):
        _, angle = self.initialPose.orientation.getAxisAngle()
        name = self.name if self.name is not None else "RigidBody"
        return "{}(m={} r={:.2g} θ={:.2g} v={:.3g} ω={:.3g})".format(
            name,
            self.mass,
            self.initialPose.position.length(),
            angle,
            self.initialMotion.translational.length(),
            self.initialMotion.rotational.length()
        )
