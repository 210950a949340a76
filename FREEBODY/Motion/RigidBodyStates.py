'''
Defines the integrated state of a rigid body.
States are defined in such a way that, for the purposes of Runge-Kutta motion integration, they can be treated like scalars.
'''
from FREEBODY.Motion.pose import Pose
from FREEBODY.Motion.SpatialVector import Vector33

__all__ = [ "BodyState", "StateList" ]

class BodyState():
    """
        Class created to be able to treat rigid body states like scalars when integrating the movement of a rigid body
            pose = Pose (position of the body origin, orientation) - World frame
            momentum = Vector33 (linear momentum, angular momentum about the body origin) - World frame

        Adding/subtracting BodyStates adds/subtracts each component.
        Multiplying a BodyState by a scalar scales each component.

        The same class also stores state time derivatives (pose = (velocity, quaternion rate), momentum = net loading),
            so 'state + h*rate' returns a BodyState again. Call normalize() on the result to return the orientation to unit length.
    """
    __slots__ = [ "pose", "momentum" ]

    def __init__(self, pose, momentum):
        # States are immutable, __setattr__ is disabled
        object.__setattr__(self, "pose", pose)
        object.__setattr__(self, "momentum", momentum)

    def __setattr__(self, name, value):
        raise AttributeError("BodyState is immutable, can't set attribute: {}".format(name))

    def __delattr__(self, name):
        raise AttributeError("BodyState is immutable, can't delete attribute: {}".format(name))

    def __reduce__(self):
        return (BodyState, (self.pose, self.momentum))

    @staticmethod
    def addScale(a, b, factor):
        ''' Returns a + factor*b '''
        return BodyState(a.pose + b.pose*factor, Vector33.addScale(a.momentum, b.momentum, factor))

    def normalize(self):
        return BodyState(self.pose.normalize(), self.momentum)

    def getDynamics(self, body):
        from FREEBODY.Motion.bodyDynamics import BodyDynamics
        return BodyDynamics(body, self)

    #### Operators ####
    def __add__(self, other):
        ''' Used in: initVal {+} timeStep * slope '''
        return BodyState(self.pose + other.pose, self.momentum + other.momentum)

    def __sub__(self, other):
        return BodyState(self.pose - other.pose, self.momentum - other.momentum)

    def __neg__(self):
        return BodyState(-self.pose, -self.momentum)

    def __mul__(self, scalar):
        ''' Used in: initVal + timeStep {*} slope '''
        scalar = float(scalar)
        return BodyState(self.pose*scalar, self.momentum*scalar)

    def __rmul__(self, scalar):
        return self * scalar

    def __truediv__(self, scalar):
        return self * (1/float(scalar))

    def __eq__(self, other):
        try:
            return self.pose == other.pose and self.momentum == other.momentum
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __iter__(self):
        yield self.pose
        yield self.momentum

    ### String Functions ###
    def getLogHeader(self):
        return " PositionX(m) PositionY(m) PositionZ(m)" + \
            " OrientationQ0 OrientationQ1 OrientationQ2 OrientationQ3" + \
            " MomentumX(kgm/s) MomentumY(kgm/s) MomentumZ(kgm/s)" + \
            " AngularMomentumX(kgm^2/s) AngularMomentumY(kgm^2/s) AngularMomentumZ(kgm^2/s)"

    def __str__(self):
        ''' Called by print '''
        return " {:>10.3f} {:>10.7f} {:>10.4f} {:>10.4f}".format(
            self.pose.position,
            self.pose.orientation,
            self.momentum.translational,
            self.momentum.rotational
        )

    def __repr__(self):
        return "BodyState({}, {})".format(self.pose, self.momentum)

class StateList(tuple):
    '''
        Immutable list of BodyStates (one per body), which can itself be integrated like a scalar:
            + / - / * scalar / / scalar are applied element-wise
        Used to integrate all the bodies in a simulation simultaneously
    '''
    def __new__(cls, states=()):
        return super().__new__(cls, states)

    def normalize(self):
        return StateList([ s.normalize() for s in self ])

    def __add__(self, other):
        if len(self) != len(other):
            raise ValueError("Can't add StateLists of different lengths: {}, {}".format(len(self), len(other)))
        return StateList([ a + b for a, b in zip(self, other) ])

    def __sub__(self, other):
        if len(self) != len(other):
            raise ValueError("Can't subtract StateLists of different lengths: {}, {}".format(len(self), len(other)))
        return StateList([ a - b for a, b in zip(self, other) ])

    def __neg__(self):
        return StateList([ -s for s in self ])

    def __mul__(self, scalar):
        scalar = float(scalar)
        return StateList([ s*scalar for s in self ])

    def __rmul__(self, scalar):
        return self * scalar

    def __truediv__(self, scalar):
        return self * (1/float(scalar))

    def __eq__(self, other):
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return "StateList({})".format(", ".join([ repr(s) for s in self ]))
