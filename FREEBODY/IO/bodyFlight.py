'''
Temporarily holds simulation results.
Used for plotting body paths and energy histories.
'''
import numpy as np

__all__ = [ "BodyFlight" ]

class BodyFlight():
    ''' Holds the state history of a single body '''

    def __init__(self, name=None):
        ''' These lists are filled in during a simulation by `FREEBODY.SimulationRunners.SingleSimulations.SimulationRunner` '''
        self.name = name
        self.times = []
        self.states = []

    def append(self, time, state):
        self.times.append(time)
        self.states.append(state)

    def getFinalTime(self):
        return self.times[-1]

    def getFinalState(self):
        return self.states[-1]

    def getMaxSpeed(self, body):
        ''' Max speed of the body origin '''
        maxSpeed = 0
        for state in self.states:
            speed = body.getMotion(state.pose.orientation, state.momentum).translational.length()
            if speed > maxSpeed:
                maxSpeed = speed
        return maxSpeed

    def getKineticEnergies(self, body):
        '''
            Returns a list of kinetic energies, one per logged state:
                KE = 0.5 * (motion . momentum) = 0.5 * (v_A . p + ω . L_A)
        '''
        energies = []
        for state in self.states:
            motion = body.getMotion(state.pose.orientation, state.momentum)
            energies.append(0.5 * motion.dot(state.momentum))
        return energies

    def getMomentumMagnitudes(self):
        ''' Returns a list of (|p|, |L_A|) tuples '''
        return [ (state.momentum.translational.length(), state.momentum.rotational.length()) for state in self.states ]

    def getPositions(self) -> np.ndarray:
        ''' Returns an (nStates x 3) array of body origin positions '''
        return np.array([ list(state.pose.position) for state in self.states ])
