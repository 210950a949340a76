'''
FREEBODY: free rigid body motion simulator.

Simulation entry point: `FREEBODY.Main.main`.
`FREEBODY.Main.main` will initialize a `FREEBODY.SimulationRunners.SimulationRunner`, which reads a simulation definition file,
    creates the bodies it describes and advances them through time using `FREEBODY.SimulationRunners.Simulation`.

Simulations can also be set up directly from Python. A box spinning about its z-axis:

    >>> from FREEBODY.Geometry import createBox
    >>> from FREEBODY.Motion import Pose, Vector, Vector33
    >>> from FREEBODY.SimulationRunners import Simulation
    >>> sim = Simulation()
    >>> box = sim.addBody(1.0, createBox(1, 2, 3), Pose.identity(), Vector33(Vector.zero(), Vector(0, 0, 1)))
    >>> nSubSteps = sim.run(endTime=5)
    >>> state = sim.states[0]
    >>> motion = box.getMotion(state.pose.orientation, state.momentum)
    >>> (motion.rotational - Vector(0, 0, 1)).length() < 1e-9
    True
    >>> motion.translational.length() < 1e-9
    True

See README.md for info about installation, running simulations and running the unit tests
'''

__version__ = "0.1.0"

__pdoc__ = {
    'Examples': False
}
