import math
import os
import sys

from tqdm import tqdm

from FREEBODY.Geometry import Sphere, createBox, createPyramid
from FREEBODY.IO import BodyFlight, SimDefinition, SubDictReader
from FREEBODY.IO import Logging, Plotting
from FREEBODY.Motion import (BodyState, Pose, Quaternion, RigidBody, StateList,
                             Vector, Vector33, integratorFactory)
from FREEBODY.Utilities import isFinite, strtobool

__all__ = [ "Simulation", "SimulationRunner", "runSimulation", "loadSimDefinition", "createBody", "constantLoading" ]

class Simulation():
    '''
        Owns an ordered collection of `FREEBODY.Motion.RigidBody` objects and a parallel collection of their `FREEBODY.Motion.BodyState`s.
        Advances all of them simultaneously with a Runge-Kutta integrator (RK4 by default).

        States are Empty until reset() is called (run() calls it automatically), after which there is one state per body.
        The state collection is replaced as a whole after every completed sub-step.

        Step callbacks (see addStepCallback) are called with this Simulation once after reset() and once after every completed sub-step.
    '''
    def __init__(self, gravity=None, integrationMethod="RK4"):
        self._bodies = []
        self._states = []
        self._time = 0.0

        self.gravity = gravity if gravity is not None else Vector.zero()
        ''' (Vector) World-frame gravitational acceleration, applied to all bodies '''

        self.stepCallbacks = []

        self.integrator = integratorFactory(integrationMethod, normalize=lambda states: states.normalize())
        ''' Callable `FREEBODY.Motion.Integration.ClassicalIntegrator`. Renormalizes all orientations after each stage '''

    #### Snapshot accessors ####
    @property
    def bodies(self):
        return tuple(self._bodies)

    @property
    def states(self):
        return tuple(self._states)

    @property
    def time(self):
        return self._time

    #### Setup ####
    def addBody(self, mass, solid, initialPose=None, initialMotion=None, name=None, loading=None):
        ''' Creates a `FREEBODY.Motion.RigidBody` and adds it to the simulation. Returns the new body '''
        body = RigidBody(mass, solid, initialPose, initialMotion, name=name, loading=loading)
        return self.addRigidBody(body)

    def addRigidBody(self, body, initialPose=None):
        '''
            Adds an existing body, optionally overriding its initial pose. Returns the body.
            If the simulation has already been reset, the body starts at its initial conditions right away
        '''
        if initialPose is not None:
            body.initialPose = initialPose

        self._bodies.append(body)
        if len(self._states) > 0:
            self._states.append(self._getInitialState(body))

        return body

    @staticmethod
    def _getInitialState(body):
        pose = body.initialPose
        return BodyState(pose, body.getMomentum(pose.orientation, body.initialMotion))

    def reset(self):
        ''' Sets time to zero and creates a state for each body from its initial pose and motion '''
        self._time = 0.0
        self._states = [ self._getInitialState(body) for body in self._bodies ]
        self._notifyStepCallbacks()

    #### Step notification ####
    def addStepCallback(self, callback):
        self.stepCallbacks.append(callback)

    def removeStepCallback(self, callback):
        ''' Raises ValueError if callback was not registered '''
        self.stepCallbacks.remove(callback)

    def _notifyStepCallbacks(self):
        for callback in list(self.stepCallbacks):
            callback(self)

    #### Rates ####
    def _getBodyRate(self, time, body, state):
        '''
            Returns the time derivative of state:
                pose rate = (velocity, quaternion rate)
                momentum rate = gravity + applied loading + momentum transport term
        '''
        dynamics = state.getDynamics(body)

        # Gravity acts at the CG, loading is summed about the body origin
        loading = Vector33.wrenchAt(self.gravity*body.mass, dynamics.cg)
        if body.loading is not None:
            loading = loading + body.loading(time, state.pose, dynamics.motion)
        loading = loading + dynamics.getTransportLoading()

        return dynamics.getMomentumRate(loading)

    def _getRates(self, time, states):
        return StateList([ self._getBodyRate(time, body, state) for body, state in zip(self._bodies, states) ])

    def getRate(self, states, h=0, rates=None):
        '''
            Returns the rate of each state, evaluated at self.time + h.
            If rates are provided, they are evaluated at the trial states normalize(state + h*rate) instead
        '''
        if rates is not None:
            states = [ BodyState.addScale(state, rate, h).normalize() for state, rate in zip(states, rates) ]

        return self._getRates(self._time + h, states)

    def integrate(self, states, h):
        ''' Returns the states (StateList) after a single Runge-Kutta step of size h, starting from states at self.time '''
        result = self.integrator(StateList(states), self._time, self._getRates, h)
        return result.newValue

    def estimateMaxTimeStep(self):
        '''
            Limits each step to about half a degree of rotation of the fastest spinning body: pi / (360*omega_max)
            Returns 1 if there are no bodies or none of them are rotating
        '''
        if len(self._bodies) == 0:
            return 1.0

        if len(self._states) > 0:
            motions = [ body.getMotion(state.pose.orientation, state.momentum) for body, state in zip(self._bodies, self._states) ]
        else:
            motions = [ body.initialMotion for body in self._bodies ]

        omegaMax = max(motion.rotational.length() for motion in motions)
        if omegaMax > 0:
            return math.pi / (360*omegaMax)
        return 1.0

    #### Running ####
    def handleCollisions(self, states):
        ''' Extension point, called after each sub-step with the new states. Returns the states to commit. Currently does nothing '''
        return states

    def run(self, endTime=None, nSteps=None):
        '''
            run(endTime):           nSteps = ceil((endTime - time) / estimateMaxTimeStep())
            run(nSteps=n):          endTime = time + n*estimateMaxTimeStep()
            run(endTime, nSteps):   nominal step size = (endTime - time) / nSteps

            Each sub-step is limited to min(nominal step, estimateMaxTimeStep(), endTime - time)
            Resets the simulation first if it has no states.
            Returns the number of sub-steps taken
        '''
        if endTime is None and nSteps is None:
            raise ValueError("Simulation.run requires an endTime, a number of steps (nSteps), or both")
        if nSteps is not None and nSteps < 1:
            raise ValueError("nSteps must be >= 1, got: {}".format(nSteps))

        if len(self._states) == 0:
            self.reset()

        if endTime is None:
            endTime = self._time + nSteps*self.estimateMaxTimeStep()
        if endTime <= self._time:
            return 0
        if nSteps is None:
            nSteps = max(1, math.ceil((endTime - self._time) / self.estimateMaxTimeStep()))

        h = (endTime - self._time) / nSteps
        nSubSteps = 0

        while self._time < endTime:
            remainingTime = endTime - self._time
            hNext = min(h, self.estimateMaxTimeStep(), remainingTime)

            newStates = self.integrate(self._states, hNext)
            newStates = self.handleCollisions(newStates)

            self._states = list(newStates)
            # Land exactly on endTime on the final sub-step
            self._time = endTime if hNext == remainingTime else self._time + hNext
            nSubSteps += 1

            self._notifyStepCallbacks()

        return nSubSteps

def loadSimDefinition(simDefinitionFilePath=None, simDefinition=None, silent=False):
    ''' Loads a simulation definition file into a `FREEBODY.IO.SimDefinition` object - accepts either a file path or a `FREEBODY.IO.SimDefinition` object as input '''
    if simDefinition is None and simDefinitionFilePath is not None:
        return SimDefinition(simDefinitionFilePath, silent=silent)

    elif simDefinition is not None:
        return simDefinition

    else:
        raise ValueError(""" Insufficient information to initialize a SimulationRunner.
            Please provide either simDefinitionFilePath (string) or simDefinition (SimDefinition), which has been created from the desired Sim Definition file.
            If both are provided, the SimDefinition is used.""")

def constantLoading(force, moment):
    ''' Returns a body loading function that always returns the same world-frame wrench (moment about the body origin) '''
    wrench = Vector33(force, moment)
    def loading(time, pose, motion):
        return wrench
    return loading

def createBody(bodyDictReader):
    '''
        Creates a `FREEBODY.Motion.RigidBody` from a `FREEBODY.IO.SubDictReader` pointing at a body's dictionary ('Bodies.Box' for example)
    '''
    name = bodyDictReader.getDictName()

    shape = bodyDictReader.getString("shape")
    if shape == "Sphere":
        solid = Sphere(Vector.zero(), bodyDictReader.getFloat("radius"))
    elif shape == "Box":
        size = bodyDictReader.getVector("size")
        solid = createBox(size.X, size.Y, size.Z)
    elif shape == "Pyramid":
        solid = createPyramid(bodyDictReader.getFloat("side"), bodyDictReader.getFloat("height"))
    else:
        raise ValueError("Shape: {} of body: {} not implemented. Options are: Sphere, Box, Pyramid".format(shape, name))

    angle = math.radians(bodyDictReader.getFloat("orientationAngle"))
    orientation = Quaternion(axisOfRotation=bodyDictReader.getVector("orientationAxis"), angle=angle)
    initialPose = Pose(bodyDictReader.getVector("position"), orientation)
    initialMotion = Vector33(bodyDictReader.getVector("velocity"), bodyDictReader.getVector("angularVelocity"))

    force = bodyDictReader.getVector("Loading.force")
    moment = bodyDictReader.getVector("Loading.moment")
    if force.length() > 0 or moment.length() > 0:
        loading = constantLoading(force, moment)
    else:
        loading = None

    return RigidBody(bodyDictReader.getFloat("mass"), solid, initialPose, initialMotion, name=name, loading=loading)

class SimulationRunner():

    def __init__(self, simDefinitionFilePath=None, simDefinition=None, silent=False, resultsDirectory=None):
        '''
            Inputs:

                * simDefinitionFilePath:  (string) path to simulation definition file
                * simDefinition:          (`FREEBODY.IO.SimDefinition`) object that's already loaded and parsed the desired sim definition file
                * silent:                 (bool) toggles optional outputs to the console
                * resultsDirectory:       (string) where log files are written. Defaults to the directory containing the sim definition file
        '''
        self.simDefinition = loadSimDefinition(simDefinitionFilePath, simDefinition, silent)
        ''' Instance of `FREEBODY.IO.SimDefinition`. Defines the current simulation '''

        self.silent = silent

        self.loggingLevel = int(self.simDefinition.getValue("SimControl.loggingLevel"))
        self.resultsDirectory = resultsDirectory

        self.simulation = None
        ''' Instance of `Simulation`, created by createSimulation '''
        self.flights = []
        ''' One `FREEBODY.IO.BodyFlight` per body, filled in during run() '''
        self.stateLog = None
        ''' `FREEBODY.IO.Logging.TimeStepLog`, None if loggingLevel < 2 '''
        self.consoleOutputLog = []
        self.progressBar = None

    #### Pre-sim ####
    def createSimulation(self):
        ''' Creates a `Simulation` containing all the bodies defined in the 'Bodies' dictionary of the sim definition '''
        simDefinition = self.simDefinition

        integrationMethod = simDefinition.getValue("SimControl.timeDiscretization")
        gravity = Vector(simDefinition.getValue("SimControl.gravity"))
        simulation = Simulation(gravity, integrationMethod)

        bodyDicts = simDefinition.getImmediateSubDicts("Bodies")
        if len(bodyDicts) == 0:
            raise ValueError("No bodies defined in {}. Define each body as a sub-dictionary of 'Bodies'".format(simDefinition.fileName))

        for bodyDict in bodyDicts:
            # Bodies read their defaults from the 'Body' class
            simDefinition.setIfAbsent(bodyDict + ".class", "Body")
            simulation.addRigidBody(createBody(SubDictReader(bodyDict, simDefinition)))

        return simulation

    def _setUpConsoleLogging(self):
        if self.loggingLevel > 0:
            # Set up logging so that the output of any print calls after this point is captured in consoleOutputLog
            self.consoleOutputLog = []
            self.logger = Logging.Logger(self.consoleOutputLog, continueWritingToTerminal=not self.silent)
            sys.stdout = self.logger

            Logging.getSystemInfo(printToConsole=True)
            # Output sim definition file and default value dict to the log only
            self.consoleOutputLog += Logging.getSimDefinitionAndDefaultValueDictsForOutput(simDefinition=self.simDefinition, printToConsole=False)

        elif self.silent:
            # No intention of writing things to a log file, just prevent them from being printed to the terminal
            sys.stdout = Logging.Logger([], continueWritingToTerminal=False)

    def _setUpStateLog(self):
        if self.loggingLevel > 1:
            log = Logging.TimeStepLog()
            for body in self.simulation.bodies:
                log.addColumn(body.name + ".Position(m)", Vector.zero())
                log.addColumn(body.name + ".Orientation", Quaternion.identity())
                log.addColumn(body.name + ".Velocity(m/s)", Vector.zero())
                log.addColumn(body.name + ".AngularVelocity(rad/s)", Vector.zero())
                log.addColumn(body.name + ".Momentum(kgm/s)", Vector.zero())
                log.addColumn(body.name + ".AngularMomentum(kgm^2/s)", Vector.zero())
                log.addColumn(body.name + ".KineticEnergy(J)")
            self.stateLog = log

    #### During sim ####
    def _recordStep(self, simulation):
        ''' Step callback: caches the current states in self.flights and the state log '''
        time = simulation.time
        for flight, state in zip(self.flights, simulation.states):
            flight.append(time, state)

        if self.stateLog is not None:
            log = self.stateLog
            log.newLogRow(time)
            for body, state in zip(simulation.bodies, simulation.states):
                motion = body.getMotion(state.pose.orientation, state.momentum)
                log.logValue(body.name + ".Position(m)", state.pose.position)
                log.logValue(body.name + ".Orientation", state.pose.orientation)
                log.logValue(body.name + ".Velocity(m/s)", motion.translational)
                log.logValue(body.name + ".AngularVelocity(rad/s)", motion.rotational)
                log.logValue(body.name + ".Momentum(kgm/s)", state.momentum.translational)
                log.logValue(body.name + ".AngularMomentum(kgm^2/s)", state.momentum.rotational)
                log.logValue(body.name + ".KineticEnergy(J)", 0.5*motion.dot(state.momentum))

    def _printStates(self, simulation):
        line = "{:>10.4f}".format(simulation.time)
        for state in simulation.states:
            line += str(state)
        print(line)

    def _closeProgressBar(self):
        if self.progressBar is not None:
            self.progressBar.close()
            self.progressBar = None

            try:
                sys.stdout.continueWritingToTerminal = not self.silent # sys.stdout is an instance of FREEBODY.IO.Logging.Logger
            except AttributeError:
                pass

    def run(self, endTime=None):
        '''
            Runs the simulation defined by self.simDefinition (which has parsed a simulation definition file)
            SimControl.nSteps nominal steps are taken, each of which may be split into several sub-steps by `Simulation.estimateMaxTimeStep`

            Returns:
                * flights: (list[`FREEBODY.IO.BodyFlight`]) the state history of each body
                * logFilePaths: (list[string]) list of paths to all log files created by this simulation. None if loggingLevel == 0
        '''
        simDefinition = self.simDefinition

        if endTime is None:
            endTime = float(simDefinition.getValue("SimControl.endTime"))
        nSteps = int(simDefinition.getValue("SimControl.nSteps"))
        if nSteps < 1:
            raise ValueError("SimControl.nSteps must be >= 1, got: {}".format(nSteps))

        self.simulation = simulation = self.createSimulation()
        self._setUpConsoleLogging()
        self._setUpStateLog()

        self.flights = [ BodyFlight(body.name) for body in simulation.bodies ]
        simulation.addStepCallback(self._recordStep)

        print("Starting Simulation:")
        for body in simulation.bodies:
            print(body)
        simulation.reset()
        print("   Time(s)" + "".join([ state.getLogHeader() for state in simulation.states ]))
        self._printStates(simulation)

        if strtobool(simDefinition.getValue("SimControl.progressBar")) and not self.silent:
            self.progressBar = tqdm(total=endTime)
            try:
                self.logger.continueWritingToTerminal = False
            except AttributeError:
                pass # Logging not set up for this sim

        #### Main Loop ####
        h = endTime / nSteps
        try:
            for i in range(nSteps):
                stepEndTime = endTime if (i == nSteps-1) else (i+1)*h
                simulation.run(stepEndTime, nSteps=1)
                self._printStates(simulation)

                if self.progressBar is not None:
                    self.progressBar.update(h)

                if not isFinite(simulation.states):
                    print("ERROR: Non-finite state at time {}, ending simulation early".format(simulation.time))
                    break

        except Exception:
            self._closeProgressBar()
            print("ERROR: Simulation Crashed, Aborting")
            print("Attempting to save log files")
            self._postProcess(simDefinition, showPlots=False)
            raise

        self._closeProgressBar()
        print("Simulation Complete")

        logFilePaths = self._postProcess(simDefinition)
        return self.flights, logFilePaths

    #### Post-sim ####
    def _postProcess(self, simDefinition, showPlots=True):
        simDefinition.printDefaultValuesUsed() # Print these out before logging, to include them in the log

        logFilePaths = self._logSimulationResults()

        # Stop capturing console output
        if self.loggingLevel > 0 or self.silent:
            Logging.removeLogger()

        if showPlots:
            self._plotSimulationResults(logFilePaths)

        # Print these out after logging to avoid including the log/plot keys in the unused keys
        simDefinition.printUnusedKeys()

        return logFilePaths

    def _getResultsDirectory(self):
        if self.resultsDirectory is not None:
            return self.resultsDirectory
        elif self.simDefinition.fileName is not None:
            return os.path.dirname(os.path.abspath(self.simDefinition.fileName))
        else:
            return "."

    def _logSimulationResults(self):
        ''' Writes the console output log (loggingLevel >= 1) and the state log (loggingLevel >= 2) to the results directory '''
        if self.loggingLevel == 0:
            return None

        directory = self._getResultsDirectory()
        os.makedirs(directory, exist_ok=True)

        # Console and state logs share a number, console logs are always written first
        consoleOutputPath = Logging.findNextAvailableNumberedFileName(fileBaseName=os.path.join(directory, "simulationLog_"), extension=".txt")
        logNumber = os.path.basename(consoleOutputPath)[len("simulationLog_"):-len(".txt")]

        logFilePaths = []

        print("Writing log file: {}".format(consoleOutputPath))
        self.logger.writeLogToFile(consoleOutputPath)
        logFilePaths.append(consoleOutputPath)

        if self.stateLog is not None:
            stateLogPath = os.path.join(directory, "stateLog_{}.csv".format(logNumber))
            if self.stateLog.writeToCSV(stateLogPath):
                print("Writing log file: {}".format(stateLogPath))
                logFilePaths.append(stateLogPath)

        return logFilePaths

    def _plotSimulationResults(self, logFilePaths):
        ''' Plot simulation results (as/if specified in sim definition) '''
        plotsToMake = self.simDefinition.getValue("SimControl.plot").split()

        if plotsToMake == [ "None" ]:
            return

        if "Energy" in plotsToMake:
            Plotting.plotEnergy(self.flights, self.simulation.bodies)
            plotsToMake.remove("Energy")

        if "BodyPaths" in plotsToMake:
            Plotting.plotBodyPaths(self.flights)
            plotsToMake.remove("BodyPaths")

        # Plot all other columns from log files
        for plotDefinitionString in plotsToMake:
            Plotting.plotFromLogFiles(logFilePaths, plotDefinitionString)

def runSimulation(simDefinitionFilePath=None, simDefinition=None, silent=False):
    simRunner = SimulationRunner(simDefinitionFilePath, simDefinition, silent)
    return simRunner.run()
