#To run tests:
#In this file: [python3 test/test_Plotting.py]
#In all files in the current directory: [python -m unittest discover]
#Add [-v] for verbose output (displays names of all test functions)

import os
import tempfile
import unittest
from test.testUtilities import captureOutput

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

import FREEBODY.IO.Plotting as Plotting
from FREEBODY.Geometry import Sphere
from FREEBODY.IO import BodyFlight
from FREEBODY.IO.Logging import TimeStepLog
from FREEBODY.Motion import (BodyState, Pose, RigidBody, Vector, Vector33)


class TestPlotting(unittest.TestCase):
    '''
        Most of the tests in this section really just check that the functions are not crashing
        Plot appearance is not checked
    '''

    def setUp(self):
        self.tempDir = tempfile.TemporaryDirectory()

        log = TimeStepLog()
        log.addColumn("Ball.Position(m)", Vector.zero())
        log.addColumn("Ball.Velocity(m/s)", Vector.zero())
        log.addColumn("Ball.AngularVelocity(rad/s)", Vector.zero())
        log.addColumn("Ball.KineticEnergy(J)")
        for i in range(3):
            log.newLogRow(0.1*i)
            log.logValue("Ball.Position(m)", Vector(i, 0, -i))
            log.logValue("Ball.Velocity(m/s)", Vector(1, 0, -1))
            log.logValue("Ball.AngularVelocity(rad/s)", Vector(0, 0, 2))
            log.logValue("Ball.KineticEnergy(J)", 1.0)

        self.logPath = os.path.join(self.tempDir.name, "stateLog_1.csv")
        log.writeToCSV(self.logPath)

        self.body = RigidBody(1, Sphere(Vector.zero(), 1))
        self.flights = []
        for name, velocity in [ ("Ball1", Vector(1,0,0)), ("Ball2", Vector(0,1,1)) ]:
            flight = BodyFlight(name)
            for i in range(3):
                flight.append(0.1*i, BodyState(Pose(velocity*(0.1*i)), Vector33(velocity, Vector.zero())))
            self.flights.append(flight)

    def tearDown(self):
        plt.close('all')
        self.tempDir.cleanup()

    def test_getLoggedColumns(self):
        data, names = Plotting.getLoggedColumns(self.logPath, [ "Position" ])
        self.assertEqual(names, [ "Ball.PositionX(m)", "Ball.PositionY(m)", "Ball.PositionZ(m)" ])
        self.assertEqual(data[0], [ 0, 1, 2 ])

        # Regex column specs
        data, names = Plotting.getLoggedColumns(self.logPath, r".*Velocity[XY]\(m/s\)")
        self.assertEqual(names, [ "Ball.VelocityX(m/s)", "Ball.VelocityY(m/s)" ])
        self.assertEqual(data[1], [ 0, 0, 0 ])

        # Exclusions
        data, names = Plotting.getLoggedColumns(self.logPath, [ "Position" ], columnsToExclude=[ "Ball.PositionY(m)" ])
        self.assertEqual(len(names), 2)

    def test_plotColumn(self):
        names = Plotting.tryPlottingFromLog(self.logPath, [ "Position" ], showPlot=False)
        self.assertEqual(len(names), 3)
        ax = plt.gca()
        self.assertEqual(len(ax.lines), 3)

        # Only csv state logs can be plotted
        self.assertEqual(Plotting.tryPlottingFromLog(os.path.join(self.tempDir.name, "simulationLog_1.txt"), [ "Position" ], showPlot=False), [])

    def test_plotFromLogFiles(self):
        with captureOutput():
            plotted = Plotting.plotFromLogFiles([ self.logPath ], "Velocity", showPlot=False)
        # Angular velocity columns are not matched by "Velocity"
        self.assertEqual(plotted, [ "Ball.VelocityX(m/s)", "Ball.VelocityY(m/s)", "Ball.VelocityZ(m/s)" ])

        with captureOutput():
            plotted = Plotting.plotFromLogFiles([ self.logPath ], "PositionX&KineticEnergy", showPlot=False)
        self.assertEqual(plotted, [ "Ball.PositionX(m)", "Ball.KineticEnergy(J)" ])

        with captureOutput() as (out, err):
            plotted = Plotting.plotFromLogFiles([ self.logPath ], "asdf", showPlot=False)
        self.assertEqual(plotted, [])
        self.assertIn("ERROR", out.getvalue())

        with captureOutput() as (out, err):
            self.assertEqual(Plotting.plotFromLogFiles(None, "Position", showPlot=False), [])

    def test_plotBodyPaths(self):
        with captureOutput():
            ax = Plotting.plotBodyPaths(self.flights, showPlot=False)
        self.assertEqual(len(ax.lines), 2)

    def test_plotEnergy(self):
        with captureOutput():
            ax = Plotting.plotEnergy(self.flights, [ self.body, self.body ], showPlot=False)
        # One line per body + total
        self.assertEqual(len(ax.lines), 3)

        with captureOutput():
            ax = Plotting.plotEnergy(self.flights[:1], [ self.body ], showPlot=False)
        self.assertEqual(len(ax.lines), 1)

#If this file is run by itself, run the tests above
if __name__ == '__main__':
    unittest.main()
