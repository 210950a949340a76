'''
Script to run rigid body simulations from the command line
If FREEBODY has been installed with pip, this script is accessible through the 'freebody' command
'''
import argparse
import math
import os
import sys
import time
from pathlib import Path

import FREEBODY.IO.Plotting as Plotting
from FREEBODY.IO import SimDefinition, getAbsoluteFilePath
from FREEBODY.SimulationRunners import SimulationRunner


def buildParser() -> argparse.ArgumentParser:
    ''' Builds the command-line argument parser using argparse '''
    parser = argparse.ArgumentParser(formatter_class=argparse.RawTextHelpFormatter, description="""
    Run individual FREEBODY simulations.
    Expects simulations to be defined by simulation definition files like those in ./FREEBODY/Examples/Simulations
    """)

    parser.add_argument(
        "--plotFromLog",
        nargs=2,
        default=[],
        metavar=("plotDefinition", "pathToLogFile"),
        help="plotDefinition works the same way as SimControl.plot entries in simulation definition files"
    )
    parser.add_argument(
        "--endTime",
        type=float,
        default=None,
        help="Overrides SimControl.endTime from the simulation definition file"
    )
    parser.add_argument(
        "--silent",
        action='store_true',
        help="If present, does not output to console"
    )
    parser.add_argument(
        "simDefinitionFile",
        nargs='?',
        default="SpinningBox.freebody",
        help="Path to a simulation definition (.freebody) file, or the name of one of the example cases. Not required if using --plotFromLog"
    )

    return parser

def findSimDefinitionFile(providedPath):
    # It is already a path, just return it
    if os.path.isfile(providedPath):
        return providedPath

    # Also check relative to the example cases
    installationLocation = Path(__file__).parent.parent
    alternateLocations = [ installationLocation / "FREEBODY/Examples/Simulations/" ]

    possibleRelativePaths = [ providedPath ]
    if not providedPath.endswith(".freebody"):
        # If it's just the case name (ex: 'SpinningBox') try also adding the file extension
        possibleRelativePaths.append(providedPath + ".freebody")

    for path in possibleRelativePaths:
        for alternateLocation in alternateLocations:
            absPath = getAbsoluteFilePath(path, alternateLocation, silent=True)

            if os.path.isfile(absPath):
                return absPath

    print("ERROR: Unable to locate simulation definition file: {}! Checked whether the path was relative to the current command line location, or one of the example cases. To be sure that your file will be found, try using an absolute path.".format(providedPath))
    sys.exit(1)

def printSummary(simRunner):
    ''' Prints the final pose and kinetic energy of each body '''
    simulation = simRunner.simulation
    print("\nFinal states at t = {:1.4f} s:".format(simulation.time))
    for body, state, flight in zip(simulation.bodies, simulation.states, simRunner.flights):
        axis, angle = state.pose.orientation.getAxisAngle()
        kineticEnergies = flight.getKineticEnergies(body)
        print("{:<15} position: ({:>1.4f}) rotation: {:>1.2f} deg about ({:>1.3f}) KE: {:1.6g} J (initial: {:1.6g} J)".format(
            body.name,
            state.pose.position,
            math.degrees(angle),
            axis,
            kineticEnergies[-1],
            kineticEnergies[0]
        ))

def main(argv=None) -> int:
    '''
        Main function to run a FREEBODY simulation.
        Expects to be called from the command line, usually using the `freebody` command

        For testing purposes, can also pass a list of command line arguments into the argv parameter
    '''
    startTime = time.time()

    parser = buildParser()
    args = parser.parse_args(argv)

    if len(args.plotFromLog):
        # Just plot a column from a log file, and not run a whole simulation
        Plotting.plotFromLogFiles([args.plotFromLog[1]], args.plotFromLog[0])
        print("Exiting")
        return 0

    simDefPath = findSimDefinitionFile(args.simDefinitionFile)
    simDef = SimDefinition(simDefPath, silent=args.silent)

    simRunner = SimulationRunner(simDefinition=simDef, silent=args.silent)
    simRunner.run(endTime=args.endTime)

    if not args.silent:
        printSummary(simRunner)
        print("Run time: {:1.2f} seconds".format(time.time() - startTime))
        print("Exiting")

    return 0

if __name__ == "__main__":
    main()
