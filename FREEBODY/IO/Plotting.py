'''
Functions to create plots of simulation results, from log files or from `FREEBODY.IO.BodyFlight` objects.
'''
import re
from collections import OrderedDict
from statistics import mean

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

__all__ = [ "plotFromLogFiles", "tryPlottingFromLog", "getLoggedColumns", "plotBodyPaths", "plotEnergy" ]

plt.rcParams["font.size"] = "10"

logFileCache = OrderedDict()
''' Will keep the contents of the last n log files loaded cached, to avoid re-loading repeatedly when making lots of plots '''

numberOfFilesToKeepCached = 10
''' Number of log files to keep cached '''

### Plot data from log files ###
def plotFromLogFiles(logFilePaths, plotDefinitionString, showPlot=True):
    '''
        Plots all log columns matching plotDefinitionString vs. time, on a single set of axes
        plotDefinitionString can be a partial column name, a regex, or several of those joined with '&'

        Returns the names of the columns plotted
    '''
    if logFilePaths is None:
        print("ERROR: can't plot {} - must log data to plot it".format(plotDefinitionString))
        return []

    if plotDefinitionString == "Velocity":
        # Otherwise also plots AngularVelocity
        columns = [ r"(.*\.)?Velocity[XYZ]\(m/s\)" ]
    elif '&' in plotDefinitionString:
        columns = plotDefinitionString.split('&')
    else:
        columns = [ plotDefinitionString ]

    fig, ax = plt.subplots(figsize=(6,4))

    plottedCols = []
    print("Plotting log columns containing '{}'".format(plotDefinitionString))
    for logFilePath in logFilePaths:
        plottedCols += tryPlottingFromLog(logFilePath, columns, ax=ax, showPlot=False, columnsToExclude=plottedCols)

    if len(plottedCols) == 0:
        print("ERROR: no column names containing {} were found in the logFiles {}".format(plotDefinitionString, logFilePaths))
        plt.close(fig)
    elif showPlot:
        plt.show()

    return plottedCols

def tryPlottingFromLog(logPath, columnSpecs, columnsToExclude=None, ax=None, showPlot=True):
    '''
        Load the file at logPath, which should be a comma-separated state log
        Plots any columns whose names a) contain any of the strings in "columnSpecs", or b) match the regex defined by any of the strings in "columnSpecs" vs. time

        Returns the list of column names plotted
    '''
    if ax is None:
        fig, ax = plt.subplots(figsize=(6,4))

    if isinstance(columnSpecs, str):
        columnSpecs = [ columnSpecs ]

    if not logPath.endswith(".csv"):
        # Console output logs don't contain any columns
        return []

    data, names = getLoggedColumns(logPath, columnSpecs, columnsToExclude)
    if len(names) == 0:
        return []

    x = getLoggedColumns(logPath, [ "Time(s)" ])[0][0]

    for columnData, name in zip(data, names):
        ax.plot(x, columnData, label=name)

    ax.set_xlabel("Time(s)")
    ax.autoscale()
    ax.legend()

    if showPlot:
        plt.show()

    return names

def getLoggedColumns(logPath, columnSpecs, columnsToExclude=None, sep=","):
    '''
        Inputs:
            logPath:            (string) path to a state log file
            columnSpecs:        (list (string)) list of partial/full column names and/or regex expressions, to identify the desired columns
            columnsToExclude:   (list (string)) list of full column names to exclude
            sep:                (string) controls the separator pandas.read_csv uses to load the file

        Outputs:
            Returns: matchingColumnData (list (list (float))), matchingColumnNames (list (string))
    '''
    if isinstance(columnSpecs, str):
        columnSpecs = [ columnSpecs ]
    if columnsToExclude is None:
        columnsToExclude = []

    if logPath in logFileCache:
        df = logFileCache[logPath]
    else:
        df = pd.read_csv(logPath, sep=sep, dtype=np.float64)

        logFileCache[logPath] = df
        if len(logFileCache) > numberOfFilesToKeepCached:
            logFileCache.popitem(last=False)

    matchingColumnData = []
    matchingColumnNames = []

    for columnSpec in columnSpecs:
        for colName in df.columns:
            if colName in columnsToExclude or colName in matchingColumnNames:
                continue

            if columnSpec in colName or re.match(columnSpec, colName):
                matchingColumnData.append(list(df[colName]))
                matchingColumnNames.append(colName)

    return matchingColumnData, matchingColumnNames

### Plot results held in BodyFlight objects ###
def plotBodyPaths(flights, showPlot=True):
    '''
        Pass in an iterable of `FREEBODY.IO.BodyFlight` objects. The paths of their origins will be plotted in a 3D graph, using equal axis scales
    '''
    print("Plotting body paths")

    fig = plt.figure()
    ax = fig.add_subplot(projection='3d')

    allPositions = []
    for flight in flights:
        positions = flight.getPositions()
        allPositions.append(positions)
        ax.plot3D(positions[:,0], positions[:,1], positions[:,2], label=flight.name)

    allPositions = np.vstack(allPositions)
    halfLength = max((allPositions.max() - allPositions.min())/2, 0.5)
    centers = [ mean(allPositions[:,i]) for i in range(3) ]

    ax.set_xlim(centers[0] - halfLength, centers[0] + halfLength)
    ax.set_ylim(centers[1] - halfLength, centers[1] + halfLength)
    ax.set_zlim(centers[2] - halfLength, centers[2] + halfLength)

    ax.set_xlabel('x (m)')
    ax.set_ylabel('y (m)')
    ax.set_zlabel('z (m)')
    if any(flight.name is not None for flight in flights):
        ax.legend()

    if showPlot:
        plt.show()

    return ax

def plotEnergy(flights, bodies, showPlot=True):
    '''
        Plots the kinetic energy of each body, and the total, vs. time
        flights and bodies are parallel lists of `FREEBODY.IO.BodyFlight` and `FREEBODY.Motion.RigidBody` objects
    '''
    print("Plotting kinetic energy")

    fig, ax = plt.subplots(figsize=(6,4))

    totalEnergy = None
    for flight, body in zip(flights, bodies):
        energies = np.array(flight.getKineticEnergies(body))
        ax.plot(flight.times, energies, label=flight.name)
        totalEnergy = energies if totalEnergy is None else totalEnergy + energies

    if len(flights) > 1:
        ax.plot(flights[0].times, totalEnergy, 'k--', label="Total")

    ax.set_xlabel("Time(s)")
    ax.set_ylabel("Kinetic Energy (J)")
    ax.legend()

    if showPlot:
        plt.show()

    return ax
