'''
Classes and functions for creating simulation logs: capturing console output (Logger) and recording body states at every time step (TimeStepLog)
'''
import os
import sys
from bisect import bisect_left

import pandas as pd

from FREEBODY.Motion import Quaternion, Vector

__all__ = [ "Logger", "TimeStepLog", "removeLogger", "findNextAvailableNumberedFileName", "getSystemInfo", "getSimDefinitionAndDefaultValueDictsForOutput" ]

class Logger():
    '''
        Class intended to capture calls to print() and copy their contents to a list of strings, while still (optionally) printing them to the console

        Ex:
            logger = Logger(stringResultList)
            sys.stdout = logger

        Now anything passed into print() will be printed to the console and stored in stringResultList
    '''

    def __init__(self, stringListToCopyTo, continueWritingToTerminal=True):
        self.terminal = sys.__stdout__
        self.log = stringListToCopyTo
        self.continueWritingToTerminal = continueWritingToTerminal

    def write(self, msg):
        if self.continueWritingToTerminal:
            self.terminal.write(msg)
        self.log.append(msg)

    def flush(self):
        self.terminal.flush()

    def writeLogToFile(self, filePath, overwrite=False):
        ''' Returns True if the file was written '''
        if overwrite or not os.path.exists(filePath):
            with open(filePath, 'w+') as file:
                file.writelines(self.log)
            return True
        return False

class TimeStepLog():
    '''
        Columnar log with one row per time step. The first column is always "Time(s)".

        Vector and Quaternion values are split into one column per component:
            "Position(m)" -> "PositionX(m)", "PositionY(m)", "PositionZ(m)"
            "Orientation" -> "Orientation0", "Orientation1", "Orientation2", "Orientation3" (scalar part first)

        Values not logged for a row are filled in with the column's fill value when the next row is started.
    '''
    def __init__(self, columnNames=None, fillValue=0.0):
        self.fillValue = fillValue
        self.logColumns = { "Time(s)": [] }
        ''' Dictionary of column name -> list of values '''
        self.expandedColumnNames = {}
        ''' Maps the names passed to addColumn/logValue to the (component) column names stored in self.logColumns '''

        if columnNames is not None:
            for name in columnNames:
                self.addColumn(name)

    @staticmethod
    def _expandColumnName(name, value):
        if isinstance(value, (Vector, Quaternion)):
            if "(" in name:
                baseName, units = name[:name.index("(")], name[name.index("("):]
            else:
                baseName, units = name, ""

            suffixes = [ "X", "Y", "Z" ] if isinstance(value, Vector) else [ "0", "1", "2", "3" ]
            return [ baseName + suffix + units for suffix in suffixes ]
        else:
            return [ name ]

    def addColumn(self, name, exampleValue=0.0):
        '''
            exampleValue determines how many columns are created (Vector: 3, Quaternion: 4, scalar: 1)
            Any rows already in the log are back-filled with self.fillValue
            Returns the list of column names created
        '''
        expandedNames = self._expandColumnName(name, exampleValue)
        if any(colName in self.logColumns for colName in expandedNames):
            raise ValueError("Column: {} already exists in log".format(name))

        self.expandedColumnNames[name] = expandedNames
        nRows = len(self.logColumns["Time(s)"])
        for colName in expandedNames:
            self.logColumns[colName] = [ self.fillValue ] * nRows

        return expandedNames

    def _completeLastRow(self):
        nRows = len(self.logColumns["Time(s)"])
        for column in self.logColumns.values():
            while len(column) < nRows:
                column.append(self.fillValue)

    def newLogRow(self, time):
        self._completeLastRow()
        self.logColumns["Time(s)"].append(time)

    def logValue(self, columnName, value):
        ''' Logs value to the current (last) row '''
        try:
            expandedNames = self.expandedColumnNames[columnName]
        except KeyError:
            raise KeyError("Column: {} not found in log. Add it with addColumn first".format(columnName))

        # Quaternions iterate as (s, x, y, z), matching the column order
        values = list(value) if len(expandedNames) > 1 else [ value ]

        nRows = len(self.logColumns["Time(s)"])
        for colName, componentValue in zip(expandedNames, values):
            column = self.logColumns[colName]
            if len(column) == nRows:
                column[-1] = componentValue
            else:
                self._padColumn(column, nRows-1)
                column.append(componentValue)

    def _padColumn(self, column, length):
        while len(column) < length:
            column.append(self.fillValue)

    def getValue(self, time, columnName):
        ''' Returns the value logged at the row whose time is time. Raises ValueError if there's no such row '''
        times = self.logColumns["Time(s)"]
        rowIndex = bisect_left(times, time - 1e-12)
        if rowIndex == len(times) or abs(times[rowIndex] - time) > 1e-12:
            raise ValueError("No row for time: {} in log".format(time))

        column = self.logColumns[columnName]
        if rowIndex >= len(column):
            return self.fillValue
        return column[rowIndex]

    def getColumn(self, columnName):
        return self.logColumns[columnName]

    def deleteLastRow(self):
        nRows = len(self.logColumns["Time(s)"])
        if nRows == 0:
            return

        for column in self.logColumns.values():
            if len(column) == nRows:
                column.pop()

    def __len__(self):
        return len(self.logColumns["Time(s)"])

    def toDataFrame(self) -> pd.DataFrame:
        self._completeLastRow()
        return pd.DataFrame(self.logColumns)

    def writeToCSV(self, path) -> bool:
        '''
            Writes the log to path as comma-separated values, with a header row of column names.
            Returns False (writes nothing) if the log is empty
        '''
        if len(self) == 0:
            return False

        self.toDataFrame().to_csv(path, index=False, float_format="%.10g")
        return True

def removeLogger():
    sys.stdout = sys.__stdout__

def findNextAvailableNumberedFileName(fileBaseName="simulationLog", extension=".txt"):
    '''
        If fileBaseName is simLog, returns the first of: simLog1, simLog2, simLog3, etc... that isn't already a file.
        Returns a string of the form fileBaseName + Number + extension
    '''
    fileNumber = 0
    filePath = None
    while filePath is None or os.path.exists(filePath):
        fileNumber += 1
        filePath = fileBaseName + str(fileNumber) + extension

    return filePath

def getSystemInfo(printToConsole=False):
    ''' Returns string array containing info about git status, machine type, date, etc... '''
    from datetime import datetime
    from platform import platform
    from subprocess import DEVNULL, CalledProcessError, check_output

    result = []

    try:
        currentCommit = check_output(['git', 'rev-parse', 'HEAD'], stderr=DEVNULL).decode().strip()
        currentBranch = check_output(['git', 'rev-parse', '--abbrev-ref', 'HEAD'], stderr=DEVNULL).decode().strip()
        result.append("# FREEBODY, branch: {}, latest commit: {}".format(currentBranch, currentCommit))
    except (CalledProcessError, OSError):
        result.append("# FREEBODY, git branch/commit info unavailable")

    now = datetime.now().strftime("%d/%m/%Y %H:%M:%S")
    result.append("# {}".format(now))
    result.append("# OS: {}".format(platform()))

    if printToConsole:
        for line in result:
            print(line)

    return result

def getSimDefinitionAndDefaultValueDictsForOutput(simDefinition, printToConsole=True):
    ''' Returns a string array '''
    from pprint import pformat

    from FREEBODY.IO.simDefinition import defaultConfigValues

    stringResultArray = []

    stringResultArray.append("# Using sim definition file: {}\n".format(simDefinition.fileName))

    stringResultArray.append("\n---- Start Sim Definition File ----\n")
    stringResultArray.append(str(simDefinition))
    stringResultArray.append("\n---- End Sim Definition File ----\n\n")

    stringResultArray.append("\n---- Start Default Value Dictionary ----\n")
    stringResultArray.append(pformat(defaultConfigValues))
    stringResultArray.append("\n---- End Default Value Dictionary ----\n\n")

    if printToConsole:
        for line in stringResultArray:
            print(line)

    return stringResultArray
