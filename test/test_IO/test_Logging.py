import os
import sys
import tempfile
import unittest

import pandas as pd

from FREEBODY.IO import SimDefinition
from FREEBODY.IO.Logging import (Logger, TimeStepLog,
                                 findNextAvailableNumberedFileName,
                                 getSimDefinitionAndDefaultValueDictsForOutput,
                                 getSystemInfo, removeLogger)
from FREEBODY.Motion import Quaternion, Vector


class TestLogger(unittest.TestCase):

    def test_Logging(self):
        output = []
        sys.stdout = Logger(output, continueWritingToTerminal=False)
        testText = "testStatement"
        print(testText)
        self.assertEqual(output, [testText, '\n'])

    def test_removeLogging(self):
        # Log some text
        output = []
        sys.stdout = Logger(output, continueWritingToTerminal=False)
        testText = "testStatement"
        print(testText)
        # Make sure it worked
        self.assertEqual(output, [testText, '\n'])
        # Remove the logger
        removeLogger()
        # Log some more text, make sure it no longer shows up in the output array
        print(testText)
        self.assertEqual(len(output), 2)

    def test_writeLogToFile(self):
        log = Logger([ "line1\n", "line2\n" ], continueWritingToTerminal=False)
        with tempfile.TemporaryDirectory() as tempDir:
            filePath = os.path.join(tempDir, "consoleLog.txt")
            self.assertTrue(log.writeLogToFile(filePath))
            with open(filePath) as file:
                self.assertEqual(file.read(), "line1\nline2\n")

            # Existing files are only replaced when asked
            log.write("line3\n")
            self.assertFalse(log.writeLogToFile(filePath))
            self.assertTrue(log.writeLogToFile(filePath, overwrite=True))
            with open(filePath) as file:
                self.assertEqual(file.read(), "line1\nline2\nline3\n")

    def tearDown(self):
        removeLogger()

class TestLoggingFunctions(unittest.TestCase):
    def test_findNextAvailableNumberedFileName(self):
        with tempfile.TemporaryDirectory() as tempDir:
            baseName = os.path.join(tempDir, "testFindNextAvailableNumberedFileName")
            newFileName = findNextAvailableNumberedFileName(fileBaseName=baseName, extension=".txt")
            self.assertEqual(newFileName, baseName + '1.txt')

            # Create a file:
            open(baseName + '1.txt', 'w+').close()
            newFileName = findNextAvailableNumberedFileName(fileBaseName=baseName, extension=".txt")
            self.assertEqual(newFileName, baseName + '2.txt')

            # Create another file, gaps are filled first:
            open(baseName + '2.txt', 'w+').close()
            open(baseName + '4.txt', 'w+').close()
            newFileName = findNextAvailableNumberedFileName(fileBaseName=baseName, extension=".txt")
            self.assertEqual(newFileName, baseName + '3.txt')

    def test_getSystemInfo(self):
        info = getSystemInfo()
        self.assertEqual(len(info), 3)
        self.assertTrue(info[0].startswith("# FREEBODY"))
        self.assertTrue(info[2].startswith("# OS:"))

    def test_simDefinitionOutput(self):
        simDef = SimDefinition(dictionary={ "SimControl.endTime": "5" }, silent=True)
        output = getSimDefinitionAndDefaultValueDictsForOutput(simDef, printToConsole=False)
        allOutput = "".join(output)
        self.assertIn("SimControl.endTime: 5", allOutput)
        self.assertIn("Start Default Value Dictionary", allOutput)
        self.assertIn("'Body.shape': 'Sphere'", allOutput)

class TestTimeStepLog(unittest.TestCase):

    def setUp(self):
        cols = [ "PositionX", "PositionY" ]
        log = TimeStepLog(cols)

        log.newLogRow(0.0)
        log.logValue("PositionX", 0.1)
        log.logValue("PositionY", 0.2)
        self.log = log

    def test_basicLogging(self):
        log = self.log
        # Check values are in there properly
        x1 = log.getValue(0, "PositionX")
        y1 = log.getValue(0, "PositionY")
        self.assertAlmostEqual(x1, 0.1)
        self.assertAlmostEqual(y1, 0.2)
        self.assertEqual(len(log), 1)

    def test_completeLastLine(self):
        log = self.log
        log.newLogRow(0.1)
        log.newLogRow(0.2)

        # Check that t==0.1 values where filled in with the fill value (0)
        x2 = log.getValue(0.1, "PositionX")
        y2 = log.getValue(0.1, "PositionY")
        self.assertAlmostEqual(x2, 0)
        self.assertAlmostEqual(y2, 0)

    def test_addColumn(self):
        log = self.log
        newCols = log.addColumn("newCol")
        self.assertEqual(newCols, [ "newCol" ])
        # Back-filled
        self.assertEqual(log.getColumn("newCol"), [ 0.0 ])

        with self.assertRaises(ValueError):
            log.addColumn("PositionX")

    def test_vectorAndQuaternionColumns(self):
        log = self.log
        self.assertEqual(log.addColumn("Velocity(m/s)", Vector.zero()), [ "VelocityX(m/s)", "VelocityY(m/s)", "VelocityZ(m/s)" ])
        self.assertEqual(log.addColumn("Orientation", Quaternion.identity()), [ "Orientation0", "Orientation1", "Orientation2", "Orientation3" ])

        log.logValue("Velocity(m/s)", Vector(1,2,3))
        log.logValue("Orientation", Quaternion(Vector(0.1,0.2,0.3), 0.9))
        self.assertEqual(log.getValue(0, "VelocityY(m/s)"), 2)
        self.assertEqual(log.getValue(0, "Orientation0"), 0.9)
        self.assertEqual(log.getValue(0, "Orientation3"), 0.3)

    def test_unknownColumn(self):
        with self.assertRaises(KeyError):
            self.log.logValue("asdf", 1)

    def test_missingTime(self):
        with self.assertRaises(ValueError):
            self.log.getValue(0.5, "PositionX")

    def test_deleteLastRow(self):
        log = self.log
        log.deleteLastRow()
        self.assertEqual(0, len(log.logColumns["Time(s)"]))
        self.assertEqual(0, len(log.logColumns["PositionX"]))
        # Deleting from an empty log does nothing
        log.deleteLastRow()
        self.assertEqual(0, len(log))

    def test_writeToCSV(self):
        log = self.log
        log.newLogRow(0.1)
        log.logValue("PositionY", 0.4)

        with tempfile.TemporaryDirectory() as tempDir:
            csvPath = os.path.join(tempDir, "testCSVLogOutput.csv")
            self.assertTrue(log.writeToCSV(csvPath))

            with open(csvPath) as outputtedFile:
                output = outputtedFile.read()

        self.assertEqual(output, "Time(s),PositionX,PositionY\n0,0.1,0.2\n0.1,0,0.4\n")

        emptyLog = TimeStepLog([ "a" ])
        self.assertFalse(emptyLog.writeToCSV(csvPath))

    def test_toDataFrame(self):
        df = self.log.toDataFrame()
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(list(df.columns), [ "Time(s)", "PositionX", "PositionY" ])
        self.assertAlmostEqual(df["PositionY"][0], 0.2)

    def test_getValue(self):
        log = self.log
        val = log.getValue(0, "PositionX")
        self.assertEqual(val, 0.1)

    def test_logValue(self):
        log = self.log
        log.newLogRow(0.1)
        log.logValue("PositionX", 0.3)
        log.logValue("PositionY", 0.4)

        val = log.getValue(0.1, "PositionX")
        self.assertEqual(val, 0.3)

        val = log.getValue(0.1, "PositionY")
        self.assertEqual(val, 0.4)

        # Overwriting a value in the current row
        log.logValue("PositionY", 0.5)
        self.assertEqual(log.getValue(0.1, "PositionY"), 0.5)


if __name__ == '__main__':
    unittest.main()
