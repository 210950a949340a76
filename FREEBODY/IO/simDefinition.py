'''
Reads, writes and modifies simulation definition (.freebody) files.
Also holds the master dictionary of default values, and a few utility functions for working with dotted string dictionary keys.
'''
import random
import re
import shlex
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Tuple, Union

from FREEBODY.Motion import Vector

__all__ = [ "defaultConfigValues", "SimDefinition", "getAbsoluteFilePath" ]

#################### Default value dictionary  #########################
defaultConfigValues = {
    "SimControl.timeDiscretization":                    "RK4",
    "SimControl.endTime":                               "10",
    "SimControl.nSteps":                                "100",
    "SimControl.gravity":                               "(0 0 0)",
    "SimControl.loggingLevel":                          "1",
    "SimControl.plot":                                  "None",
    "SimControl.progressBar":                           "True",
    "SimControl.randomSeed":                            "None",

    # Class-based defaults, used by any dictionary containing 'class Body'
    "Body.mass":                                        "1",
    "Body.shape":                                       "Sphere",
    "Body.radius":                                      "1",
    "Body.size":                                        "(1 1 1)",
    "Body.side":                                        "1",
    "Body.height":                                      "1",
    "Body.position":                                    "(0 0 0)",
    "Body.orientationAxis":                             "(0 0 1)",
    "Body.orientationAngle":                            "0",
    "Body.velocity":                                    "(0 0 0)",
    "Body.angularVelocity":                             "(0 0 0)",
    "Body.Loading.force":                               "(0 0 0)",
    "Body.Loading.moment":                              "(0 0 0)",
}

simDefinitionHelpMessage = \
"""
    All non-empty, non-comment lines are expected to end in either:
    {   (dictionary start)
    }   (dictionary end)

    Or to contain a space-separated key-value pair:
    key value
"""

class SimDefinition():

    #### Parsing / Initialization ####
    def __init__(self, fileName=None, dictionary=None, disableDistributionSampling=False, silent=False, defaultDict=None):
        '''
        Parse simulation definition files into a dictionary of string values accessible by string keys.

        Inputs:
            * fileName: (str) path to simulation definition file
            * dictionary: (dict[str,str]) if not providing a fileName, provide a pre-parsed dictionary equivalent to a simulation definition file
            * disableDistributionSampling: (bool) Turn sampling of normally-distributed parameters (key_stdDev) on/off
            * silent: (bool) Console output control
            * defaultDict: (dict[str,str]) provide a custom dictionary of default values. If none is provided, defaultConfigValues is used.

        Example:
            The file contents:
                'SimControl{
                    &nbsp;&nbsp;&nbsp;&nbsp;timeDiscretization RK4
                }'
            Would be parsed into a single-key Python dictionary, stored in self.dict:
            `{ "SimControl.timeDiscretization": "RK4"}`
        '''
        self.silent = silent
        ''' Boolean, controls console output '''

        self.disableDistributionSampling = disableDistributionSampling
        ''' Boolean - if True, parameters which have standard deviations specified always return their mean value '''

        self.dict = None # type: Dict[str, str]
        ''' Main dictionary of values, usually populated from a simulation definition file '''

        self.defaultDict = defaultDict if defaultDict is not None else defaultConfigValues
        ''' Fills in for values missing from self.dict. Holds a reference to `defaultConfigValues` unless a different dictionary is specified '''

        self.fileName = fileName

        if fileName is not None:
            self._parseSimDefinitionFile(fileName)
        elif dictionary is not None:
            self.dict = dictionary
        else:
            raise ValueError("No fileName or dictionary provided to initialize the SimDefinition")

        self._resetUsedAndUnusedKeyTrackers()

        containsProbabilisticValues = any(key.endswith("_stdDev") for key in self.dict)

        if not disableDistributionSampling:
            try:
                randomSeed = self.getValue("SimControl.randomSeed")
            except KeyError:
                # Custom default dictionaries may not define a seed
                randomSeed = "None"

            if randomSeed == "None":
                randomSeed = random.randrange(1000000)
            else:
                randomSeed = int(randomSeed)

            if not silent and containsProbabilisticValues:
                print("Random seed: {}".format(randomSeed))

            self.rng = random.Random(randomSeed)
            ''' Instance of random.Random owned by this SimDefinition. Seeded by SimControl.randomSeed unless it is 'None'. Used to sample all normally-distributed parameters '''

    def _parseSimDefinitionFile(self, fileName):
        self.fileName = fileName
        self.dict = {}

        with open(fileName, "r") as file:
            workingText = file.read()

        # Remove comments and blank lines
        workingText = re.sub(re.compile("#.*"), "", workingText)
        workingText = [ line for line in workingText.split('\n') if line.strip() != '' ]

        # Start recursive parse by asking to parse the root-level dictionary
        self._parseDictionaryContents(workingText, 0, "")

    def _parseDictionaryContents(self, workingText, startLine, currDictName, allowKeyOverwriting=False) -> int:
        '''
            Parses a single (sub)dictionary, starting at workingText[startLine].
            Calls itself recursively to parse nested dictionaries, saving all key-value pairs to self.dict

            Returns index of the line that closed the dictionary
        '''
        i = startLine

        while i < len(workingText):
            line = workingText[i].strip()

            if line.split()[0] == "!create":
                i = self._parseDerivedDictionary(workingText, i, currDictName)

            elif line[-1] == '{':
                subDictName = line[:-1].strip()
                i = self._parseDictionaryContents(workingText, i+1, joinKeys(currDictName, subDictName), allowKeyOverwriting)

            elif line == '}':
                return i

            elif len(line.split()) > 1:
                key, *valueWords = line.split()
                keyString = joinKeys(currDictName, key)

                if keyString in self.dict and not allowKeyOverwriting:
                    raise ValueError("Duplicate Key: {} in File: {}".format(keyString, self.fileName))
                self.dict[keyString] = " ".join(valueWords)

            else:
                print(simDefinitionHelpMessage)
                raise ValueError("Problem reading line {}".format(line))

            i += 1

        return i

    def _parseDerivedDictionary(self, workingText, initializationLine, currDictName) -> int:
        '''
            Parse a 'derived' subdictionary, defined with the !create command:
                !create Bodies.Box2 from Bodies.Box1{
                    !replace "Box1" "Box2"
                    position (0 0 5)
                }

            Copies all keys from the parent dictionary, applies any !replace / !removeKeysContaining commands,
                then parses the remaining lines as regular key-value pairs, which can overwrite the copied values.

            Returns:
                (int): index of the last line in the derived subdictionary
        '''
        definitionLine = workingText[initializationLine].split()
        derivedDictName = joinKeys(currDictName, definitionLine[1])
        parentDictName = definitionLine[-1].rstrip('{')

        keysInParentDict = self.getSubKeys(parentDictName)
        if len(keysInParentDict) == 0:
            raise ValueError("Dictionary to derive from: {} is not defined before {} in {}".format(parentDictName, derivedDictName, self.fileName))

        derivedDict = { derivedDictName + key[len(parentDictName):]: self.dict[key] for key in keysInParentDict }

        #### Apply commands ####
        i = initializationLine + 1
        while i < len(workingText):
            line = workingText[i].strip()
            command = line.split()[0]

            if command == "!replace":
                # !replace "toReplace" "replaceWith"
                args = shlex.split(line)
                toReplace, replaceWith = args[1], args[-1]
                derivedDict = { key.replace(toReplace, replaceWith): value.replace(toReplace, replaceWith) for key, value in derivedDict.items() }

            elif command == "!removeKeysContaining":
                stringToDelete = shlex.split(line)[1]
                derivedDict = { key: value for key, value in derivedDict.items() if stringToDelete not in key }

            elif line[0] != "!":
                # Done commands - let the regular parser handle the rest
                break

            else:
                raise ValueError("Command: {} not implemented. Try using !replace or !removeKeysContaining".format(command))

            i += 1

        for key, value in derivedDict.items():
            if key in self.dict:
                raise ValueError("Derived dict key {} already exists in {}".format(key, self.fileName))
            self.dict[key] = value

        return self._parseDictionaryContents(workingText, i, derivedDictName, allowKeyOverwriting=True)

    #### Normal Usage ####
    def getValue(self, key: str) -> str:
        """
            Input:
                Key should be a string of format "DictionaryName.SubdictionaryName.Key"
            Output:
                Always returns a string value
                Returns value from the default dictionary (or a class-based default value) if key not present in this SimDefinition's dictionary
                Raises KeyError if the key can't be found anywhere

                Normal Distribution Sampling:
                    If (key + "_stdDev") exists and the value is a scalar or Vector, returns a value sampled from a normal distribution
                        The mean is the value of 'key', the standard deviation is the value of 'key_stdDev'
                        For a vector value, a vector of standard deviations is expected
                    For repeatable sampling, set "SimControl.randomSeed"
        """
        key = key.strip()

        ### Find string/mean value ###
        if key in self.dict:
            stringValue = self.dict[key]
            self.unaccessedFields.discard(key)
        elif key in self.defaultDict:
            stringValue = self.defaultDict[key]
            self.defaultValuesUsed.add(key)
        else:
            stringValue = self._getClassBasedDefaultValue(key)
            if stringValue is None:
                raise KeyError("Key: {} not found in {} or default config values".format(key, self.fileName))

        if self.disableDistributionSampling:
            return stringValue

        ### Sample from normal distribution if required ###
        stdDevKey = key + "_stdDev"
        if stdDevKey not in self.dict:
            return stringValue

        # Scalar values
        try:
            sampledValue = self.rng.gauss(float(stringValue), float(self.getValue(stdDevKey)))
            self._logSample("Sampling scalar parameter: {}, value: {:1.3f}".format(key, sampledValue))
            return str(sampledValue)
        except ValueError:
            pass

        # Vector values
        try:
            muVec = Vector(stringValue)
            sigmaVec = Vector(self.getValue(stdDevKey))
        except ValueError:
            return stringValue

        sampledVec = Vector(*[ self.rng.gauss(mu, sigma) for mu, sigma in zip(muVec, sigmaVec) ])
        self._logSample("Sampling vector parameter: {}, value: ({:1.3f})".format(key, sampledVec))
        return str(sampledVec)

    def _logSample(self, logLine):
        if not self.silent:
            print(logLine)

    def setValue(self, key: str, value) -> None:
        ''' Will add the entry if it's not present '''
        self.dict[key.strip()] = value

    def removeKey(self, key: str):
        if key in self.dict:
            return self.dict.pop(key)
        else:
            print("Warning: " + key + " not found, can't delete")
            return None

    def setIfAbsent(self, key: str, value):
        ''' Sets a value, only if it doesn't currently exist in the dictionary '''
        if key not in self.dict:
            self.setValue(key, value)

    def writeToFile(self, fileName: str, writeHeader=True) -> None:
        '''
            Write a (potentially modified) sim definition to file.
            Newly written file will not contain any comments!
        '''
        self.fileName = fileName

        with open(fileName, 'w') as file:
            if writeHeader:
                file.write("# FREEBODY\n")
                file.write("# File: {}\n".format(fileName))
                file.write("# Autowritten on: " + str(datetime.now()) + "\n")

            # Sorting the keys ensures that dictionaries will be stored together
            currDicts = []
            for key in sorted(self.dict.keys()):
                dicts = key.split('.')[:-1]

                if dicts != currDicts:
                    # Close dictionaries that don't contain the current key
                    nShared = 0
                    while nShared < min(len(dicts), len(currDicts)) and dicts[nShared] == currDicts[nShared]:
                        nShared += 1

                    for depth in range(len(currDicts)-1, nShared-1, -1):
                        file.write("\t"*depth + "}\n")

                    # Open new ones
                    if nShared == len(dicts):
                        file.write("\n")
                    for depth in range(nShared, len(dicts)):
                        file.write("\n" + "\t"*depth + dicts[depth] + "{\n")

                    currDicts = dicts

                file.write("\t"*len(currDicts) + key.split('.')[-1] + "\t" + self.dict[key] + "\n")

            for depth in range(len(currDicts)-1, -1, -1):
                file.write("\t"*depth + "}\n")

    #### Introspection / Key Gymnastics ####
    def findKeysContaining(self, keyContains: List[str]) -> List[str]:
        '''
            Returns a list of all keys that contain all of the strings in keyContains, None if there are no matches

            ## Example
                findKeysContaining(["class"]) ->
                [ "Bodies.Ball.class", "Bodies.Box.class", etc... ]
        '''
        matchingKeys = [ key for key in self.dict.keys() if all(s in key for s in keyContains) ]
        return matchingKeys if len(matchingKeys) > 0 else None

    def getSubKeys(self, key: str) -> List[str]:
        '''
            Returns a list of all keys that are children of key

            ## Example
                getSubKeys("Bodies") ->
                [ "Bodies.Ball.mass", "Bodies.Ball.radius", "Bodies.Box.Loading.force", etc... ]
        '''
        return [ currentKey for currentKey in self.dict.keys() if isSubKey(key, currentKey) ]

    def getImmediateSubKeys(self, key: str) -> List[str]:
        """
            Returns all keys that are immediate children of the parentKey (one 'level' lower)

            .. note:: Will not return subdictionaries, only keys that have a value associated with them. Use self.getImmediateSubDicts() to discover sub-dictionaries

            ## Example:
                getImmediateSubKeys("Bodies.Ball") ->
                [ "Bodies.Ball.mass", "Bodies.Ball.radius", etc...]
        """
        keyLevel = getKeyLevel(key)
        return [ subKey for subKey in self.getSubKeys(key) if getKeyLevel(subKey) == keyLevel + 1 ]

    def getImmediateSubDicts(self, key: str) -> List[str]:
        '''
            Returns list of names of immediate subdictionaries, in the order in which they were first defined

            ## Example
                getImmediateSubDicts("Bodies") ->
                [ "Bodies.Ball", "Bodies.Box", etc... ]

            .. note:: This example would not return a dictionary like: "Bodies.Box.Loading" because it's not an immediate subdictionary of "Bodies"
        '''
        keyLevel = getKeyLevel(key)

        subDictionaries = []
        for subKey in self.getSubKeys(key):
            if getKeyLevel(subKey) - keyLevel > 1:
                # A subkey of a subdictionary is at least 2 levels lower
                subDictKey = getParentKeyAtLevel(subKey, keyLevel+1)
                if subDictKey not in subDictionaries:
                    subDictionaries.append(subDictKey)

        return subDictionaries

    def _getClassBasedDefaultValue(self, key: str) -> Union[str, None]:
        '''
            Returns class-based default value from the default dictionary if it exists. Otherwise returns None

            Searches successively shorter prefixes of the key for a 'class' key:
                key = "Bodies.Box.Loading.force"
                Attempt1 = "Bodies.Box.Loading.class" -> Not present
                Attempt2 = "Bodies.Box.class" -> Body -> look up 'Body.Loading.force' in defaultDict -> if there, return it, otherwise return None
        '''
        splitLevel = getKeyLevel(key)

        while splitLevel >= 0:
            prefix, suffix = splitKeyAtLevel(key, splitLevel)
            classKey = prefix + ".class"

            if classKey in self.dict:
                # As soon as we arrive at an item with a class, search terminates
                classBasedDefaultKey = self.dict[classKey] + "." + suffix
                if classBasedDefaultKey not in self.defaultDict:
                    return None

                self.defaultValuesUsed.add(classBasedDefaultKey)
                self.unaccessedFields.discard(classKey)
                return self.defaultDict[classBasedDefaultKey]

            splitLevel -= 1

        return None

    #### Usage Reporting ####
    def printUnusedKeys(self):
        ''' Prints the keys in this simulation definition that have not been accessed yet '''
        if len(self.unaccessedFields) > 0:
            print("\nWarning: The following keys were loaded from: {} but never accessed:".format(self.fileName))
            for key in sorted(self.unaccessedFields):
                print("{:<45}{}".format(key+":", self.dict[key]))
            print("")

    def printDefaultValuesUsed(self):
        ''' Prints the default values used since this SimDefinition was created '''
        if len(self.defaultValuesUsed) > 0:
            print("\nWarning: The following default values were used in this simulation:")
            for key in sorted(self.defaultValuesUsed):
                print("{:<45}{}".format(key+":", self.defaultDict[key]))
            print("\nIf this was not intended, override the default values by adding the above information to your simulation definition file.\n")

    def _resetUsedAndUnusedKeyTrackers(self):
        self.unaccessedFields = set(self.dict.keys())
        self.defaultValuesUsed = set()

    #### Utilities ####
    def __str__(self):
        result = "File: {}\n".format(self.fileName)
        for key, value in self.dict.items():
            result += "{}: {}\n".format(key, value)
        return result + "\n"

    def __eq__(self, simDef2):
        try:
            return self.dict == simDef2.dict
        except AttributeError:
            return False

################### Functions for dealing with string keys ########################
def joinKeys(parent: str, child: str) -> str:
    """
        >>> joinKeys('', 'Bodies')
        'Bodies'
        >>> joinKeys('Bodies', 'Ball')
        'Bodies.Ball'
    """
    return child if parent == "" else parent + "." + child

def isSubKey(potentialParent: str, potentialChild: str) -> bool:
    """
        >>> isSubKey("Bodies", "Bodies.Ball.mass")
        True
        >>> isSubKey("Bodies.Ball", "Bodies.Ball2.mass")
        False
        >>> isSubKey("", "Bodies")
        True
    """
    if potentialParent == "":
        return True
    return potentialChild.startswith(potentialParent + ".")

def getKeyLevel(key: str) -> int:
    """
        Counts the number of dots in the key
        >>> getKeyLevel("Bodies")
        0
        >>> getKeyLevel("Bodies.Ball")
        1
        >>> getKeyLevel("")
        -1
    """
    if len(key) == 0:
        return -1
    return key.count('.')

def getParentKeyAtLevel(key: str, desiredLevel: int) -> str:
    """
        >>> getParentKeyAtLevel('Bodies.Box.Loading.force', 0)
        'Bodies'
        >>> getParentKeyAtLevel('Bodies.Box.Loading.force', 2)
        'Bodies.Box.Loading'
    """
    return '.'.join(key.split('.')[:desiredLevel+1])

def splitKeyAtLevel(key: str, prefixLevel: int) -> Tuple[str, str]:
    '''
        0 <= level <= getKeyLevel(key)
        >>> splitKeyAtLevel("Bodies", 0)
        ('Bodies', '')
        >>> splitKeyAtLevel("Bodies.Box.mass", 1)
        ('Bodies.Box', 'mass')
    '''
    keyNames = key.split('.')
    return ".".join(keyNames[:prefixLevel+1]), ".".join(keyNames[prefixLevel+1:])

def getAbsoluteFilePath(relativePath: str, relativeTo=None, silent=False) -> str:
    '''
        Takes a path defined relative to the FREEBODY repository (or to the directory relativeTo) and tries to return an absolute path for the current installation.
        Returns the original relativePath if an absolute path is not found
    '''
    if relativeTo is None:
        # This file is at FREEBODY/IO/simDefinition.py, so the install directory is three levels up
        relativeTo = Path(__file__).parent.parent.parent
    absolutePath = Path(relativeTo) / relativePath

    if absolutePath.exists():
        return str(absolutePath)
    else:
        if not silent:
            print("WARNING: Unable to find an absolute path for a path suspected to be relative to the FREEBODY installation location: {}".format(relativePath))
        return relativePath
