'''
    Reads the values of a single body's dictionary ('Bodies.Box') in a SimDefinition.
'''
from FREEBODY.Motion import Vector

__all__ = [ "SubDictReader" ]

class SubDictReader():

    def __init__(self, bodyDictPath, simDefinition):
        '''
            Example bodyDictPath = 'Bodies.Box' if we're creating a body called 'Box'
        '''
        self.bodyDictPath = bodyDictPath
        self.simDefinition = simDefinition

    def getDictName(self) -> str:
        ''' 'Bodies.Box' -> 'Box' '''
        return self.bodyDictPath.split('.')[-1]

    def getString(self, key: str) -> str:
        '''
            key is relative to the body's dictionary: 'mass' or 'Loading.force' read Bodies.Box.mass or Bodies.Box.Loading.force
            Missing keys fall back to the 'Body' class defaults through the SimDefinition
        '''
        try:
            return self.simDefinition.getValue(self.bodyDictPath + "." + key)
        except KeyError:
            raise KeyError("Body '{}' has no value for '{}' in {} or in the default value dictionary".format(self.getDictName(), key, self.simDefinition.fileName))

    def getFloat(self, key: str) -> float:
        try:
            return float(self.getString(key))
        except ValueError:
            raise ValueError("Body '{}': expected a number for '{}', got: {}".format(self.getDictName(), key, self.getString(key)))

    def getVector(self, key: str) -> Vector:
        return Vector(self.getString(key))
