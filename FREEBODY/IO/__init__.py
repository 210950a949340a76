'''
Input/Output functionality:

* Reading/Writing Simulation Definition Files
* Logging console output and body states
* Holding and plotting results

FREEBODY.IO relies on FREEBODY.Motion to implement a few convenience / parsing functions.
'''
# Make the classes in all submodules importable directly from FREEBODY.IO
from .bodyFlight import *
from .simDefinition import *
from .subDictReader import *

subModules = [ bodyFlight, simDefinition, subDictReader ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
