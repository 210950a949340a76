'''
Defines the classes that drive simulations.
`Simulation` advances a collection of rigid bodies through time, `SimulationRunner` creates and runs a `Simulation` from a simulation definition file.
'''
# Make the classes in all submodules importable directly from FREEBODY.SimulationRunners
from .SingleSimulations import *

subModules = [ SingleSimulations ]

__all__ = [ ]

for subModule in subModules:
    __all__ += subModule.__all__
