'''
Numerical tolerances, the coordinate `Axis` enumeration and a few small helpers shared by all FREEBODY packages
'''
import math
from enum import Enum

__all__ = [ "ulp", "tiny", "small", "Axis", "isFinite", "strtobool" ]

ulp = 1.0 / 2251799813685248
''' Unit of least precision used to build the equality tolerances below (2^-51) '''

tiny = 64 * ulp
''' Tolerance for near-zero / near-unit comparisons. Used by all value-type equality checks '''

small = 2048 * ulp
''' Coarser tolerance for geometric proximity tests '''

class Axis(Enum):
    X = 0
    Y = 1
    Z = 2

def isFinite(value) -> bool:
    '''
        Returns False if value contains a NaN or an infinity.
        Accepts floats or any of the iterable FREEBODY value types (Vector, Quaternion, Matrix3, Vector33, Pose, BodyState), nested to any depth
    '''
    try:
        return math.isfinite(value)
    except TypeError:
        return all(isFinite(x) for x in value)

def strtobool(value: str) -> bool:
    ''' Parses the truth values accepted in simulation definition files ('true', 'On', 'yes', '1', etc...) '''
    value = value.strip().lower()
    if value in ("y", "yes", "t", "true", "on", "1"):
        return True
    elif value in ("n", "no", "f", "false", "off", "0"):
        return False
    else:
        raise ValueError("Invalid truth value: {}".format(value))
