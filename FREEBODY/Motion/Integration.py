'''
    Defines explicit, constant time step ODE integrators. Used by `FREEBODY.SimulationRunners.SingleSimulations.Simulation` to integrate body motion

    Integrators are callable, meaning they can be called like a function once instantiated
        This is facilitated by their __call__ methods

    See `FREEBODY.SimulationRunners.SingleSimulations.Simulation.integrate` for an example use of these Integrators

    Runge-Kutta methods are defined by Butcher tableaus, represented by lists of lists as follows:
        Expected Format (Example is RK4 - 3/8 method, see conventional Butcher tableau here: https://en.wikipedia.org/wiki/List_of_Runge%E2%80%93Kutta_methods#3/8-rule_fourth-order_method):
            [                                   # Top 0 row ommitted
                [ 1/3, 1/3 ],                   # Row 1: all coefficients sequentially, first column is current time (c_i), remainder are a_{i1} to a_{in} (derivative coefficients)
                [ 2/3, -1/3, 1.0 ],             # Row 2: ''
                [ 1.0, 1.0, -1.0, 1.0 ],        # Row 3: ''
                [ 1/8, 3/8, 3/8, 1/8 ]          # Row 4: (result calculation row) - empty space on left ignored, just enter all coefficients
            ]

        Learn about Butcher Tableaus here: https://en.wikipedia.org/wiki/Runge%E2%80%93Kutta_methods
'''
import math
from abc import ABC, abstractmethod
from typing import Callable

__all__ = [ "integratorFactory", "ClassicalIntegrator", "IntegrationResult", "checkButcherTableau" ]

def checkButcherTableau(tableau):
    ''' Checks that the Butcher tableau passed in represents a consistent R-K method. Raises ValueError if it doesn't '''
    lastRowLength = 0
    for i in range(len(tableau)):
        if len(tableau[i]) == lastRowLength:
            # We're checking a row of "b" coefficients (constructing a final answer)
            # Here the sum of all numbers should be 1
            sumB = sum(tableau[i])
            if not math.isclose(sumB, 1.0):
                raise ValueError("Sum of 'b' coefficients ({}) of butcher tableau row {} don't = 1".format(sumB, i))
        else:
            # We're checking a row of "c" and "a" coefficients (constructing one of the k values)
            # Here the first number, the c coefficient, should be equal to the sum of all the other numbers (the a coefficients)
            c = tableau[i][0]
            sumA = sum(tableau[i][1:])
            if not math.isclose(c, sumA):
                raise ValueError("Sum of 'a' coefficients ({}) of butcher tableau row {} don't = 'c' coefficient from the same row {}".format(sumA, i, c))

        lastRowLength = len(tableau[i])

def integratorFactory(integrationMethod="RK4", normalize=None):
    '''
        Returns a callable integrator object

        Inputs:
            * integrationMethod: (str) Name of integration method: "Euler", "RK2Midpoint", "RK2Heun", "RK4" or "RK4_3/8"
            * normalize: (1-argument function reference) if provided, applied to every intermediate value and to the final result.
                Used to project quaternions back onto the unit sphere after each linear combination of states
    '''
    return ClassicalIntegrator(method=integrationMethod, normalize=normalize)

class Integrator(ABC):
    @abstractmethod
    def __call__(self, initVal, initTime:float, derivativeFunc:Callable, dt:float):
        '''
            See `ClassicalIntegrator._integrateEuler` for simplest possible implementation

            Inputs:
                initVal: must be addable with other objects of its type
                derivativeFunc: is expected to be a function which accepts the following arguments: initTime, initVal
                    Should return an object representing the derivative of objects of type(initVal)
                        - must be multipliable by floats, returning an object addable to initVal

            Returns:
                An object of type IntegrationResult
        '''
        pass

class IntegrationResult():
    __slots__ = [ 'newValue', 'dt', 'derivativeEstimate' ]

    def __init__(self, newValue, dt, derivativeEstimate):
        '''
            newValue:                   Value of quantity represented by initVal at time initTime+dt
            dt:                         The size of the time step taken
            derivativeEstimate:         Weighted average derivative used to take the step: newValue = initVal + dt*derivativeEstimate (before normalization)
        '''
        self.newValue = newValue
        self.dt = dt
        self.derivativeEstimate = derivativeEstimate

class ClassicalIntegrator(Integrator):
    ''' Callable class for constant-dt ODE integration '''

    def __init__(self, method="RK4", normalize=None):
        # Save integration method and associated Butcher tableau
        self.method = method
        self.tableau = None
        self.normalize = normalize if normalize is not None else (lambda value: value)

        if method == "Euler":
            self.integrate = self._integrateEuler
        elif method == "RK2Midpoint":
            self.integrate = self._integrateByButcherTableau
            self.tableau = [
                [0.5, 0.5],
                [0,   1  ]
            ]
        elif method == "RK2Heun":
            self.integrate = self._integrateByButcherTableau
            self.tableau = [
                [1, 1],
                [0.5, 0.5]
            ]
        elif method == "RK4":
            self.integrate = self._integrateByButcherTableau
            self.tableau = [
                [ 0.5, 0.5 ],
                [ 0.5, 0, 0.5 ],
                [ 1, 0, 0, 1 ],
                [ 1/6, 1/3, 1/3, 1/6 ]
            ]
        elif method == "RK4_3/8":
            self.integrate = self._integrateByButcherTableau
            self.tableau = [
                [ 1/3, 1/3 ],
                [ 2/3, -1/3, 1.0 ],
                [ 1.0, 1.0, -1.0, 1.0 ],
                [ 1/8, 3/8, 3/8, 1/8 ]
            ]
        else:
            raise ValueError("Integration method: {} not implemented. Options are: Euler, RK2Midpoint, RK2Heun, RK4, RK4_3/8".format(method))

        # If a butcher tableau is used to define the R-K method, check that it is valid
        if self.tableau != None:
            checkButcherTableau(self.tableau)

    def __call__(self, initVal, initTime, derivativeFunc, dt):
        return self.integrate(initVal, initTime, derivativeFunc, dt)

    @staticmethod
    def _weightedSum(k, coefficients):
        ''' sum(coefficients[i] * k[i]), skipping zero coefficients. Does not start summation with 0, because k could be a non-scalar type '''
        total = None
        for ki, coeff in zip(k, coefficients):
            if coeff == 0:
                continue
            term = ki*coeff
            total = term if total is None else total + term
        return total

    #### Constant time step methods ####
    def _integrateEuler(self, initVal, initTime, derivativeFunc, dt):
        yPrime = derivativeFunc(initTime, initVal)
        return IntegrationResult(self.normalize(initVal + yPrime*dt), dt, yPrime)

    def _integrateByButcherTableau(self, initVal, initTime, derivativeFunc, dt):
        '''
            Integrates a function based on a Butcher tableau defined in self.tableau
            Format expected is:
            [
                [ c2, a21 ],
                [ c3, a31, a32 ],
                ...
                [ b1, b2, ... ]

            Then for row i of the tableau, ki = derivativefunc(t + ci*dt, normalize(y + dt(ai1*k1 + ai2*k2 + ...)))
            Then final result is normalize(y + dt*(b1*k1 + b2*k2 + ...))
            Further explanation: https://en.wikipedia.org/wiki/Runge%E2%80%93Kutta_methods#Use
        '''
        tab = self.tableau

        # Initialize array of derivatives (k's) with first k-value from beginning of interval
        k = [ derivativeFunc(initTime, initVal) ]
        # Calculate all other k's - one for each row of the tableau except the last one
        for i in range(len(tab) - 1):
            evalTime = initTime + dt*tab[i][0]
            evalK = self._weightedSum(k, tab[i][1:])
            evalY = self.normalize(initVal + evalK*dt)
            k.append(derivativeFunc(evalTime, evalY))

        # Calculate final result using last row of coefficients
        derivative = self._weightedSum(k, tab[-1])
        return IntegrationResult(self.normalize(initVal + derivative*dt), dt, derivative)
