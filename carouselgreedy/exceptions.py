"""
Exceptions raised by the Carousel Greedy solver.
"""


class InvalidConfiguration(ValueError):
    """
    Raised when a solver is built or called with an invalid configuration.

    Covers missing callbacks, an empty (or duplicated) candidate universe,
    and out-of-range alpha, beta or seed values. Running out of candidates
    during a phase is never reported through this exception.
    """
    pass
