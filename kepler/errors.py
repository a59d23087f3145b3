class CalcError(ValueError):
    """Base class for failures while propagating or searching."""


class SingularityReached(CalcError):
    """e >= 1, or an iteration cap ran out before convergence"""

    def __init__(self, message="Reached singularity in calculation"):
        super().__init__(message)


class InvalidRange(CalcError):
    """windowed query where end is before start"""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Invalid time range: end {end} is before start {start}")
