class PlinkoError(Exception):
    """Base class for every error the plinko engine and round layer raise."""


class InvalidSeedFormat(PlinkoError):
    pass


class InvalidParameter(PlinkoError):
    pass


class StateViolation(PlinkoError):
    pass


class HashMismatch(PlinkoError):
    """A revealed seed does not reproduce its published commitment."""


class RoundNotFound(PlinkoError):
    pass
