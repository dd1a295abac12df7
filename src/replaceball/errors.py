class ReplaceballError(RuntimeError):
    pass


class ConfigError(ReplaceballError):
    pass


class SimulationInvariantError(ReplaceballError):
    """Raised when the engine reaches a state its rules make impossible.

    These are programming errors, not recoverable conditions; nothing inside
    the engine catches them.
    """


class FieldingGeometryError(SimulationInvariantError):
    pass


class NoFielderError(SimulationInvariantError):
    pass


class BaseStateError(SimulationInvariantError):
    pass


class ReplayExhaustedError(ReplaceballError):
    pass


class ReplayMismatchError(ReplaceballError):
    pass
