"""Error kinds raised by the creep core."""


class CreepError(Exception):
    """Base for errors raised by the world package."""


class InvalidArgumentError(CreepError, ValueError):
    """Out-of-range spread origin, negative radius, or a malformed grid."""


class UndefinedPointError(CreepError, LookupError):
    """Mesh code asked for a logical point that does not exist. Programmer error."""

    def __init__(self, point: object) -> None:
        super().__init__(f"undefined cell point: {point!r}")
        self.point = point
