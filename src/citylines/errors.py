from typing import Sequence


class CityLinesError(Exception):
    pass


class GenerationError(CityLinesError):
    """One generation attempt failed; the retry loop moves to the next seed."""


class PlacementError(GenerationError):
    pass


class CarveError(GenerationError):
    pass


class FourWayIntersectionError(GenerationError):
    pass


class UnsolvableLayoutError(GenerationError):
    pass


class GenerationExhaustedError(CityLinesError):
    def __init__(self, seeds: Sequence[int]):
        self.seeds = list(seeds)
        super().__init__(
            f"could not generate a level; exhausted seeds {self.seeds}"
        )


class LevelFormatError(CityLinesError, ValueError):
    pass
