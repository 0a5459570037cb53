from dataclasses import dataclass
from typing import Optional

import numpy as np


class FrstError(Exception):
    """Base class for all errors raised by the frst package."""
    def __init__(self, arg: str = "") -> None:
        super().__init__(arg)
        self.arg = arg


class InvalidParameterError(FrstError, ValueError):
    def __str__(self) -> str:
        if self.arg != "":
            return f"Invalid parameter ({self.arg})"
        else:
            return "Invalid parameter"


class ImageLoadError(FrstError, IOError):
    def __str__(self) -> str:
        if self.arg != "":
            return f"Could not decode image ({self.arg})"
        else:
            return "Could not decode image"


@dataclass(frozen=True)
class TransformResult:
    """Tagged outcome of a transform call: either a score map or an error."""
    value: Optional[np.ndarray] = None
    error: Optional[FrstError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> np.ndarray:
        """Returns the score map, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: np.ndarray) -> "TransformResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FrstError) -> "TransformResult":
        return cls(error=error)
