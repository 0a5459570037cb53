from dataclasses import dataclass, field
from enum import Enum
import numpy as np
from typing import Dict, List, Optional, Any, Tuple, Union

from .errors import InvalidParameterError


class Mode(Enum):
    """Which polarity of radial symmetry casts votes."""
    BRIGHT = 1
    DARK = 2
    BOTH = 3

    @property
    def bright(self) -> bool:
        return self in (Mode.BRIGHT, Mode.BOTH)

    @property
    def dark(self) -> bool:
        return self in (Mode.DARK, Mode.BOTH)

    @classmethod
    def parse(cls, value: Union["Mode", str, int]) -> "Mode":
        """
        Resolves a mode given as a Mode member, a case-insensitive name
        ('bright', 'dark', 'both') or one of the integer codes 1, 2, 3.

        Raises:
            InvalidParameterError: For any other value.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        # bool is an int subclass; True/False are not mode codes
        elif isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            for member in cls:
                if member.value == int(value):
                    return member
        raise InvalidParameterError(f"mode must be one of 'bright', 'dark', 'both', got {value!r}")


@dataclass(frozen=True)
class TransformParameters:
    """Validated parameter set of a single transform call."""
    radius: int
    alpha: float = 2.0
    std_factor: float = 0.1
    mode: Mode = Mode.DARK

    def __post_init__(self):
        # Mode is resolved first so an unknown mode fails before anything else
        object.__setattr__(self, 'mode', Mode.parse(self.mode))

        radius = self.radius
        if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)):
            raise InvalidParameterError(f"radius must be an integer, got {radius!r}")
        if radius <= 0:
            raise InvalidParameterError(f"radius must be positive, got {radius}")
        object.__setattr__(self, 'radius', int(radius))

        alpha = float(self.alpha)
        if not np.isfinite(alpha) or alpha < 1.0:
            raise InvalidParameterError(f"alpha must be a finite value >= 1, got {self.alpha!r}")
        object.__setattr__(self, 'alpha', alpha)

        std_factor = float(self.std_factor)
        if not np.isfinite(std_factor) or std_factor <= 0.0:
            raise InvalidParameterError(f"std_factor must be positive, got {self.std_factor!r}")
        object.__setattr__(self, 'std_factor', std_factor)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radius": self.radius,
            "alpha": self.alpha,
            "std_factor": self.std_factor,
            "mode": self.mode.name.lower(),
        }


@dataclass
class GradientField:
    """Central-difference gradients of one image, both H x W float64."""
    horizontal: np.ndarray  # d/dcol, zero on first/last column
    vertical: np.ndarray    # d/drow, zero on first/last row

    @property
    def shape(self) -> Tuple[int, int]:
        return self.horizontal.shape

    def magnitude(self) -> np.ndarray:
        return np.sqrt(self.horizontal ** 2 + self.vertical ** 2)


@dataclass
class VoteCanvas:
    """Padded (H + 2r) x (W + 2r) vote accumulators."""
    count: np.ndarray
    magnitude: np.ndarray
    radius: int

    @classmethod
    def zeros(cls, image_shape: Tuple[int, int], radius: int) -> "VoteCanvas":
        height, width = image_shape
        padded = (height + 2 * radius, width + 2 * radius)
        return cls(count=np.zeros(padded, dtype=np.float64),
                   magnitude=np.zeros(padded, dtype=np.float64),
                   radius=radius)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.count.shape

    def __iadd__(self, other: "VoteCanvas") -> "VoteCanvas":
        self.count += other.count
        self.magnitude += other.magnitude
        return self

    def has_votes(self) -> bool:
        return bool(np.any(self.count) or np.any(self.magnitude))


@dataclass
class DetectionResult:
    """Holds every stage of a detection run before saving."""
    parameters: TransformParameters

    # --- Images ---
    score: Optional[np.ndarray] = None         # Raw transform output (float64)
    normalized: Optional[np.ndarray] = None    # Score stretched to uint8
    binary: Optional[np.ndarray] = None        # Thresholded score
    markers: Optional[np.ndarray] = None       # Binary after morphology

    # --- Results ---
    centers: List[Tuple[float, float]] = field(default_factory=list)  # (x, y)
    threshold: Optional[float] = None

    # --- Metadata ---
    metadata: Dict[str, Any] = field(default_factory=dict)
    output_paths: Dict[str, str] = field(default_factory=dict)
