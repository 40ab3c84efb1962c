"""
Hand landmark types shared by the tracker and the gesture classifier.
"""
from dataclasses import dataclass
from typing import List, Mapping, NamedTuple, Optional, Sequence


class Landmark(NamedTuple):
    """Normalized landmark. x, y in [0, 1] relative to the image."""
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None


def as_landmark(point) -> Landmark:
    """
    Coerce a point into a Landmark.

    Accepts Landmark, plain (x, y[, z]) tuples, {"x", "y", "z"?, "visibility"?}
    mappings and objects exposing .x/.y such as MediaPipe's NormalizedLandmark.
    Raises TypeError, ValueError or KeyError for anything else.
    """
    if isinstance(point, Landmark):
        return point
    if isinstance(point, Mapping):
        return Landmark(
            float(point["x"]),
            float(point["y"]),
            float(point.get("z") or 0.0),
            point.get("visibility"),
        )
    if hasattr(point, 'x') and hasattr(point, 'y'):
        return Landmark(
            float(point.x),
            float(point.y),
            float(getattr(point, 'z', 0.0) or 0.0),
            getattr(point, 'visibility', None),
        )
    z = float(point[2]) if len(point) > 2 else 0.0
    return Landmark(float(point[0]), float(point[1]), z)


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks for a single tracked hand.

    Attributes:
        landmarks: List of 21 landmarks, normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Landmark]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    NUM_LANDMARKS = 21

    @classmethod
    def from_points(cls, points: Sequence, handedness: str = "Unknown",
                    confidence: float = 1.0) -> "HandLandmarks":
        return cls([as_landmark(p) for p in points], handedness, confidence)

    def get(self, index: int) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def is_complete(self) -> bool:
        return len(self.landmarks) >= self.NUM_LANDMARKS

    @property
    def thumb_tip(self) -> Landmark:
        return self.landmarks[self.THUMB_TIP]

    @property
    def thumb_base(self) -> Landmark:
        return self.landmarks[self.THUMB_MCP]

    @property
    def index_tip(self) -> Landmark:
        return self.landmarks[self.INDEX_TIP]

    @property
    def index_pip(self) -> Landmark:
        return self.landmarks[self.INDEX_PIP]

    @property
    def center_x(self) -> float:
        """Mean x of all landmarks."""
        return sum(p.x for p in self.landmarks) / len(self.landmarks)


# (tip, pip) pairs for the fingers that must be folded in index-only pointing
FOLDED_FINGERS = (
    (HandLandmarks.MIDDLE_TIP, HandLandmarks.MIDDLE_PIP),
    (HandLandmarks.RING_TIP, HandLandmarks.RING_PIP),
    (HandLandmarks.PINKY_TIP, HandLandmarks.PINKY_PIP),
)


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
