from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class Difficulty(Enum):
    EASY = ('easy', 5, 20)
    MEDIUM = ('medium', 10, 35)
    HARD = ('hard', 20, 50)

    def __init__(self, label, minimum, maximum):
        self.label = label
        self.minimum = minimum
        self.maximum = maximum

    @property
    def bounds(self) -> Tuple[int, int]:
        return self.minimum, self.maximum

    def contains(self, value) -> bool:
        return self.minimum <= value <= self.maximum

    @classmethod
    def parse(cls, label):
        """Look up a difficulty by its wire label (case-insensitive)."""
        if isinstance(label, cls):
            return label
        key = str(label or '').strip().lower()
        for difficulty in cls:
            if difficulty.label == key:
                return difficulty
        raise ValueError(f"Unknown difficulty {label!r}")

    def to_dict(self):
        return {'min': self.minimum, 'max': self.maximum}


class Cue(str, Enum):
    NEUTRAL = 'neutral'
    INCORRECT = 'incorrect'
    CORRECT = 'correct'


class Phase(str, Enum):
    ACTIVE = 'active'
    RESOLVED = 'resolved'  # won, waiting for the automatic restart


@dataclass(frozen=True)
class HistoryEntry:
    difficulty: Difficulty
    target: int
    attempts: int
    points: int
    streak: int

    def line(self) -> str:
        return (
            f"Level: {self.difficulty.label}, Target: {self.target}, "
            f"Attempts: {self.attempts}, Points: {self.points}, Streak: {self.streak}"
        )

    def to_dict(self):
        return {
            'difficulty': self.difficulty.label,
            'target': self.target,
            'attempts': self.attempts,
            'points': self.points,
            'streak': self.streak,
            'line': self.line(),
        }


@dataclass
class RoundState:
    round_id: int
    difficulty: Difficulty
    target: int
    timer: int
    attempts: int = 0
    feedback: str = ''
    input_text: str = ''
    phase: Phase = Phase.ACTIVE
    cue: Cue = Cue.NEUTRAL


@dataclass
class SessionState:
    score: int = 0
    streak: int = 0
    history: List[HistoryEntry] = field(default_factory=list)

    def record(self, entry: HistoryEntry) -> None:
        self.history.append(entry)
