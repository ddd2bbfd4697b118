from __future__ import annotations

import logging
import math
import random
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

# --- Difficulty -------------------------------------------------------------------

PROBLEM_COUNTS = {
    "easy": 3,
    "medium": 5,
    "hard": 7,
}


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"

    @property
    def problem_count(self) -> int:
        return PROBLEM_COUNTS[self.value]


# --- Range / problems -------------------------------------------------------------

DEFAULT_BOUNDS: Tuple[int, int] = (1, 12)


@dataclass(frozen=True)
class QuizRange:
    low: int
    high: int

    def __post_init__(self) -> None:
        # keep low <= high
        if self.low > self.high:
            low, high = self.high, self.low
            object.__setattr__(self, "low", low)
            object.__setattr__(self, "high", high)

    @classmethod
    def from_sliders(
        cls,
        min_value: float,
        max_value: float,
        bounds: Tuple[int, int] = DEFAULT_BOUNDS,
    ) -> "QuizRange":
        """
        Build a range the way the two practice sliders do: each value is clamped
        into `bounds`, min may not exceed max, max may not fall below min, and
        the result is truncated to whole numbers.
        """
        lo_bound, hi_bound = sorted(bounds)
        # NaN falls back to the full range
        min_value = float(min_value)
        max_value = float(max_value)
        if math.isnan(min_value):
            min_value = lo_bound
        if math.isnan(max_value):
            max_value = hi_bound
        lo = min(max(min_value, lo_bound), hi_bound)
        hi = min(max(max_value, lo_bound), hi_bound)
        lo = min(lo, hi)
        hi = max(hi, lo)
        return cls(int(lo), int(hi))

    def contains(self, n: int) -> bool:
        return self.low <= n <= self.high

    def __str__(self) -> str:
        return f"{self.low} – {self.high}"


@dataclass(frozen=True)
class Problem:
    a: int
    b: int

    @property
    def answer(self) -> int:
        return self.a * self.b

    # Larger operand goes on top when displayed
    @property
    def top(self) -> int:
        return max(self.a, self.b)

    @property
    def bottom(self) -> int:
        return min(self.a, self.b)

    @property
    def prompt(self) -> str:
        return f"{self.top} × {self.bottom}"


def generate_problems(
    count: int, quiz_range: QuizRange, rng: Optional[random.Random] = None
) -> Tuple[Problem, ...]:
    rng = rng or random.Random()
    return tuple(
        Problem(
            rng.randint(quiz_range.low, quiz_range.high),
            rng.randint(quiz_range.low, quiz_range.high),
        )
        for _ in range(max(count, 0))
    )


# --- Answer text ------------------------------------------------------------------

_INT_RE = re.compile(r"[+-]?[0-9]+")

# longer than any product of in-range operands
MAX_ANSWER_DIGITS = 18


def digits_only(text: Optional[str]) -> str:
    """Keystroke filter: keep numeric characters only (digits, but also ½ or Ⅻ)."""
    if not text:
        return ""
    return "".join(ch for ch in text if ch.isnumeric())


def parse_answer(text: Optional[str]) -> Optional[int]:
    """
    Parse a submitted answer. Returns None when the text is not a whole number,
    which can never equal a product and is therefore graded wrong.
    """
    if text is None or _INT_RE.fullmatch(text) is None:
        return None
    if len(text.lstrip("+-")) > MAX_ANSWER_DIGITS:
        return None
    return int(text)


# --- Results ----------------------------------------------------------------------


@dataclass(frozen=True)
class GradeResult:
    is_correct: bool
    correct_answer: int
    score: int
    answer: Optional[int] = None

    @property
    def title(self) -> str:
        return "Correct!" if self.is_correct else "Wrong"

    @property
    def message(self) -> str:
        if self.is_correct:
            return "Nice job!"
        return f"The answer was {self.correct_answer}."


@dataclass(frozen=True)
class ProblemAvailable:
    index: int
    problem: Problem


@dataclass(frozen=True)
class SessionComplete:
    score: int
    total: int

    @property
    def message(self) -> str:
        return f"You scored {self.score} out of {self.total}."


NextState = Union[ProblemAvailable, SessionComplete]


class SessionStatus(str, Enum):
    idle = "idle"
    in_progress = "in_progress"
    complete = "complete"


class QuizStateError(RuntimeError):
    """Raised when an operation has no meaning in the session's current state."""


# --- Session ----------------------------------------------------------------------


class QuizSession:
    """
    One playthrough: Idle -> InProgress(i) -> Complete.

    `start` may be called from any state and discards everything from the
    previous game. `submit_answer` grades the current problem without moving
    on; `advance` moves to the next problem or completes the session.
    Instances are not thread-safe; callers serialise access.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._difficulty: Optional[Difficulty] = None
        self._range: Optional[QuizRange] = None
        self._problems: Tuple[Problem, ...] = ()
        self._index = 0
        self._score = 0
        self._answer_text = ""
        self._last_result: Optional[GradeResult] = None
        self._started = False

    # ------------------------------------------------------------
    # read-only state
    # ------------------------------------------------------------
    @property
    def difficulty(self) -> Optional[Difficulty]:
        return self._difficulty

    @property
    def quiz_range(self) -> Optional[QuizRange]:
        return self._range

    @property
    def problems(self) -> Tuple[Problem, ...]:
        return self._problems

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def score(self) -> int:
        return self._score

    @property
    def total(self) -> int:
        return len(self._problems)

    @property
    def answer_text(self) -> str:
        return self._answer_text

    @property
    def last_result(self) -> Optional[GradeResult]:
        return self._last_result

    @property
    def status(self) -> SessionStatus:
        if not self._started:
            return SessionStatus.idle
        if self._index >= len(self._problems):
            return SessionStatus.complete
        return SessionStatus.in_progress

    @property
    def is_complete(self) -> bool:
        return self.status is SessionStatus.complete

    @property
    def current_problem(self) -> Optional[Problem]:
        if self.status is not SessionStatus.in_progress:
            return None
        return self._problems[self._index]

    def state(self) -> Optional[NextState]:
        """The current step as `start`/`advance` would report it; None while idle."""
        if self.status is SessionStatus.idle:
            return None
        if self.status is SessionStatus.complete:
            return SessionComplete(score=self._score, total=self.total)
        return ProblemAvailable(index=self._index, problem=self._problems[self._index])

    # ------------------------------------------------------------
    # operations
    # ------------------------------------------------------------
    def start(self, difficulty: Difficulty, quiz_range: QuizRange) -> NextState:
        difficulty = Difficulty(difficulty)
        state = self.start_with_count(difficulty.problem_count, quiz_range)
        self._difficulty = difficulty
        return state

    def start_with_count(self, count: int, quiz_range: QuizRange) -> NextState:
        problems = generate_problems(count, quiz_range, self._rng)

        self._difficulty = None
        self._range = quiz_range
        self._problems = problems
        self._index = 0
        self._score = 0
        self._answer_text = ""
        self._last_result = None
        self._started = True

        logger.info("quiz started: %d problems in range %s", len(problems), quiz_range)
        state = self.state()
        if isinstance(state, SessionComplete):
            logger.info("quiz complete: %d/%d", state.score, state.total)
        return state

    def set_answer_text(self, raw: Optional[str]) -> str:
        self._answer_text = digits_only(raw)
        return self._answer_text

    def submit_answer(self, text: Optional[str] = None) -> GradeResult:
        problem = self.current_problem
        if problem is None:
            raise QuizStateError(f"no problem to answer (session is {self.status.value})")
        if self._last_result is not None:
            raise QuizStateError("problem already answered; advance to continue")

        if text is None:
            text = self._answer_text
        parsed = parse_answer(text)
        correct_answer = problem.answer
        is_correct = parsed is not None and parsed == correct_answer
        if is_correct:
            self._score += 1

        result = GradeResult(
            is_correct=is_correct,
            correct_answer=correct_answer,
            score=self._score,
            answer=parsed,
        )
        self._last_result = result
        logger.debug(
            "problem %d graded: answer=%r correct=%s", self._index, text, is_correct
        )
        return result

    def advance(self) -> NextState:
        if self.status is not SessionStatus.in_progress:
            raise QuizStateError(f"cannot advance (session is {self.status.value})")

        self._answer_text = ""
        self._last_result = None
        self._index += 1

        state = self.state()
        if isinstance(state, SessionComplete):
            logger.info("quiz complete: %d/%d", state.score, state.total)
        return state
