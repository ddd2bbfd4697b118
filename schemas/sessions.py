# schemas/sessions.py
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field

from quiz import Difficulty, SessionStatus

# ---------- Requests ----------


class CreateSessionRequest(BaseModel):
    # fixed seed makes the problem sequence reproducible
    seed: Optional[int] = None


class StartRequest(BaseModel):
    difficulty: Difficulty = Difficulty.easy
    # slider values; truncated and clamped server side
    min_value: float = Field(1, allow_inf_nan=False)
    max_value: float = Field(12, allow_inf_nan=False)


class AnswerTextRequest(BaseModel):
    text: str = ""


class SubmitRequest(BaseModel):
    # None grades whatever text is buffered on the session
    answer: Optional[str] = None


# ---------- Responses ----------


class ProblemOut(BaseModel):
    index: int
    a: int
    b: int
    top: int
    bottom: int
    prompt: str


class RangeOut(BaseModel):
    low: int
    high: int


class GradeOut(BaseModel):
    ok: bool = True
    is_correct: bool
    correct_answer: int
    score: int
    answer: Optional[int] = None
    title: str
    feedback: str


class StepOut(BaseModel):
    ok: bool = True
    status: SessionStatus
    problem: Optional[ProblemOut] = None
    score: int
    total: int
    message: Optional[str] = None


class SessionOut(BaseModel):
    id: str
    status: SessionStatus
    difficulty: Optional[Difficulty] = None
    range: Optional[RangeOut] = None
    current_index: int
    total: int
    score: int
    problem: Optional[ProblemOut] = None
    answer_text: str = ""
    last_result: Optional[GradeOut] = None


class ConfigOut(BaseModel):
    min_bound: int
    max_bound: int
    difficulties: Dict[str, int] = Field(default_factory=dict)
    default_difficulty: Difficulty = Difficulty.easy


class HealthOut(BaseModel):
    ok: bool
    sessions: int
