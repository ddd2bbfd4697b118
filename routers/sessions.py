from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from config import QUIZ_MAX_BOUND, QUIZ_MIN_BOUND
from deps.sessions import get_store
from quiz import (
    GradeResult,
    NextState,
    Problem,
    QuizRange,
    QuizSession,
    QuizStateError,
    SessionComplete,
)
from schemas.sessions import (
    AnswerTextRequest,
    CreateSessionRequest,
    GradeOut,
    SessionOut,
    StartRequest,
    StepOut,
    SubmitRequest,
)
from store import SessionNotFound, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

# --- Serialisation helpers --------------------------------------------------------


def _problem_out(index: int, p: Optional[Problem]) -> Optional[Dict[str, Any]]:
    if p is None:
        return None
    return {
        "index": index,
        "a": p.a,
        "b": p.b,
        "top": p.top,
        "bottom": p.bottom,
        "prompt": p.prompt,
    }


def _grade_out(r: GradeResult) -> Dict[str, Any]:
    return {
        "ok": True,
        "is_correct": r.is_correct,
        "correct_answer": r.correct_answer,
        "score": r.score,
        "answer": r.answer,
        "title": r.title,
        "feedback": r.message,
    }


def _step_out(session: QuizSession, state: NextState) -> Dict[str, Any]:
    if isinstance(state, SessionComplete):
        return {
            "ok": True,
            "status": session.status,
            "problem": None,
            "score": state.score,
            "total": state.total,
            "message": state.message,
        }
    return {
        "ok": True,
        "status": session.status,
        "problem": _problem_out(state.index, state.problem),
        "score": session.score,
        "total": session.total,
        "message": None,
    }


def _session_out(session_id: str, s: QuizSession) -> Dict[str, Any]:
    r = s.quiz_range
    return {
        "id": session_id,
        "status": s.status,
        "difficulty": s.difficulty,
        "range": {"low": r.low, "high": r.high} if r else None,
        "current_index": s.current_index,
        "total": s.total,
        "score": s.score,
        "problem": _problem_out(s.current_index, s.current_problem),
        "answer_text": s.answer_text,
        "last_result": _grade_out(s.last_result) if s.last_result else None,
    }


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"session not found: {session_id}")


# --- Endpoints --------------------------------------------------------------------


@router.post("", response_model=SessionOut, status_code=201)
def create_session(
    req: Optional[CreateSessionRequest] = None,
    sessions: SessionStore = Depends(get_store),
):
    seed = req.seed if req is not None else None
    session_id = sessions.create(seed=seed)
    logger.info("session created: %s", session_id)
    return _session_out(session_id, sessions.get(session_id))


@router.get("/{session_id}", response_model=SessionOut)
def get_session(session_id: str, sessions: SessionStore = Depends(get_store)):
    try:
        with sessions.checkout(session_id) as s:
            return _session_out(session_id, s)
    except SessionNotFound:
        raise _not_found(session_id)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, sessions: SessionStore = Depends(get_store)):
    try:
        sessions.delete(session_id)
    except SessionNotFound:
        raise _not_found(session_id)
    return Response(status_code=204)


@router.post("/{session_id}/start", response_model=StepOut)
def start_session(
    session_id: str,
    req: StartRequest,
    sessions: SessionStore = Depends(get_store),
):
    quiz_range = QuizRange.from_sliders(
        req.min_value, req.max_value, bounds=(QUIZ_MIN_BOUND, QUIZ_MAX_BOUND)
    )
    try:
        with sessions.checkout(session_id) as s:
            state = s.start(req.difficulty, quiz_range)
            return _step_out(s, state)
    except SessionNotFound:
        raise _not_found(session_id)


@router.put("/{session_id}/answer-text", response_model=SessionOut)
def set_answer_text(
    session_id: str,
    req: AnswerTextRequest,
    sessions: SessionStore = Depends(get_store),
):
    try:
        with sessions.checkout(session_id) as s:
            s.set_answer_text(req.text)
            return _session_out(session_id, s)
    except SessionNotFound:
        raise _not_found(session_id)


@router.post("/{session_id}/answer", response_model=GradeOut)
def submit_answer(
    session_id: str,
    req: Optional[SubmitRequest] = None,
    sessions: SessionStore = Depends(get_store),
):
    answer = req.answer if req is not None else None
    try:
        with sessions.checkout(session_id) as s:
            return _grade_out(s.submit_answer(answer))
    except SessionNotFound:
        raise _not_found(session_id)
    except QuizStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{session_id}/advance", response_model=StepOut)
def advance_session(session_id: str, sessions: SessionStore = Depends(get_store)):
    try:
        with sessions.checkout(session_id) as s:
            return _step_out(s, s.advance())
    except SessionNotFound:
        raise _not_found(session_id)
    except QuizStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
