from fastapi import APIRouter

from config import QUIZ_MAX_BOUND, QUIZ_MIN_BOUND
from quiz import PROBLEM_COUNTS, Difficulty
from schemas.sessions import ConfigOut

router = APIRouter(tags=["config"])


@router.get("/config", response_model=ConfigOut)
def get_config():
    # what the range sliders and difficulty picker need to render
    return {
        "min_bound": QUIZ_MIN_BOUND,
        "max_bound": QUIZ_MAX_BOUND,
        "difficulties": dict(PROBLEM_COUNTS),
        "default_difficulty": Difficulty.easy,
    }
