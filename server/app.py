"""FastAPI server for the word game."""

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from core.config import DEFAULT_LEVEL, LANGUAGE, LEVELS
from core.corpus import InMemoryCorpus
from core.engine import WordGameEngine
from core.interfaces import Feedback, FeedbackEvent

from server.file_corpus import load_corpus


# Pydantic models for API
class AnswerRequest(BaseModel):
    card_id: str
    selected: str
    user_id: str = "default"


class LevelRequest(BaseModel):
    level: str
    user_id: str = "default"


class UserRequest(BaseModel):
    user_id: str = "default"


class EventPayload(BaseModel):
    event: str
    level: Optional[str] = None


class StatsPayload(BaseModel):
    review_count: int
    accuracy_percent: Optional[int]
    streak: int
    level: str
    locked: bool
    thresholds: dict  # {up, down} for the current level


class QuestionPayload(BaseModel):
    card_id: str
    prompt: str
    options: list[str]
    mode: str  # 'flashcard' or 'cloze'
    is_review: bool
    category_label: Optional[str] = None
    level_tier: Optional[str] = None
    pronunciation: Optional[str] = None
    hint: Optional[str] = None


class NextQuestionResponse(BaseModel):
    exhausted: bool
    question: Optional[QuestionPayload]
    stats: StatsPayload
    events: list[EventPayload]


class AnswerResponse(BaseModel):
    correct: bool
    correct_answer: str
    level_changed: bool
    new_level: str
    change_type: Optional[str]
    stats: StatsPayload
    events: list[EventPayload]


class StatusResponse(BaseModel):
    language: str
    levels: list[str]
    state: str
    stats: StatsPayload
    events: list[EventPayload]


class RecordingFeedback(Feedback):
    """Collects feedback events until the next response drains them."""

    def __init__(self):
        self.events = []

    def notify(self, event: FeedbackEvent, level: str = None) -> None:
        self.events.append({'event': event.value, 'level': level})

    def drain(self) -> list[dict]:
        events, self.events = self.events, []
        return events


# Global state (in production, use proper DI)
corpus: InMemoryCorpus = None
start_level: str = DEFAULT_LEVEL
user_engines: dict[str, WordGameEngine] = {}


app = FastAPI(title="Word Game API", description=f"{LANGUAGE} vocabulary drill API")


@app.on_event("startup")
async def startup():
    """Load the corpus on startup."""
    global corpus, start_level

    start_level = os.environ.get('WORDGAME_LEVEL', DEFAULT_LEVEL)
    if start_level not in LEVELS:
        logger.warning(f"Unknown WORDGAME_LEVEL {start_level!r}, using {DEFAULT_LEVEL}")
        start_level = DEFAULT_LEVEL

    if corpus is None:
        corpus = load_corpus(os.environ.get('WORDGAME_CORPUS'))


def get_engine(user_id: str = "default") -> WordGameEngine:
    """Get or create the engine for a user."""
    if corpus is None:
        raise HTTPException(status_code=503, detail="Corpus not loaded")
    if user_id not in user_engines:
        logger.info(f"New session for {user_id} at level {start_level}")
        user_engines[user_id] = WordGameEngine(corpus, level=start_level, feedback=RecordingFeedback())
    return user_engines[user_id]


def drain_events(engine: WordGameEngine) -> list[dict]:
    return engine.feedback.drain()


def build_status(engine: WordGameEngine) -> StatusResponse:
    return StatusResponse(
        language=LANGUAGE,
        levels=LEVELS,
        state=engine.state,
        stats=StatsPayload(**engine.stats()),
        events=drain_events(engine)
    )


@app.get("/")
async def root():
    """Health check."""
    return {
        "status": "ok",
        "language": LANGUAGE,
        "entries": len(corpus) if corpus is not None else 0
    }


@app.get("/api/next", response_model=NextQuestionResponse)
async def get_next_question(user_id: str = "default"):
    """Present the next question for a user."""
    engine = get_engine(user_id)
    question = engine.next_question()

    if question is None:
        logger.info(f"Corpus exhausted for {user_id} at level {engine.level}")

    return NextQuestionResponse(
        exhausted=question is None,
        question=QuestionPayload(**question.to_dict()) if question else None,
        stats=StatsPayload(**engine.stats()),
        events=drain_events(engine)
    )


@app.post("/api/answer", response_model=AnswerResponse)
async def submit_answer(request: AnswerRequest):
    """Record an answer to the current question."""
    engine = get_engine(request.user_id)
    result = engine.answer(request.card_id, request.selected)
    if result is None:
        raise HTTPException(status_code=400, detail="No active question for this card")

    logger.info(f"{request.user_id} answered {request.card_id}: "
                f"{'correct' if result['correct'] else 'incorrect'}")
    if result['level_changed']:
        logger.info(f"{request.user_id} level {result['change_type']} to {result['new_level']}")

    return AnswerResponse(
        correct=result['correct'],
        correct_answer=result['correct_answer'],
        level_changed=result['level_changed'],
        new_level=result['new_level'],
        change_type=result['change_type'],
        stats=StatsPayload(**result['stats']),
        events=drain_events(engine)
    )


@app.post("/api/level", response_model=StatusResponse)
async def set_level(request: LevelRequest):
    """Jump to a level. Resets the user's session."""
    engine = get_engine(request.user_id)
    try:
        engine.set_level(request.level)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return build_status(engine)


@app.post("/api/lock", response_model=StatusResponse)
async def toggle_lock(request: UserRequest):
    """Toggle the level lock."""
    engine = get_engine(request.user_id)
    engine.toggle_lock()
    return build_status(engine)


@app.get("/api/status", response_model=StatusResponse)
async def get_status(user_id: str = "default"):
    """Get the current session status."""
    return build_status(get_engine(user_id))


@app.post("/api/reset", response_model=StatusResponse)
async def reset_session(request: UserRequest):
    """Start the user's session over."""
    engine = get_engine(request.user_id)
    engine.reset()
    logger.info(f"Session reset for {request.user_id}")
    return build_status(engine)
