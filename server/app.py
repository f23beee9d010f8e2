"""FastAPI server for the Seefunk trainer."""

import logging
import os
import random

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel
from typing import Optional, Union

logger = logging.getLogger(__name__)

from core.models import DrillSession, DrillSettings, ReferenceText, VocabCard
from core.config import (
    ALL_CHAPTERS, DIRECTIONS, DIRECTION_DE_EN, DEFAULT_COMPLETION_TARGET, TARGET_ALL,
    GRADE_MODES, MODE_DE,
    MSG_EMPTY_DECK, MSG_EMPTY_DECK_HINT, MSG_NO_ERRORS
)
from core.drill import start_session, pick_next, submit_answer, needs_rebuild
from core.grading import grade
from core.vocabulary import clean_cards, load_texts, get_chapters

from server.file_storage import FileContentStore


# Pydantic models for API
class GradeRequest(BaseModel):
    index: int
    answer: str = ""
    mode: str = MODE_DE  # "de": dictation against the German text, "en": translation into English


class GradeResponse(BaseModel):
    passed: bool
    similarity: float
    threshold: float
    missing_required_tokens: list[str]
    required_tokens: list[str]
    text: str


class DrillStartRequest(BaseModel):
    user_id: str = "default"
    chapter: str = ALL_CHAPTERS
    direction: str = DIRECTION_DE_EN
    shuffle: bool = False
    review_first: bool = False
    target: Union[int, str] = DEFAULT_COMPLETION_TARGET
    restart: bool = False  # Start over even if the settings are unchanged


class DrillAnswerRequest(BaseModel):
    user_id: str = "default"
    answer: str = ""


class DrillStatusResponse(BaseModel):
    settings: dict
    state: str
    deck_size: int
    current_prompt: Optional[str]
    review_queue_size: int
    mastered: int
    completion_target: int
    correct: int
    total: int
    session_done: bool
    score_display: str
    progress_display: str
    done_display: str


class DrillCardResponse(BaseModel):
    prompt: Optional[str]
    message: str
    status: DrillStatusResponse


class DrillAnswerResponse(BaseModel):
    accepted: bool
    correct: bool
    solution: Optional[str]
    message: str
    status: DrillStatusResponse


# Global state, loaded once on startup
store: FileContentStore = None
texts: list[ReferenceText] = []
cards: list[VocabCard] = []
exercises: list[dict] = []
drill_sessions: dict[str, DrillSession] = {}

# Replaced in tests for a deterministic order
shuffle_fn = random.shuffle


def load_content(data_dir: str = None) -> None:
    """(Re)load all content and drop existing drill sessions."""
    global store, texts, cards, exercises
    store = FileContentStore(data_dir)
    texts = load_texts(store.load_texts())
    cards = clean_cards(store.load_vocab())
    exercises = store.load_exercises()
    drill_sessions.clear()
    logger.info(f"Content loaded from {store.data_dir}: {len(texts)} texts, "
                f"{len(cards)} vocabulary cards, {len(exercises)} exercise sets")


app = FastAPI(title="Seefunk Trainer API", description="Maritime radio exam practice API")


@app.on_event("startup")
async def startup():
    """Load content on startup."""
    # Set SEEFUNK_DATA_DIR to read content from somewhere other than the project root
    load_content(os.environ.get('SEEFUNK_DATA_DIR'))


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "seefunk"}


def get_text(index: int) -> ReferenceText:
    if index < 0 or index >= len(texts):
        raise HTTPException(status_code=404, detail=f"Text {index} not found")
    return texts[index]


# Reference texts
@app.get("/api/texts")
async def list_texts():
    """List reference texts for the selection menus."""
    return [
        {"index": i, "title": t.display_title(i), "has_audio": bool(t.audio)}
        for i, t in enumerate(texts)
    ]


@app.get("/api/texts/{index}")
async def get_text_detail(index: int):
    """Full reference text in both languages."""
    text = get_text(index)
    data = text.to_dict()
    data['index'] = index
    data['title'] = text.display_title(index)
    return data


@app.get("/api/texts/{index}/audio")
async def get_text_audio(index: int):
    """Audio recording for a text."""
    text = get_text(index)
    path = store.resolve_audio(text.audio) if text.audio else None
    if not path:
        raise HTTPException(status_code=404, detail="Keine Audiodatei für diesen Text gefunden.")
    return FileResponse(path)


@app.post("/api/grade", response_model=GradeResponse)
async def grade_answer(request: GradeRequest):
    """Grade a dictation (mode 'de') or a DE->EN translation (mode 'en')."""
    if request.mode not in GRADE_MODES:
        raise HTTPException(status_code=422, detail=f"Unknown mode: {request.mode}")
    text = get_text(request.index)
    reference = text.de if request.mode == MODE_DE else text.en
    result = grade(request.answer, reference, request.mode)
    logger.info(f"Graded text {request.index} ({request.mode}): passed={result.passed}, "
                f"similarity={result.similarity:.2f}")
    return result.to_dict()


@app.get("/api/exercises")
async def list_exercises():
    """Optional exercise sets, as shipped with the content."""
    return {"total": len(exercises), "exercises": exercises}


# Vocabulary drill
@app.get("/api/chapters")
async def list_chapters():
    """Chapters for the drill menu."""
    return {"chapters": get_chapters(cards)}


def validate_settings(request: DrillStartRequest) -> DrillSettings:
    if request.direction not in DIRECTIONS:
        raise HTTPException(status_code=422, detail=f"Unknown direction: {request.direction}")
    target = request.target
    if isinstance(target, str):
        if target.strip().lower() == TARGET_ALL:
            target = TARGET_ALL
        elif target.strip().isdigit():
            target = int(target)
        else:
            raise HTTPException(status_code=422, detail=f"Invalid target: {request.target}")
    if target != TARGET_ALL and target < 1:
        raise HTTPException(status_code=422, detail=f"Invalid target: {request.target}")
    return DrillSettings(
        chapter=request.chapter,
        direction=request.direction,
        shuffle=request.shuffle,
        review_first=request.review_first,
        target=target
    )


def get_session(user_id: str) -> DrillSession:
    if user_id not in drill_sessions:
        raise HTTPException(status_code=404, detail="No drill session started")
    return drill_sessions[user_id]


def card_response(session: DrillSession) -> dict:
    if session.is_empty:
        prompt, message = MSG_EMPTY_DECK, MSG_EMPTY_DECK_HINT
    elif session.current_card is None:
        prompt, message = None, session.get_done_display()
    else:
        prompt, message = session.current_card.prompt(session.settings.direction), ""
    return {"prompt": prompt, "message": message, "status": session.to_dict()}


@app.post("/api/drill/start", response_model=DrillCardResponse)
async def start_drill(request: DrillStartRequest):
    """Start a drill session.

    A running session with the same settings is resumed unless restart is set;
    otherwise a fresh session replaces it.
    """
    settings = validate_settings(request)
    current = drill_sessions.get(request.user_id)
    if not request.restart and not needs_rebuild(current, settings):
        return card_response(current)
    session, _ = start_session(cards, settings, shuffle_fn)
    drill_sessions[request.user_id] = session
    logger.info(f"Drill started for {request.user_id}: chapter={settings.chapter}, "
                f"{len(session.deck)} cards, target={session.completion_target}")
    return card_response(session)


@app.get("/api/drill/next", response_model=DrillCardResponse)
async def next_drill_card(user_id: str = "default"):
    """Present the next card."""
    session, _ = pick_next(get_session(user_id))
    drill_sessions[user_id] = session
    return card_response(session)


@app.post("/api/drill/answer", response_model=DrillAnswerResponse)
async def answer_drill_card(request: DrillAnswerRequest):
    """Check an answer for the presented card."""
    before = get_session(request.user_id)
    session, feedback = submit_answer(before, request.answer)
    drill_sessions[request.user_id] = session

    if feedback is None:
        return {
            "accepted": False,
            "correct": False,
            "solution": None,
            "message": "",
            "status": session.to_dict()
        }

    if session.session_done and not before.session_done:
        logger.info(f"Drill completed for {request.user_id}: {session.get_score_display()}")
    return {
        "accepted": True,
        "correct": feedback.correct,
        "solution": feedback.solution,
        "message": feedback.message,
        "status": session.to_dict()
    }


@app.get("/api/drill/status", response_model=DrillStatusResponse)
async def drill_status(user_id: str = "default"):
    """Score, progress and completion of the user's session."""
    return get_session(user_id).to_dict()


@app.get("/api/drill/errors")
async def drill_errors(user_id: str = "default"):
    """Missed cards, most often missed first."""
    errors = get_session(user_id).get_errors()
    return {
        "total": len(errors),
        "message": "" if errors else MSG_NO_ERRORS,
        "errors": [
            {
                "de": e['card'].de,
                "en": e['card'].en,
                "chapter": e['card'].chapter,
                "wrong_count": e['wrong_count'],
                "last_answer": e['last_answer']
            }
            for e in errors
        ]
    }


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
