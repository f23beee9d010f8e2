"""Command functions driving a vocabulary drill session.

Each command takes a session and returns a new one; the session passed in
is left as it was. Callers keep the returned value and drop the old one.
"""

import logging
import random
from typing import Callable

from .models import DrillSession, DrillSettings, VocabCard, AnswerFeedback
from .utils import unique
from .vocabulary import filter_by_chapter

logger = logging.getLogger(__name__)

ShuffleFn = Callable[[list], None]


def build_deck(cards: list[VocabCard], settings: DrillSettings,
               shuffle_fn: ShuffleFn | None = None) -> list[VocabCard]:
    """Cards for the selected chapter, one per identity key, optionally shuffled in place."""
    deck = unique(filter_by_chapter(cards, settings.chapter))
    if settings.shuffle:
        (shuffle_fn or random.shuffle)(deck)
    return deck


def start_session(cards: list[VocabCard], settings: DrillSettings,
                  shuffle_fn: ShuffleFn | None = None) -> tuple[DrillSession, VocabCard | None]:
    """Build a fresh session and present its first card.

    Returns (session, first_card); first_card is None for an empty chapter.
    """
    session = DrillSession(build_deck(cards, settings, shuffle_fn), settings)
    logger.debug("New drill session: %s, %d cards, target %d",
                 settings.to_dict(), len(session.deck), session.completion_target)
    card = session.next_card()
    return session, card


def pick_next(session: DrillSession) -> tuple[DrillSession, VocabCard | None]:
    """Advance to the next card (a due review or the next deck card)."""
    updated = session.copy()
    card = updated.next_card()
    return updated, card


def submit_answer(session: DrillSession, answer: str | None) -> tuple[DrillSession, AnswerFeedback | None]:
    """Check an answer for the presented card.

    Feedback is None (and the session unchanged) when no card awaits an answer.
    """
    updated = session.copy()
    feedback = updated.check_answer(answer)
    if feedback is None:
        return session, None
    logger.debug("Answer %s for %s", 'correct' if feedback.correct else 'wrong', updated.current_card)
    return updated, feedback


def needs_rebuild(session: DrillSession | None, settings: DrillSettings) -> bool:
    """True if settings differ from the ones the session was built with."""
    return session is None or session.settings != settings
