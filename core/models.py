"""Domain models for the Seefunk trainer."""

import logging

from .config import (
    DIRECTION_EN_DE, TARGET_ALL, DEFAULT_COMPLETION_TARGET,
    ALL_CHAPTERS, DIRECTION_DE_EN,
    REVIEW_DELAY, REVIEW_DELAY_REVIEW_FIRST,
    MSG_CORRECT, MSG_WRONG, MSG_SESSION_DONE
)
from .utils import normalize

logger = logging.getLogger(__name__)


def parse_target(value) -> int | str:
    """Completion target from user input: a positive int or 'all'.

    Unparseable values fall back to the default target.
    """
    if isinstance(value, str) and value.strip().lower() == TARGET_ALL:
        return TARGET_ALL
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return DEFAULT_COMPLETION_TARGET


def completion_target(target, deck_size: int) -> int:
    target = parse_target(target)
    if target == TARGET_ALL:
        return deck_size
    return min(target, deck_size)


class ReferenceText:
    """A reference radio message with German and English versions."""

    def __init__(self, title: str, de: str, en: str, audio: str | None = None):
        self.title = title
        self.de = de
        self.en = en
        self.audio = audio

    def display_title(self, index: int) -> str:
        """Title for menus; untitled texts are numbered from 1."""
        return self.title or f"Eintrag {index + 1}"

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'de': self.de,
            'en': self.en,
            'audio': self.audio
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ReferenceText':
        return cls(
            data.get('title') or '',
            data.get('de') or '',
            data.get('en') or '',
            data.get('audio') or None
        )


class VocabCard:
    """A German/English vocabulary pair in a chapter."""

    def __init__(self, chapter: str, de: str, en: str):
        self.chapter = chapter
        self.de = de
        self.en = en

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity for scheduling and mastery."""
        return (self.chapter.strip(), self.de.strip(), self.en.strip())

    def prompt(self, direction: str) -> str:
        return self.en if direction == DIRECTION_EN_DE else self.de

    def solution(self, direction: str) -> str:
        return self.de if direction == DIRECTION_EN_DE else self.en

    def __eq__(self, other) -> bool:
        return isinstance(other, VocabCard) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"VocabCard({self.chapter!r}, {self.de!r}, {self.en!r})"

    def to_dict(self) -> dict:
        return {'chapter': self.chapter, 'de': self.de, 'en': self.en}

    @classmethod
    def from_dict(cls, data: dict) -> 'VocabCard':
        return cls(data.get('chapter') or '', data.get('de') or '', data.get('en') or '')


class DrillSettings:
    """Everything that defines a drill session. Changing any of it means a new session."""

    def __init__(self, chapter: str = ALL_CHAPTERS, direction: str = DIRECTION_DE_EN,
                 shuffle: bool = False, review_first: bool = False,
                 target: int | str = DEFAULT_COMPLETION_TARGET):
        self.chapter = chapter
        self.direction = direction
        self.shuffle = shuffle
        self.review_first = review_first
        self.target = target

    @property
    def review_delay(self) -> int:
        return REVIEW_DELAY_REVIEW_FIRST if self.review_first else REVIEW_DELAY

    def __eq__(self, other) -> bool:
        return isinstance(other, DrillSettings) and self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            'chapter': self.chapter,
            'direction': self.direction,
            'shuffle': self.shuffle,
            'review_first': self.review_first,
            'target': self.target
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DrillSettings':
        return cls(
            chapter=data.get('chapter', ALL_CHAPTERS),
            direction=data.get('direction', DIRECTION_DE_EN),
            shuffle=bool(data.get('shuffle', False)),
            review_first=bool(data.get('review_first', False)),
            target=data.get('target', DEFAULT_COMPLETION_TARGET)
        )


class AnswerFeedback:
    """Result of checking one drill answer."""

    def __init__(self, correct: bool, solution: str, answer: str):
        self.correct = correct
        self.solution = solution
        self.answer = answer

    @property
    def message(self) -> str:
        if self.correct:
            return MSG_CORRECT
        return MSG_WRONG.format(solution=self.solution)

    def to_dict(self) -> dict:
        return {
            'correct': self.correct,
            'solution': self.solution,
            'answer': self.answer,
            'message': self.message
        }


class DrillSession:
    """Vocabulary drill state for one chapter/direction/settings combination.

    The deck is presented in order and wraps around. Missed cards go into
    the review queue and come back after a fixed number of presentations.
    The session is done once enough distinct cards were answered correctly
    and nothing is left to repeat.
    """

    def __init__(self, deck: list[VocabCard], settings: DrillSettings):
        self.settings = settings
        self.deck = list(deck)
        self.deck_index = 0
        self.review_queue = []  # [{card, due_in}]
        self.mastered_keys = set()
        self.wrong_ledger = {}  # {card key: {card, wrong_count, last_answer}}
        self.correct = 0
        self.total = 0
        self.session_done = False
        self.current_card = None
        self.answered = False
        self.completion_target = completion_target(settings.target, len(self.deck))

    @property
    def is_empty(self) -> bool:
        return not self.deck

    @property
    def state(self) -> str:
        """idle, presenting, answered or done."""
        if self.session_done:
            return 'done'
        if self.current_card is None:
            return 'idle'
        return 'answered' if self.answered else 'presenting'

    def copy(self) -> 'DrillSession':
        """Shallow-structure copy; cards are shared, containers are not."""
        clone = DrillSession.__new__(DrillSession)
        clone.settings = self.settings
        clone.deck = self.deck
        clone.deck_index = self.deck_index
        clone.review_queue = [dict(entry) for entry in self.review_queue]
        clone.mastered_keys = set(self.mastered_keys)
        clone.wrong_ledger = {k: dict(v) for k, v in self.wrong_ledger.items()}
        clone.correct = self.correct
        clone.total = self.total
        clone.session_done = self.session_done
        clone.current_card = self.current_card
        clone.answered = self.answered
        clone.completion_target = self.completion_target
        return clone

    def is_queued(self, card: VocabCard) -> bool:
        return any(entry['card'].key == card.key for entry in self.review_queue)

    def _decrement_review_due(self) -> None:
        for entry in self.review_queue:
            entry['due_in'] -= 1

    def _pick_due_review_card(self) -> VocabCard | None:
        if not self.review_queue:
            return None

        self._decrement_review_due()
        for i, entry in enumerate(self.review_queue):
            if entry['due_in'] <= 0:
                return self.review_queue.pop(i)['card']

        if not self.settings.review_first:
            return None

        # Nothing due yet: pull the soonest one forward
        min_idx = 0
        for i in range(1, len(self.review_queue)):
            if self.review_queue[i]['due_in'] < self.review_queue[min_idx]['due_in']:
                min_idx = i
        self.review_queue[min_idx]['due_in'] = 0
        return self.review_queue.pop(min_idx)['card']

    def _next_sequential_card(self) -> VocabCard | None:
        if not self.deck:
            return None
        if self.deck_index >= len(self.deck):
            self.deck_index = 0
        card = self.deck[self.deck_index]
        self.deck_index += 1
        return card

    def next_card(self) -> VocabCard | None:
        """Present the next card: a due review if there is one, else the deck."""
        if not self.deck or self.session_done:
            self.current_card = None
            return None
        due = self._pick_due_review_card()
        self.current_card = due or self._next_sequential_card()
        self.answered = False
        return self.current_card

    def queue_for_repeat(self, card: VocabCard) -> bool:
        """Queue a missed card unless it is already waiting. Returns True if queued."""
        if self.is_queued(card):
            return False
        self.review_queue.append({'card': card, 'due_in': self.settings.review_delay})
        return True

    def record_wrong(self, card: VocabCard, answer: str) -> None:
        entry = self.wrong_ledger.get(card.key)
        if entry:
            entry['wrong_count'] += 1
            entry['last_answer'] = answer
        else:
            self.wrong_ledger[card.key] = {'card': card, 'wrong_count': 1, 'last_answer': answer}

    def check_answer(self, answer: str | None) -> AnswerFeedback | None:
        """Check an answer for the presented card.

        Returns None when no card is waiting for an answer.
        """
        if self.state != 'presenting':
            return None

        card = self.current_card
        answer = (answer or '').strip()
        solution = card.solution(self.settings.direction)
        ok = normalize(answer) == normalize(solution)

        self.total += 1
        if ok:
            self.correct += 1
            self.mastered_keys.add(card.key)
        else:
            self.record_wrong(card, answer)
            self.queue_for_repeat(card)

        self.answered = True
        self.check_completion()
        return AnswerFeedback(ok, solution, answer)

    def check_completion(self) -> bool:
        if self.session_done:
            return True
        if len(self.mastered_keys) >= self.completion_target and not self.review_queue:
            self.session_done = True
            logger.debug("Drill session complete: %d/%d mastered",
                         len(self.mastered_keys), self.completion_target)
        return self.session_done

    def get_errors(self) -> list[dict]:
        """Missed cards, most often missed first."""
        return sorted(self.wrong_ledger.values(), key=lambda e: e['wrong_count'], reverse=True)

    def get_score_display(self) -> str:
        return f"{self.correct}/{self.total}"

    def get_progress_display(self) -> str:
        return f"{len(self.mastered_keys)}/{self.completion_target}"

    def get_done_display(self) -> str:
        return MSG_SESSION_DONE if self.session_done else ''

    def to_dict(self) -> dict:
        return {
            'settings': self.settings.to_dict(),
            'state': self.state,
            'deck_size': len(self.deck),
            'current_prompt': self.current_card.prompt(self.settings.direction) if self.current_card else None,
            'review_queue_size': len(self.review_queue),
            'mastered': len(self.mastered_keys),
            'completion_target': self.completion_target,
            'correct': self.correct,
            'total': self.total,
            'session_done': self.session_done,
            'score_display': self.get_score_display(),
            'progress_display': self.get_progress_display(),
            'done_display': self.get_done_display()
        }
