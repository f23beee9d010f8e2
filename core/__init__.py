from .models import ReferenceText, VocabCard, DrillSettings, DrillSession, AnswerFeedback
from .interfaces import ContentStore, AudioPlayer
from .utils import normalize, tokenize
from .grading import GradeResult, extract_required_tokens, similarity, grade
from .drill import start_session, pick_next, submit_answer
from .config import (
    PASS_THRESHOLD_DE, PASS_THRESHOLD_EN,
    REVIEW_DELAY, REVIEW_DELAY_REVIEW_FIRST,
    ALL_CHAPTERS, CHAPTER_ORDER
)

__all__ = [
    'ReferenceText', 'VocabCard', 'DrillSettings', 'DrillSession', 'AnswerFeedback',
    'ContentStore', 'AudioPlayer',
    'normalize', 'tokenize',
    'GradeResult', 'extract_required_tokens', 'similarity', 'grade',
    'start_session', 'pick_next', 'submit_answer',
    'PASS_THRESHOLD_DE', 'PASS_THRESHOLD_EN',
    'REVIEW_DELAY', 'REVIEW_DELAY_REVIEW_FIRST',
    'ALL_CHAPTERS', 'CHAPTER_ORDER'
]
