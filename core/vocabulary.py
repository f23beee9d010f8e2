"""Vocabulary chapters: canonical names, card cleaning and filtering."""

from .config import ALL_CHAPTERS, CHAPTER_ORDER
from .models import VocabCard, ReferenceText
from .utils import collapse_whitespace

# Lower-cased spellings seen in content files -> canonical chapter name
CHAPTER_ALIASES = {
    'wetter': 'Wetter',
    'navigation': 'Navigation',
    'wendungen': 'Wendungen',
    'meldungsstruktur': 'Meldungsstruktur',
    'notfälle': 'Notfälle',
    'notfaelle': 'Notfälle',
    'notfalle': 'Notfälle',
    'weitere nautische begriffe': 'Weitere nautische Begriffe',
    'schiffsmerkmale': 'Schiffsmerkmale',
    'schiffs merkmale': 'Schiffsmerkmale',
}

_ALL_ALIASES = {ALL_CHAPTERS.lower(), 'all'}


def normalize_chapter_name(chapter: str | None) -> str:
    """Map a raw chapter label onto the canonical set.

    Unknown labels are returned trimmed but otherwise unchanged.
    """
    c = (chapter or '').strip()
    return CHAPTER_ALIASES.get(c.lower(), c)


def is_all_chapters(chapter: str | None) -> bool:
    return (chapter or '').strip().lower() in _ALL_ALIASES


def clean_card(data: dict) -> VocabCard:
    """Build a card from raw content with a canonical chapter and tidy text."""
    return VocabCard(
        normalize_chapter_name(data.get('chapter')),
        collapse_whitespace(data.get('de')),
        collapse_whitespace(data.get('en'))
    )


def clean_cards(items: list[dict]) -> list[VocabCard]:
    return [clean_card(item) for item in items if isinstance(item, dict)]


def load_texts(items: list[dict]) -> list[ReferenceText]:
    return [ReferenceText.from_dict(item) for item in items if isinstance(item, dict)]


def chapter_sort_key(chapter: str) -> tuple[int, str]:
    """Known chapters in catalogue order, anything else afterwards by name."""
    if chapter in CHAPTER_ORDER:
        return (CHAPTER_ORDER.index(chapter), '')
    return (len(CHAPTER_ORDER), chapter.lower())


def get_chapters(cards: list[VocabCard]) -> list[str]:
    """Chapter menu: 'Alle', the catalogue chapters, then unknown labels found in cards."""
    extra = {card.chapter for card in cards if card.chapter and card.chapter not in CHAPTER_ORDER}
    return [ALL_CHAPTERS] + CHAPTER_ORDER + sorted(extra, key=chapter_sort_key)


def filter_by_chapter(cards: list[VocabCard], chapter: str | None) -> list[VocabCard]:
    """Cards of one chapter, or all of them for 'Alle'."""
    if is_all_chapters(chapter):
        return list(cards)
    wanted = normalize_chapter_name(chapter)
    return [card for card in cards if card.chapter.strip() == wanted]
