# Keyword sentiment, theme detection, prompts and period reflections for journal entries.
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"

EXACT = "exact"
SUBSTRING = "substring"

PERIODS = ("week", "month")
SENTIMENT_THRESHOLD = 0.3
RECENT_ENTRIES_FOR_PROMPTS = 5
MAX_PROMPTS = 5
THEME_DISTRIBUTION_LIMIT = 8
TOP_THEMES = {"week": 3, "month": 5}
NO_THEMES_TEXT = "general reflection and personal growth"

# Raw `timestamp` values inside this open interval mark seeded demonstration entries.
DEMO_TIMESTAMP_RANGE_MS = (1730000000000, 1760000000000)


@dataclass(frozen=True)
class Lexicon:
    categories: dict
    mode: str

    def hit(self, keyword: str, token: str) -> bool:
        if self.mode == EXACT:
            return token == keyword
        return keyword in token


SENTIMENT_LEXICON = Lexicon(
    categories={
        POSITIVE: (
            'happy', 'joy', 'excited', 'grateful', 'blessed', 'amazing', 'wonderful', 'fantastic',
            'great', 'excellent', 'love', 'adore', 'enjoy', 'pleasure', 'delight', 'thrilled',
            'proud', 'accomplished', 'success', 'achievement', 'progress', 'growth', 'improvement',
            'peaceful', 'calm', 'relaxed', 'content', 'satisfied', 'fulfilled', 'optimistic',
            'hopeful', 'confident', 'strong', 'energized', 'motivated', 'inspired', 'creative',
        ),
        NEGATIVE: (
            'sad', 'depressed', 'down', 'upset', 'angry', 'frustrated', 'annoyed', 'irritated',
            'worried', 'anxious', 'stressed', 'overwhelmed', 'tired', 'exhausted', 'drained',
            'lonely', 'isolated', 'hurt', 'pain', 'suffering', 'struggle', 'difficult', 'hard',
            'challenging', 'problem', 'issue', 'concern', 'fear', 'scared', 'afraid', 'nervous',
            'disappointed', 'discouraged', 'hopeless', 'helpless', 'lost', 'confused', 'stuck',
        ),
        NEUTRAL: (
            'okay', 'fine', 'normal', 'regular', 'usual', 'typical', 'average', 'standard',
            'work', 'job', 'meeting', 'appointment', 'plan', 'schedule', 'routine', 'daily',
            'today', 'yesterday', 'tomorrow', 'week', 'month', 'year', 'time', 'date',
        ),
    },
    mode=EXACT,
)

# Substring mode so inflections ("meetings", "workout") still count.
THEME_LEXICON = Lexicon(
    categories={
        'work': ('work', 'job', 'career', 'office', 'meeting', 'project', 'boss', 'colleague', 'deadline', 'presentation'),
        'family': ('family', 'mom', 'dad', 'parent', 'sibling', 'brother', 'sister', 'child', 'kid', 'son', 'daughter'),
        'relationships': ('relationship', 'partner', 'boyfriend', 'girlfriend', 'spouse', 'husband', 'wife', 'friend', 'dating'),
        'health': ('health', 'exercise', 'workout', 'gym', 'doctor', 'medical', 'sick', 'illness', 'medicine', 'fitness'),
        'hobbies': ('hobby', 'hobbies', 'music', 'art', 'reading', 'writing', 'gaming', 'sports', 'cooking', 'travel'),
        'education': ('school', 'college', 'university', 'study', 'learning', 'class', 'course', 'exam', 'test', 'homework'),
        'travel': ('travel', 'trip', 'vacation', 'holiday', 'flight', 'hotel', 'destination', 'journey', 'adventure'),
        'finance': ('money', 'budget', 'expense', 'income', 'salary', 'investment', 'saving', 'spending', 'financial'),
    },
    mode=SUBSTRING,
)

FALLBACK_PROMPTS = [
    "What's on your mind today?",
    "How are you feeling right now?",
    "What made you smile today?",
    "What are you grateful for?",
    "What's one thing you learned today?",
]

# Checked in this order; a theme's prompts are offered once it recurs.
THEME_PROMPTS = {
    'work': [
        "How did work go today? Any new challenges or wins?",
        "What's one thing you accomplished at work recently?",
    ],
    'family': [
        "How are things with your family lately?",
        "What's a favorite memory with family you've been thinking about?",
    ],
    'health': [
        "How are you taking care of yourself today?",
        "What's one healthy choice you made recently?",
    ],
}

COMFORT_PROMPTS = [
    "What's one thing that brought you comfort today?",
    "How did you find moments of calm in your day?",
    "What's something you're looking forward to?",
]

MOMENTUM_PROMPTS = [
    "What's contributing to your positive energy lately?",
    "How can you carry this good feeling forward?",
]

CLOSING_PROMPTS = [
    "What's one thing you're grateful for today?",
    "How did you grow or learn something new today?",
    "What's a small win you had today?",
]

WEEK_INSIGHTS = {
    'work': "You wrote about work frequently this week. Consider how work-life balance is going.",
    'family': "Family was a recurring theme. How are your relationships feeling?",
    POSITIVE: "You've been feeling quite positive this week! What's contributing to this energy?",
    NEGATIVE: "This week had some challenges. Remember to be gentle with yourself.",
}

MONTH_INSIGHTS = {
    'work': "Work has been a major focus this month. Consider your work-life balance.",
    'family': "Family relationships have been important to you this month.",
    'health': "You've been thinking about health and wellness. How are you feeling?",
    POSITIVE: "You've had a very positive month! What's been contributing to this?",
    NEGATIVE: "This month had its challenges. Remember that growth often comes from difficult times.",
}


def _tokens(text: str) -> list:
    return (text or "").lower().split()


def classify_sentiment(text: str) -> str:
    counts = {label: 0 for label in SENTIMENT_LEXICON.categories}
    for token in _tokens(text):
        for label, words in SENTIMENT_LEXICON.categories.items():
            if any(SENTIMENT_LEXICON.hit(w, token) for w in words):
                counts[label] += 1
                break
    total = sum(counts.values())
    if total == 0:
        return NEUTRAL
    pos_ratio = counts[POSITIVE] / total
    neg_ratio = counts[NEGATIVE] / total
    if pos_ratio > neg_ratio and pos_ratio > SENTIMENT_THRESHOLD:
        return POSITIVE
    if neg_ratio > pos_ratio and neg_ratio > SENTIMENT_THRESHOLD:
        return NEGATIVE
    return NEUTRAL


def detect_themes(text: str) -> list:
    """Return one ThemeMatch dict per theme found in ``text``.

    ``confidence`` is the share of the theme's keywords that appear inside
    at least one token. Sorted by confidence, highest first; equal scores
    keep declaration order.
    """
    tokens = _tokens(text)
    found = []
    for theme, keywords in THEME_LEXICON.categories.items():
        matched = [k for k in keywords if any(THEME_LEXICON.hit(k, t) for t in tokens)]
        if matched:
            found.append({"theme": theme, "confidence": len(matched) / len(keywords), "matches": len(matched)})
    return sorted(found, key=lambda m: -m["confidence"])


def _tally(entries) -> tuple[dict, dict]:
    # Both dicts keep first-encountered key order for tie-breaking.
    theme_counts, sentiment_counts = {}, {}
    for e in entries:
        content = e.content or ""
        for m in detect_themes(content):
            theme_counts[m["theme"]] = theme_counts.get(m["theme"], 0) + 1
        label = classify_sentiment(content)
        sentiment_counts[label] = sentiment_counts.get(label, 0) + 1
    return theme_counts, sentiment_counts


def generate_prompts(entries) -> list:
    entries = list(entries or [])
    if not entries:
        return list(FALLBACK_PROMPTS)
    theme_counts, sentiment_counts = _tally(entries[-RECENT_ENTRIES_FOR_PROMPTS:])
    prompts = []
    for theme, theme_prompts in THEME_PROMPTS.items():
        if theme_counts.get(theme, 0) > 1:
            prompts.extend(theme_prompts)
    pos, neg = sentiment_counts.get(POSITIVE, 0), sentiment_counts.get(NEGATIVE, 0)
    if neg > pos:
        prompts.extend(COMFORT_PROMPTS)
    elif pos > neg:
        prompts.extend(MOMENTUM_PROMPTS)
    prompts.extend(CLOSING_PROMPTS)
    return prompts[:MAX_PROMPTS]


def _check_period(period: str) -> None:
    if period not in PERIODS:
        raise ValueError(f"Unknown period {period!r}; expected one of {', '.join(PERIODS)}.")


def period_cutoff(period: str, now: datetime | None = None) -> datetime:
    _check_period(period)
    now = now or datetime.now()
    if period == "week":
        return now - timedelta(days=7)
    # Same day number one month back; days past the shorter month's end roll
    # forward into the next month (Mar 31 -> Mar 3).
    year, month = (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
    return now.replace(year=year, month=month, day=1) + timedelta(days=now.day - 1)


def filter_by_period(entries, period: str, now: datetime | None = None) -> list:
    cutoff_ms = int(period_cutoff(period, now).timestamp() * 1000)
    return [e for e in entries or [] if e.effective_ms >= cutoff_ms]


def has_demo_data(entries) -> bool:
    lo, hi = DEMO_TIMESTAMP_RANGE_MS
    return any(e.timestamp is not None and lo < e.timestamp < hi for e in entries or [])


def _insights(period: str, theme_counts: dict, sentiment_counts: dict) -> list:
    pos, neg = sentiment_counts.get(POSITIVE, 0), sentiment_counts.get(NEGATIVE, 0)
    insights = []
    if period == "week":
        texts = WEEK_INSIGHTS
        for theme in ('work', 'family'):
            if theme_counts.get(theme, 0) > 2:
                insights.append(texts[theme])
        if pos > neg:
            insights.append(texts[POSITIVE])
        elif neg > pos:
            insights.append(texts[NEGATIVE])
    else:
        texts = MONTH_INSIGHTS
        for theme, floor in (('work', 5), ('family', 5), ('health', 3)):
            if theme_counts.get(theme, 0) > floor:
                insights.append(texts[theme])
        if pos > neg * 1.5:
            insights.append(texts[POSITIVE])
        elif neg > pos * 1.5:
            insights.append(texts[NEGATIVE])
    return insights


def summarize_period(entries, period: str, now: datetime | None = None,
                     use_all_entries_if_demo_data_present: bool = False) -> dict:
    _check_period(period)
    entries = list(entries or [])
    if use_all_entries_if_demo_data_present and has_demo_data(entries):
        logger.debug("Demo data present; reflecting over all %d entries", len(entries))
        in_period = entries
    else:
        in_period = filter_by_period(entries, period, now)

    if not in_period:
        return {
            "summary": f"No entries this {period} to reflect on.",
            "themes": [],
            "sentiment": NEUTRAL,
            "insights": [],
        }

    theme_counts, sentiment_counts = _tally(in_period)
    ranked = sorted(theme_counts.items(), key=lambda kv: -kv[1])
    top_themes = [t for t, _ in ranked[:TOP_THEMES[period]]]
    dominant = max(sentiment_counts, key=sentiment_counts.get)
    themes_text = ", ".join(top_themes) if top_themes else NO_THEMES_TEXT
    return {
        "summary": f"This {period} you wrote {len(in_period)} entries with themes around {themes_text}.",
        "themes": top_themes,
        "sentiment": dominant,
        "insights": _insights(period, theme_counts, sentiment_counts),
        "entryCount": len(in_period),
    }


def sentiment_distribution(entries) -> dict:
    counts = {POSITIVE: 0, NEGATIVE: 0, NEUTRAL: 0}
    for e in entries or []:
        counts[classify_sentiment(e.content)] += 1
    return counts


def theme_distribution(entries, limit: int = THEME_DISTRIBUTION_LIMIT) -> list:
    counts = {}
    for e in entries or []:
        for m in detect_themes(e.content):
            counts[m["theme"]] = counts.get(m["theme"], 0) + m["matches"]
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])[:limit]
    return [{"theme": t, "count": c} for t, c in ranked]
