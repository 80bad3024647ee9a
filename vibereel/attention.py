#!/usr/bin/env python3
"""
Attention-level scoring via weighted signal fusion

Five independent signals, each roughly in [0, 1], are combined as a fixed
weighted sum (see ATTENTION_SIGNAL_WEIGHTS):

    genre       0.40  mean genre attention weight
    runtime     0.20  step function of runtime
    synopsis    0.20  keyword buckets over title + overview
    popularity  0.10  inverse step function (popular = accessible)
    rating      0.10  rating, gated on vote count

The sum maps to a tier by descending inclusive thresholds. Never raises:
sparse input falls back to neutral defaults, out-of-range numbers are clamped.
"""

import logging
from typing import Iterable, Sequence

from vibereel.constants import (
    ATTENTION_FLOOR_LEVEL,
    ATTENTION_KEYWORDS,
    ATTENTION_SIGNAL_WEIGHTS,
    ATTENTION_THRESHOLDS,
    DEFAULT_GENRE_ATTENTION,
    GENRE_ATTENTION_WEIGHTS,
    MIN_OVERVIEW_LENGTH,
    SYNOPSIS_BASE_SCORE,
    SYNOPSIS_BUCKET_WEIGHTS,
)
from vibereel.models import AttentionResult, MovieMetadata

logger = logging.getLogger(__name__)


def clamp(value, low: float, high: float) -> float:
    return max(low, min(high, value))


def count_matches(text: str, keywords: Iterable[str]) -> int:
    """Number of keywords occurring as substrings of text"""
    return sum(1 for keyword in keywords if keyword in text)


def genre_attention_score(genre_ids: Sequence[int]) -> float:
    """Mean attention weight over genres; unknown genres and no genres count 0.5"""
    if not genre_ids:
        return DEFAULT_GENRE_ATTENTION
    scores = [GENRE_ATTENTION_WEIGHTS.get(gid, DEFAULT_GENRE_ATTENTION) for gid in genre_ids]
    return sum(scores) / len(scores)


def runtime_score(runtime: int) -> float:
    if runtime <= 0:
        return 0.5   # Unknown runtime
    if runtime > 150:
        return 0.9
    if runtime > 120:
        return 0.7
    if runtime > 90:
        return 0.5
    if runtime > 60:
        return 0.3
    return 0.1


def synopsis_complexity(text: str) -> float:
    """Base 0.5, nudged by each attention keyword bucket, clamped to [0, 1]"""
    score = SYNOPSIS_BASE_SCORE
    for bucket, keywords in ATTENTION_KEYWORDS.items():
        matches = count_matches(text, keywords)
        if matches:
            score += matches * SYNOPSIS_BUCKET_WEIGHTS[bucket]
    return clamp(score, 0.0, 1.0)


def popularity_adjustment(popularity: float) -> float:
    # Very popular films tend to be broadly accessible, so demand less attention
    if popularity > 100:
        return 0.3
    if popularity > 50:
        return 0.4
    if popularity > 20:
        return 0.5
    if popularity > 5:
        return 0.6
    return 0.7


def rating_signal(rating: float, vote_count: int) -> float:
    if vote_count < 100:
        return 0.5   # Not enough votes to trust the rating
    if rating >= 8.0 and vote_count >= 1000:
        return 0.8
    if rating >= 7.5 and vote_count >= 500:
        return 0.7
    if rating >= 7.0:
        return 0.6
    if rating < 6.0:
        return 0.3
    return 0.5


def map_score_to_level(score: float) -> str:
    for threshold, level in ATTENTION_THRESHOLDS:
        if score >= threshold:
            return level
    return ATTENTION_FLOOR_LEVEL


def attention_confidence(score: float, genre_ids: Sequence[int], overview: str, text: str) -> str:
    """
    Count evidence factors: genres present, overview longer than 50 chars,
    any deep-dive keyword, any immersive keyword.

    High needs >= 3 factors AND an extreme score (<= 0.3 or >= 0.7);
    Medium needs >= 2 factors; anything else is Low.
    """
    factors = sum([
        len(genre_ids) > 0,
        len(overview) > MIN_OVERVIEW_LENGTH,
        count_matches(text, ATTENTION_KEYWORDS['deep-dive']) > 0,
        count_matches(text, ATTENTION_KEYWORDS['immersive']) > 0,
    ])

    if factors >= 3 and (score <= 0.3 or score >= 0.7):
        return 'High'
    if factors >= 2:
        return 'Medium'
    return 'Low'


def score_attention(movie: MovieMetadata) -> AttentionResult:
    """Score how much sustained attention a movie demands"""
    genre_ids = list(movie.genre_ids)
    overview = movie.overview or ''
    text = movie.text
    runtime = max(0, movie.runtime_minutes or 0)
    rating = clamp(movie.vote_average or 0.0, 0.0, 10.0)
    vote_count = max(0, movie.vote_count or 0)
    popularity = max(0.0, movie.popularity or 0.0)

    signals = {
        'genre': genre_attention_score(genre_ids),
        'runtime': runtime_score(runtime),
        'synopsis': synopsis_complexity(text),
        'popularity': popularity_adjustment(popularity),
        'rating': rating_signal(rating, vote_count),
    }
    final_score = sum(signals[name] * weight for name, weight in ATTENTION_SIGNAL_WEIGHTS.items())

    level = map_score_to_level(final_score)
    confidence = attention_confidence(final_score, genre_ids, overview, text)

    signal_notes = [
        f"Genre score: {signals['genre']:.2f}",
        f"Runtime: {runtime}min ({signals['runtime']:.2f})",
        f"Synopsis complexity: {signals['synopsis']:.2f}",
        f"Popularity adjustment: {signals['popularity']:.2f}",
        f"Rating signal: {signals['rating']:.2f}",
    ]
    explanation = f"Final score: {final_score:.2f} → {level}. Signals: {', '.join(signal_notes)}"

    logger.debug(f"Attention '{movie.title}': {final_score:.3f} → {level} ({confidence})")

    return AttentionResult(
        level=level,
        confidence=confidence,
        explanation=explanation,
        score=final_score,
    )
