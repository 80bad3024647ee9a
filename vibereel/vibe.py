#!/usr/bin/env python3
"""
Vibe classification via additive genre, keyword and rating signals

Scores are un-normalized running sums; only their relative order matters.
After the genre/keyword/rating passes, trap corrections counter known
systematic misreads (dark comedy, hopeful war films, family animation,
plain sci-fi, romance).
"""

import logging
from typing import Dict, Sequence

from vibereel.attention import clamp, count_matches
from vibereel.constants import (
    ACCLAIMED_RATING,
    GENRE_ANIMATION,
    GENRE_COMEDY,
    GENRE_CRIME,
    GENRE_DRAMA,
    GENRE_FAMILY,
    GENRE_HORROR,
    GENRE_ROMANCE,
    GENRE_SCIENCE_FICTION,
    GENRE_THRILLER,
    GENRE_VIBE_WEIGHTS,
    GENRE_WAR,
    POOR_RATING,
    VIBE_KEYWORD_WEIGHT,
    VIBE_KEYWORDS,
    VIBES,
)
from vibereel.models import MovieMetadata, VibeResult

logger = logging.getLogger(__name__)


def empty_scores() -> Dict[str, float]:
    return {vibe: 0.0 for vibe in VIBES}


def apply_genre_weights(scores: Dict[str, float], genre_ids: Sequence[int]) -> None:
    for gid in genre_ids:
        for vibe, weight in GENRE_VIBE_WEIGHTS.get(gid, {}).items():
            scores[vibe] += weight


def apply_keyword_matches(scores: Dict[str, float], text: str) -> None:
    for vibe, keywords in VIBE_KEYWORDS.items():
        scores[vibe] += count_matches(text, keywords) * VIBE_KEYWORD_WEIGHT


def apply_rating_context(scores: Dict[str, float], genre_ids: Sequence[int], rating: float) -> None:
    genres = set(genre_ids)
    # Acclaimed dramas and war films lean melancholic-with-hope
    if rating >= ACCLAIMED_RATING and genres & {GENRE_DRAMA, GENRE_WAR}:
        scores['melancholic'] += 0.2
        scores['uplifting'] += 0.1
    # Poorly rated genre films lean dark
    if rating < POOR_RATING and genres & {GENRE_HORROR, GENRE_THRILLER, GENRE_CRIME}:
        scores['dark'] += 0.3


def correct_common_traps(scores: Dict[str, float], genre_ids: Sequence[int], text: str) -> Dict[str, float]:
    """
    Return a corrected copy of scores. Every rule whose condition holds is
    applied; rules only add/subtract, so application order is irrelevant.
    """
    corrected = dict(scores)
    genres = set(genre_ids)

    # Dark comedy: comedy about crime is dark, not feel-good
    if GENRE_COMEDY in genres and (GENRE_CRIME in genres or 'murder' in text or 'crime' in text):
        corrected['dark'] += 0.4
        corrected['feel-good'] -= 0.3

    # War films stay melancholic even when hopeful
    if GENRE_WAR in genres or 'war' in text or 'holocaust' in text:
        corrected['melancholic'] += 0.3
        corrected['uplifting'] -= 0.2

    # Light family animation is feel-good, not mind-bending
    if (GENRE_ANIMATION in genres and GENRE_FAMILY in genres
            and 'dark' not in text and 'complex' not in text):
        corrected['feel-good'] += 0.4
        corrected['mind-bending'] -= 0.3

    # Sci-fi is not automatically mind-bending
    if GENRE_SCIENCE_FICTION in genres and not count_matches(text, VIBE_KEYWORDS['mind-bending']):
        corrected['mind-bending'] -= 0.2

    if GENRE_ROMANCE in genres and ('love' in text or 'romantic' in text):
        corrected['feel-good'] += 0.3

    return corrected


def select_vibe(scores: Dict[str, float]) -> str:
    """
    Highest score wins.

    Ties go to the earliest vibe in VIBES order, so a movie with no signals at
    all is classified as VIBES[0] ("dark"), not the last tied vibe.
    """
    best = VIBES[0]
    for vibe in VIBES[1:]:
        if scores[vibe] > scores[best]:
            best = vibe
    return best


def vibe_confidence(scores: Dict[str, float]) -> str:
    ranked = sorted(scores.values(), reverse=True)
    top = ranked[0]
    second = ranked[1] if len(ranked) > 1 else 0.0
    spread = top - second

    if top > 0.8 and spread > 0.3:
        return 'High'
    if top > 0.5 and spread > 0.2:
        return 'Medium'
    return 'Low'


def score_vibe(movie: MovieMetadata) -> VibeResult:
    """Pick the dominant emotional tone of a movie"""
    genre_ids = list(movie.genre_ids)
    text = movie.text
    rating = clamp(movie.vote_average or 0.0, 0.0, 10.0)

    scores = empty_scores()
    apply_genre_weights(scores, genre_ids)
    apply_keyword_matches(scores, text)
    apply_rating_context(scores, genre_ids, rating)
    scores = correct_common_traps(scores, genre_ids, text)

    vibe = select_vibe(scores)
    confidence = vibe_confidence(scores)

    logger.debug(f"Vibe '{movie.title}': {vibe} ({confidence}) scores={scores}")

    return VibeResult(
        vibe=vibe,
        confidence=confidence,
        explanation=(
            f"Top vibe: {vibe} ({scores[vibe]:.2f}). "
            "Genre signals + keyword analysis + rating context"
        ),
        scores=scores,
    )
