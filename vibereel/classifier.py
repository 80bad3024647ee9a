#!/usr/bin/env python3
"""
Movie classification engine - top-level orchestration

classify_movie() is a pure function: no I/O, no shared mutable state, safe
to call from any number of threads. Priority order per field:

1. [PRECISION] Manual override → forced value, High confidence
2. [REASONING] Scorer → attention.score_attention() / vibe.score_vibe()

Overall confidence is the averaged per-field confidence, except that any
manual override forces the whole result to High.
"""

import datetime
import logging
from typing import Iterable, List, Optional, Tuple

from vibereel.attention import score_attention
from vibereel.constants import (
    CONFIDENCE_SCORES,
    DEFAULT_DESCRIPTION,
    DEFAULT_LANGUAGE,
    DEFAULT_POSTER_SIZE,
    DEFAULT_RUNTIME,
    MANUAL_OVERRIDES,
    OVERRIDE_EXPLANATION,
    TMDB_GENRES,
    TMDB_IMAGE_BASE_URL,
)
from vibereel.models import (
    AttentionResult,
    ClassificationResult,
    DisplayMovieRecord,
    MovieMetadata,
    VibeResult,
)
from vibereel.vibe import score_vibe

logger = logging.getLogger(__name__)


def combine_confidence(attention_confidence: str, vibe_confidence: str) -> str:
    """Average High=3/Medium=2/Low=1 and map back (>= 2.5 High, >= 1.5 Medium)"""
    average = (CONFIDENCE_SCORES[attention_confidence] + CONFIDENCE_SCORES[vibe_confidence]) / 2
    if average >= 2.5:
        return 'High'
    if average >= 1.5:
        return 'Medium'
    return 'Low'


def classify_movie(movie: MovieMetadata) -> ClassificationResult:
    """Classify a movie into attention level + vibe with confidence and explanation"""
    override = MANUAL_OVERRIDES.get((movie.title or '').lower())

    if override:
        logger.debug(f"Manual override for '{movie.title}': {dict(override)}")

        if override.get('attention'):
            attention = AttentionResult(
                level=override['attention'],
                confidence='High',
                explanation=OVERRIDE_EXPLANATION,
            )
        else:
            attention = score_attention(movie)

        if override.get('vibe'):
            vibe = VibeResult(
                vibe=override['vibe'],
                confidence='High',
                explanation=OVERRIDE_EXPLANATION,
            )
        else:
            vibe = score_vibe(movie)

        return ClassificationResult(
            attention_level=attention.level,
            vibe=vibe.vibe,
            confidence='High',
            explanation=f"Manual override applied. {attention.explanation}. {vibe.explanation}",
        )

    attention = score_attention(movie)
    vibe = score_vibe(movie)

    return ClassificationResult(
        attention_level=attention.level,
        vibe=vibe.vibe,
        confidence=combine_confidence(attention.confidence, vibe.confidence),
        explanation=f"Attention: {attention.explanation}. Vibe: {vibe.explanation}",
    )


def classify_many(movies: Iterable[MovieMetadata]) -> List[Tuple[MovieMetadata, ClassificationResult]]:
    return [(movie, classify_movie(movie)) for movie in movies]


def poster_url(path: Optional[str], size: str = DEFAULT_POSTER_SIZE) -> Optional[str]:
    """Full TMDb image URL for a poster path, None when there is no poster"""
    if not path:
        return None
    return TMDB_IMAGE_BASE_URL.format(size=size, path=path)


def release_year(release_date: Optional[str], today: Optional[datetime.date] = None) -> int:
    """Year from an ISO date; the current year when absent or unparseable"""
    if release_date:
        try:
            return int(release_date[:4])
        except ValueError:
            logger.debug(f"Unparseable release date '{release_date}', using current year")
    return (today or datetime.date.today()).year


def genre_names(movie: MovieMetadata) -> List[str]:
    """Detailed genre objects win; otherwise resolve ids via TMDB_GENRES, dropping unknown ids"""
    if movie.genres:
        return [name for _, name in movie.genres]
    return [TMDB_GENRES[gid] for gid in movie.genre_ids if gid in TMDB_GENRES]


def convert_to_display_record(
    movie: MovieMetadata,
    classification: Optional[ClassificationResult] = None,
    today: Optional[datetime.date] = None,
) -> DisplayMovieRecord:
    """Map provider metadata + classification to the stored/displayed shape"""
    result = classification or classify_movie(movie)
    runtime = movie.runtime_minutes if movie.runtime_minutes and movie.runtime_minutes > 0 else DEFAULT_RUNTIME

    return DisplayMovieRecord(
        title=movie.title,
        attention_level=result.attention_level,
        vibe=result.vibe,
        image_url=poster_url(movie.poster_path),
        description=movie.overview or DEFAULT_DESCRIPTION,
        runtime=runtime,
        language=movie.original_language or DEFAULT_LANGUAGE,
        release_year=release_year(movie.release_date, today),
        genres=genre_names(movie),
        tmdb_id=movie.tmdb_id,
    )
