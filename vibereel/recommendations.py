#!/usr/bin/env python3
"""
Similar-movie recommendations built on classification output

Works over an in-memory pool of display records (fetching the pool is the
caller's job). Fill order:

1. Up to 3 records sharing a genre, most shared genres first
2. Same attention level
3. Same vibe
4. Anything else left in the pool
"""

import logging
from typing import Callable, Iterable, List

from vibereel.constants import ATTENTION_LEVEL_INFO
from vibereel.models import DisplayMovieRecord

logger = logging.getLogger(__name__)

MAX_GENRE_MATCHES = 3


def record_key(record: DisplayMovieRecord):
    return record.tmdb_id if record.tmdb_id is not None else record.title


def shared_genres(a: DisplayMovieRecord, b: DisplayMovieRecord) -> List[str]:
    return [g for g in a.genres if g in (b.genres or [])]


def find_similar(
    movie: DisplayMovieRecord,
    pool: Iterable[DisplayMovieRecord],
    limit: int = 6,
) -> List[DisplayMovieRecord]:
    """Pick up to `limit` records similar to `movie`, never the movie itself or a duplicate"""
    candidates = list(pool)
    similar: List[DisplayMovieRecord] = []
    seen = {record_key(movie)}

    def take(matches: Iterable[DisplayMovieRecord], cap: int):
        for record in matches:
            if len(similar) >= limit or cap <= 0:
                return
            key = record_key(record)
            if key in seen:
                continue
            similar.append(record)
            seen.add(key)
            cap -= 1

    def stage(predicate: Callable[[DisplayMovieRecord], bool]):
        take((r for r in candidates if predicate(r)), limit)

    if movie.genres:
        genre_matches = [r for r in candidates if r.genres and shared_genres(movie, r)]
        # Stable sort keeps pool order among equal overlap counts
        genre_matches.sort(key=lambda r: len(shared_genres(r, movie)), reverse=True)
        take(genre_matches, MAX_GENRE_MATCHES)

    stage(lambda r: r.attention_level == movie.attention_level)
    stage(lambda r: r.vibe == movie.vibe)
    stage(lambda r: True)

    logger.debug(f"Found {len(similar)} similar movies for '{movie.title}'")
    return similar[:limit]


def recommendation_reason(original: DisplayMovieRecord, recommended: DisplayMovieRecord) -> str:
    """Short human-readable reason, the first one that applies"""
    common = shared_genres(original, recommended) if original.genres and recommended.genres else []
    if common:
        return f"Shared genres: {', '.join(common[:2])}"

    if original.attention_level == recommended.attention_level:
        info = ATTENTION_LEVEL_INFO.get(original.attention_level)
        label = info['name'] if info else original.attention_level
        return f"Same attention level: {label}"

    if original.vibe == recommended.vibe:
        return f"Same vibe: {original.vibe}"

    return 'Popular pick'
