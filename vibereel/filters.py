#!/usr/bin/env python3
"""Filter classified display records by attention level, vibe, year and language."""

from typing import Iterable, List, Optional

from vibereel.models import DisplayMovieRecord


def filter_records(
    records: Iterable[DisplayMovieRecord],
    attention_level: Optional[str] = None,
    vibe: Optional[str] = None,
    release_year: Optional[int] = None,
    language: Optional[str] = None,
) -> List[DisplayMovieRecord]:
    """Keep records matching every supplied criterion. None matches anything."""
    kept = []
    for record in records:
        if attention_level and record.attention_level != attention_level:
            continue
        if vibe and record.vibe != vibe:
            continue
        if release_year and record.release_year != release_year:
            continue
        if language and record.language != language:
            continue
        kept.append(record)
    return kept
