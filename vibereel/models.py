#!/usr/bin/env python3
"""
Record types passed into and out of the classification engine
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Tuple, Dict, Any


@dataclass(frozen=True)
class MovieMetadata:
    """Movie record as supplied by the metadata provider (read-only)"""
    title: str
    overview: str = ''
    genre_ids: Tuple[int, ...] = ()
    runtime_minutes: int = 0        # 0 means unknown
    vote_average: float = 0.0       # 0-10
    vote_count: int = 0
    popularity: float = 0.0
    release_date: Optional[str] = None  # ISO date, e.g. '1999-10-15'
    original_language: str = ''     # ISO 639-1 code
    poster_path: Optional[str] = None
    tmdb_id: Optional[int] = None
    # Detailed (id, name) genre objects, only present on detail responses
    genres: Tuple[Tuple[int, str], ...] = ()
    adult: bool = False

    @property
    def text(self) -> str:
        """Lowercased title + overview, the haystack for keyword matching"""
        return f"{self.title or ''} {self.overview or ''}".lower()

    @classmethod
    def from_tmdb(cls, payload: Dict[str, Any]) -> 'MovieMetadata':
        """
        Build from a raw TMDb movie dict (list or detail endpoint).

        List endpoints carry `genre_ids`; detail endpoints carry `genres`
        objects instead. Missing numbers default to 0 and missing strings
        to '' so the classifier always has something to score.
        """
        genres = tuple(
            (g['id'], g.get('name') or '')
            for g in (payload.get('genres') or [])
            if isinstance(g, dict) and g.get('id') is not None
        )
        genre_ids = payload.get('genre_ids')
        if genre_ids is None:
            genre_ids = [gid for gid, _ in genres]

        return cls(
            title=payload.get('title') or '',
            overview=payload.get('overview') or '',
            genre_ids=tuple(genre_ids),
            runtime_minutes=payload.get('runtime') or 0,
            vote_average=payload.get('vote_average') or 0.0,
            vote_count=payload.get('vote_count') or 0,
            popularity=payload.get('popularity') or 0.0,
            release_date=payload.get('release_date') or None,
            original_language=payload.get('original_language') or '',
            poster_path=payload.get('poster_path'),
            tmdb_id=payload.get('id'),
            genres=genres,
            adult=bool(payload.get('adult', False)),
        )


@dataclass(frozen=True)
class AttentionResult:
    """Attention-level verdict for one movie"""
    level: str
    confidence: str
    explanation: str
    score: Optional[float] = None   # None when a manual override decided the level


@dataclass(frozen=True)
class VibeResult:
    """Vibe verdict for one movie"""
    vibe: str
    confidence: str
    explanation: str
    # Final per-vibe scores after corrections, in declared vibe order
    scores: Optional[Dict[str, float]] = None


@dataclass(frozen=True)
class ClassificationResult:
    """Combined engine output consumed by display, filtering and storage"""
    attention_level: str
    vibe: str
    confidence: str
    explanation: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class DisplayMovieRecord:
    """Shape written to the persistence store and shown by the UI"""
    title: str
    attention_level: str
    vibe: str
    image_url: Optional[str]
    description: str
    runtime: int
    language: str
    release_year: int
    genres: List[str] = field(default_factory=list)
    tmdb_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
