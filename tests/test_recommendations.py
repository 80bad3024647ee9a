#!/usr/bin/env python3
"""Tests for similar-movie recommendations and record filtering"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from vibereel.constants import (
    ATTENTION_LEVEL_INFO,
    ATTENTION_LEVELS,
    VIBE_INFO,
    VIBES,
    attention_level_icon,
)
from vibereel.filters import filter_records
from vibereel.models import DisplayMovieRecord
from vibereel.recommendations import find_similar, recommendation_reason


def make_record(tmdb_id, title=None, attention_level='casual-watch', vibe='feel-good',
                genres=None, release_year=2001, language='en'):
    return DisplayMovieRecord(
        title=title or f"Movie {tmdb_id}",
        attention_level=attention_level,
        vibe=vibe,
        image_url=None,
        description='',
        runtime=100,
        language=language,
        release_year=release_year,
        genres=genres or [],
        tmdb_id=tmdb_id,
    )


@pytest.fixture
def source():
    return make_record(1, attention_level='immersive', vibe='dark', genres=['Crime', 'Thriller'])


class TestFindSimilar:

    def test_genre_overlap_first_most_shared_first(self, source):
        pool = [
            make_record(2, genres=['Crime']),
            make_record(3, genres=['Crime', 'Thriller']),
            make_record(4, genres=['Comedy']),
        ]
        similar = find_similar(source, pool, limit=2)
        assert [r.tmdb_id for r in similar] == [3, 2]

    def test_at_most_three_genre_matches_before_other_stages(self, source):
        pool = [make_record(i, genres=['Crime']) for i in range(10, 15)]
        pool.append(make_record(20, attention_level='immersive'))

        similar = find_similar(source, pool, limit=6)

        ids = [r.tmdb_id for r in similar]
        assert ids[:3] == [10, 11, 12]
        assert ids[3] == 20
        assert len(ids) == 6

    def test_fill_order_attention_then_vibe_then_rest(self, source):
        pool = [
            make_record(30),
            make_record(31, vibe='dark'),
            make_record(32, attention_level='immersive'),
        ]
        similar = find_similar(source, pool, limit=3)
        assert [r.tmdb_id for r in similar] == [32, 31, 30]

    def test_never_returns_source_or_duplicates(self, source):
        pool = [
            make_record(1, genres=['Crime']),
            make_record(5, genres=['Crime']),
            make_record(5, genres=['Crime']),
        ]
        similar = find_similar(source, pool, limit=6)
        assert [r.tmdb_id for r in similar] == [5]

    def test_records_without_id_keyed_by_title(self, source):
        pool = [make_record(None, title='Heat'), make_record(None, title='Heat')]
        assert len(find_similar(source, pool)) == 1

    def test_empty_pool(self, source):
        assert find_similar(source, []) == []


class TestRecommendationReason:

    def test_shared_genres_listed_up_to_two(self, source):
        other = make_record(2, genres=['Thriller', 'Crime', 'Drama'])
        assert recommendation_reason(source, other) == "Shared genres: Crime, Thriller"

    def test_same_attention_level_label(self, source):
        other = make_record(2, attention_level='immersive')
        assert recommendation_reason(source, other) == "Same attention level: Immersive"

    def test_multi_word_label(self):
        a = make_record(1, attention_level='background-comfort', vibe='dark')
        b = make_record(2, attention_level='background-comfort')
        assert recommendation_reason(a, b) == "Same attention level: Background Comfort"

    def test_same_vibe(self, source):
        assert recommendation_reason(source, make_record(2, vibe='dark')) == "Same vibe: dark"

    def test_fallback(self, source):
        assert recommendation_reason(source, make_record(2)) == "Popular pick"


class TestFilterRecords:

    @pytest.fixture
    def records(self):
        return [
            make_record(1, attention_level='deep-dive', vibe='dark', release_year=1999, language='en'),
            make_record(2, attention_level='deep-dive', vibe='melancholic', release_year=2019, language='ko'),
            make_record(3, attention_level='zone-off', vibe='dark', release_year=2019, language='en'),
        ]

    def test_no_criteria_keeps_everything(self, records):
        assert filter_records(records) == records

    def test_criteria_combine(self, records):
        kept = filter_records(records, attention_level='deep-dive', release_year=2019)
        assert [r.tmdb_id for r in kept] == [2]

    def test_vibe_and_language(self, records):
        kept = filter_records(records, vibe='dark', language='en')
        assert [r.tmdb_id for r in kept] == [1, 3]


def test_attention_level_icons():
    assert attention_level_icon('deep-dive') == '🎯'
    assert attention_level_icon('zone-off') == '💤'
    assert attention_level_icon('binge') == '❓'


def test_every_label_has_display_info():
    assert set(ATTENTION_LEVEL_INFO) == set(ATTENTION_LEVELS)
    assert set(VIBE_INFO) == set(VIBES)
