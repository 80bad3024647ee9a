#!/usr/bin/env python3
"""
Tests for vibe scoring and trap corrections

Trap corrections exist for known systematic misreads:
- comedy about crime read as feel-good
- hopeful war films read as uplifting
- family animation with sci-fi elements read as mind-bending
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from vibereel.models import MovieMetadata
from vibereel.vibe import (
    apply_rating_context,
    correct_common_traps,
    empty_scores,
    score_vibe,
    select_vibe,
    vibe_confidence,
)


def scores_with(**values):
    scores = empty_scores()
    for key, value in values.items():
        scores[key.replace('_', '-')] = value
    return scores


class TestDarkComedy:

    def test_comedy_crime_murder_is_dark(self):
        movie = MovieMetadata(
            title="Knives Out",
            overview="A detective investigates a murder at a family estate.",
            genre_ids=(35, 80),
            vote_average=7.0,
            vote_count=3000,
        )

        result = score_vibe(movie)

        # dark: Crime 0.6 + 'murder' 0.3 + correction 0.4
        # feel-good: Comedy 0.8 - correction 0.3
        assert result.scores['dark'] == pytest.approx(1.3)
        assert result.scores['feel-good'] == pytest.approx(0.5)
        assert result.vibe == 'dark'
        assert result.confidence == 'High'

    def test_comedy_without_crime_is_untouched(self):
        corrected = correct_common_traps(scores_with(feel_good=0.8), [35], "two friends on a road trip")
        assert corrected['feel-good'] == pytest.approx(0.8)
        assert corrected['dark'] == 0.0

    def test_crime_word_in_text_triggers_correction(self):
        corrected = correct_common_traps(empty_scores(), [35], "a crime caper")
        assert corrected['dark'] == pytest.approx(0.4)
        assert corrected['feel-good'] == pytest.approx(-0.3)


class TestWarCorrection:

    def test_war_genre(self):
        corrected = correct_common_traps(scores_with(uplifting=0.5), [10752], "soldiers come home")
        assert corrected['melancholic'] == pytest.approx(0.3)
        assert corrected['uplifting'] == pytest.approx(0.3)

    def test_holocaust_in_text(self):
        corrected = correct_common_traps(empty_scores(), [18], "a survivor of the holocaust")
        assert corrected['melancholic'] == pytest.approx(0.3)

    def test_substring_match_is_preserved(self):
        """'war' matches inside 'toward' - plain substring semantics"""
        corrected = correct_common_traps(empty_scores(), [18], "she drifts toward the coast")
        assert corrected['melancholic'] == pytest.approx(0.3)


class TestFamilyAnimation:

    def test_light_family_animation_is_feel_good(self):
        corrected = correct_common_traps(empty_scores(), [16, 10751], "a puppy finds a friend")
        assert corrected['feel-good'] == pytest.approx(0.4)
        assert corrected['mind-bending'] == pytest.approx(-0.3)

    def test_dark_or_complex_text_blocks_correction(self):
        for text in ("a puppy lost in the dark", "a complex puppy"):
            corrected = correct_common_traps(empty_scores(), [16, 10751], text)
            assert corrected['feel-good'] == 0.0

    def test_needs_both_genres(self):
        corrected = correct_common_traps(empty_scores(), [16], "a puppy finds a friend")
        assert corrected['feel-good'] == 0.0

    def test_robot_family_film_beats_sci_fi(self):
        movie = MovieMetadata(
            title="Sparky",
            overview="A young robot befriends a girl.",
            genre_ids=(16, 10751, 878),
        )

        result = score_vibe(movie)

        # feel-good 0.6 + 0.6 + 0.4; mind-bending 0.6 - 0.3 - 0.2
        assert result.scores['feel-good'] == pytest.approx(1.6)
        assert result.scores['mind-bending'] == pytest.approx(0.1)
        assert result.vibe == 'feel-good'


class TestSciFiAndRomance:

    def test_plain_sci_fi_loses_mind_bending(self):
        corrected = correct_common_traps(scores_with(mind_bending=0.6), [878], "astronauts fix a ship")
        assert corrected['mind-bending'] == pytest.approx(0.4)

    def test_sci_fi_with_mind_bending_keyword_keeps_it(self):
        corrected = correct_common_traps(scores_with(mind_bending=0.6), [878], "a time travel heist")
        assert corrected['mind-bending'] == pytest.approx(0.6)

    def test_romance_with_love(self):
        corrected = correct_common_traps(empty_scores(), [10749], "they fall in love in paris")
        assert corrected['feel-good'] == pytest.approx(0.3)

    def test_corrections_accumulate(self):
        """Comedy + Crime + War + Romance: every matching rule applies"""
        corrected = correct_common_traps(empty_scores(), [35, 80, 10752, 10749], "love")
        assert corrected['dark'] == pytest.approx(0.4)
        assert corrected['feel-good'] == pytest.approx(0.0)
        assert corrected['melancholic'] == pytest.approx(0.3)
        assert corrected['uplifting'] == pytest.approx(-0.2)

    def test_input_scores_not_mutated(self):
        scores = empty_scores()
        correct_common_traps(scores, [35, 80], "murder")
        assert scores == empty_scores()


class TestRatingContext:

    def test_acclaimed_drama_leans_melancholic(self):
        scores = empty_scores()
        apply_rating_context(scores, [18], 8.6)
        assert scores['melancholic'] == pytest.approx(0.2)
        assert scores['uplifting'] == pytest.approx(0.1)

    def test_just_below_acclaimed_threshold(self):
        scores = empty_scores()
        apply_rating_context(scores, [18], 8.4)
        assert scores == empty_scores()

    def test_poorly_rated_horror_leans_dark(self):
        scores = empty_scores()
        apply_rating_context(scores, [27], 4.5)
        assert scores['dark'] == pytest.approx(0.3)

    def test_low_rated_horror_movie(self):
        movie = MovieMetadata(title="Untitled", genre_ids=(27,), vote_average=4.0, vote_count=500)
        result = score_vibe(movie)
        assert result.vibe == 'dark'
        assert result.scores['dark'] == pytest.approx(1.2)
        assert result.confidence == 'High'


class TestSelection:

    def test_all_zero_picks_first_declared(self):
        assert select_vibe(empty_scores()) == 'dark'

    def test_tie_goes_to_earlier_declared_vibe(self):
        scores = scores_with(uplifting=1.0, melancholic=1.0)
        assert select_vibe(scores) == 'uplifting'

    def test_negative_scores_still_rank(self):
        scores = scores_with(dark=-0.5, mind_bending=-0.5, uplifting=-0.2, feel_good=-0.3, melancholic=-0.9)
        assert select_vibe(scores) == 'uplifting'

    def test_empty_movie_defaults(self):
        result = score_vibe(MovieMetadata(title="Untitled"))
        assert result.vibe == 'dark'
        assert result.confidence == 'Low'


class TestVibeConfidence:

    def test_high(self):
        assert vibe_confidence(scores_with(dark=0.9, melancholic=0.5)) == 'High'

    def test_medium(self):
        assert vibe_confidence(scores_with(dark=0.9, melancholic=0.65)) == 'Medium'

    def test_low_when_close(self):
        assert vibe_confidence(scores_with(dark=0.6, melancholic=0.5)) == 'Low'

    def test_low_when_all_zero(self):
        assert vibe_confidence(empty_scores()) == 'Low'
