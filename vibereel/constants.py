#!/usr/bin/env python3
"""
Shared constants for movie classification

Single source of truth for genre tables, keyword vocabularies, overrides and
display defaults. DO NOT duplicate these tables in other modules - import
from here instead.

Every table is read-only (MappingProxyType / tuple). The classifier is called
concurrently by batch jobs, so nothing here may be mutated at runtime.
"""

from types import MappingProxyType

# =============================================================================
# LABELS
# =============================================================================

# Ordered from most to least attention-demanding
ATTENTION_LEVELS = (
    'deep-dive',
    'immersive',
    'casual-watch',
    'background-comfort',
    'zone-off',
)

# Declaration order is also the tie-break order for vibe selection
VIBES = (
    'dark',
    'mind-bending',
    'uplifting',
    'feel-good',
    'melancholic',
)

CONFIDENCE_SCORES = MappingProxyType({'High': 3, 'Medium': 2, 'Low': 1})

# =============================================================================
# TMDb GENRE TABLE
# =============================================================================

# Stored genre names must match these exactly
TMDB_GENRES = MappingProxyType({
    28: 'Action',
    12: 'Adventure',
    16: 'Animation',
    35: 'Comedy',
    80: 'Crime',
    99: 'Documentary',
    18: 'Drama',
    10751: 'Family',
    14: 'Fantasy',
    36: 'History',
    27: 'Horror',
    10402: 'Music',
    9648: 'Mystery',
    10749: 'Romance',
    878: 'Science Fiction',
    10770: 'TV Movie',
    53: 'Thriller',
    10752: 'War',
    37: 'Western',
})

GENRE_ACTION = 28
GENRE_ADVENTURE = 12
GENRE_ANIMATION = 16
GENRE_COMEDY = 35
GENRE_CRIME = 80
GENRE_DOCUMENTARY = 99
GENRE_DRAMA = 18
GENRE_FAMILY = 10751
GENRE_FANTASY = 14
GENRE_HISTORY = 36
GENRE_HORROR = 27
GENRE_MUSIC = 10402
GENRE_MYSTERY = 9648
GENRE_ROMANCE = 10749
GENRE_SCIENCE_FICTION = 878
GENRE_THRILLER = 53
GENRE_WAR = 10752

# =============================================================================
# ATTENTION LEVEL SCORING
# =============================================================================

# How much sustained attention a genre typically demands (0.0 - 1.0)
GENRE_ATTENTION_WEIGHTS = MappingProxyType({
    # High attention
    GENRE_DOCUMENTARY: 0.9,
    GENRE_HISTORY: 0.85,
    GENRE_WAR: 0.8,
    GENRE_MYSTERY: 0.75,
    GENRE_THRILLER: 0.7,
    GENRE_CRIME: 0.7,
    GENRE_DRAMA: 0.65,
    GENRE_SCIENCE_FICTION: 0.6,
    GENRE_FANTASY: 0.55,
    # Medium attention
    GENRE_ADVENTURE: 0.5,
    GENRE_ACTION: 0.45,
    GENRE_ROMANCE: 0.4,
    # Low attention
    GENRE_COMEDY: 0.35,
    GENRE_FAMILY: 0.3,
    GENRE_ANIMATION: 0.25,
    GENRE_MUSIC: 0.2,
})

DEFAULT_GENRE_ATTENTION = 0.5

# Signal weights sum to 1.0; the weighted sum is never re-normalized
ATTENTION_SIGNAL_WEIGHTS = MappingProxyType({
    'genre': 0.4,
    'runtime': 0.2,
    'synopsis': 0.2,
    'popularity': 0.1,
    'rating': 0.1,
})

# Lower bound of each tier, checked top-down (bounds are inclusive)
ATTENTION_THRESHOLDS = (
    (0.85, 'deep-dive'),
    (0.65, 'immersive'),
    (0.45, 'casual-watch'),
    (0.25, 'background-comfort'),
)
ATTENTION_FLOOR_LEVEL = 'zone-off'

# Per-match synopsis adjustment for each attention keyword bucket
SYNOPSIS_BUCKET_WEIGHTS = MappingProxyType({
    'deep-dive': 0.20,
    'immersive': 0.15,
    'casual': 0.05,
    'background': -0.10,
})

SYNOPSIS_BASE_SCORE = 0.5

# Overview must be longer than this to count as a confidence factor
MIN_OVERVIEW_LENGTH = 50

ATTENTION_KEYWORDS = MappingProxyType({
    'deep-dive': (
        'mind-bending mystery', 'non-linear timeline', 'multiple universes', 'complex narrative',
        'philosophical exploration', 'twist ending', 'multiple timelines', 'temporal loops',
        'ambiguous endings', 'intricate plot', 'puzzle-like storytelling', 'dense', 'layered',
        'documentary', 'historical', 'biography', 'based on true events',
    ),
    'immersive': (
        'intense drama', 'gripping story', 'character-driven', 'emotional stakes',
        'detailed world-building', 'engaging', 'captivating', 'suspenseful', 'compelling',
        'rich storytelling', 'psychological', 'thriller', 'mystery', 'crime investigation',
    ),
    'casual': (
        'fun adventure', 'lighthearted journey', 'classic tale', 'straightforward',
        'entertaining', 'accessible', 'mainstream', 'familiar', 'easy to follow',
        'action-packed', 'adventure', 'comedy', 'romance',
    ),
    'background': (
        'slice-of-life', 'episodic', 'light and enjoyable', 'pleasant', 'comfortable',
        'relaxing', 'uncomplicated', 'simple', 'basic', 'mindless fun',
    ),
})

# =============================================================================
# VIBE SCORING
# =============================================================================

# Additive per-genre contributions; a genre may feed several vibes
GENRE_VIBE_WEIGHTS = MappingProxyType({
    GENRE_HORROR: MappingProxyType({'dark': 0.9}),
    GENRE_THRILLER: MappingProxyType({'dark': 0.7}),
    GENRE_CRIME: MappingProxyType({'dark': 0.6}),
    GENRE_WAR: MappingProxyType({'melancholic': 0.7, 'dark': 0.3}),

    GENRE_COMEDY: MappingProxyType({'feel-good': 0.8}),
    GENRE_ROMANCE: MappingProxyType({'feel-good': 0.7}),
    GENRE_FAMILY: MappingProxyType({'feel-good': 0.6}),
    GENRE_ANIMATION: MappingProxyType({'feel-good': 0.6}),

    GENRE_SCIENCE_FICTION: MappingProxyType({'mind-bending': 0.6}),
    GENRE_MYSTERY: MappingProxyType({'mind-bending': 0.5}),
    GENRE_FANTASY: MappingProxyType({'uplifting': 0.4, 'feel-good': 0.3}),

    GENRE_DRAMA: MappingProxyType({'melancholic': 0.4, 'uplifting': 0.3}),
    GENRE_ADVENTURE: MappingProxyType({'uplifting': 0.5}),
    GENRE_ACTION: MappingProxyType({'uplifting': 0.4}),
})

VIBE_KEYWORD_WEIGHT = 0.3

VIBE_KEYWORDS = MappingProxyType({
    'dark': (
        'murder', 'serial killer', 'haunted', 'dystopian', 'violent', 'tense', 'gritty',
        'revenge', 'tragic demise', 'chilling', 'intense psychological', 'gruesome',
        'terrifying', 'demonic', 'sinister', 'macabre', 'brutal', 'corruption', 'betrayal',
        'nightmare', 'evil', 'disturbing', 'noir', 'apocalyptic', 'terror', 'fear',
        'crime', 'criminal', 'gang', 'mafia', 'drug', 'violence', 'death', 'kill',
    ),
    'mind-bending': (
        'mind-bending', 'twist', 'puzzle', 'surreal', 'time travel', 'alternate reality',
        'memory loss', 'hallucinatory', 'philosophical', 'nothing is what it seems',
        'questions reality', 'simulation', 'consciousness', 'identity', 'perception',
        'parallel universe', 'non-linear', 'complex narrative', 'metaphysical',
        'existential', 'dream', 'dimension', 'quantum', 'matrix', 'inception',
        'multiverse', 'reality bending', 'psychological thriller',
    ),
    'uplifting': (
        'inspiring', 'uplifting', 'heartwarming journey', 'triumph', 'overcomes',
        'finds hope', 'against all odds', 'redemption', 'touching story', 'resilience',
        'learns the true value', 'saves their community', 'perseverance',
        'achievement', 'victory', 'success', 'growth', 'healing', 'solace', 'hero',
        'courage', 'brave', 'determination', 'overcome obstacles',
    ),
    'feel-good': (
        'heartwarming', 'hilarious', 'feel-good', 'quirky comedy', 'lighthearted fun',
        'charming', 'adventure for the whole family', 'delightful', 'sweet', 'romantic',
        'find love', 'family comes together', 'wholesome', 'comfort', 'cozy', 'warm',
        'festive', 'celebration', 'pleasant', 'enjoyable', 'friendship', 'humorous',
        'funny', 'comedy', 'entertaining', 'light', 'magical', 'whimsical',
    ),
    'melancholic': (
        'tragic', 'heartbreaking', 'bittersweet', 'poignant', 'moving drama', 'loss',
        'grief', 'sacrifice', 'emotional journey', 'comes at a great cost', 'must say goodbye',
        'learns to cope with loss', 'love story doomed by fate', 'family coping with tragedy',
        'nostalgic', 'longing', 'separation', 'farewell', 'memory', 'regret', 'solitude',
        'contemplative', 'introspective', 'touching', 'tearjerker', 'suffering', 'sorrow',
    ),
})

# Rating-context adjustments
ACCLAIMED_RATING = 8.5
POOR_RATING = 6.0

# =============================================================================
# MANUAL OVERRIDES
# =============================================================================

# Keyed by lowercased exact title. A field present here replaces the computed
# value for that field only; the other field still runs the scorer.
MANUAL_OVERRIDES = MappingProxyType({
    'lilo & stitch': MappingProxyType({'attention': 'casual-watch', 'vibe': 'feel-good'}),
    'how to train your dragon': MappingProxyType({'attention': 'casual-watch', 'vibe': 'feel-good'}),
    'beauty and the beast': MappingProxyType({'attention': 'casual-watch', 'vibe': 'feel-good'}),
    'the lion king': MappingProxyType({'attention': 'immersive', 'vibe': 'feel-good'}),
    'forrest gump': MappingProxyType({'vibe': 'feel-good'}),
    'parasite': MappingProxyType({'attention': 'immersive', 'vibe': 'dark'}),
    'oppenheimer': MappingProxyType({'attention': 'immersive', 'vibe': 'feel-good'}),
    'moonlight': MappingProxyType({'attention': 'immersive', 'vibe': 'feel-good'}),
})

OVERRIDE_EXPLANATION = 'Manual override for known case'

# =============================================================================
# DISPLAY RECORD DEFAULTS
# =============================================================================

TMDB_IMAGE_BASE_URL = 'https://image.tmdb.org/t/p/{size}{path}'
DEFAULT_POSTER_SIZE = 'w500'

DEFAULT_RUNTIME = 120
DEFAULT_LANGUAGE = 'en'
DEFAULT_DESCRIPTION = 'No description available.'

# =============================================================================
# DISPLAY CATALOGUES
# =============================================================================

ATTENTION_LEVEL_INFO = MappingProxyType({
    'deep-dive': MappingProxyType({
        'name': 'Deep Dive',
        'icon': '🎯',
        'description': 'Complex narratives that demand your full attention and engagement.',
    }),
    'immersive': MappingProxyType({
        'name': 'Immersive',
        'icon': '🌊',
        'description': 'Engaging content that rewards focused viewing but allows brief distractions.',
    }),
    'casual-watch': MappingProxyType({
        'name': 'Casual Watch',
        'icon': '☕',
        'description': 'Easy to follow while doing light activities or having conversations.',
    }),
    'background-comfort': MappingProxyType({
        'name': 'Background Comfort',
        'icon': '🎵',
        'description': 'Familiar content perfect for background entertainment while multitasking.',
    }),
    'zone-off': MappingProxyType({
        'name': 'Zone Off',
        'icon': '💤',
        'description': 'Light, predictable content ideal for unwinding or falling asleep to.',
    }),
})

VIBE_INFO = MappingProxyType({
    'uplifting': MappingProxyType({
        'name': 'Uplifting',
        'icon': '🌟',
        'description': 'Positive, inspiring, and mood-boosting content',
    }),
    'melancholic': MappingProxyType({
        'name': 'Melancholic',
        'icon': '🌧️',
        'description': 'Thoughtful, emotional, and contemplative pieces',
    }),
    'dark': MappingProxyType({
        'name': 'Dark',
        'icon': '🌑',
        'description': 'Intense, gritty, or psychologically challenging content',
    }),
    'feel-good': MappingProxyType({
        'name': 'Feel-good',
        'icon': '💝',
        'description': 'Light-hearted, warm, and comforting stories',
    }),
    'mind-bending': MappingProxyType({
        'name': 'Mind-bending',
        'icon': '🌀',
        'description': 'Complex, thought-provoking, or reality-bending narratives',
    }),
})

UNKNOWN_LEVEL_ICON = '❓'


def attention_level_icon(level: str) -> str:
    """Display icon for an attention level, '❓' for anything unknown"""
    info = ATTENTION_LEVEL_INFO.get(level)
    return info['icon'] if info else UNKNOWN_LEVEL_ICON
