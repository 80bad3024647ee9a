#!/usr/bin/env python3
"""
classify.py - Catalog Classification Job

NEVER writes to the movie database. Only reads TMDb and writes a manifest
(CSV, optionally JSON lines) for the store loader to upsert.

Pipeline:
1. [PRECISION] Fetch candidates → TMDb popular (10 pages), top rated (10 pages), trending (week)
2. [PRECISION] Filter → non-adult, vote_count > 100, deduplicated by TMDb id
3. [REASONING] Rank → vote_average * ln(vote_count) + popularity / 100, keep top N
4. [PRECISION] Details → per-movie detail fetch (falls back to list payload)
5. [REASONING] Classify → vibereel.classifier (attention level + vibe)
6. [PRECISION] Convert → display record, written to manifest

With --input, steps 1-4 are replaced by a JSON file of TMDb payloads and
no network access happens at all.
"""

import sys
import csv
import json
import math
import os
import logging
import argparse
from pathlib import Path
from typing import List, Dict, Optional, Tuple
from collections import defaultdict

import yaml

from vibereel.classifier import classify_movie, convert_to_display_record
from vibereel.constants import ATTENTION_LEVELS, VIBES
from vibereel.models import ClassificationResult, DisplayMovieRecord, MovieMetadata
from vibereel.tmdb import TMDbClient, JsonFileCache, MemoryCache, RequestThrottle

logger = logging.getLogger(__name__)

Classified = Tuple[DisplayMovieRecord, ClassificationResult]

DEFAULT_CONFIG = {
    'tmdb_api_key': None,
    'cache_path': None,          # None → in-memory cache only
    'cache_ttl': 300,
    'min_request_interval': 0.25,
    'limit': 500,
    'output_path': 'output/classified_movies.csv',
}

SOURCE_PAGES = {
    'popular': 10,
    'top_rated': 10,
    'trending': 1,
}

MIN_VOTE_COUNT = 100

MANIFEST_FIELDS = [
    'tmdb_id', 'title', 'attention_level', 'vibe', 'confidence',
    'image_url', 'description', 'runtime', 'language', 'release_year',
    'genres',
]


def load_config(config_path: Optional[Path]) -> dict:
    """Load configuration from YAML file on top of defaults; TMDB_API_KEY env fills a missing key"""
    config = dict(DEFAULT_CONFIG)
    if config_path is not None and config_path.exists():
        with open(config_path, 'r') as f:
            config.update(yaml.safe_load(f) or {})
    if not config.get('tmdb_api_key'):
        config['tmdb_api_key'] = os.environ.get('TMDB_API_KEY')
    return config


def rank_score(payload: Dict) -> float:
    vote_average = payload.get('vote_average') or 0.0
    vote_count = max(payload.get('vote_count') or 0, 1)
    popularity = payload.get('popularity') or 0.0
    return vote_average * math.log(vote_count) + popularity / 100


class CatalogClassifier:
    """Fetch, classify and convert a catalog of TMDb movies"""

    def __init__(self, config: dict, offline: bool = False):
        self.config = config
        self.offline = offline
        self.stats = defaultdict(int)
        self.errors: List[str] = []
        self._setup_components()

    def _setup_components(self):
        """Initialize TMDb client (optional - offline runs need none)"""
        if self.offline:
            self.tmdb = None
            logger.info("Offline run: TMDb disabled")
            return

        cache_path = self.config.get('cache_path')
        cache_ttl = self.config.get('cache_ttl', 300)
        if cache_path:
            cache = JsonFileCache(Path(cache_path), ttl=cache_ttl)
            logger.info(f"TMDb responses cached in {cache_path} for {cache_ttl}s")
        else:
            cache = MemoryCache(ttl=cache_ttl)

        self.tmdb = TMDbClient(
            api_key=self.config.get('tmdb_api_key'),
            cache=cache,
            throttle=RequestThrottle(self.config.get('min_request_interval', 0.25)),
        )

    def _fetch_source(self, source: str, max_pages: int) -> List[Dict]:
        """Page through one TMDb list; stops at the first failed page"""
        movies = []
        for page in range(1, max_pages + 1):
            if source == 'popular':
                response = self.tmdb.get_popular(page)
            elif source == 'top_rated':
                response = self.tmdb.get_top_rated(page)
            else:
                response = self.tmdb.get_trending('week')

            if response is None:
                logger.warning(f"Failed to fetch page {page} from {source} - stopping this source")
                self.errors.append(f"Failed to fetch {source} page {page}")
                break

            movies.extend(response.get('results') or [])
        return movies

    def fetch_top_movies(self, limit: int) -> List[Dict]:
        """Collect unique non-adult movies with enough votes, best-ranked first"""
        unique: Dict[int, Dict] = {}

        for source, max_pages in SOURCE_PAGES.items():
            logger.info(f"Fetching from {source}...")
            movies = self._fetch_source(source, max_pages)
            for movie in movies:
                if not movie.get('adult') and (movie.get('vote_count') or 0) > MIN_VOTE_COUNT:
                    unique[movie['id']] = movie
            logger.info(f"Added {len(movies)} movies from {source} ({len(unique)} unique)")

        ranked = sorted(unique.values(), key=rank_score, reverse=True)
        return ranked[:limit]

    def _detailed(self, payload: Dict) -> Dict:
        """Detail payload for better classification, list payload if that fails"""
        if self.tmdb is None or payload.get('id') is None:
            return payload
        details = self.tmdb.get_movie_by_id(payload['id'])
        if details is None:
            logger.info(f"Using basic info for {payload.get('title')} (detailed fetch failed)")
            self.stats['detail_fallbacks'] += 1
            return payload
        return details

    def classify_payloads(self, payloads: List[Dict]) -> List[Classified]:
        """Classify and convert provider payloads; a failing movie is logged and skipped"""
        results = []
        for i, payload in enumerate(payloads, 1):
            if i % 50 == 0:
                logger.info(f"Classified {i}/{len(payloads)} movies...")

            self.stats['processed'] += 1
            if not isinstance(payload, dict):
                logger.error(f"Skipping entry {i}: expected a movie object, got {type(payload).__name__}")
                self.errors.append(f"Entry {i} is not a movie object: {payload!r}")
                self.stats['failed'] += 1
                continue

            try:
                movie = MovieMetadata.from_tmdb(self._detailed(payload))
                classification = classify_movie(movie)
                record = convert_to_display_record(movie, classification)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.error(f"Failed to classify {payload.get('title')}: {e}")
                self.errors.append(f"Classification failed for {payload.get('title')}: {e}")
                self.stats['failed'] += 1
                continue

            self.stats['classified'] += 1
            self.stats[f'confidence_{classification.confidence.lower()}'] += 1
            results.append((record, classification))

        return results

    def write_manifest(self, results: List[Classified], output_path: Path):
        """Write display records to a properly-quoted CSV manifest"""
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=MANIFEST_FIELDS, quoting=csv.QUOTE_ALL)
            writer.writeheader()

            for record, classification in results:
                writer.writerow({
                    'tmdb_id': record.tmdb_id or '',
                    'title': record.title,
                    'attention_level': record.attention_level,
                    'vibe': record.vibe,
                    'confidence': classification.confidence,
                    'image_url': record.image_url or '',
                    'description': record.description,
                    'runtime': record.runtime,
                    'language': record.language,
                    'release_year': record.release_year,
                    'genres': ', '.join(record.genres),
                })

        logger.info(f"Wrote manifest to {output_path}")

    def write_jsonl(self, results: List[Classified], output_path: Path):
        """One JSON object per line, the shape the store upserts"""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            for record, _ in results:
                f.write(json.dumps(record.to_dict(), ensure_ascii=False) + '\n')
        logger.info(f"Wrote JSON lines to {output_path}")

    def print_stats(self, results: List[Classified]):
        """Print classification statistics"""
        level_counts = defaultdict(int)
        vibe_counts = defaultdict(int)
        for record, _ in results:
            level_counts[record.attention_level] += 1
            vibe_counts[record.vibe] += 1

        total = len(results)

        print("\n" + "=" * 60)
        print("CLASSIFICATION STATISTICS")
        print("=" * 60)
        print(f"Processed:  {self.stats['processed']}")
        print(f"Classified: {self.stats['classified']}")
        print(f"Failed:     {self.stats['failed']}\n")

        print("BY ATTENTION LEVEL:")
        for level in ATTENTION_LEVELS:
            count = level_counts.get(level, 0)
            pct = (count / total * 100) if total > 0 else 0
            print(f"  {level:20s}: {count:4d} ({pct:5.1f}%)")

        print("\nBY VIBE:")
        for vibe in VIBES:
            count = vibe_counts.get(vibe, 0)
            pct = (count / total * 100) if total > 0 else 0
            print(f"  {vibe:20s}: {count:4d} ({pct:5.1f}%)")

        print("\nBY CONFIDENCE:")
        for conf in ('high', 'medium', 'low'):
            print(f"  {conf:20s}: {self.stats.get(f'confidence_{conf}', 0):4d}")

        if self.tmdb:
            cache_stats = self.tmdb.get_cache_stats()
            print(f"\nTMDb: {cache_stats['misses']} API queries, "
                  f"{cache_stats['hits']} cache hits "
                  f"({cache_stats['hit_rate']:.0f}% hit rate)")

        if self.errors:
            print("\nErrors encountered:")
            for n, error in enumerate(self.errors[:10], 1):
                print(f"  {n}. {error}")
            if len(self.errors) > 10:
                print(f"  ... and {len(self.errors) - 10} more errors")

        print("=" * 60)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Classify TMDb movies by attention level and vibe',
        epilog="""
NEVER writes to the movie database. Only reads TMDb and writes a manifest.

Examples:
  python classify.py
  python classify.py --limit 100 --output output/top100.csv
  python classify.py --input output/tmdb_payloads.json --jsonl output/movies.jsonl
        """
    )
    parser.add_argument('--config', type=Path, default=None,
                        help='Configuration file (default: config.yaml if present)')
    parser.add_argument('--output', '-o', type=Path, default=None,
                        help='Output CSV manifest path (default: output/classified_movies.csv)')
    parser.add_argument('--jsonl', type=Path, default=None,
                        help='Also write records as JSON lines to this path')
    parser.add_argument('--limit', type=int, default=None,
                        help='Maximum number of movies to classify (default: 500)')
    parser.add_argument('--input', type=Path, default=None,
                        help='Classify a JSON list of TMDb payloads instead of fetching (offline)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging (per-movie scores)')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if args.config is not None and not args.config.exists():
        logger.error(f"Config file not found: {args.config}")
        return 1

    config = load_config(args.config if args.config is not None else Path('config.yaml'))
    limit = args.limit if args.limit is not None else config['limit']
    output_path = args.output or Path(config['output_path'])

    if args.input is not None:
        if not args.input.exists():
            logger.error(f"Input file does not exist: {args.input}")
            return 1
        with open(args.input, 'r', encoding='utf-8') as f:
            payloads = json.load(f)
        if not isinstance(payloads, list):
            logger.error(f"Input file must hold a JSON list of movies: {args.input}")
            return 1
        payloads = payloads[:limit]
        classifier = CatalogClassifier(config, offline=True)
    else:
        if not config.get('tmdb_api_key'):
            logger.error("Missing TMDb API key (set tmdb_api_key in config or TMDB_API_KEY)")
            return 1
        classifier = CatalogClassifier(config)
        payloads = classifier.fetch_top_movies(limit)
        logger.info(f"Found {len(payloads)} unique movies")

    results = classifier.classify_payloads(payloads)

    classifier.write_manifest(results, output_path)
    if args.jsonl:
        classifier.write_jsonl(results, args.jsonl)

    classifier.print_stats(results)

    return 0


if __name__ == '__main__':
    sys.exit(main())
