#!/usr/bin/env python3
"""
TMDb API client with injectable response cache and request throttle

The client owns no global state: the cache and throttle are passed in, so a
batch job can share a persistent JsonFileCache across runs while tests use a
MemoryCache with a fake clock.
"""

import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"


class MemoryCache:
    """In-process response cache; entries expire after `ttl` seconds"""

    def __init__(self, ttl: float = 300.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self.entries: Dict[str, tuple] = {}

    def _expired(self, stored_at: float) -> bool:
        return self.clock() - stored_at >= self.ttl

    def get(self, key: str) -> Optional[Dict]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        stored_at, data = entry
        if self._expired(stored_at):
            del self.entries[key]
            return None
        return data

    def set(self, key: str, data: Dict):
        self.sweep()
        self.entries[key] = (self.clock(), data)

    def sweep(self):
        """Drop every expired entry"""
        expired = [k for k, (stored_at, _) in self.entries.items() if self._expired(stored_at)]
        for key in expired:
            del self.entries[key]

    def clear(self):
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)


class JsonFileCache:
    """
    Response cache persisted to a JSON file across runs.

    Each entry is stored as [timestamp, data] with wall-clock timestamps, so a
    later process honours the same `ttl`. Entries without a timestamp are
    treated as expired.
    """

    def __init__(self, cache_path: Path, ttl: float = 300.0, clock: Callable[[], float] = time.time):
        self.cache_path = Path(cache_path)
        self.ttl = ttl
        self.clock = clock
        self.entries = self._load_cache()

    def _load_cache(self) -> Dict:
        """Load cache from JSON file"""
        if self.cache_path.exists():
            try:
                with open(self.cache_path, 'r', encoding='utf-8') as f:
                    cache = json.load(f)
                if not isinstance(cache, dict):
                    raise ValueError("cache file does not hold an object")
                logger.info(f"Loaded TMDb cache with {len(cache)} entries")
                return cache
            except (OSError, ValueError) as e:
                logger.warning(f"Could not load cache: {e}. Starting fresh.")
                return {}
        return {}

    def _save_cache(self):
        """Save cache to JSON file"""
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.cache_path, 'w', encoding='utf-8') as f:
                json.dump(self.entries, f, indent=2, ensure_ascii=False)

            logger.debug(f"Saved TMDb cache with {len(self.entries)} entries")
        except OSError as e:
            logger.error(f"Could not save cache: {e}")

    def _fresh(self, entry) -> bool:
        if not isinstance(entry, list) or len(entry) != 2:
            return False
        stored_at = entry[0]
        return isinstance(stored_at, (int, float)) and self.clock() - stored_at < self.ttl

    def get(self, key: str) -> Optional[Dict]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        if not self._fresh(entry):
            del self.entries[key]
            return None
        return entry[1]

    def set(self, key: str, data: Dict):
        self.entries = {k: v for k, v in self.entries.items() if self._fresh(v)}
        self.entries[key] = [self.clock(), data]
        self._save_cache()

    def clear(self):
        self.entries = {}
        self._save_cache()

    def __len__(self) -> int:
        return len(self.entries)


class RequestThrottle:
    """Enforce a minimum interval between requests (default 4 requests/second)"""

    def __init__(
        self,
        min_interval: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval = min_interval
        self.clock = clock
        self.sleep = sleep
        self.last_request: Optional[float] = None

    def wait(self):
        if self.last_request is not None:
            elapsed = self.clock() - self.last_request
            if elapsed < self.min_interval:
                self.sleep(self.min_interval - elapsed)
        self.last_request = self.clock()


class TMDbClient:
    """Interface to The Movie Database API"""

    def __init__(
        self,
        api_key: Optional[str],
        cache=None,
        throttle: Optional[RequestThrottle] = None,
        base_url: str = TMDB_BASE_URL,
        timeout: float = 10,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.cache = cache if cache is not None else MemoryCache()
        self.throttle = throttle if throttle is not None else RequestThrottle()
        self.cache_hits = 0
        self.cache_misses = 0

        if not api_key:
            logger.warning("TMDb API key not configured - TMDb requests are disabled")

    @staticmethod
    def _make_cache_key(endpoint: str, params: Dict) -> str:
        """Cache key from endpoint and sorted params (API key never included)"""
        query = '&'.join(f"{k}={params[k]}" for k in sorted(params))
        return f"{endpoint}?{query}"

    def _request(self, endpoint: str, params: Optional[Dict] = None) -> Optional[Dict]:
        """
        GET an endpoint, consulting the cache first.

        Returns the decoded JSON body, or None when the key is missing or the
        request fails. Failures are logged and never cached.
        """
        if not self.api_key:
            return None

        params = {k: str(v) for k, v in (params or {}).items()}
        cache_key = self._make_cache_key(endpoint, params)

        cached = self.cache.get(cache_key)
        if cached is not None:
            self.cache_hits += 1
            logger.debug(f"TMDb cache hit: {cache_key}")
            return cached

        self.cache_misses += 1
        self.throttle.wait()
        logger.debug(f"TMDb API request: {cache_key}")

        try:
            response = requests.get(
                f"{self.base_url}{endpoint}",
                params={'api_key': self.api_key, **params},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            logger.warning(f"TMDb API timeout for {endpoint}")
            return None
        except requests.exceptions.HTTPError as e:
            logger.warning(f"TMDb API HTTP error for {endpoint}: {e}")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"TMDb API request failed for {endpoint}: {e}")
            return None
        except ValueError as e:
            logger.warning(f"TMDb API returned invalid JSON for {endpoint}: {e}")
            return None

        self.cache.set(cache_key, data)
        return data

    def get_popular(self, page: int = 1) -> Optional[Dict]:
        return self._request('/movie/popular', {'page': page})

    def get_top_rated(self, page: int = 1) -> Optional[Dict]:
        return self._request('/movie/top_rated', {'page': page})

    def get_trending(self, window: str = 'week') -> Optional[Dict]:
        """Trending movies for 'day' or 'week'"""
        return self._request(f'/trending/movie/{window}')

    def get_movie_by_id(self, movie_id: int) -> Optional[Dict]:
        """Full detail payload (runtime, genre objects, tagline...)"""
        return self._request(f'/movie/{movie_id}')

    def search_movies(self, query: str, page: int = 1) -> Optional[Dict]:
        return self._request('/search/movie', {'query': query, 'page': page})

    def get_movies_by_genre(self, genre_id: int, page: int = 1) -> Optional[Dict]:
        return self._request('/discover/movie', {
            'with_genres': genre_id,
            'page': page,
            'sort_by': 'popularity.desc',
        })

    def get_upcoming(self, page: int = 1) -> Optional[Dict]:
        return self._request('/movie/upcoming', {'page': page})

    def get_now_playing(self, page: int = 1) -> Optional[Dict]:
        return self._request('/movie/now_playing', {'page': page})

    def clear_cache(self):
        self.cache.clear()

    def get_cache_stats(self) -> Dict:
        """Get cache performance statistics"""
        total = self.cache_hits + self.cache_misses
        hit_rate = (self.cache_hits / total * 100) if total > 0 else 0

        return {
            'hits': self.cache_hits,
            'misses': self.cache_misses,
            'total_queries': total,
            'hit_rate': hit_rate,
            'cache_size': len(self.cache),
        }
