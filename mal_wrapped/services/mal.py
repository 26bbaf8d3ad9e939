"""MyAnimeList API integration service"""
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

# --- Constants for Fetching Control ---
# Base delay in seconds for retries on rate limit
RATE_LIMIT_RETRY_BASE_DELAY = 2
# Upper bound for a server-requested Retry-After wait
MAX_RETRY_AFTER_SECONDS = 60
# ------------------------------------

USER_FIELDS = "id,name,picture,anime_statistics,manga_statistics"

ANIME_LIST_FIELDS = ",".join([
    "list_status{status,score,start_date,finish_date,num_episodes_watched}",
    "genres{name}",
    "studios{name}",
    "start_season{year,season}",
    "mean",
    "num_list_users",
    "average_episode_duration",
    "title",
    "main_picture",
    "id",
    "num_episodes",
])

MANGA_LIST_FIELDS = ",".join([
    "list_status{status,score,start_date,finish_date,num_chapters_read}",
    "genres{name}",
    "authors{first_name,last_name}",
    "mean",
    "num_list_users",
    "title",
    "main_picture",
    "id",
    "num_chapters",
])


class MALClient:
    """Handles all MyAnimeList API interactions for one authorized user"""

    def __init__(self, token: str, base_url: str = "https://api.myanimelist.net/v2",
                 timeout: float = 15.0, session: Optional[requests.Session] = None):
        """
        Initialize with a MyAnimeList access token
        """
        if not token:
            raise ValueError("MAL access token cannot be empty")
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json'
        })

    def get_user_info(self) -> Dict[str, Any]:
        """Get the profile with MAL's own anime and manga statistics"""
        logger.info("Fetching user info...")
        user_info = self._make_request('users/@me', {'fields': USER_FIELDS})
        if isinstance(user_info, dict) and 'id' in user_info:
            logger.info(f"User info fetched successfully for user: {user_info.get('name')}")
        else:
            logger.error(f"Invalid user info response received: {user_info}")
            raise ValueError("Failed to fetch valid user info from MyAnimeList.")
        return user_info

    def fetch_anime_page(self, offset: int, limit: int) -> Tuple[List[Dict], bool]:
        """
        Get one page of the user's anime list

        Args:
            offset: Index of the first entry
            limit: Number of entries to fetch (MAL max is 1000)

        Returns:
            (raw list records, whether MAL reports a next page)
        """
        return self._fetch_list_page('users/@me/animelist', ANIME_LIST_FIELDS, offset, limit)

    def fetch_manga_page(self, offset: int, limit: int) -> Tuple[List[Dict], bool]:
        """Get one page of the user's manga list. Same contract as fetch_anime_page."""
        return self._fetch_list_page('users/@me/mangalist', MANGA_LIST_FIELDS, offset, limit)

    def _fetch_list_page(self, endpoint: str, fields: str, offset: int, limit: int) -> Tuple[List[Dict], bool]:
        response_data = self._make_request(endpoint, {
            'fields': fields,
            'offset': offset,
            'limit': limit,
            'nsfw': 'true',
        })
        data = response_data.get('data')
        if not isinstance(data, list):
            logger.error(f"Unexpected response format for {endpoint} (offset {offset}): {response_data}")
            raise ValueError(f"Unexpected response format for {endpoint} (offset {offset})")
        paging = response_data.get('paging')
        has_next = bool(paging.get('next')) if isinstance(paging, dict) else False
        return data, has_next

    def _make_request(self, endpoint: str, params: Optional[Dict[str, Any]] = None, retries: int = 3) -> Dict:
        """Make authenticated request to the MAL API with retries"""
        url = f'{self.base_url}/{endpoint}'
        attempt = 0
        last_exception: Optional[Exception] = None

        while attempt < retries:
            attempt += 1
            try:
                logger.debug(f"Attempt {attempt}/{retries}: Making request to {url} with {params}")
                response = self.session.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                logger.debug(f"Request successful (Status: {response.status_code}) to {url}")
                try:
                    json_response = response.json()
                except ValueError:
                    logger.error(f"Failed to decode JSON response from {url}. Status: {response.status_code}. Response text: {response.text[:200]}")
                    return {}
                return json_response if isinstance(json_response, dict) else {}
            except requests.exceptions.HTTPError as e:
                last_exception = e
                response = e.response
                status = response.status_code if response is not None else 0
                logger.warning(f"HTTP Error on attempt {attempt} for {url}: {e}")
                if status == 401:
                    logger.error(f"MAL access token rejected (401) for {url}. The OAuth token expired or was revoked; re-authorize the app.")
                    raise
                elif status == 403:
                    logger.error(f"MAL refused access (403) to {url}. The client ID may not be allowed to read this list.")
                    raise
                elif status == 429:
                    retry_after = self._retry_after(response, attempt)
                    logger.warning(f"Rate limit hit (429) for {url}. Retrying after {retry_after} seconds...")
                    if attempt < retries:
                        time.sleep(retry_after)
                    continue
                elif status >= 500:
                    logger.warning(f"MAL server error ({status}) for {url}. Retrying...")
                else:
                    logger.error(f"Client error ({status}) for {url}. Aborting request.")
                    raise
            except requests.exceptions.RequestException as e:
                last_exception = e
                logger.warning(f"Request Error on attempt {attempt} for {url}: {e}. Retrying...")
            if attempt < retries:
                sleep_time = RATE_LIMIT_RETRY_BASE_DELAY * (1.5 ** (attempt - 1)) + (0.5 * attempt)
                logger.info(f"Waiting {sleep_time:.2f}s before next retry for {url}...")
                time.sleep(sleep_time)

        logger.error(f"Request failed after {retries} attempts for {url}.")
        raise last_exception or requests.exceptions.RetryError(f"Request failed after {retries} attempts for {url}")

    @staticmethod
    def _retry_after(response: requests.Response, attempt: int) -> int:
        default = RATE_LIMIT_RETRY_BASE_DELAY * (2 ** (attempt - 1))
        try:
            retry_after = int(response.headers.get('Retry-After', default))
        except (TypeError, ValueError):
            retry_after = default
        return max(1, min(retry_after, MAX_RETRY_AFTER_SECONDS))
