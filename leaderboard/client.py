"""
Async client for the leaderboard service.

Game code uses this in place of talking to the store directly: check that the
service is ready, save a score, load the top score or the top N scores, and
render results as the text lines shown in the game UI.
"""
from typing import Iterable, List, Optional
import httpx
from .errors import StorageUnavailable, ValidationError
from .logger import get_logger
from .models.data import Leader

logger = get_logger('client')

def format_score(leader: Leader) -> str:
    return f"Player: {leader.player_name}, Score: {leader.score}"

def format_scores(leaders: Iterable[Leader]) -> str:
    return "\n".join(format_score(leader) for leader in leaders)

class LeaderboardClient:
    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 5.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def _request(self, method: str, url: str, allow_404: bool = False, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise StorageUnavailable(f"Leaderboard service unreachable: {e}") from e
        if response.status_code >= 500:
            logger.error(f"{method} {url} returned {response.status_code}")
            raise StorageUnavailable(f"Leaderboard service error {response.status_code}")
        if response.status_code == 404 and not allow_404:
            logger.error(f"{method} {url} returned 404")
            raise StorageUnavailable(f"Leaderboard service has no route for {method} {url}")
        if response.status_code >= 400 and response.status_code != 404:
            raise ValidationError(f"Request rejected ({response.status_code}): {response.text}")
        return response

    @staticmethod
    def _decode(response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Undecodable response from {response.request.url}: {e}")
            raise StorageUnavailable("Leaderboard service sent an invalid response") from e

    @staticmethod
    def _leader(entry) -> Leader:
        try:
            return Leader(str(entry['player_name']), int(entry['score']))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed score entry {entry!r}: {e}")
            raise StorageUnavailable("Leaderboard service sent a malformed entry") from e

    async def check_ready(self) -> bool:
        """True when the service is reachable and its store has been loaded"""
        try:
            response = await self._request("GET", "/health")
        except (StorageUnavailable, ValidationError):
            return False
        if response.status_code != 200:
            return False
        try:
            body = self._decode(response)
        except StorageUnavailable:
            return False
        if not isinstance(body, dict):
            logger.error(f"Expected a health object, got {type(body).__name__}")
            return False
        ready = bool(body.get('ready', False))
        if not ready:
            logger.error("Leaderboard service is not ready")
        return ready

    async def save_score(self, player_name: str, score: int) -> None:
        await self._request("POST", "/scores", json={'player_name': player_name, 'score': score})

    async def load_single_entry(self) -> Optional[Leader]:
        """The top score, or None when nothing has been recorded"""
        response = await self._request("GET", "/scores/top1", allow_404=True)
        if response.status_code == 404:
            return None
        return self._leader(self._decode(response))

    async def load_top_entries(self, count: int = 5) -> List[Leader]:
        response = await self._request("GET", "/scores/top", params={'count': count})
        body = self._decode(response)
        if not isinstance(body, list):
            logger.error(f"Expected a list of scores, got {type(body).__name__}")
            raise StorageUnavailable("Leaderboard service sent an invalid response")
        return [self._leader(entry) for entry in body]
