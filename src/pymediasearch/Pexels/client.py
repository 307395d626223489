"""Asynchronous client for the Pexels REST API.

Every endpoint binding performs one authenticated ``GET`` and decodes the JSON
body into a model from :mod:`pymediasearch.Pexels.models`::

    async with Client(api_key) as client:
        photos = await client.search_photos(PhotoSearchParams(query="nature"))

Failures are raised to the caller as-is: :class:`QueryValidationError` before
any request is sent, :class:`APIError` for non-success statuses,
:class:`DecodeError` for undecodable bodies, and the underlying ``aiohttp`` or
``asyncio`` exception for transport failures, timeouts and cancellation.
Nothing is retried.
"""

from collections.abc import Mapping
from types import TracebackType
from typing import ClassVar, TypeVar, final
from urllib.parse import quote

from aiohttp import ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from yarl import URL

from ..meta import LOGGER, USER_AGENT
from .models import (
    CollectionMediaParams,
    CollectionMediaResponse,
    CollectionsParams,
    CollectionsResponse,
    CuratedPhotosParams,
    Photo,
    PhotoSearchParams,
    PhotosResponse,
    PopularVideosParams,
    Video,
    VideoSearchParams,
    VideosResponse,
)
from .query import encode_query

__all__ = (
    "BASE_URL",
    "VERSION",
    "TIMEOUT",
    "ClientConfig",
    "PexelsError",
    "QueryValidationError",
    "APIError",
    "DecodeError",
    "Client",
)

BASE_URL = "https://api.pexels.com/"
VERSION = "v1"
TIMEOUT = 120.0

_DEFAULT_PAGE = 1
_DEFAULT_PER_PAGE = 5
_POPULAR_VIDEOS_PER_PAGE = 2
_EMPTY_QUERY_MESSAGE = "Query field cannot be empty."
_JSON = "application/json"

_M = TypeVar("_M", bound=BaseModel)
_P = TypeVar(
    "_P",
    PhotoSearchParams,
    CuratedPhotosParams,
    VideoSearchParams,
    PopularVideosParams,
    CollectionsParams,
    CollectionMediaParams,
)


class ClientConfig(BaseModel):
    """Connection settings shared by every call made through a :class:`Client`.

    ``base_url`` must end with a slash; ``version`` is the path segment
    prefixed to photo and collection endpoints. ``timeout`` bounds each request
    in seconds and only applies to sessions the client creates itself.
    """

    base_url: str = BASE_URL
    version: str = VERSION
    timeout: float = Field(default=TIMEOUT, gt=0)

    model_config = ConfigDict(frozen=True)


class PexelsError(Exception):
    """Base class of errors raised by this client."""


class QueryValidationError(PexelsError, ValueError):
    """A required parameter is missing; no request was sent."""


class APIError(PexelsError):
    """The API answered with a non-success status.

    ``body`` is the raw response text, not re-parsed.
    """

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Unknown API error: {status} {body}")
        self.status = status
        self.body = body


class DecodeError(PexelsError):
    """A successful response body could not be decoded into its model."""


def _path_id(id: str | int) -> str:
    # a single path segment, so `/` is escaped too
    return quote(str(id), safe="")


def _with_page_defaults(params: _P, per_page: int) -> _P:
    """Return `params` with unset pagination replaced by the defaults."""
    update: dict[str, int] = {}
    if params.page == 0:
        update["page"] = _DEFAULT_PAGE
    if params.per_page == 0:
        update["per_page"] = per_page
    return params.model_copy(update=update) if update else params


@final
class Client:
    """Pexels API client.

    The client may be shared by concurrent coroutines; its configuration is
    never modified after construction. When no `session` is given one is
    created on first use and closed by :meth:`close` or on leaving the
    ``async with`` block. An injected session stays owned by the caller.
    """

    __slots__: ClassVar = ("_api_key", "_config", "_session", "_owns_session")

    def __init__(
        self,
        api_key: str,
        *,
        config: ClientConfig | None = None,
        session: ClientSession | None = None,
    ) -> None:
        self._api_key = api_key
        self._config = ClientConfig() if config is None else config
        self._session = session
        self._owns_session = session is None

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session and self._session is not None:
            session, self._session = self._session, None
            await session.close()

    def _get_session(self) -> ClientSession:
        if self._session is None:
            self._session = ClientSession(
                timeout=ClientTimeout(total=self._config.timeout),
                headers={"User-Agent": USER_AGENT},
            )
        return self._session

    def _headers(self, *, content_type: bool = True) -> dict[str, str]:
        headers = {"Accept": _JSON}
        if content_type:
            headers["Content-Type"] = _JSON
        headers["Authorization"] = self._api_key
        return headers

    async def _send(
        self, url: str, headers: Mapping[str, str], model: type[_M]
    ) -> _M:
        """Perform a single ``GET`` and decode the body into `model`.

        Statuses below 200 or from 400 upwards raise :class:`APIError` with
        the full body text. Transport errors propagate unchanged.
        """

        LOGGER.debug(f"GET {url}")
        async with self._get_session().get(
            URL(url, encoded=True), headers=headers
        ) as resp:
            if resp.status < 200 or resp.status >= 400:
                text = await resp.text(errors="replace")
                LOGGER.debug(f"GET {url} returned {resp.status}")
                raise APIError(resp.status, text)
            body = await resp.read()
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise DecodeError(f"Cannot decode {model.__name__} from {url}") from exc

    def _versioned(self, path: str) -> str:
        return f"{self._config.base_url}{self._config.version}/{path}"

    async def search_photos(self, params: PhotoSearchParams) -> PhotosResponse:
        """Search photos matching ``params.query``.

        Raises :class:`QueryValidationError` when the query is empty.
        """

        params = _with_page_defaults(params, _DEFAULT_PER_PAGE)
        if not params.query:
            raise QueryValidationError(_EMPTY_QUERY_MESSAGE)
        url = f"{self._versioned('search')}?{encode_query(params)}"
        return await self._send(
            url, self._headers(content_type=False), PhotosResponse
        )

    async def curated_photos(
        self, params: CuratedPhotosParams | None = None
    ) -> PhotosResponse:
        """List curated photos."""
        params = _with_page_defaults(
            CuratedPhotosParams() if params is None else params, _DEFAULT_PER_PAGE
        )
        url = f"{self._versioned('curated')}?{encode_query(params)}"
        return await self._send(url, self._headers(), PhotosResponse)

    async def get_photo(self, id: str | int) -> Photo:
        """Fetch a single photo by its ID."""
        url = self._versioned(f"photos/{_path_id(id)}")
        return await self._send(url, self._headers(), Photo)

    async def search_videos(self, params: VideoSearchParams) -> VideosResponse:
        """Search videos matching ``params.query``.

        Raises :class:`QueryValidationError` when the query is empty.
        """

        params = _with_page_defaults(params, _DEFAULT_PER_PAGE)
        if not params.query:
            raise QueryValidationError(_EMPTY_QUERY_MESSAGE)
        url = f"{self._config.base_url}/videos/search?{encode_query(params)}"
        return await self._send(
            url, self._headers(content_type=False), VideosResponse
        )

    async def popular_videos(
        self, params: PopularVideosParams | None = None
    ) -> VideosResponse:
        """List popular videos, two per page unless ``per_page`` is set."""
        params = _with_page_defaults(
            PopularVideosParams() if params is None else params,
            _POPULAR_VIDEOS_PER_PAGE,
        )
        url = f"{self._config.base_url}videos/popular?{encode_query(params)}"
        return await self._send(url, self._headers(), VideosResponse)

    async def get_video(self, id: str | int) -> Video:
        """Fetch a single video by its ID."""
        url = f"{self._config.base_url}/videos/videos/{_path_id(id)}"
        return await self._send(url, self._headers(), Video)

    async def _collections(
        self, params: CollectionsParams | None, *, own: bool
    ) -> CollectionsResponse:
        params = _with_page_defaults(
            CollectionsParams() if params is None else params, _DEFAULT_PER_PAGE
        )
        path = "collections" if own else "collections/featured"
        url = f"{self._versioned(path)}?{encode_query(params)}"
        return await self._send(url, self._headers(), CollectionsResponse)

    async def featured_collections(
        self, params: CollectionsParams | None = None
    ) -> CollectionsResponse:
        """List featured collections."""
        return await self._collections(params, own=False)

    async def user_collections(
        self, params: CollectionsParams | None = None
    ) -> CollectionsResponse:
        """List the collections of the account owning the API key."""
        return await self._collections(params, own=True)

    async def get_collection(
        self, id: str, params: CollectionMediaParams | None = None
    ) -> CollectionMediaResponse:
        """List the media of a collection, optionally filtered and sorted."""
        params = _with_page_defaults(
            CollectionMediaParams() if params is None else params, _DEFAULT_PER_PAGE
        )
        path = f"collections/{_path_id(id)}"
        url = f"{self._versioned(path)}?{encode_query(params)}"
        return await self._send(url, self._headers(), CollectionMediaResponse)
