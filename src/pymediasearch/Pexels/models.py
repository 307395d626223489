"""Pydantic models for Pexels API parameters and responses.

Parameter records describe the query string of one endpoint each; every field
is annotated with the :class:`~pymediasearch.Pexels.query.QueryKey` it is sent
as, and ``0``/``""`` mean "unset".

Response records mirror the JSON returned by the API. Unknown fields are
ignored, and missing or ``null`` fields fall back to their defaults so that a
sparse payload still yields a usable record.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .query import QueryKey

__all__ = (
    "PhotoSearchParams",
    "CuratedPhotosParams",
    "VideoSearchParams",
    "PopularVideosParams",
    "CollectionsParams",
    "CollectionMediaParams",
    "User",
    "PhotoSrc",
    "Photo",
    "PhotosResponse",
    "VideoFile",
    "VideoPicture",
    "Video",
    "VideosResponse",
    "Collection",
    "CollectionsResponse",
    "CollectionMedia",
    "CollectionMediaResponse",
)


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PhotoSearchParams(_Params):
    """Parameters of the photo search endpoint."""

    query: Annotated[str, QueryKey("query")] = ""
    orientation: Annotated[str, QueryKey("orientation")] = ""
    size: Annotated[str, QueryKey("size")] = ""
    color: Annotated[str, QueryKey("color")] = ""
    locale: Annotated[str, QueryKey("locale")] = ""
    page: Annotated[int, QueryKey("page")] = 0
    per_page: Annotated[int, QueryKey("per_page")] = 0


class CuratedPhotosParams(_Params):
    """Parameters of the curated photos endpoint."""

    page: Annotated[int, QueryKey("page")] = 0
    per_page: Annotated[int, QueryKey("per_page")] = 0


class VideoSearchParams(_Params):
    """Parameters of the video search endpoint."""

    query: Annotated[str, QueryKey("query")] = ""
    orientation: Annotated[str, QueryKey("orientation")] = ""
    size: Annotated[str, QueryKey("size")] = ""
    locale: Annotated[str, QueryKey("locale")] = ""
    page: Annotated[int, QueryKey("page")] = 0
    per_page: Annotated[int, QueryKey("per_page")] = 0


class PopularVideosParams(_Params):
    """Parameters of the popular videos endpoint.

    Durations are in seconds, dimensions in pixels.
    """

    min_width: Annotated[int, QueryKey("min_width")] = 0
    min_height: Annotated[int, QueryKey("min_height")] = 0
    min_duration: Annotated[int, QueryKey("min_duration")] = 0
    max_duration: Annotated[int, QueryKey("max_duration")] = 0
    page: Annotated[int, QueryKey("page")] = 0
    per_page: Annotated[int, QueryKey("per_page")] = 0


class CollectionsParams(_Params):
    """Parameters shared by the featured and user collections endpoints."""

    page: Annotated[int, QueryKey("page")] = 0
    per_page: Annotated[int, QueryKey("per_page")] = 0


class CollectionMediaParams(_Params):
    """Parameters of the collection media endpoint.

    ``type`` filters by ``photos`` or ``videos``; ``sort`` is ``asc`` or
    ``desc``.
    """

    type: Annotated[str, QueryKey("type")] = ""
    sort: Annotated[str, QueryKey("sort")] = ""
    page: Annotated[int, QueryKey("page")] = 0
    per_page: Annotated[int, QueryKey("per_page")] = 0


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # `null` behaves like an absent field
        if isinstance(data, Mapping):
            return {key: value for key, value in data.items() if value is not None}
        return data


class User(_Record):
    """The uploader of a video or collection item."""

    id: int = 0
    name: str = ""
    url: str = ""


class PhotoSrc(_Record):
    """URLs of the sizes a photo is served in."""

    original: str = ""
    large2x: str = ""
    large: str = ""
    medium: str = ""
    small: str = ""
    portrait: str = ""
    landscape: str = ""
    tiny: str = ""


class Photo(_Record):
    """A single photo."""

    id: int = 0
    width: int = 0
    height: int = 0
    url: str = ""
    photographer: str = ""
    photographer_url: str = ""
    photographer_id: int = 0
    avg_color: str = ""
    src: PhotoSrc = Field(default_factory=PhotoSrc)
    liked: bool = False
    alt: str = ""


class PhotosResponse(_Record):
    """A page of photos returned by photo search and curated photos."""

    total_results: int = 0
    page: int = 0
    per_page: int = 0
    photos: tuple[Photo, ...] = ()
    next_page: str | None = None
    prev_page: str | None = None


class VideoFile(_Record):
    """One encoding of a video."""

    id: int = 0
    quality: str = ""
    file_type: str = ""
    width: int = 0
    height: int = 0
    fps: float = 0.0
    link: str = ""


class VideoPicture(_Record):
    """A preview picture of a video."""

    id: int = 0
    picture: str = ""
    nr: int = 0


class Video(_Record):
    """A single video.

    ``full_res`` and ``tags`` have no documented shape and are kept as raw
    JSON values.
    """

    id: int = 0
    width: int = 0
    height: int = 0
    url: str = ""
    image: str = ""
    full_res: Any = None
    tags: tuple[Any, ...] = ()
    duration: int = 0
    user: User = Field(default_factory=User)
    video_files: tuple[VideoFile, ...] = ()
    video_pictures: tuple[VideoPicture, ...] = ()


class VideosResponse(_Record):
    """A page of videos returned by video search and popular videos."""

    page: int = 0
    per_page: int = 0
    total_results: int = 0
    url: str = ""
    videos: tuple[Video, ...] = ()
    next_page: str | None = None
    prev_page: str | None = None


class Collection(_Record):
    """A collection of media."""

    id: str = ""
    title: str = ""
    description: str = ""
    private: bool = False
    media_count: int = 0
    photos_count: int = 0
    videos_count: int = 0


class CollectionsResponse(_Record):
    """A page of collections."""

    collections: tuple[Collection, ...] = ()
    page: int = 0
    per_page: int = 0
    total_results: int = 0
    next_page: str | None = None
    prev_page: str | None = None


class CollectionMedia(_Record):
    """A photo or video inside a collection, discriminated by ``type``.

    Photo-only fields (``photographer``, ``src``, ...) are unset on videos and
    video-only fields (``duration``, ``video_files``, ...) are unset on photos.
    """

    type: str = ""
    id: int = 0
    width: int = 0
    height: int = 0
    url: str = ""
    photographer: str = ""
    photographer_url: str = ""
    photographer_id: int = 0
    avg_color: str = ""
    src: PhotoSrc | None = None
    liked: bool = False
    alt: str = ""
    duration: int = 0
    full_res: Any = None
    tags: tuple[Any, ...] = ()
    image: str = ""
    user: User | None = None
    video_files: tuple[VideoFile, ...] = ()
    video_pictures: tuple[VideoPicture, ...] = ()


class CollectionMediaResponse(_Record):
    """A page of media belonging to one collection."""

    id: str = ""
    media: tuple[CollectionMedia, ...] = ()
    page: int = 0
    per_page: int = 0
    total_results: int = 0
    next_page: str | None = None
    prev_page: str | None = None
