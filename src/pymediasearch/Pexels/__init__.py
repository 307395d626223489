"""Client for the Pexels photo, video and collection API.

The names most callers need are re-exported here; see
:mod:`pymediasearch.Pexels.client` for the request flow and
:mod:`pymediasearch.Pexels.models` for the records it returns.
"""

from .client import (
    APIError,
    Client,
    ClientConfig,
    DecodeError,
    PexelsError,
    QueryValidationError,
)
from .models import (
    CollectionMediaParams,
    CollectionsParams,
    CuratedPhotosParams,
    PhotoSearchParams,
    PopularVideosParams,
    VideoSearchParams,
)

__all__ = (
    "APIError",
    "Client",
    "ClientConfig",
    "DecodeError",
    "PexelsError",
    "QueryValidationError",
    "CollectionMediaParams",
    "CollectionsParams",
    "CuratedPhotosParams",
    "PhotoSearchParams",
    "PopularVideosParams",
    "VideoSearchParams",
)
