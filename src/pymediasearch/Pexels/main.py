"""Pexels command-line subcommand.

Each command maps onto one :class:`~pymediasearch.Pexels.client.Client`
binding. The decoded response is printed as JSON, or written to the file given
with ``--output``. Failures are logged and reflected in the :class:`ExitCode`.
"""

from argparse import ArgumentParser, Namespace
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import IntFlag, auto, unique
from functools import wraps
from os import environ
from sys import exit
from typing import Callable, ClassVar, final

from anyio import Path
from pydantic import BaseModel

from ..meta import LOGGER, OPEN_TEXT_OPTIONS, VERSION
from .client import APIError, Client, DecodeError, QueryValidationError
from .models import (
    CollectionMediaParams,
    CollectionsParams,
    CuratedPhotosParams,
    PhotoSearchParams,
    PopularVideosParams,
    VideoSearchParams,
)

__all__ = (
    "API_KEY_ENV",
    "ExitCode",
    "Args",
    "main",
    "parser",
)

API_KEY_ENV = "PEXELS_API_KEY"
_JSON_INDENT = 2

Request = Callable[[Client], Awaitable[BaseModel]]


@final
@unique
class ExitCode(IntFlag):
    """Exit codes for the failure classes a run may end with.

    ``GENERIC_ERROR`` is set for every failure; the other bits tell which
    phase failed.
    """

    __slots__: ClassVar = ()

    GENERIC_ERROR = auto()
    VALIDATION_ERROR = auto()
    API_ERROR = auto()
    DECODE_ERROR = auto()
    OUTPUT_ERROR = auto()


@final
@dataclass(
    init=True,
    repr=False,
    eq=True,
    order=False,
    unsafe_hash=False,
    frozen=True,
    match_args=True,
    kw_only=True,
    slots=True,
)
class Args:
    """Immutable container for parsed CLI arguments.

    Attributes:
        api_key: key sent in the ``Authorization`` header
        request: coroutine factory issuing the selected call on a client
        output: optional file to write the JSON result to
    """

    api_key: str
    request: Request
    output: Path | None = None

    def __repr__(self) -> str:
        return f"Args(request={self.request!r}, output={self.output!r})"


async def main(args: Args):
    """Run one request and emit its result.

    Calls `sys.exit` with the accumulated :class:`ExitCode`.
    """

    ec = ExitCode(0)

    try:
        async with Client(args.api_key) as client:
            try:
                result = await args.request(client)
            except QueryValidationError:
                LOGGER.exception("Invalid parameters")
                ec |= ExitCode.VALIDATION_ERROR
                raise
            except APIError:
                LOGGER.exception("Error requesting")
                ec |= ExitCode.API_ERROR
                raise
            except DecodeError:
                LOGGER.exception("Error decoding")
                ec |= ExitCode.DECODE_ERROR
                raise
        text = result.model_dump_json(indent=_JSON_INDENT)
        try:
            if args.output is None:
                print(text)
            else:
                LOGGER.info(f"Writing '{args.output}'")
                await args.output.parent.mkdir(parents=True, exist_ok=True)
                await args.output.write_text(f"{text}\n", **OPEN_TEXT_OPTIONS)
        except Exception:
            LOGGER.exception("Error writing output")
            ec |= ExitCode.OUTPUT_ERROR
            raise
    except Exception:
        LOGGER.exception("Error")
        ec |= ExitCode.GENERIC_ERROR

    exit(ec)


def _add_pagination(parser: ArgumentParser):
    parser.add_argument(
        "--page",
        action="store",
        type=int,
        default=0,
        help="page number, 1 when omitted",
    )
    parser.add_argument(
        "--per-page",
        action="store",
        type=int,
        default=0,
        help="results per page, endpoint default when omitted",
        dest="per_page",
    )


def _add_filters(parser: ArgumentParser, *names: str, kind: type = str):
    for name in names:
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            action="store",
            type=kind,
            default=kind(),
            help=f"{name.replace('_', ' ')} filter",
            dest=name,
        )


def _search_photos(ns: Namespace) -> Request:
    params = PhotoSearchParams(
        query=ns.query,
        orientation=ns.orientation,
        size=ns.size,
        color=ns.color,
        locale=ns.locale,
        page=ns.page,
        per_page=ns.per_page,
    )
    return lambda client: client.search_photos(params)


def _curated_photos(ns: Namespace) -> Request:
    params = CuratedPhotosParams(page=ns.page, per_page=ns.per_page)
    return lambda client: client.curated_photos(params)


def _photo(ns: Namespace) -> Request:
    return lambda client: client.get_photo(ns.id)


def _search_videos(ns: Namespace) -> Request:
    params = VideoSearchParams(
        query=ns.query,
        orientation=ns.orientation,
        size=ns.size,
        locale=ns.locale,
        page=ns.page,
        per_page=ns.per_page,
    )
    return lambda client: client.search_videos(params)


def _popular_videos(ns: Namespace) -> Request:
    params = PopularVideosParams(
        min_width=ns.min_width,
        min_height=ns.min_height,
        min_duration=ns.min_duration,
        max_duration=ns.max_duration,
        page=ns.page,
        per_page=ns.per_page,
    )
    return lambda client: client.popular_videos(params)


def _video(ns: Namespace) -> Request:
    return lambda client: client.get_video(ns.id)


def _featured_collections(ns: Namespace) -> Request:
    params = CollectionsParams(page=ns.page, per_page=ns.per_page)
    return lambda client: client.featured_collections(params)


def _user_collections(ns: Namespace) -> Request:
    params = CollectionsParams(page=ns.page, per_page=ns.per_page)
    return lambda client: client.user_collections(params)


def _collection(ns: Namespace) -> Request:
    params = CollectionMediaParams(
        type=ns.type, sort=ns.sort, page=ns.page, per_page=ns.per_page
    )
    return lambda client: client.get_collection(ns.id, params)


def parser(parent: Callable[..., ArgumentParser] | None = None):
    """Return an argparse parser configured for the Pexels subcommand.

    When embedded, `parent` can be a callable that produces an `ArgumentParser`.
    The API key defaults to the ``PEXELS_API_KEY`` environment variable and is
    required only when that variable is unset.
    """

    prog = __package__ or __name__

    parser = (ArgumentParser if parent is None else parent)(
        prog=f"python -m {prog}",
        description="search photos, videos and collections on Pexels",
        add_help=True,
        allow_abbrev=False,
        exit_on_error=False,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{prog} v{VERSION}",
        help="print version and exit",
    )
    api_key = environ.get(API_KEY_ENV)
    parser.add_argument(
        "-k",
        "--api-key",
        action="store",
        type=str,
        default=api_key,
        required=not api_key,
        help=f"API key, defaults to ${API_KEY_ENV}",
        dest="api_key",
    )
    parser.add_argument(
        "-o",
        "--output",
        action="store",
        type=Path,
        help="write the JSON result to this file instead of stdout",
    )
    commands = parser.add_subparsers(
        required=True,
    )

    def command(name: str, build: Callable[[Namespace], Request], summary: str):
        sub = commands.add_parser(
            name,
            description=summary,
            help=summary,
            allow_abbrev=False,
            exit_on_error=False,
        )
        sub.set_defaults(build=build)
        return sub

    sub = command("search-photos", _search_photos, "search photos")
    sub.add_argument("query", action="store", type=str, help="search terms")
    _add_filters(sub, "orientation", "size", "color", "locale")
    _add_pagination(sub)

    _add_pagination(command("curated-photos", _curated_photos, "list curated photos"))

    sub = command("photo", _photo, "get a photo by ID")
    sub.add_argument("id", action="store", type=str, help="photo ID")

    sub = command("search-videos", _search_videos, "search videos")
    sub.add_argument("query", action="store", type=str, help="search terms")
    _add_filters(sub, "orientation", "size", "locale")
    _add_pagination(sub)

    sub = command("popular-videos", _popular_videos, "list popular videos")
    _add_filters(
        sub, "min_width", "min_height", "min_duration", "max_duration", kind=int
    )
    _add_pagination(sub)

    sub = command("video", _video, "get a video by ID")
    sub.add_argument("id", action="store", type=str, help="video ID")

    _add_pagination(
        command(
            "featured-collections", _featured_collections, "list featured collections"
        )
    )
    _add_pagination(
        command("user-collections", _user_collections, "list your collections")
    )

    sub = command("collection", _collection, "list the media of a collection")
    sub.add_argument("id", action="store", type=str, help="collection ID")
    _add_filters(sub, "type", "sort")
    _add_pagination(sub)

    @wraps(main)
    async def invoke(args: Namespace):
        await main(
            Args(
                api_key=args.api_key,
                request=args.build(args),
                output=args.output,
            )
        )

    parser.set_defaults(invoke=invoke)
    return parser
