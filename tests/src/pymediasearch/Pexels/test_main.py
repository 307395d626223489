"""Tests for the Pexels CLI subcommand.

Parses command lines into requests, then runs `main` with fake requests or a
fake `aiohttp.ClientSession` and asserts on the emitted JSON and exit code.
"""

import argparse
import dataclasses
import json
from argparse import ArgumentParser
from typing import Any

import pytest
from anyio import Path

from pymediasearch.Pexels import client as client_module
from pymediasearch.Pexels import main as pexels_main
from pymediasearch.Pexels.client import (
    APIError,
    Client,
    DecodeError,
    QueryValidationError,
)
from pymediasearch.Pexels.main import Args, ExitCode
from pymediasearch.Pexels.models import Photo, PhotosResponse

__all__ = ()


class _FakeResp:
    """Minimal async response returning a fixed JSON body."""

    status = 200

    def __init__(self, body: bytes) -> None:
        """Store the raw body."""
        self._body = body

    async def read(self) -> bytes:
        """Return the raw body."""
        return self._body

    async def __aenter__(self) -> "_FakeResp":
        """Enter async context (no-op)."""
        return self

    async def __aexit__(self, *exc: object) -> bool:
        """Exit async context (no-op)."""
        return False


class _FakeClientSession:
    """Fake session recording request URLs."""

    def __init__(self, **kwargs: object) -> None:
        """Start with no recorded requests."""
        self.urls: list[str] = []

    def get(self, url: object, *args: object, **kwargs: object) -> _FakeResp:
        """Record the URL and answer with an empty photo page."""
        self.urls.append(str(url))
        return _FakeResp(b'{"page": 1, "per_page": 5, "photos": []}')

    async def close(self) -> None:
        """Nothing to release."""


@pytest.fixture
def exit_codes(monkeypatch: pytest.MonkeyPatch) -> list[object]:
    """Replace `sys.exit` in the CLI module and collect the codes passed to it."""
    codes: list[object] = []
    monkeypatch.setattr(pexels_main, "exit", codes.append)
    return codes


def _parse(monkeypatch: pytest.MonkeyPatch, *argv: str) -> argparse.Namespace:
    """Parse `argv` with the API key taken from the environment."""
    monkeypatch.setenv(pexels_main.API_KEY_ENV, "env-key")
    return pexels_main.parser().parse_args(list(argv))


async def _photo(client: Client) -> Photo:
    """Request stand-in returning a fixed photo."""
    return Photo(id=42, alt="fixed")


@pytest.mark.asyncio
async def test_main_prints_json_and_exits_cleanly(
    exit_codes: list[object], capsys: pytest.CaptureFixture[str]
) -> None:
    """A successful request is printed as JSON and exits with no flags set."""
    await pexels_main.main(Args(api_key="k", request=_photo))

    out = json.loads(capsys.readouterr().out)
    assert out["id"] == 42
    assert out["alt"] == "fixed"
    assert exit_codes == [ExitCode(0)]


@pytest.mark.asyncio
async def test_main_writes_output_file(exit_codes: list[object], tmp_path: Any) -> None:
    """With `output` set the JSON lands in the file, creating parent dirs."""
    output = Path(tmp_path) / "results" / "photo.json"

    await pexels_main.main(Args(api_key="k", request=_photo, output=output))

    assert json.loads(await output.read_text(encoding="utf-8"))["id"] == 42
    assert exit_codes == [ExitCode(0)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error,flag",
    [
        (QueryValidationError("Query field cannot be empty."), ExitCode.VALIDATION_ERROR),
        (APIError(404, "Not found"), ExitCode.API_ERROR),
        (DecodeError("bad body"), ExitCode.DECODE_ERROR),
        (RuntimeError("boom"), ExitCode(0)),
    ],
)
async def test_main_maps_errors_to_exit_codes(
    exit_codes: list[object], error: Exception, flag: ExitCode
) -> None:
    """Each failure class sets its own flag on top of `GENERIC_ERROR`."""

    async def _fail(client: Client) -> Photo:
        """Request stand-in raising the parametrized error."""
        raise error

    await pexels_main.main(Args(api_key="k", request=_fail))

    assert len(exit_codes) == 1
    code = exit_codes[0]
    assert isinstance(code, ExitCode)
    assert code == ExitCode.GENERIC_ERROR | flag


@pytest.mark.asyncio
async def test_main_sets_output_error_when_writing_fails(
    exit_codes: list[object], tmp_path: Any
) -> None:
    """Failing to write the result sets `OUTPUT_ERROR`."""
    blocker = Path(tmp_path) / "file"
    await blocker.write_text("not a directory", encoding="utf-8")

    await pexels_main.main(
        Args(api_key="k", request=_photo, output=blocker / "photo.json")
    )

    code = exit_codes[0]
    assert isinstance(code, ExitCode)
    assert code & ExitCode.OUTPUT_ERROR
    assert code & ExitCode.GENERIC_ERROR


@pytest.mark.asyncio
async def test_parsed_search_runs_against_session(
    monkeypatch: pytest.MonkeyPatch,
    exit_codes: list[object],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A parsed command line issues the matching request through a client."""
    session = _FakeClientSession()
    monkeypatch.setattr(client_module, "ClientSession", lambda **_k: session)
    ns = _parse(
        monkeypatch, "search-photos", "red car", "--color", "red", "--per-page", "20"
    )

    await ns.invoke(ns)

    assert session.urls == [
        "https://api.pexels.com/v1/search?query=red+car&color=red&page=1&per_page=20"
    ]
    assert isinstance(
        PhotosResponse.model_validate_json(capsys.readouterr().out), PhotosResponse
    )
    assert exit_codes == [ExitCode(0)]


@pytest.mark.parametrize(
    "argv,url",
    [
        (["curated-photos", "--page", "2"], "v1/curated?page=2&per_page=5"),
        (["photo", "2014422"], "v1/photos/2014422"),
        (
            ["search-videos", "ocean", "--orientation", "portrait"],
            "/videos/search?query=ocean&orientation=portrait&page=1&per_page=5",
        ),
        (
            ["popular-videos", "--min-duration", "5", "--max-duration", "30"],
            "videos/popular?min_duration=5&max_duration=30&page=1&per_page=2",
        ),
        (["video", "2499611"], "/videos/videos/2499611"),
        (["featured-collections"], "v1/collections/featured?page=1&per_page=5"),
        (["user-collections", "--per-page", "3"], "v1/collections?page=1&per_page=3"),
        (
            ["collection", "9mp14cx", "--type", "videos", "--sort", "asc"],
            "v1/collections/9mp14cx?type=videos&sort=asc&page=1&per_page=5",
        ),
    ],
)
@pytest.mark.asyncio
async def test_every_command_maps_to_its_endpoint(
    monkeypatch: pytest.MonkeyPatch, argv: list[str], url: str
) -> None:
    """Each subcommand builds a request for its own endpoint."""
    session = _FakeClientSession()
    ns = _parse(monkeypatch, *argv)
    client = Client("k", session=session)  # type: ignore[arg-type]

    await ns.build(ns)(client)

    assert session.urls == [f"https://api.pexels.com/{url}"]


def test_api_key_flag_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--api-key` takes precedence over the environment variable."""
    ns = _parse(monkeypatch, "--api-key", "flag-key", "curated-photos")
    assert ns.api_key == "flag-key"

    ns = _parse(monkeypatch, "curated-photos")
    assert ns.api_key == "env-key"


def test_api_key_required_without_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Without the environment variable the key option becomes required."""
    monkeypatch.delenv(pexels_main.API_KEY_ENV, raising=False)
    p = pexels_main.parser()

    key_action = next(a for a in p._actions if "--api-key" in a.option_strings)
    assert key_action.required
    assert key_action.default is None


def test_output_option_is_anyio_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--output` is parsed into an `anyio.Path`."""
    ns = _parse(monkeypatch, "-o", "out.json", "video", "1")
    assert isinstance(ns.output, Path)


def test_parser_accepts_parent_factory() -> None:
    """`parser(parent=...)` builds on the given factory."""
    called: dict[str, object] = {}

    def factory(*_a: object, **kwargs: Any) -> ArgumentParser:
        """Record the `prog` keyword and build a plain parser."""
        called["prog"] = kwargs.get("prog")
        return ArgumentParser(**kwargs)

    p = pexels_main.parser(parent=factory)

    assert isinstance(p, ArgumentParser)
    assert called["prog"] == "python -m pymediasearch.Pexels"


def test_args_repr_hides_api_key() -> None:
    """The API key never appears in the `Args` representation."""
    assert "secret" not in repr(Args(api_key="secret", request=_photo))


def test_args_are_frozen_keyword_only() -> None:
    """`Args` rejects assignment and positional construction."""
    args = Args(api_key="k", request=_photo)

    with pytest.raises(dataclasses.FrozenInstanceError):
        args.api_key = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        Args("k", _photo)  # type: ignore[misc]
    assert not hasattr(args, "__dict__")
