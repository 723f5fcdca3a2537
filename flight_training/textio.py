"""Line-oriented text sources and sinks.

Sources may be local paths, ``http(s)://`` URLs, or ``gs://bucket/object``
locations of publicly readable Cloud Storage objects (fetched through the
public HTTPS endpoint). Sinks are always local files.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import requests

LOGGER = logging.getLogger(__name__)

GCS_PUBLIC_URL = "https://storage.googleapis.com"
DEFAULT_TIMEOUT = 30.0

Location = Union[str, Path]


def resolve_url(location: str) -> Optional[str]:
    """Return the HTTP(S) URL for a remote location, or None for local paths."""
    if location.startswith(("http://", "https://")):
        return location
    if location.startswith("gs://"):
        return f"{GCS_PUBLIC_URL}/{location[len('gs://'):]}"
    return None


def _read_remote(
    url: str, session: Optional[requests.Session], timeout: float
) -> Iterator[str]:
    owns_session = session is None
    http = session or requests.Session()
    try:
        LOGGER.info("Fetching %s", url)
        response = http.get(url, stream=True, timeout=timeout)
        response.raise_for_status()
        # GCS serves objects without a charset.
        response.encoding = response.encoding or "utf-8"
        for raw in response.iter_lines(decode_unicode=True):
            if raw:
                yield raw.rstrip("\r")
    finally:
        if owns_session:
            http.close()


def _read_local(path: Path) -> Iterator[str]:
    # Bad bytes become U+FFFD; parse_flight rejects such lines.
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            line = raw.rstrip("\r\n")
            if line:
                yield line


def read_lines(
    location: Location,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Iterator[str]:
    """Yield the non-blank lines of a text source, without line terminators.

    Raises:
        FileNotFoundError: when a local source does not exist.
        requests.HTTPError: when a remote source answers with an error status.
    """
    url = resolve_url(str(location))
    if url is not None:
        return _read_remote(url, session, timeout)
    path = Path(location)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    return _read_local(path)


def _stage(target: Path, lines: Iterable[str]) -> Tuple[str, int]:
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    count = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")
                count += 1
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return tmp_name, count


def write_outputs(outputs: Sequence[Tuple[Location, Iterable[str]]]) -> List[int]:
    """Write several files so that either all of them appear or none do.

    Every file is staged as a temporary sibling first; the renames into place
    happen only once all of them were written in full.
    """
    staged: List[Tuple[str, Path, int]] = []
    try:
        for path, lines in outputs:
            target = Path(path)
            tmp_name, count = _stage(target, lines)
            staged.append((tmp_name, target, count))
    except BaseException:
        for tmp_name, _, _ in staged:
            Path(tmp_name).unlink(missing_ok=True)
        raise

    for tmp_name, target, count in staged:
        os.replace(tmp_name, target)
        LOGGER.info("Wrote %s lines to %s", count, target)
    return [count for _, _, count in staged]


def write_lines(path: Location, lines: Iterable[str]) -> int:
    """Write ``lines`` to ``path``, one per line, replacing any existing file."""
    return write_outputs([(path, lines)])[0]


__all__ = ["read_lines", "resolve_url", "write_lines", "write_outputs"]
