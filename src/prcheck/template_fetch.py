from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path
from typing import Callable
import urllib.error
import urllib.parse
import urllib.request

from prcheck.exceptions import TemplateFetchError

# https://docs.github.com/en/communities/using-templates-to-encourage-useful-issues-and-pull-requests/creating-a-pull-request-template-for-your-repository
PR_TEMPLATE_PATHS: tuple[str, ...] = (
    ".github/pull_request_template.md",
    "docs/pull_request_template.md",
    "pull_request_template.md",
    ".github/PULL_REQUEST_TEMPLATE/pull_request_template.md",
    "docs/PULL_REQUEST_TEMPLATE/pull_request_template.md",
    "PULL_REQUEST_TEMPLATE/pull_request_template.md",
)

DEFAULT_API_URL = "https://api.github.com"
_REQUEST_TIMEOUT_SECONDS = 20


def _contents_url(api_url: str, repo: str, path: str, ref: str) -> str:
    url = f"{api_url.rstrip('/')}/repos/{repo}/contents/{urllib.parse.quote(path)}"
    if ref:
        url += "?" + urllib.parse.urlencode({"ref": ref})
    return url


def _decode_file_payload(payload: object, *, path: str) -> str | None:
    if not isinstance(payload, dict):
        return None
    content = payload.get("content")
    if payload.get("type", "file") != "file" or not isinstance(content, str):
        return None
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise TemplateFetchError(f"template at {path} could not be decoded: {exc}", path=path) from exc


def fetch_pr_template(
    *,
    repo: str,
    token: str = "",
    ref: str = "",
    api_url: str = DEFAULT_API_URL,
    paths: tuple[str, ...] = PR_TEMPLATE_PATHS,
    urlopen_fn: Callable[..., object] = urllib.request.urlopen,
) -> str | None:
    """Text of the first PR template found in ``repo``, or ``None``.

    Paths are tried in order. A 404 (or a non-file entry) moves on to the
    next path; any other failure raises :class:`TemplateFetchError`.
    """
    repo = repo.strip()
    if not repo:
        raise TemplateFetchError("repository is required to fetch the PR template")
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token.strip():
        headers["Authorization"] = f"Bearer {token.strip()}"

    for path in paths:
        req = urllib.request.Request(_contents_url(api_url, repo, path, ref.strip()), headers=headers)
        try:
            with urlopen_fn(req, timeout=_REQUEST_TIMEOUT_SECONDS) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            if exc.code == 404:
                continue
            raise TemplateFetchError(
                f"GitHub returned HTTP {exc.code} for {path}",
                path=path,
                status=exc.code,
            ) from exc
        except urllib.error.URLError as exc:
            raise TemplateFetchError(f"unable to reach GitHub for {path}: {exc.reason}", path=path) from exc
        except OSError as exc:
            raise TemplateFetchError(f"unable to read GitHub response for {path}: {exc}", path=path) from exc
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TemplateFetchError(f"unreadable response for {path}: {exc}", path=path) from exc
        text = _decode_file_payload(payload, path=path)
        if text is not None:
            return text
    return None


def find_local_template(
    root: Path,
    *,
    paths: tuple[str, ...] = PR_TEMPLATE_PATHS,
) -> str | None:
    for path in paths:
        candidate = root / path
        if candidate.is_file():
            try:
                return candidate.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise TemplateFetchError(f"unable to read {path}: {exc}", path=path) from exc
    return None
