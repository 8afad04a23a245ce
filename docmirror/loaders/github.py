"""Load documentation versions from the tags and branches of a GitHub repo.

Tags are listed with github3.py; each version is fetched as a tarball from the
REST API and unpacked into a work directory.

Example
-------
>>> loader = GitHubLoader("octo/widgets", docs_path="docs")  # doctest: +SKIP
>>> [version.name for version in loader.versions()]  # doctest: +SKIP
['v1.0', 'v1.1', 'main']
"""

from __future__ import annotations

import logging
import tarfile
import tempfile
import typing as typ
from http import HTTPStatus
from pathlib import Path

import requests
from github3 import GitHub
from github3 import exceptions as gh_exc
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from docmirror.files import force_create_path, recursive_delete

from .models import LoaderError, Version, ordered_versions, version_sort_key

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
_ACCEPT_HEADER = "application/vnd.github+json"
_CHUNK_SIZE = 64 * 1024


def _retrying_session() -> requests.Session:
    """Return a session that retries transient GitHub failures."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class GitHubLoader:
    """Fetch each version of a repository's documentation from GitHub."""

    def __init__(
        self,
        repo: str,
        *,
        docs_path: str = "",
        versions: cabc.Sequence[str] = (),
        branches: cabc.Sequence[str] = (),
        token: str | None = None,
        api_base: str = DEFAULT_API_BASE,
        work_dir: Path | None = None,
        session: requests.Session | None = None,
        client: GitHub | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the loader.

        Parameters
        ----------
        repo : str
            Repository in ``owner/name`` form.
        docs_path : str, optional
            Documentation directory inside the repository.
        versions : Sequence[str], optional
            Explicit refs to publish; tags are listed when empty.
        branches : Sequence[str], optional
            Branches appended after the tags.
        token : str, optional
            Token sent with API and tarball requests.
        api_base : str, optional
            REST API root, for GitHub Enterprise installs.
        work_dir : Path, optional
            Directory receiving the unpacked tarballs; a temporary directory
            is created when omitted.
        session : requests.Session, optional
            Session used for tarball downloads.
        client : GitHub, optional
            github3.py client used to list tags.
        timeout : float, optional
            Per-request timeout in seconds.
        """
        owner, _, name = repo.strip().partition("/")
        if not owner or not name:
            msg = f"GitHub source must be in 'owner/name' form, got '{repo}'."
            raise LoaderError(msg)
        self.owner = owner
        self.name = name
        self.docs_path = docs_path
        self._configured = list(versions)
        self._branches = list(branches)
        self._token = token
        self._api_base = api_base.rstrip("/") or DEFAULT_API_BASE
        self._work_dir = work_dir
        self._session = session
        self._client = client
        self.timeout = timeout
        self._headers = {
            "Accept": _ACCEPT_HEADER,
            "User-Agent": "docmirror/0.1",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._materialized: dict[str, Path] = {}
        self._unpacked: list[Path] = []

    @property
    def repo(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def work_dir(self) -> Path:
        """Return the directory that receives unpacked versions."""
        if self._work_dir is None:
            self._work_dir = Path(tempfile.mkdtemp(prefix="docmirror-"))
        return self._work_dir

    def _github(self) -> GitHub:
        """Return a cached github3.py client."""
        if self._client is None:
            self._client = GitHub(token=self._token)
        return self._client

    def _http(self) -> requests.Session:
        if self._session is None:
            self._session = _retrying_session()
        return self._session

    def versions(self) -> list[Version]:
        """Return configured refs, or every tag naturally sorted, then branches."""
        if self._configured:
            names = list(self._configured)
        else:
            names = sorted(self._tag_names(), key=version_sort_key)
        names.extend(branch for branch in self._branches if branch not in names)
        return ordered_versions(names)

    def _tag_names(self) -> list[str]:
        try:
            repository = self._github().repository(self.owner, self.name)
            if repository is None:
                msg = f"GitHub repository '{self.repo}' was not found."
                raise LoaderError(msg)
            names = [tag.name for tag in repository.tags()]
        except gh_exc.GitHubException as exc:
            msg = f"Failed to list tags for '{self.repo}': {exc}"
            raise LoaderError(msg) from exc
        logger.info("Found %d tags for %s", len(names), self.repo)
        return names

    def doc_by_version(self, version: Version) -> Path:
        """Download and unpack ``version``, returning the repository root.

        Each version is fetched once per loader; later calls reuse the
        unpacked tree.

        Raises
        ------
        LoaderError
            When the tarball cannot be downloaded or unpacked.
        """
        cached = self._materialized.get(version.name)
        if cached is not None:
            return cached

        destination = self.work_dir / version.slug
        recursive_delete(destination)
        force_create_path(destination)
        self._unpacked.append(destination)
        archive = self.work_dir / f"{version.slug}.tar.gz"
        self._download(version.name, archive)
        root = _extract(archive, destination)
        archive.unlink(missing_ok=True)
        self._materialized[version.name] = root
        logger.info("Unpacked %s %s into %s", self.repo, version.name, root)
        return root

    def _download(self, ref: str, archive: Path) -> None:
        url = f"{self._api_base}/repos/{self.repo}/tarball/{ref}"
        try:
            response = self._http().get(
                url, headers=self._headers, timeout=self.timeout, stream=True
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach GitHub for '{self.repo}@{ref}': {exc}"
            raise LoaderError(msg) from exc

        if response.status_code == HTTPStatus.NOT_FOUND:
            msg = f"Version '{ref}' of '{self.repo}' was not found."
            raise LoaderError(msg)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            msg = (
                f"Download of '{self.repo}@{ref}' failed with "
                f"status {response.status_code}"
            )
            raise LoaderError(msg)

        force_create_path(archive.parent)
        try:
            with archive.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    handle.write(chunk)
        except requests.RequestException as exc:
            msg = f"Download of '{self.repo}@{ref}' was interrupted: {exc}"
            raise LoaderError(msg) from exc
        finally:
            response.close()

    def system_path_modifier(self) -> str:
        """Return the docs directory inside each unpacked repository."""
        return self.docs_path

    def cleanup(self) -> None:
        """Remove every unpacked version."""
        for destination in self._unpacked:
            recursive_delete(destination)
        self._unpacked.clear()
        self._materialized.clear()


def _extract(archive: Path, destination: Path) -> Path:
    """Unpack ``archive`` and return the single top-level directory inside it."""
    try:
        with tarfile.open(archive, "r:*") as bundle:
            tops = {
                member.name.split("/", 1)[0]
                for member in bundle.getmembers()
                if member.name.strip("/")
            }
            bundle.extractall(destination, filter="data")
    except (tarfile.TarError, OSError) as exc:
        msg = f"Failed to unpack '{archive}': {exc}"
        raise LoaderError(msg) from exc

    if len(tops) != 1:
        return destination
    return destination / tops.pop()


__all__ = ["DEFAULT_API_BASE", "GitHubLoader"]
