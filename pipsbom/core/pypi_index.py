"""PyPI checksum lookup.

Fetches a package's JSON document from the PyPI JSON API and picks the
sha256 digest of the release file that best matches what is installed
locally::

    from pipsbom.utils.http import HTTPClient
    from pipsbom.core.pypi_index import PyPIChecksumIndex

    with HTTPClient() as client:
        index = PyPIChecksumIndex(client)
        record = index.lookup("requests", "", True, "py3-none-any")
        print(record.value)

Release file selection, in order:

1. with a usable build tag, the ``bdist_wheel`` whose filename contains it;
2. the ``sdist``;
3. any file that carries a sha256 digest.

Lookups are best-effort: a failed fetch is logged and yields an empty
:class:`ChecksumRecord` so that one package never stops an analysis run.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pipsbom.utils.http import HTTPClient
from pipsbom.utils.logger import get_logger
from pipsbom.models import ChecksumRecord
from pipsbom.exceptions import NetworkError
from pipsbom.constants import CHECKSUM_ALGORITHM, PYPI_JSON_API

logger = get_logger("core.pypi_index")

__all__ = ["PyPIChecksumIndex"]


class PyPIChecksumIndex:
    """Checksum lookups against the PyPI JSON API.

    Instances are callable with the same arguments as :meth:`lookup`, so
    one can be handed directly to
    :func:`pipsbom.core.checksum.get_package_checksum`.

    Args:
        http_client: Client used for every request (owns the connection
            pool).
        url_template: JSON endpoint used when a lookup passes no explicit
            URL; ``{package}`` is replaced with the package name.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        url_template: str = PYPI_JSON_API,
    ) -> None:
        self.http_client = http_client
        self.url_template = url_template
        self._documents: Dict[str, Dict[str, Any]] = {}

    def __call__(
        self,
        package_name: str,
        package_json_url: str,
        use_tag: bool,
        wheel_tag: str,
    ) -> ChecksumRecord:
        return self.lookup(package_name, package_json_url, use_tag, wheel_tag)

    def lookup(
        self,
        package_name: str,
        package_json_url: str,
        use_tag: bool,
        wheel_tag: str,
    ) -> ChecksumRecord:
        """Resolve the checksum of ``package_name``.

        Args:
            package_name: Distribution name.
            package_json_url: JSON endpoint for the package; falls back to
                :attr:`url_template` when empty.
            use_tag: Whether ``wheel_tag`` should select a wheel file.
            wheel_tag: Build tag of the locally installed wheel.

        Returns:
            The selected digest, or an empty record when none is available.
        """
        url = package_json_url or self.url_template.format(package=package_name)

        try:
            document = self._fetch(url)
        except NetworkError as exc:
            logger.warning("Checksum lookup failed for %s: %s", package_name, exc)
            return ChecksumRecord(CHECKSUM_ALGORITHM, "")

        files = _release_files(document)
        chosen = select_release_file(files, wheel_tag if use_tag else None)
        if chosen is None:
            logger.info("No digest published for %s", package_name)
            return ChecksumRecord(CHECKSUM_ALGORITHM, "")

        logger.debug("Checksum for %s taken from %s", package_name, chosen.get("filename"))
        return ChecksumRecord(CHECKSUM_ALGORITHM, _sha256(chosen))

    def _fetch(self, url: str) -> Dict[str, Any]:
        """Return the JSON document at ``url``, fetching it at most once."""
        if url not in self._documents:
            self._documents[url] = self.http_client.get_json(url)
        return self._documents[url]


def select_release_file(
    files: List[Dict[str, Any]],
    wheel_tag: Optional[str],
) -> Optional[Dict[str, Any]]:
    """Pick the release file whose digest represents the installed package.

    Files without a sha256 digest are never selected.
    """
    with_digest = [f for f in files if _sha256(f)]

    if wheel_tag:
        for file_info in with_digest:
            if file_info.get("packagetype") == "bdist_wheel" and wheel_tag in str(
                file_info.get("filename", "")
            ):
                return file_info
        logger.debug("No wheel matches tag %s", wheel_tag)

    for file_info in with_digest:
        if file_info.get("packagetype") == "sdist":
            return file_info

    return with_digest[0] if with_digest else None


def _release_files(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    files = document.get("urls") or []
    return [f for f in files if isinstance(f, dict)]


def _sha256(file_info: Dict[str, Any]) -> str:
    digests = file_info.get("digests") or {}
    return str(digests.get("sha256") or "")
