"""Best-effort check for a newer published version.

The checker fetches the latest version string of a resource (by default
from the SpigotMC legacy API, which answers with the bare version as plain
text) and compares it case-insensitively with the running version. Network
and decoding failures are logged and reported as "no result"; they never
propagate to the caller.

Usage:
    from albatross.update import UpdateChecker

    checker = UpdateChecker("https://www.spigotmc.org/resources/13540/", 13540, "1.2.0")
    checker.check_for_updates()          # background thread, logs the outcome
    result = checker.check()             # synchronous, UpdateCheckResult | None
"""

from __future__ import annotations

import logging
import threading
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass

from albatross.core.constants import DEFAULT_UPDATE_API_URL, FILE_ENCODING, UPDATE_CHECK_TIMEOUT
from albatross.core.exceptions import UpdateCheckError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateCheckResult:
    """Outcome of a successful update check.

    Attributes:
        current_version: Version of the running software.
        latest_version: Version reported by the remote endpoint.
        download_url: Where the latest version can be downloaded.

    """

    current_version: str
    latest_version: str
    download_url: str

    @property
    def update_available(self) -> bool:
        """True when the remote version differs from the running one (case-insensitive)."""
        return self.current_version.casefold() != self.latest_version.casefold()


class UpdateChecker:
    """Compare the running version against the latest published version.

    Attributes:
        download_url: Listing where users can download the software.
        resource_id: Identifier of the resource on the remote service.
        current_version: Version of the running software.
        api_url: Version endpoint; ``{resource_id}`` is substituted.
        timeout: Request timeout in seconds.

    """

    def __init__(
        self,
        download_url: str,
        resource_id: int,
        current_version: str,
        *,
        api_url: str = DEFAULT_UPDATE_API_URL,
        timeout: float = UPDATE_CHECK_TIMEOUT,
    ) -> None:
        """Initialize UpdateChecker.

        Args:
            download_url: Listing where users can download the software.
            resource_id: Identifier of the resource on the remote service.
            current_version: Version of the running software.
            api_url: Version endpoint template.
            timeout: Request timeout in seconds.

        """
        self.download_url = download_url
        self.resource_id = resource_id
        self.current_version = current_version
        self.api_url = api_url
        self.timeout = timeout

    @property
    def version_url(self) -> str:
        """Endpoint queried for the latest version."""
        return self.api_url.format(resource_id=self.resource_id)

    def fetch_latest_version(self) -> str:
        """Fetch the latest version string from the remote endpoint.

        Returns:
            First whitespace-separated token of the response body.

        Raises:
            UpdateCheckError: If the request fails or the body is empty.

        """
        url = self.version_url
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                body = response.read().decode(FILE_ENCODING, errors="replace")
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise UpdateCheckError(f"Unable to check for updates: {e}") from e

        tokens = body.split()
        if not tokens:
            raise UpdateCheckError(f"Empty version response from {url}")
        return tokens[0]

    def check(self) -> UpdateCheckResult | None:
        """Run the update check synchronously.

        Returns:
            The result, or None if the check failed (the failure is logged).

        """
        logger.info("Checking for updates...")
        try:
            latest = self.fetch_latest_version()
        except UpdateCheckError as e:
            logger.info("%s", e)
            return None

        result = UpdateCheckResult(
            current_version=self.current_version,
            latest_version=latest,
            download_url=self.download_url,
        )
        if result.update_available:
            logger.info("There is an update available! Download it at %s", self.download_url)
        else:
            logger.info("You are already running the latest version.")
        return result

    def check_for_updates(
        self,
        callback: Callable[[UpdateCheckResult], None] | None = None,
    ) -> threading.Thread:
        """Run the update check on a daemon thread.

        Args:
            callback: Called with the result if the check succeeds. Exceptions
                raised by the callback are logged.

        Returns:
            The started thread; join() it to wait for the outcome.

        """

        def _run() -> None:
            result = self.check()
            if result is None or callback is None:
                return
            try:
                callback(result)
            except Exception:
                logger.exception("Update check callback failed")

        thread = threading.Thread(target=_run, name="albatross-update-check", daemon=True)
        thread.start()
        return thread
