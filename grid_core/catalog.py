import logging
from typing import Dict, Iterable, List, Optional

import requests

from grid_core.errors import CatalogUnavailable
from grid_core.manifest import GRID_FILE_SUFFIX, parse_hash_manifest
from grid_core.models import CatalogEntry, GridRelease, HashManifest, UNKNOWN

logger = logging.getLogger(__name__)

LISTING_URL = "https://api.github.com/repos/abnersajr/d2pt-grid-updater/contents/grids"
MANIFEST_URL = "https://raw.githubusercontent.com/abnersajr/d2pt-grid-updater/main/grid_hashes.txt"

DEFAULT_TIMEOUT = 10.0


class CatalogClient:
    """
    Reads the published grid catalog: the grids/ folder listing and grid_hashes.txt.
    Both calls are read-only and safe to retry.
    """

    HEADERS = {
        "User-Agent": "d2pt-grid-updater-app"
    }

    def __init__(
        self,
        listing_url: str = LISTING_URL,
        manifest_url: str = MANIFEST_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.listing_url = listing_url
        self.manifest_url = manifest_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, url: str, what: str) -> requests.Response:
        logger.info(f"Fetching {what}: {url}")
        try:
            response = self.session.get(url, headers=self.HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching {what}: {e}")
            raise CatalogUnavailable(f"Failed to fetch {what}: {e}") from e

        if not response.ok:
            logger.warning(f"Failed to fetch {what} (Status: {response.status_code})")
            raise CatalogUnavailable(
                f"Failed to fetch {what}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def list_grids(self) -> List[CatalogEntry]:
        """
        Returns every published grid file that has a download URL.
        """
        response = self._get(self.listing_url, "grid listing")
        try:
            contents = response.json()
        except ValueError as e:
            raise CatalogUnavailable(f"Grid listing is not valid JSON: {e}") from e

        if not isinstance(contents, list):
            raise CatalogUnavailable("Grid listing has an unexpected shape")

        grids = []
        for item in contents:
            if not isinstance(item, dict):
                continue
            name = item.get("name")
            download_url = item.get("download_url")
            if not isinstance(name, str) or not name.endswith(GRID_FILE_SUFFIX):
                continue
            if not download_url:
                continue
            grids.append(CatalogEntry.from_filename(name, download_url))

        logger.info(f"Catalog lists {len(grids)} grids")
        return grids

    def fetch_hash_manifest(self) -> HashManifest:
        response = self._get(self.manifest_url, "grid hashes")
        manifest = parse_hash_manifest(response.text)
        logger.info(f"Loaded {len(manifest)} grid hashes")
        return manifest


def group_grids_by_date(grids: Iterable[CatalogEntry]) -> List[GridRelease]:
    """
    Groups catalog entries into releases, newest date first.
    The patch of a release is taken from the first file seen for that date.
    Entries without a recognised grid type are left out.
    """
    releases: Dict[str, GridRelease] = {}
    for grid in grids:
        release = releases.get(grid.date)
        if release is None:
            release = GridRelease(date=grid.date, patch=grid.patch)
            releases[grid.date] = release

        grid_type = grid.grid_type
        if grid_type != UNKNOWN:
            release.grids[grid_type] = grid

    # Undated releases go last
    return sorted(releases.values(), key=lambda r: (r.date != UNKNOWN, r.date), reverse=True)
