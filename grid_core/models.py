import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

UNKNOWN = "unknown"

GRID_D2PT = "d2pt"
GRID_HIGH_WINRATE = "high_winrate"
GRID_MOST_PLAYED = "most_played"
GRID_CUSTOM = "custom"

GRID_TYPES = (GRID_D2PT, GRID_HIGH_WINRATE, GRID_MOST_PLAYED, GRID_CUSTOM, UNKNOWN)

# Filename marker -> grid type, checked in this order.
# Catalog filenames look like:
#   dota2protracker_hero_grid_[marker]_config_[date]_p[major]_[minor].json
TYPE_MARKERS = (
    ("d2pt_rating", GRID_D2PT),
    ("high_winrate", GRID_HIGH_WINRATE),
    ("most_played", GRID_MOST_PLAYED),
)

CURRENT_GRID_NAME = "Current Grid"

_PATCH_PATTERN = re.compile(r"_p(\d+)_(\w+)\.json")


def extract_date(filename: str) -> str:
    """
    Returns the first underscore-delimited token starting with "20",
    or "unknown" when the filename carries no date.
    """
    for part in filename.split("_"):
        if part.startswith("20"):
            return part
    return UNKNOWN


def classify_grid_type(filename: str) -> str:
    """
    Returns the grid type named by the first marker found in the filename,
    or "unknown" if none is present.
    """
    for marker, grid_type in TYPE_MARKERS:
        if marker in filename:
            return grid_type
    return UNKNOWN


def extract_patch(filename: str) -> str:
    """
    "..._p7_39d.json" -> "7.39d". Returns "N/A" when there is no patch suffix.
    """
    match = _PATCH_PATTERN.search(filename)
    if not match:
        return "N/A"
    return f"{match.group(1)}.{match.group(2)}"


@dataclass(frozen=True)
class CatalogEntry:
    """
    A grid file published in the remote catalog.
    """
    name: str
    date: str
    download_url: str

    @classmethod
    def from_filename(cls, name: str, download_url: str) -> "CatalogEntry":
        return cls(name=name, date=extract_date(name), download_url=download_url)

    @property
    def grid_type(self) -> str:
        return classify_grid_type(self.name)

    @property
    def patch(self) -> str:
        return extract_patch(self.name)


class HashManifest(Mapping[str, str]):
    """
    Read-only snapshot of filename -> hex digest, as published in grid_hashes.txt.
    """

    def __init__(self, hashes: Optional[Mapping[str, str]] = None):
        self._hashes = MappingProxyType(dict(hashes or {}))

    def __getitem__(self, filename: str) -> str:
        return self._hashes[filename]

    def __iter__(self) -> Iterator[str]:
        return iter(self._hashes)

    def __len__(self) -> int:
        return len(self._hashes)

    def __repr__(self) -> str:
        return f"HashManifest({len(self)} entries)"


@dataclass(frozen=True)
class DetectedGrid:
    grid_type: str
    name: str
    date: str
    hash: str
    is_known: bool

    @classmethod
    def unclassified(cls, file_hash: str) -> "DetectedGrid":
        """
        Result for a local grid that has not been (or could not be) matched
        against the catalog. The digest is kept for diagnostics.
        """
        return cls(
            grid_type=UNKNOWN,
            name=CURRENT_GRID_NAME,
            date=UNKNOWN,
            hash=file_hash,
            is_known=False,
        )

    @property
    def display_name(self) -> str:
        if not self.is_known:
            return f"{self.name} (not in catalog)"
        return f"{self.name} [{self.grid_type}, {self.date}]"


@dataclass
class GridRelease:
    """
    All grids published on one date, one slot per grid type.
    """
    date: str
    patch: str
    grids: Dict[str, CatalogEntry] = field(default_factory=dict)

    @property
    def d2pt(self) -> Optional[CatalogEntry]:
        return self.grids.get(GRID_D2PT)

    @property
    def high_winrate(self) -> Optional[CatalogEntry]:
        return self.grids.get(GRID_HIGH_WINRATE)

    @property
    def most_played(self) -> Optional[CatalogEntry]:
        return self.grids.get(GRID_MOST_PLAYED)
