import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from grid_core.errors import ConfigAccessError
from grid_core.fingerprint import digest
from grid_core.models import (
    DetectedGrid,
    GRID_CUSTOM,
    UNKNOWN,
    classify_grid_type,
    extract_date,
)
from grid_core.steam_paths import GRID_CONFIG_FILENAME, SteamPathDetector

logger = logging.getLogger(__name__)


def classify(local_digest: str, manifest: Mapping[str, str]) -> Optional[DetectedGrid]:
    """
    Looks up a local digest in the catalog manifest.

    Entries are scanned in filename order, so when several catalog files share
    the same content the lexicographically smallest filename is reported.
    A match whose filename has no known type marker is reported as "custom".
    Returns None when nothing in the manifest matches.
    """
    wanted = local_digest.strip().lower()
    for filename in sorted(manifest):
        if manifest[filename].strip().lower() != wanted:
            continue

        grid_type = classify_grid_type(filename)
        if grid_type == UNKNOWN:
            grid_type = GRID_CUSTOM

        return DetectedGrid(
            grid_type=grid_type,
            name=filename,
            date=extract_date(filename),
            hash=local_digest,
            is_known=True,
        )
    return None


def detect_current_grid(
    config_path: Union[str, Path, None] = None,
    steam_path_override: str = "",
) -> Optional[DetectedGrid]:
    """
    Fingerprints the active hero grid file.

    config_path is the Dota 2 cfg directory; when omitted it is discovered.
    Returns None if no cfg directory or grid file exists. The result is never
    classified here; pass its hash to classify() with a fetched manifest.
    """
    if config_path is None:
        cfg_dir = SteamPathDetector(settings_path=steam_path_override).resolve()
        if cfg_dir is None:
            return None
    else:
        cfg_dir = Path(config_path)

    grid_file = cfg_dir / GRID_CONFIG_FILENAME
    try:
        with open(grid_file, "rb") as f:
            content = f.read()
    except (FileNotFoundError, NotADirectoryError):
        logger.info(f"No hero grid file at {grid_file}")
        return None
    except OSError as e:
        raise ConfigAccessError(f"Failed to read grid file {grid_file}: {e}") from e

    file_hash = digest(content)
    logger.info(f"Current grid hash: {file_hash}")
    return DetectedGrid.unclassified(file_hash)


def detect_and_match(
    manifest: Mapping[str, str],
    config_path: Union[str, Path, None] = None,
    steam_path_override: str = "",
) -> Optional[DetectedGrid]:
    """
    detect_current_grid() followed by classify().
    An unmatched grid is still returned, unclassified, with its hash.
    """
    current = detect_current_grid(config_path, steam_path_override)
    if current is None:
        return None

    matched = classify(current.hash, manifest)
    if matched is None:
        logger.info("Current grid does not match any catalog entry")
        return current

    logger.info(f"Current grid matches {matched.name}")
    return matched
