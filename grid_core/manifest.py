import logging
from pathlib import Path
from typing import Dict, Mapping

from grid_core.fingerprint import digest_file
from grid_core.models import HashManifest

logger = logging.getLogger(__name__)

GRID_FILE_SUFFIX = ".json"


def parse_hash_manifest(text: str) -> HashManifest:
    """
    Parses grid_hashes.txt content.
    Format: one "filename,digest" pair per line, split on the first comma.
    Blank lines and lines without a comma are skipped.
    """
    hashes: Dict[str, str] = {}
    skipped = 0

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        filename, sep, file_hash = line.partition(",")
        if not sep:
            skipped += 1
            logger.debug(f"Skipping malformed manifest line: {line!r}")
            continue

        hashes[filename.strip()] = file_hash.strip()

    if skipped:
        logger.warning(f"Ignored {skipped} malformed line(s) in hash manifest")

    return HashManifest(hashes)


def build_hash_manifest(grids_folder: Path) -> HashManifest:
    """
    Digests every grid file in a local folder.
    This is how the published grid_hashes.txt is produced.
    """
    hashes = {}
    for file in sorted(grids_folder.glob(f"*{GRID_FILE_SUFFIX}")):
        if not file.is_file():
            continue
        hashes[file.name] = digest_file(file)
        logger.info(f"Processed: {file.name} -> {hashes[file.name]}")
    return HashManifest(hashes)


def format_hash_manifest(manifest: Mapping[str, str]) -> str:
    if not manifest:
        return ""
    lines = [f"{name},{manifest[name]}" for name in sorted(manifest)]
    return "\n".join(lines) + "\n"


def write_hash_manifest(manifest: Mapping[str, str], file_path: Path):
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(format_hash_manifest(manifest))
