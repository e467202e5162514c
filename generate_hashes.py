import sys
import os
import logging
from pathlib import Path

# Add project root to path
sys.path.append(os.getcwd())

from grid_core.manifest import build_hash_manifest, write_hash_manifest

GRIDS_FOLDER = Path("grids")
HASHES_FILE = Path("grid_hashes.txt")

def main(argv=None):
    """
    Regenerates grid_hashes.txt from the grid files in ./grids.
    Usage: generate_hashes.py [grids_folder] [output_file]
    """
    args = sys.argv[1:] if argv is None else argv
    grids_folder = Path(args[0]) if len(args) > 0 else GRIDS_FOLDER
    hashes_file = Path(args[1]) if len(args) > 1 else HASHES_FILE

    print("Generating MD5 hashes for grid files...")
    if not grids_folder.is_dir():
        print(f"Grids folder not found: {grids_folder}")
        return 1

    manifest = build_hash_manifest(grids_folder)
    if not manifest:
        print(f"No .json files found in {grids_folder}.")
        return 0

    write_hash_manifest(manifest, hashes_file)
    print(f"Generated {hashes_file} with {len(manifest)} entries.")
    return 0

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(message)s')
    sys.exit(main())
