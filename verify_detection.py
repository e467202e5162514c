import sys
import os
import logging

# Add project root to path
sys.path.append(os.getcwd())

from grid_core.catalog import CatalogClient
from grid_core.errors import GridDetectorError
from grid_core.matcher import classify, detect_current_grid
from grid_core.settings import SettingsManager
from grid_core.steam_paths import SteamPathDetector

def verify_detection():
    print("--- Verifying Grid Detection Logic ---")

    # 1. Load Settings
    settings = SettingsManager()
    print(f"Settings 'steam_path': '{settings.steam_path}'")

    # 2. Resolve Paths
    detector = SteamPathDetector(settings_path=settings.steam_path)
    steam_root = detector.get_steam_install_path()
    print(f"Detected Steam Path: {steam_root}")

    cfg_dir = detector.resolve()
    if cfg_dir is None:
        print("ERROR: Dota 2 cfg directory not found.")
        return
    print(f"Dota 2 cfg directory: {cfg_dir}")

    # 3. Fingerprint current grid
    current = detect_current_grid(cfg_dir)
    if current is None:
        print("No hero_grid_config.json in cfg directory.")
        return
    print(f"Current grid MD5: {current.hash}")

    # 4. Match against catalog
    client = CatalogClient(timeout=settings.request_timeout)
    manifest = client.fetch_hash_manifest()
    print(f"Catalog manifest has {len(manifest)} entries.")

    matched = classify(current.hash, manifest)
    if matched:
        print(f"Matched: {matched.name} (type={matched.grid_type}, date={matched.date})")
    else:
        print("Current grid is not in the catalog (custom or outdated).")

    print("\n--- Verification Complete ---")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        verify_detection()
    except GridDetectorError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
