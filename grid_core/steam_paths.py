import logging
import platform
import stat
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from grid_core.errors import ConfigAccessError

# Try to import winreg for Windows registry access
try:
    import winreg
except ImportError:
    winreg = None

logger = logging.getLogger(__name__)

DOTA_APP_ID = "570"
GRID_CONFIG_FILENAME = "hero_grid_config.json"


def _is_dir(path: Path) -> bool:
    """
    True if path is an existing directory. Missing paths are False;
    any other OS error (permissions, I/O) raises ConfigAccessError.
    """
    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise ConfigAccessError(f"Cannot access {path}: {e}") from e
    return stat.S_ISDIR(mode)


class WindowsRegistryStrategy:
    """
    Reads the Steam install path from the registry.
    Machine-wide key first, then the per-user key.
    """

    # (hive name, subkey, value names tried in order)
    LOOKUPS = (
        ("HKEY_LOCAL_MACHINE", r"SOFTWARE\Wow6432Node\Valve\Steam", ("InstallPath",)),
        ("HKEY_CURRENT_USER", r"Software\Valve\Steam", ("SteamPath", "InstallPath")),
    )

    def __init__(self, registry=None):
        self.registry = registry if registry is not None else winreg

    def find_install_root(self) -> Optional[Path]:
        if self.registry is None:
            return None

        for hive_name, subkey, value_names in self.LOOKUPS:
            hive = getattr(self.registry, hive_name)
            try:
                with self.registry.OpenKey(hive, subkey) as key:
                    for value_name in value_names:
                        try:
                            val, _ = self.registry.QueryValueEx(key, value_name)
                        except OSError:
                            continue
                        # Registry paths often use forward slashes or backslashes
                        reg_path = Path(val)
                        if _is_dir(reg_path):
                            return reg_path
            except OSError:
                logger.debug(f"Registry key not found: {hive_name}\\{subkey}")

        return None


class DirectoryScanStrategy:
    """
    Checks conventional Steam locations in order; the first existing one wins.
    """

    def __init__(self, candidates: Iterable[Path]):
        self.candidates = list(candidates)

    def find_install_root(self) -> Optional[Path]:
        for path in self.candidates:
            if _is_dir(path):
                return path
        return None


class OverrideStrategy:
    """
    User-supplied Steam path from the settings.
    """

    def __init__(self, path: str):
        self.path = path

    def find_install_root(self) -> Optional[Path]:
        if not self.path:
            return None
        path = Path(self.path)
        if _is_dir(path):
            return path
        logger.warning(f"Configured Steam path does not exist: {path}")
        return None


def default_strategies(system: Optional[str] = None, home: Optional[Path] = None) -> list:
    """
    Returns the install-root strategies for the running OS.
    """
    system = system or platform.system()
    user_home = home or Path.home()

    if system == "Windows":
        return [
            WindowsRegistryStrategy(),
            DirectoryScanStrategy([
                Path("C:/Program Files (x86)/Steam"),
                Path("C:/Program Files/Steam"),
            ]),
        ]

    # Linux, macOS (Darwin) and anything else share the home-relative layout
    return [
        DirectoryScanStrategy([
            user_home / ".steam" / "steam",
            user_home / ".local" / "share" / "Steam",
            user_home / "Library" / "Application Support" / "Steam",
        ])
    ]


class SteamPathDetector:
    """
    Detects the Steam installation and the Dota 2 cfg directory of the
    most recently active account.
    """

    def __init__(self, strategies: Optional[list] = None, settings_path: str = ""):
        if strategies is None:
            strategies = default_strategies()
        self.strategies = [OverrideStrategy(settings_path)] + list(strategies)

    def get_steam_install_path(self) -> Optional[Path]:
        """
        Returns the first install root any strategy yields.
        """
        for strategy in self.strategies:
            path = strategy.find_install_root()
            if path is not None:
                logger.debug(f"Steam root found by {type(strategy).__name__}: {path}")
                return path
        return None

    @staticmethod
    def get_userdata_path(steam_root: Path) -> Optional[Path]:
        userdata = steam_root / "userdata"
        if _is_dir(userdata):
            return userdata
        return None

    @staticmethod
    def get_dota_cfg_paths(userdata_path: Path) -> List[Path]:
        """
        Returns every existing '<account>/570/remote/cfg' directory, sorted by account.
        """
        try:
            user_dirs = sorted(userdata_path.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise ConfigAccessError(f"Cannot read Steam userdata at {userdata_path}: {e}") from e

        cfg_paths = []
        for user_dir in user_dirs:
            if not _is_dir(user_dir):
                continue
            cfg_dir = user_dir / DOTA_APP_ID / "remote" / "cfg"
            if _is_dir(cfg_dir):
                cfg_paths.append(cfg_dir)
        return cfg_paths

    @staticmethod
    def pick_latest_cfg(cfg_paths: List[Path]) -> Optional[Path]:
        """
        Picks the cfg directory whose hero grid file was modified most recently.
        Directories without the file are only used if no account has one.
        Ties go to the first directory in the given order.
        """
        latest: Optional[Tuple[float, Path]] = None
        fallback: Optional[Path] = None

        for cfg_dir in cfg_paths:
            grid_file = cfg_dir / GRID_CONFIG_FILENAME
            try:
                mtime = grid_file.stat().st_mtime
            except FileNotFoundError:
                if fallback is None:
                    fallback = cfg_dir
                continue
            except OSError as e:
                raise ConfigAccessError(f"Cannot stat {grid_file}: {e}") from e

            if latest is None or mtime > latest[0]:
                latest = (mtime, cfg_dir)

        if latest is not None:
            return latest[1]
        return fallback

    def resolve(self) -> Optional[Path]:
        """
        Returns the Dota 2 cfg directory to read the hero grid from, or None.
        Raises ConfigAccessError only for permission/I/O failures.
        """
        steam_root = self.get_steam_install_path()
        if steam_root is None:
            logger.info("Steam installation not found")
            return None

        userdata = self.get_userdata_path(steam_root)
        if userdata is None:
            logger.info(f"No userdata directory under {steam_root}")
            return None

        cfg_dir = self.pick_latest_cfg(self.get_dota_cfg_paths(userdata))
        if cfg_dir is None:
            logger.info(f"No Dota 2 cfg directory found in {userdata}")
        else:
            logger.info(f"Using Dota 2 cfg directory: {cfg_dir}")
        return cfg_dir


def find_dota_config_path(steam_path_override: str = "") -> Optional[Path]:
    return SteamPathDetector(settings_path=steam_path_override).resolve()
