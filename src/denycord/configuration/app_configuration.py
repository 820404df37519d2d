from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List
import yaml

from denycord.denylist.exemptions import Exemption, build_exemptions
from denycord.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml")
DEFAULT_SETUP_RETRY_SECONDS = 30.0


class AppConfig:
    """Accessor around the YAML application configuration.

    The file is read once on construction and can be re-read with :meth:`reload`.
    A missing or malformed file yields an empty mapping, so every property falls
    back to its default.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = Path(config_path)
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning("[APP CONFIGURATION] Config file %s not found; using defaults.", self.config_path)
            return {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.error("[APP CONFIGURATION] Config %s is not a mapping; ignoring it.", self.config_path)
            return {}
        return data

    def _section(self, key: str) -> Dict[str, Any]:
        value = self._data.get(key)
        return value if isinstance(value, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Re-read the YAML file, replace the cached mapping and return it."""
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """The cached configuration mapping. Callers should not mutate it."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def denylist_path(self) -> Path | None:
        """Denylist file path from ``denylist_path``, resolved against the config file's directory."""
        value = self._data.get("denylist_path")
        if not value:
            return None
        path = Path(str(value)).expanduser()
        if not path.is_absolute():
            path = self.config_path.parent / path
        return path

    @property
    def setup_retry_seconds(self) -> float:
        """Seconds between watcher setup attempts. Zero disables retrying."""
        value = self._section("watcher").get("setup_retry_seconds", DEFAULT_SETUP_RETRY_SECONDS)
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid watcher.setup_retry_seconds %r; using default.", value)
            return DEFAULT_SETUP_RETRY_SECONDS

    @property
    def exemptions(self) -> List[Exemption]:
        """Exemptions built from the ``exemptions`` section."""
        try:
            return build_exemptions(self._section("exemptions"))
        except (TypeError, ValueError) as exc:
            logger.error("[APP CONFIGURATION] Invalid exemptions section: %s", exc)
            return []
