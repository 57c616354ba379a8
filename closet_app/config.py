"""Configuration helpers for the closet harmony service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from logic.color_harmony import (
    ANALOGOUS_THRESHOLD,
    COMPLEMENTARY_THRESHOLD,
    MONOCHROMATIC_THRESHOLD,
    HarmonyThresholds,
)

DEFAULT_DB_PATH = "data/closet.db"


@dataclass
class ClosetConfig:
    """Configuration values for the closet service.

    Everything the service needs is carried here and handed to the app
    explicitly; nothing reads process-wide state after startup.
    """

    closet_db_path: str = DEFAULT_DB_PATH
    log_level: str = "INFO"
    monochromatic_threshold: float = MONOCHROMATIC_THRESHOLD
    complementary_threshold: float = COMPLEMENTARY_THRESHOLD
    analogous_threshold: float = ANALOGOUS_THRESHOLD
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str | None = None

    @property
    def harmony_thresholds(self) -> HarmonyThresholds:
        return HarmonyThresholds(
            monochromatic=self.monochromatic_threshold,
            complementary=self.complementary_threshold,
            analogous=self.analogous_threshold,
        )

    @classmethod
    def from_env(cls) -> "ClosetConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific files live in ``config/environments/<env>.yaml`` by
        default and are merged with environment variables, which take precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("CLOSET_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        def get_float(key: str, default: float) -> float:
            raw = get_value(key)
            return float(raw) if raw else default

        port = get_value("port", "8080")

        return cls(
            closet_db_path=str(get_value("closet_db_path") or DEFAULT_DB_PATH),
            log_level=str(get_value("log_level") or "INFO"),
            monochromatic_threshold=get_float("monochromatic_threshold", MONOCHROMATIC_THRESHOLD),
            complementary_threshold=get_float("complementary_threshold", COMPLEMENTARY_THRESHOLD),
            analogous_threshold=get_float("analogous_threshold", ANALOGOUS_THRESHOLD),
            host=str(get_value("host") or "0.0.0.0"),
            port=int(port or 8080),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
