"""Closet service bootstrap."""

import logging

from closet_app.config import ClosetConfig
from closet_app.logging_config import configure_logging, get_logger, log_event
from logic.color_harmony import ColorHarmonyEngine
from tools.closet_store import ClosetStore, SQLiteClosetStore
from tools.closet_tools import ClosetTools


LOGGER = get_logger(__name__)


class ClosetApp:
    """Wires together config, storage, the harmony engine and tools."""

    def __init__(self, config: ClosetConfig | None = None, store: ClosetStore | None = None) -> None:
        self.config = config or ClosetConfig.from_env()
        configure_logging(self.config.log_level)

        self.store = store or SQLiteClosetStore(self.config.closet_db_path)
        self.engine = ColorHarmonyEngine(thresholds=self.config.harmony_thresholds)
        self.tools = ClosetTools(store=self.store, engine=self.engine)

        log_event(
            LOGGER,
            logging.INFO,
            "closet_app_initialised",
            environment=self.config.environment or "local",
            database=str(self.config.closet_db_path),
            thresholds=vars(self.config.harmony_thresholds),
        )


__all__ = ["ClosetApp"]
