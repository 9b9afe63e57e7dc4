from typing import NotRequired, Optional, TypedDict
import logging
from noxml.utils import resolve_config

ROOT_LOGGER = "noxml"


class LoggerConfig(TypedDict):
    level: NotRequired[int]
    format: NotRequired[str]


class LoggerConfigRequired(TypedDict):
    level: int
    format: str


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "level": logging.DEBUG,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class StageLogger(logging.LoggerAdapter):
    """Adapter gated by its own flag; the shared ``noxml.<stage>`` logger is never disabled."""

    def __init__(self, logger: logging.Logger, is_enabled: bool):
        super().__init__(logger, {})
        self.is_enabled = is_enabled

    def isEnabledFor(self, level: int) -> bool:
        return self.is_enabled and self.logger.isEnabledFor(level)


class Logger:
    """Logger for one pipeline stage (``noxml.<stage>``); silent unless enabled."""

    def __init__(self, stage: str, is_enabled: bool = False, config: Optional[LoggerConfig] = None):
        self.config = resolve_config(config, DEFAULT_LOGGER_CONFIG)
        stage_logger = logging.getLogger(f"{ROOT_LOGGER}.{stage}")
        self.logger = StageLogger(stage_logger, is_enabled)
        if is_enabled:
            if stage_logger.level == logging.NOTSET or stage_logger.level > self.config["level"]:
                stage_logger.setLevel(self.config["level"])
            self._attach_handler()

    def _attach_handler(self) -> None:
        # stage loggers propagate to the namespace logger, which owns the only handler
        root = logging.getLogger(ROOT_LOGGER)
        if root.handlers:
            return
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(self.config["format"]))
        root.addHandler(handler)
