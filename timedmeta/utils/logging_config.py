import sys
from typing import Optional
from loguru import logger


class LoggerManager:
    def __init__(self):
        self.console_sink_id = None
        self.file_sink_id = None
        self.level = "INFO"
        self.serialize = False

        # Always remove the default handler
        logger.remove()

    def enable_console(self):
        if self.console_sink_id is None:
            self.console_sink_id = logger.add(
                sys.stdout,
                level=self.level,
                colorize=not self.serialize,
                serialize=self.serialize,
            )

    def disable_console(self):
        if self.console_sink_id is not None:
            logger.remove(self.console_sink_id)
            self.console_sink_id = None

    def enable_file(self, log_file: str, rotation: str = "10 MB", retention_days: int = 7):
        if self.file_sink_id is None:
            self.file_sink_id = logger.add(
                log_file,
                level=self.level,
                rotation=rotation,
                retention=f"{retention_days} days",
                serialize=self.serialize,
                enqueue=True,
            )

    def disable_file(self):
        if self.file_sink_id is not None:
            logger.remove(self.file_sink_id)
            self.file_sink_id = None

    def get_logger(self):
        return logger


log_manager = LoggerManager()


def configure_logging(config: Optional["LoggingConfig"] = None):
    """
    Apply a LoggingConfig to the shared loguru sinks.

    Sinks already registered are replaced so the call can be repeated
    (e.g. once per handler invocation) without duplicating output.
    """
    if config is None:
        from ..config.settings import LoggingConfig
        config = LoggingConfig()

    log_manager.disable_console()
    log_manager.disable_file()
    log_manager.level = config.level.upper()
    log_manager.serialize = config.enable_json
    log_manager.enable_console()

    if config.enable_file_logging and config.log_file:
        log_manager.enable_file(
            config.log_file,
            rotation=config.max_file_size,
            retention_days=config.retention_days,
        )
    return log_manager.get_logger()
