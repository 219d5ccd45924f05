import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from rich.logging import RichHandler

LOGGER_NAME = "dfprop"
REDACTED = "[REDACTED]"

# password=... inside JDBC URLs and connection strings
URL_PASSWORD_PATTERN = re.compile(r"(?i)(password=)[^;&\s]+")

HUMAN_PREFIXES = {
    "DEBUG": "[DEBUG] ",
    "INFO": "",
    "WARNING": "[WARN] ",
    "ERROR": "[ERROR] ",
}


class StructuredLogger:
    """Logger with human-readable (rich) or JSON-line output.

    Keyword context is rendered as ``key=value`` pairs, or merged into the JSON
    entry when structured. Registered secrets and ``password=`` URL parameters
    are replaced with ``[REDACTED]`` in messages and string context values.
    """

    def __init__(self, structured: bool = False, level: str = "INFO"):
        self._secrets = set()
        self.reconfigure(structured, level)

    def reconfigure(self, structured: bool, level: str):
        """Switch output mode and level, replacing the handler."""
        self.structured = structured
        self.level = getattr(logging, level.upper(), logging.INFO)

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(self.level)
        self.logger.propagate = False
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        if structured:
            handler = logging.StreamHandler(sys.stdout)
        else:
            handler = RichHandler(rich_tracebacks=True, markup=False, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        self.logger.addHandler(handler)

    def register_secret(self, secret: str):
        """Register a secret string to be redacted from logs."""
        if secret and isinstance(secret, str) and secret.strip():
            self._secrets.add(secret)

    def _redact(self, text: str) -> str:
        if not text:
            return text
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return URL_PASSWORD_PATTERN.sub(r"\1" + REDACTED, text)

    def info(self, message: str, **kwargs):
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log("ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs):
        self._log("DEBUG", message, **kwargs)

    def _log(self, level: str, message: str, **kwargs):
        level_val = getattr(logging, level, logging.INFO)
        if level_val < self.level:
            return

        message = self._redact(str(message))
        context: Dict[str, Any] = {
            key: self._redact(value) if isinstance(value, str) else value
            for key, value in kwargs.items()
        }

        if self.structured:
            entry = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": level,
                "message": message,
                **context,
            }
            self.logger.log(level_val, json.dumps(entry, default=str))
            return

        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            message = f"{message} ({pairs})"
        self.logger.log(level_val, HUMAN_PREFIXES[level] + message)


# Global instance, reconfigured by configure_logging()
logger = StructuredLogger()


def configure_logging(structured: bool, level: str):
    """Configure the global logger in place so imported references stay valid."""
    logger.reconfigure(structured, level)
