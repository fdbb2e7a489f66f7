"""Logging setup for the API process."""

import logging

_HANDLER_NAME = "employee_api"

# LogRecord extras surfaced by the line formatter when present
_EXTRA_FIELDS = ("status_code", "path")


class KeyValueFormatter(logging.Formatter):
    """Format records as single ``key=value`` lines for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"ts={self.formatTime(record, '%Y-%m-%dT%H:%M:%S%z')}",
            f"level={record.levelname}",
            f"logger={record.name}",
            f'msg="{record.getMessage()}"',
        ]
        for key in _EXTRA_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                parts.append(f"{key}={value}")
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "INFO", environment: str = "development") -> None:
    """Configure the root logger once.

    Calling it again replaces the handler installed by a previous call
    instead of adding a second one.
    """
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if environment == "development":
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
    else:
        handler.setFormatter(KeyValueFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
