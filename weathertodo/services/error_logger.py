"""Error log file for weathertodo.

Errors caught by the task service are appended to a local text file. The
upload step is a stand-in for shipping the file to a collection server: it
reads the file, pretends to send it, and truncates it.
"""

import logging
import time
import traceback
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = "error_log.txt"


def format_error(error: BaseException) -> str:
    """Render an exception with its traceback (and chained causes)."""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()


class ErrorLogger:
    """Append-only error log with a simulated upload."""

    def __init__(
        self,
        log_path: Union[str, Path] = DEFAULT_LOG_PATH,
        upload_delay_sec: float = 0.0,
        output: Callable[[str], None] = print,
    ):
        self.log_path = Path(log_path)
        self.upload_delay_sec = upload_delay_sec
        self.output = output

    def log_error(self, message: str, error: Optional[BaseException] = None) -> None:
        """Append one timestamped record for message and error."""
        detail = format_error(error) if error is not None else ""
        record = f"{datetime.now().isoformat(sep=' ', timespec='seconds')}: {message}\n{detail}\n"
        logger.error(f"{message}: {error}" if error is not None else message)
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as fh:
                fh.write(record)
        except OSError as e:
            logger.warning(f"Could not write error log {self.log_path}: {type(e).__name__}: {e}")

    def upload_logs(self) -> bool:
        """Upload and clear the log file.

        Returns:
            True if there was content and it was uploaded, False otherwise.
            Failures are reported on the console and never raised.
        """
        if not self.log_path.exists():
            return False
        try:
            content = self.log_path.read_text(encoding="utf-8")
            if not content:
                return False
            self._send_logs_to_server(content)
            self.log_path.write_text("", encoding="utf-8")
            return True
        except OSError as e:
            logger.warning(f"Log upload failed: {type(e).__name__}: {e}")
            self.output(f"Failed to upload logs: {e}")
            return False

    def _send_logs_to_server(self, content: str) -> None:
        # No collection server exists yet; only the network delay is simulated.
        if self.upload_delay_sec > 0:
            time.sleep(self.upload_delay_sec)
        logger.info(f"Uploaded {len(content)} bytes of error logs")
        self.output("Logs uploaded to server successfully.")
