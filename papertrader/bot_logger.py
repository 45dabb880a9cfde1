"""
Centralized logging for paper trading sessions.
Writes to log files and, optionally, to the web interface.
"""

import os
from datetime import datetime
from typing import Optional, Callable


class BotLogger:
    """
    Logger that writes to both file and web interface.

    Main log: session lifecycle and trades.
    Stream log: price ticks and indicator values.
    """

    def __init__(
        self,
        session_id: int = 1,
        log_dir: Optional[str] = 'logs',
        web_logger: Optional[Callable[[str], None]] = None,
        echo: bool = False
    ):
        """
        Initialize logger for a specific session.

        Args:
            session_id: Session number (default: 1)
            log_dir: Directory for log files, None to skip files
            web_logger: Optional callback function for web interface logging
            echo: Also print each message to stdout
        """
        self.session_id = session_id
        self.log_dir = log_dir
        self.web_logger = web_logger
        self.echo = echo

        self.main_log_file = None
        self.stream_log_file = None

        if log_dir is not None:
            os.makedirs(log_dir, exist_ok=True)
            self.main_log_file = os.path.join(log_dir, f'session_{session_id}_main.log')
            self.stream_log_file = os.path.join(log_dir, f'session_{session_id}_stream.log')

            startup_msg = f"{'=' * 80}\n"
            startup_msg += f"Session {session_id} - Started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n"
            startup_msg += f"{'=' * 80}\n"

            with open(self.main_log_file, 'a', encoding='utf-8') as f:
                f.write(startup_msg)

    def _write(self, path: Optional[str], msg: str):
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_line = f"[{timestamp}] {msg}\n"

        if path is not None:
            with open(path, 'a', encoding='utf-8') as f:
                f.write(log_line)

        if self.echo:
            print(log_line, end='')

        if self.web_logger:
            self.web_logger(msg)

    def log_main(self, msg: str):
        """Log session events and trades."""
        self._write(self.main_log_file, msg)

    def log_stream(self, msg: str):
        """Log price updates and indicator values."""
        self._write(self.stream_log_file, msg)

    def get_log_files(self) -> dict:
        """Get paths to log files for this session."""
        return {
            'main': self.main_log_file,
            'stream': self.stream_log_file
        }
