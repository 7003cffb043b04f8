import logging
import sys
from typing import Optional

from pqc_checker.classifier import NOT_AVAILABLE, ClassificationResult

DEFAULT_LOG_FILE = "pqc_results.log"
SEPARATOR = "-" * 40

HTTP2_PROTOCOL_ERROR = "net::ERR_HTTP2_PROTOCOL_ERROR"
HTTP2_PROTOCOL_ERROR_HINT = (
    "HTTP/2 protocol error - This might be due to the site's security policies. "
    "Try accessing the site directly in a browser first."
)


def format_report(url: str, result: ClassificationResult, server_header: Optional[str]) -> str:
    """Render the per-URL report block."""
    lines = [
        "",
        f"🔍 Checking: {url}",
        SEPARATOR,
        f"🔒 Security State: {result.security_state.upper()}",
        f"🖥️ Server: {server_header or NOT_AVAILABLE}",
        f"🌐 Transport Protocol: {result.transport_label}",
        f"🔑 Key Exchange: {result.key_exchange_label}",
        f"🔄 Key Exchange Group: {result.key_exchange_group_label}",
        f"🔐 Cipher Suite: {result.cipher_label}",
        f"📜 Certificate Subject: {result.subject_label}",
        f"🏛️ Issuer: {result.issuer_label}",
        f"📅 Valid From: {result.valid_from_iso}",
        f"📅 Valid To: {result.valid_to_iso}",
        SEPARATOR,
    ]
    if result.pqc_detected:
        lines.append("✅ This site is using Post-Quantum Encryption (PQC)! 🎉")
    else:
        lines.append("❌ This site is NOT using Post-Quantum Encryption.")
    return "\n".join(lines) + "\n"


def describe_error(message: str) -> str:
    if HTTP2_PROTOCOL_ERROR in message:
        return HTTP2_PROTOCOL_ERROR_HINT
    return message


def format_error(url: str, message: str) -> str:
    return f"❌ Error checking {url}: {describe_error(message)}"


class Reporter:
    """
    Writes report text to the console and appends it to a results file.
    """

    def __init__(self, log_file: str = DEFAULT_LOG_FILE, console: bool = True):
        self.log_file = log_file
        # Private logger per instance, handlers are never shared
        self._logger = logging.getLogger(f"{__name__}.results.{id(self)}")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        # Trailing blank line keeps entries apart in the file
        file_handler.setFormatter(logging.Formatter("%(message)s\n"))
        self._handlers: list[logging.Handler] = [file_handler]

        if console:
            # Reports to stdout, error lines to stderr
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.addFilter(lambda record: record.levelno < logging.ERROR)
            error_handler = logging.StreamHandler(sys.stderr)
            error_handler.setLevel(logging.ERROR)
            for handler in (console_handler, error_handler):
                handler.setFormatter(logging.Formatter("%(message)s"))
                self._handlers.append(handler)

        for handler in self._handlers:
            self._logger.addHandler(handler)

    def emit(self, text: str):
        self._logger.info(text)

    def emit_error(self, text: str):
        self._logger.error(text)

    def close(self):
        for handler in self._handlers:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
        self._handlers = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
