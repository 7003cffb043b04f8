import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from pqc_checker.classifier import ClassificationResult, SecurityStateClassifier
from pqc_checker.exceptions import NavigationError
from pqc_checker.report import Reporter, describe_error, format_error, format_report

logger = logging.getLogger(__name__)


@dataclass
class CheckOutcome:
    url: str
    check_date: datetime
    check_status: str  # "SUCCESS" or "ERROR"
    result: Optional[ClassificationResult] = None
    server_header: Optional[str] = None
    error_message: Optional[str] = None


class CheckManager:
    """
    Checks URLs one at a time. A failing URL is reported and skipped.

    `session` needs a `capture(url)` method returning a PageCapture,
    `store` (optional) a `save(outcome)` method.
    """

    def __init__(self, session, reporter: Reporter, store=None):
        self.session = session
        self.reporter = reporter
        self.store = store

    def run(self, urls: List[str]) -> List[CheckOutcome]:
        logger.info(f"Starting check for {len(urls)} URL(s)")

        outcomes = []
        for url in urls:
            outcome = self.check_url(url)
            outcomes.append(outcome)
            if self.store:
                self.store.save(outcome)

        pqc_count = sum(1 for o in outcomes if o.result and o.result.pqc_detected)
        error_count = sum(1 for o in outcomes if o.check_status == "ERROR")
        logger.info(f"Finished: {pqc_count} with PQC, {error_count} error(s), {len(outcomes)} total")
        return outcomes

    def check_url(self, url: str) -> CheckOutcome:
        check_date = datetime.now(timezone.utc)
        try:
            capture = self.session.capture(url)
        except NavigationError as e:
            return self._error_outcome(url, check_date, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error checking {url}")
            return self._error_outcome(url, check_date, f"Unexpected error ({type(e).__name__}): {e}")

        result = SecurityStateClassifier.classify(capture.security_state)
        self.reporter.emit(format_report(url, result, capture.server_header))
        logger.info(f"Completed {url}: pqc_detected={result.pqc_detected}")

        return CheckOutcome(
            url=url,
            check_date=check_date,
            check_status="SUCCESS",
            result=result,
            server_header=capture.server_header,
        )

    def _error_outcome(self, url: str, check_date: datetime, message: str) -> CheckOutcome:
        logger.error(f"Error checking {url}: {message}")
        self.reporter.emit_error(format_error(url, message))
        return CheckOutcome(
            url=url,
            check_date=check_date,
            check_status="ERROR",
            error_message=describe_error(message),
        )
