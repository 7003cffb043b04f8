import logging
import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from pqc_checker.manager import CheckOutcome
from pqc_checker.models import Base, CheckResult

logger = logging.getLogger(__name__)


def database_url_from_env() -> Optional[str]:
    return os.getenv("DATABASE_URL") or None


class ResultStore:
    """Keeps a history of check outcomes in a SQL database."""

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(self.engine)

    def get_db(self):
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def save(self, outcome: CheckOutcome):
        db = next(self.get_db())
        try:
            db.add(self._to_row(outcome))
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error saving result for {outcome.url}: {e}")
            db.rollback()
        finally:
            db.close()

    def _to_row(self, outcome: CheckOutcome) -> CheckResult:
        row = CheckResult(
            url=outcome.url,
            check_date=outcome.check_date,
            check_status=outcome.check_status,
            error_message=outcome.error_message,
            server=outcome.server_header,
        )
        result = outcome.result
        if result:
            row.security_state = result.security_state
            row.transport = result.transport_label
            row.key_exchange = result.key_exchange_label
            row.key_exchange_group = result.key_exchange_group_label
            row.cipher = result.cipher_label
            row.subject = result.subject_label
            row.issuer = result.issuer_label
            row.valid_from = result.valid_from_iso
            row.valid_to = result.valid_to_iso
            row.pqc_detected = result.pqc_detected
        return row

    def close(self):
        self.engine.dispose()
