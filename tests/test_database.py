from datetime import datetime, timezone

from pqc_checker.classifier import SecurityStateClassifier
from pqc_checker.database import ResultStore, database_url_from_env
from pqc_checker.manager import CheckOutcome
from pqc_checker.models import CheckResult
from pqc_checker.security_state import SecurityStateRecord

from conftest import PQC_EVENT


def make_store(tmp_path):
    return ResultStore(f"sqlite:///{tmp_path / 'results.db'}")


def test_saves_success_and_error(tmp_path):
    store = make_store(tmp_path)
    now = datetime.now(timezone.utc)
    result = SecurityStateClassifier.classify(SecurityStateRecord.from_event(PQC_EVENT))

    store.save(CheckOutcome(
        url="https://pq.example.com",
        check_date=now,
        check_status="SUCCESS",
        result=result,
        server_header="cloudflare",
    ))
    store.save(CheckOutcome(
        url="https://down.example.com",
        check_date=now,
        check_status="ERROR",
        error_message="net::ERR_NAME_NOT_RESOLVED",
    ))

    db = next(store.get_db())
    try:
        rows = db.query(CheckResult).order_by(CheckResult.id).all()
        assert [r.check_status for r in rows] == ["SUCCESS", "ERROR"]

        ok = rows[0]
        assert ok.pqc_detected is True
        assert ok.key_exchange_group == "X25519MLKEM768"
        assert ok.transport == "TLS 1.3"
        assert ok.server == "cloudflare"
        assert ok.valid_from == "2024-01-01T00:00:00.000Z"

        failed = rows[1]
        assert failed.pqc_detected is None
        assert failed.error_message == "net::ERR_NAME_NOT_RESOLVED"
    finally:
        db.close()
        store.close()


def test_database_url_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
    assert database_url_from_env() == "sqlite:///x.db"

    monkeypatch.setenv("DATABASE_URL", "")
    assert database_url_from_env() is None

    monkeypatch.delenv("DATABASE_URL")
    assert database_url_from_env() is None
