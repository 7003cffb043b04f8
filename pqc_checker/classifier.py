from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pqc_checker.security_state import CertificateSecurityState, SecurityStateRecord

NOT_AVAILABLE = "N/A"
QUIC_TRANSPORT_LABEL = "QUIC (Uses TLS 1.3 Encryption)"
QUIC_KEY_EXCHANGE_LABEL = "Handled by QUIC"


def format_timestamp(timestamp: Optional[float]) -> str:
    """Seconds since the epoch to ISO-8601 UTC with milliseconds, "N/A" if unset."""
    if not timestamp:
        return NOT_AVAILABLE
    try:
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        # Valid JS Date values can lie past year 9999
        return NOT_AVAILABLE
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class ClassificationResult:
    security_state: str
    transport_label: str
    key_exchange_label: str
    key_exchange_group_label: str
    cipher_label: str
    subject_label: str
    issuer_label: str
    valid_from_iso: str
    valid_to_iso: str
    pqc_detected: bool


class SecurityStateClassifier:
    """
    Classifies a captured browser security state.

    PQC detection is a substring test for the ML-KEM marker on the negotiated
    key exchange group. Hybrids such as X25519MLKEM768 match as well; other
    post-quantum identifiers (Kyber drafts, etc.) are not recognised.
    """

    PQC_MARKER = "MLKEM"
    QUIC_MARKER = "QUIC"

    @classmethod
    def is_pqc_group(cls, group: Optional[str]) -> bool:
        if not group:
            return False
        return cls.PQC_MARKER in group

    @classmethod
    def classify(cls, record: SecurityStateRecord) -> ClassificationResult:
        """
        Classify a security state record.

        Never raises: missing certificate details degrade to "N/A".
        """
        cert = record.certificate_state or CertificateSecurityState()

        protocol = cert.protocol
        is_quic = bool(protocol) and cls.QUIC_MARKER in protocol

        if is_quic:
            transport = QUIC_TRANSPORT_LABEL
        else:
            transport = protocol or NOT_AVAILABLE

        if cert.key_exchange:
            key_exchange = cert.key_exchange
        elif is_quic:
            key_exchange = QUIC_KEY_EXCHANGE_LABEL
        else:
            key_exchange = NOT_AVAILABLE

        return ClassificationResult(
            security_state=record.overall_state,
            transport_label=transport,
            key_exchange_label=key_exchange,
            key_exchange_group_label=cert.key_exchange_group or NOT_AVAILABLE,
            cipher_label=cert.cipher or NOT_AVAILABLE,
            subject_label=cert.subject_name or NOT_AVAILABLE,
            issuer_label=cert.issuer or NOT_AVAILABLE,
            valid_from_iso=format_timestamp(cert.valid_from),
            valid_to_iso=format_timestamp(cert.valid_to),
            pqc_detected=cls.is_pqc_group(cert.key_exchange_group),
        )


def classify(record: SecurityStateRecord) -> ClassificationResult:
    return SecurityStateClassifier.classify(record)
