from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CertificateSecurityState:
    protocol: Optional[str] = None
    key_exchange: Optional[str] = None
    key_exchange_group: Optional[str] = None
    cipher: Optional[str] = None
    subject_name: Optional[str] = None
    issuer: Optional[str] = None
    valid_from: Optional[float] = None
    valid_to: Optional[float] = None

    # CDP camelCase key -> field name
    FIELD_MAP = {
        "protocol": "protocol",
        "keyExchange": "key_exchange",
        "keyExchangeGroup": "key_exchange_group",
        "cipher": "cipher",
        "subjectName": "subject_name",
        "issuer": "issuer",
        "validFrom": "valid_from",
        "validTo": "valid_to",
    }

    @classmethod
    def from_cdp(cls, data: dict[str, Any]) -> "CertificateSecurityState":
        """
        Build from a CDP `CertificateSecurityState` object.

        Empty strings are treated as absent, Chrome sends "" for the
        key exchange on TLS 1.3 and QUIC connections.
        """
        values = {}
        for cdp_key, field_name in cls.FIELD_MAP.items():
            value = data.get(cdp_key)
            if value == "":
                value = None
            values[field_name] = value
        return cls(**values)


@dataclass(frozen=True)
class SecurityStateRecord:
    overall_state: str
    certificate_state: Optional[CertificateSecurityState] = None

    @classmethod
    def from_event(cls, params: dict[str, Any]) -> "SecurityStateRecord":
        """
        Parse a `Security.visibleSecurityStateChanged` payload.

        Accepts either the event params or the bare `visibleSecurityState`.
        """
        state = params.get("visibleSecurityState", params)
        cert_data = state.get("certificateSecurityState")
        return cls(
            overall_state=state.get("securityState") or "unknown",
            certificate_state=CertificateSecurityState.from_cdp(cert_data) if cert_data else None,
        )
