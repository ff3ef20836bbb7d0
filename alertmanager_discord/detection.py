import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import ValidationError

from .constants import (
    SEVERITY_COLORS,
    SEVERITY_LABEL,
    STATUS_FIRING,
    STATUS_NORMAL,
    STATUS_RESOLVED,
    Color,
)
from .models import AlertGroup, PrometheusAlertList

logger = logging.getLogger(__name__)


def get_severity_color(severity: str) -> Color:
    # Severidade desconhecida deve chamar atenção
    return SEVERITY_COLORS.get(severity, Color.RED)


def resolve_display_status(status: str, labels: Dict[str, str]) -> Tuple[str, Color]:
    """
    Retorna (status exibido, cor) de um alerta.

    firing   -> label 'severity' quando existir, cor pela severidade
    resolved -> 'normal', verde
    outros   -> status bruto, cinza
    """
    if status == STATUS_FIRING:
        display = labels.get(SEVERITY_LABEL, status)
        return display, get_severity_color(display)
    if status == STATUS_RESOLVED:
        return STATUS_NORMAL, Color.GREEN
    return status, Color.GREY


class PayloadKind(Enum):
    DECODED = "decoded"
    FOREIGN = "foreign"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class DecodeOutcome:
    kind: PayloadKind
    group: Optional[AlertGroup] = None


def decode_payload(raw: bytes) -> DecodeOutcome:
    """
    Tenta decodificar o corpo como AlertGroup do Alertmanager.
    Se falhar, verifica se é uma lista de alertas crua do Prometheus (webhook mal configurado).
    """
    try:
        return DecodeOutcome(PayloadKind.DECODED, AlertGroup.model_validate_json(raw))
    except ValidationError as exc:
        logger.debug(f"[DEBUG] Payload não é um AlertGroup: {exc.error_count()} erro(s)")

    try:
        PrometheusAlertList.model_validate_json(raw)
    except ValidationError:
        return DecodeOutcome(PayloadKind.UNPARSEABLE)
    return DecodeOutcome(PayloadKind.FOREIGN)
