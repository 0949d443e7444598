import logging
from typing import Optional

from .detection import AlertPayload, decode_body, detect_payload
from .errors import MissingConfiguration, UnsupportedPayload
from .models import (
    AlertEvent,
    AlertmanagerPayload,
    GrafanaAlertPayload,
    GrafanaLegacyPayload,
    NormalizedMessage,
)

logger = logging.getLogger(__name__)


def format_alertmanager_alert(alert: AlertEvent) -> str:
    return "[{}][{}] {}\n{}\n".format(
        alert.alertname,
        alert.status,
        alert.annotations.get("description", ""),
        alert.generator_url,
    )


def format_alertmanager(payload: AlertmanagerPayload) -> str:
    # Acumula todos os alertas do lote, na ordem recebida
    return "".join(format_alertmanager_alert(alert) for alert in payload.alerts)


def format_grafana_alert(alert: AlertEvent) -> str:
    return f"[{alert.status}] {alert.alertname} {alert.generator_url}\n"


def format_grafana_batch(payload: GrafanaAlertPayload) -> str:
    parts = []
    for alert in payload.alerts:
        logger.debug(f"processing alert {alert.alertname}")
        parts.append(format_grafana_alert(alert))
    return "".join(parts)


def format_grafana_legacy(payload: GrafanaLegacyPayload) -> str:
    return f"[{payload.state}] {payload.rule_name} {payload.message}"


FORMATTERS = {
    AlertmanagerPayload.KIND: format_alertmanager,
    GrafanaAlertPayload.KIND: format_grafana_batch,
    GrafanaLegacyPayload.KIND: format_grafana_legacy,
}

# Variantes em lote: sem alertas não há o que enviar
BATCH_KINDS = {AlertmanagerPayload.KIND, GrafanaAlertPayload.KIND}


def format_message(payload: AlertPayload) -> str:
    kind = getattr(payload, "KIND", None)
    formatter = FORMATTERS.get(kind)
    if formatter is None:
        raise UnsupportedPayload(
            f"tipo {type(payload).__name__} desconhecido, impossível montar a mensagem",
            payload=payload,
        )
    if kind in BATCH_KINDS and not payload.alerts:
        raise UnsupportedPayload(
            f"nenhum alerta encontrado no payload {kind}, impossível montar a mensagem",
            payload=payload.model_dump(by_alias=True),
        )
    return formatter(payload)


def build_message(payload: AlertPayload, recipient: str) -> NormalizedMessage:
    return NormalizedMessage.build(format_message(payload), recipient)


def normalize(raw_body, recipient: str, schema: Optional[str] = None) -> NormalizedMessage:
    """
    Converte o corpo bruto de um webhook em uma NormalizedMessage.

    Args:
        raw_body: corpo do request (bytes ou str)
        recipient: handle do destinatário, já lido da configuração
        schema: 'grafana' / 'alertmanager' para a rota dedicada, ou None para
            detectar pelo conteúdo

    Raises:
        MissingConfiguration, BadRequest, UnsupportedPayload (ou UnrecognizedSchema)
    """
    if not recipient:
        raise MissingConfiguration("destinatário não configurado no servidor")

    data = decode_body(raw_body)
    payload = detect_payload(data, schema)
    return build_message(payload, recipient)
