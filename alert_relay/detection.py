import json
import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from .constants import SCHEMA_ALERTMANAGER, SCHEMA_GRAFANA
from .errors import BadRequest, UnrecognizedSchema
from .models import AlertmanagerPayload, GrafanaAlertPayload, GrafanaLegacyPayload, SNIFF_ORDER

logger = logging.getLogger(__name__)

AlertPayload = Union[AlertmanagerPayload, GrafanaAlertPayload, GrafanaLegacyPayload]


def decode_body(raw_body) -> Any:
    """Decodifica o corpo do request em um valor JSON genérico. JSON inválido -> BadRequest."""
    try:
        return json.loads(raw_body)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError e UnicodeDecodeError são ValueError; aninhamento excessivo -> RecursionError
        raise BadRequest(f"corpo do request não é um JSON válido: {exc}") from exc


def has_discriminators(model, data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    return all(key in data for key in model.DISCRIMINATORS)


def sniff_payload(data: Any) -> AlertPayload:
    """
    Detecta o schema pelo conteúdo: tenta cada variante na ordem de SNIFF_ORDER
    (Grafana legado, Grafana lote, Alertmanager). A primeira que tiver os campos
    discriminantes e validar vence.
    """
    for model in SNIFF_ORDER:
        if not has_discriminators(model, data):
            continue
        try:
            payload = model.model_validate(data)
        except ValidationError as exc:
            logger.debug(f"Payload tem os campos de '{model.KIND}' mas não valida: {exc.error_count()} erro(s)")
            continue
        logger.info(f"detected {model.KIND} payload")
        return payload

    raise UnrecognizedSchema("formato de payload desconhecido ou nenhum alerta encontrado, impossível montar a mensagem", payload=data)


def decode_for_route(data: Any, schema: str) -> AlertPayload:
    """
    Decodifica direto no modelo fixado pela rota. Dentro da família Grafana,
    o formato legado é reconhecido pela presença de 'ruleName'.
    """
    if schema == SCHEMA_ALERTMANAGER:
        model = AlertmanagerPayload
    elif schema == SCHEMA_GRAFANA:
        if isinstance(data, dict) and "ruleName" in data:
            model = GrafanaLegacyPayload
        else:
            model = GrafanaAlertPayload
    else:
        raise ValueError(f"schema desconhecido: {schema}")

    try:
        payload = model.model_validate(data)
    except ValidationError as exc:
        raise BadRequest(f"payload não corresponde ao formato {schema}: {exc.error_count()} erro(s) de validação") from exc

    logger.info(f"detected {model.KIND} payload")
    return payload


def detect_payload(data: Any, schema: Optional[str] = None) -> AlertPayload:
    if schema is None:
        return sniff_payload(data)
    return decode_for_route(data, schema)
