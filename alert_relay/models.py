from typing import Any, ClassVar, Dict, List, Optional, Tuple, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null em campo não-Optional vira o valor padrão ("" / {} / [] / 0)
        if not isinstance(data, dict):
            return data
        nullable = set()
        for name, field in cls.model_fields.items():
            if type(None) in get_args(field.annotation):
                nullable.add(name)
                if field.alias:
                    nullable.add(field.alias)
        return {k: v for k, v in data.items() if v is not None or k in nullable}


class AlertEvent(_Frozen):
    """Um alerta individual dentro de um lote (Alertmanager ou Grafana)."""

    status: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    starts_at: str = Field(alias="startsAt", default="")
    ends_at: str = Field(alias="endsAt", default="")
    generator_url: str = Field(alias="generatorURL", default="")
    fingerprint: str = ""
    # Campos presentes apenas no formato do Grafana
    silence_url: Optional[str] = Field(alias="silenceURL", default=None)
    dashboard_url: Optional[str] = Field(alias="dashboardURL", default=None)
    panel_url: Optional[str] = Field(alias="panelURL", default=None)
    values: Optional[Dict[str, Any]] = None

    @property
    def alertname(self) -> str:
        return self.labels.get("alertname", "")


class AlertmanagerPayload(_Frozen):
    KIND: ClassVar[str] = "alertmanager"
    DISCRIMINATORS: ClassVar[Tuple[str, ...]] = ("alerts",)

    version: str = ""
    group_key: str = Field(alias="groupKey", default="")
    truncated_alerts: int = Field(alias="truncatedAlerts", default=0)
    status: str = ""
    receiver: str = ""
    group_labels: Dict[str, str] = Field(alias="groupLabels", default_factory=dict)
    common_labels: Dict[str, str] = Field(alias="commonLabels", default_factory=dict)
    common_annotations: Dict[str, str] = Field(alias="commonAnnotations", default_factory=dict)
    external_url: str = Field(alias="externalURL", default="")
    alerts: List[AlertEvent] = Field(default_factory=list)


class GrafanaAlertPayload(_Frozen):
    """Webhook do Grafana (unified alerting), com vários alertas por entrega."""

    KIND: ClassVar[str] = "grafana"
    DISCRIMINATORS: ClassVar[Tuple[str, ...]] = ("orgId", "alerts")

    receiver: str = ""
    status: str = ""
    org_id: int = Field(alias="orgId", default=0)
    alerts: List[AlertEvent] = Field(default_factory=list)
    group_labels: Dict[str, str] = Field(alias="groupLabels", default_factory=dict)
    common_labels: Dict[str, str] = Field(alias="commonLabels", default_factory=dict)
    common_annotations: Dict[str, str] = Field(alias="commonAnnotations", default_factory=dict)
    external_url: str = Field(alias="externalURL", default="")
    version: str = ""
    group_key: str = Field(alias="groupKey", default="")
    truncated_alerts: int = Field(alias="truncatedAlerts", default=0)
    title: str = ""
    state: str = ""
    message: str = ""


class EvalMatch(_Frozen):
    metric: str = ""
    value: Optional[float] = None
    tags: Optional[Dict[str, str]] = None


class GrafanaLegacyPayload(_Frozen):
    """Webhook do alerting legado do Grafana: uma regra por entrega."""

    KIND: ClassVar[str] = "grafana_legacy"
    DISCRIMINATORS: ClassVar[Tuple[str, ...]] = ("ruleName",)

    title: str = ""
    rule_id: int = Field(alias="ruleId", default=0)
    rule_name: str = Field(alias="ruleName", default="")
    rule_url: str = Field(alias="ruleUrl", default="")
    state: str = ""
    message: str = ""
    image_url: str = Field(alias="imageUrl", default="")
    eval_matches: List[EvalMatch] = Field(alias="evalMatches", default_factory=list)
    tags: Optional[Dict[str, str]] = Field(default_factory=dict)
    org_id: int = Field(alias="orgId", default=0)
    dashboard_id: int = Field(alias="dashboardId", default=0)
    panel_id: int = Field(alias="panelId", default=0)


# Ordem fixa de prioridade usada na detecção por conteúdo
SNIFF_ORDER = (GrafanaLegacyPayload, GrafanaAlertPayload, AlertmanagerPayload)


class MessageBody(_Frozen):
    message: str = ""


class Recipient(_Frozen):
    handle: str = ""


class NormalizedMessage(_Frozen):
    """Payload único enviado ao gateway de mensagens."""

    body: MessageBody = Field(default_factory=MessageBody)
    recipient: Recipient = Field(default_factory=Recipient)

    @classmethod
    def build(cls, message: str, handle: str) -> "NormalizedMessage":
        return cls(body=MessageBody(message=message), recipient=Recipient(handle=handle))

    @classmethod
    def from_json(cls, raw) -> "NormalizedMessage":
        return cls.model_validate_json(raw)

    def to_json(self) -> str:
        return self.model_dump_json()
