from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

from .constants import (
    HIDDEN_LABELS,
    METRICS_CONV_LABEL,
    METRICS_LABEL_PREFIX,
    METRICS_VALUE_LABEL,
    Color,
)


class MetricConversion(str, Enum):
    DURATION = "duration"
    TIMESTAMP = "timestamp"
    UPDOWN = "updown"
    PLAIN = ""

    @classmethod
    def parse(cls, tag: Optional[str]) -> "MetricConversion":
        try:
            return cls(tag or "")
        except ValueError:
            return cls.PLAIN


@dataclass(frozen=True)
class AuxiliaryMetric:
    value: float = 0.0
    conversion: MetricConversion = MetricConversion.PLAIN


class PayloadModel(BaseModel):
    """Campos com null no JSON recebem o valor padrão, como se estivessem ausentes."""

    model_config = ConfigDict(populate_by_name=True)

    # campos obrigatórios em que null vale como lista vazia
    null_as_empty_list: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _nulls_as_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if value is None:
                if key in cls.null_as_empty_list:
                    cleaned[key] = []
                continue
            cleaned[key] = value
        return cleaned


class Annotations(PayloadModel):
    summary: str = ""
    description: str = ""


class Alert(PayloadModel):
    status: str
    starts_at: str = Field(default="", alias="startsAt")
    ends_at: str = Field(default="", alias="endsAt")
    generator_url: str = Field(default="", alias="generatorURL")
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Annotations = Field(default_factory=Annotations)

    @property
    def metric(self) -> AuxiliaryMetric:
        """Métrica auxiliar carregada nos labels reservados metrics_value/metrics_conv."""
        raw_value = self.labels.get(METRICS_VALUE_LABEL)
        value = 0.0
        if raw_value is not None:
            try:
                value = float(raw_value)
            except ValueError:
                value = 0.0
        return AuxiliaryMetric(
            value=value,
            conversion=MetricConversion.parse(self.labels.get(METRICS_CONV_LABEL)),
        )

    @property
    def display_labels(self) -> Dict[str, str]:
        return {
            key: value
            for key, value in self.labels.items()
            if not key.startswith(METRICS_LABEL_PREFIX) and key not in HIDDEN_LABELS
        }


class GroupLabels(PayloadModel):
    alertname: str = ""


class CommonAnnotations(PayloadModel):
    summary: str = ""


class AlertGroup(PayloadModel):
    null_as_empty_list: ClassVar[Tuple[str, ...]] = ("alerts",)

    receiver: str
    status: str
    alerts: List[Alert]
    external_url: str = Field(default="", alias="externalURL")
    group_key: str = Field(default="", alias="groupKey")
    version: str = ""
    group_labels: GroupLabels = Field(default_factory=GroupLabels, alias="groupLabels")
    common_labels: GroupLabels = Field(default_factory=GroupLabels, alias="commonLabels")
    common_annotations: CommonAnnotations = Field(
        default_factory=CommonAnnotations, alias="commonAnnotations"
    )

    @property
    def header(self) -> str:
        return f"=== Alert: {self.receiver} - {self.group_labels.alertname} ==="


class PrometheusAlert(BaseModel):
    """Alerta no formato que o Prometheus envia direto para a API do Alertmanager."""

    model_config = ConfigDict(populate_by_name=True)

    labels: Dict[str, str]
    annotations: Dict[str, str] = Field(default_factory=dict)
    starts_at: Optional[str] = Field(default=None, alias="startsAt")
    ends_at: Optional[str] = Field(default=None, alias="endsAt")
    generator_url: Optional[str] = Field(default=None, alias="generatorURL")
    status: Optional[str] = None


class PrometheusAlertList(RootModel[List[PrometheusAlert]]):
    @model_validator(mode="after")
    def _looks_like_raw_prometheus(self) -> "PrometheusAlertList":
        if not self.root:
            raise ValueError("empty alert list")
        # Alertas vindos do Alertmanager sempre trazem status
        if self.root[0].status:
            raise ValueError("first alert carries a status")
        return self


@dataclass
class RenderedUnit:
    title: str
    color: Color
    description: str

    def to_embed(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "color": int(self.color),
            "fields": [],
        }


@dataclass
class OutboundMessage:
    content: str
    embeds: List[RenderedUnit] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "embeds": [embed.to_embed() for embed in self.embeds],
        }
