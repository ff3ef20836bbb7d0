from datetime import tzinfo
from typing import Optional

from .constants import (
    MISCONFIGURED_DESCRIPTION,
    MISCONFIGURED_TITLE,
    SECTION_SEPARATOR,
    STATUS_NORMAL,
    Color,
)
from .detection import resolve_display_status
from .models import Alert, OutboundMessage, RenderedUnit
from .utils import format_datetime, format_elapsed, format_value, parse_timestamp


def _bullet(text: str) -> str:
    return f": - {text}"


def render_alert(alert: Alert, tz: Optional[tzinfo] = None) -> RenderedUnit:
    """Converte um alerta do Alertmanager em um embed do Discord."""
    status, color = resolve_display_status(alert.status, alert.labels)

    starts_at = parse_timestamp(alert.starts_at)
    ends_at = parse_timestamp(alert.ends_at)
    has_ended = ends_at > starts_at

    title = f"[{status.upper()}] {alert.annotations.summary}"

    labels = [_bullet(f"**_{key}:_** {value}") for key, value in alert.display_labels.items()]
    if status != STATUS_NORMAL:
        metric = alert.metric
        labels.append(_bullet(f"**_value:_** {format_value(metric.value, metric.conversion, tz)}"))

    description = [_bullet(line) for line in alert.annotations.description.split("\n")]

    event_time = ends_at if has_ended else starts_at

    parts = [
        f"**⏰ Event Time:** {format_datetime(event_time, tz)}",
        "**🏷️ Alert labels:**\n" + "\n".join(labels),
        SECTION_SEPARATOR,
        "**📖 Description:**\n" + "\n".join(description),
    ]
    if has_ended:
        parts.extend([
            SECTION_SEPARATOR,
            f"**⏲️ Duration:** {format_elapsed(ends_at - starts_at)}",
            _bullet(f"**_Start:_** {format_datetime(starts_at, tz)}"),
            _bullet(f"**_End:_** {format_datetime(ends_at, tz)}"),
        ])

    return RenderedUnit(title=title, color=color, description="\n".join(parts))


def build_misconfiguration_message() -> OutboundMessage:
    return OutboundMessage(
        content="",
        embeds=[RenderedUnit(
            title=MISCONFIGURED_TITLE,
            color=Color.GREY,
            description=MISCONFIGURED_DESCRIPTION,
        )],
    )
