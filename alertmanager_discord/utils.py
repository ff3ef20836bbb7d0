import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from .models import MetricConversion

# Valor usado quando um timestamp não pode ser interpretado (equivale ao "zero time")
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Interpreta um timestamp RFC 3339 do Alertmanager (ex: '2025-10-08T16:29:55.933582749Z').
    Frações além de microssegundos são truncadas. Qualquer falha retorna ZERO_TIME.
    """
    match = _RFC3339_RE.match((value or "").strip())
    if not match:
        return ZERO_TIME
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        try:
            tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
        except ValueError:
            return ZERO_TIME
    try:
        return datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second), micros, tzinfo=tz
        )
    except ValueError:
        return ZERO_TIME


def to_display(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    # tz=None converte para o fuso local do sistema
    try:
        return moment.astimezone(tz)
    except (OverflowError, ValueError):
        # ZERO_TIME em fusos com offset negativo sai do intervalo de datetime
        return moment


def format_datetime(moment: datetime, tz: Optional[tzinfo] = None) -> str:
    """Formata no estilo 'YYYY-MM-DD HH:MM:SS' no fuso de exibição."""
    local = to_display(moment, tz)
    return (
        f"{local.year:04d}-{local.month:02d}-{local.day:02d} "
        f"{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
    )


def _trim_fraction(amount: int, unit: int) -> str:
    whole, fraction = divmod(amount, unit)
    if not fraction:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{fraction:0{width}d}".rstrip("0")


def _format_micros(micros: int) -> str:
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros == 0:
        return "0s"
    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < _MICROS_PER_SECOND:
        return f"{sign}{_trim_fraction(micros, 1_000)}ms"

    hours, rest = divmod(micros, _MICROS_PER_HOUR)
    minutes, rest = divmod(rest, _MICROS_PER_MINUTE)
    text = ""
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    text += f"{_trim_fraction(rest, _MICROS_PER_SECOND)}s"
    return sign + text


def format_duration(seconds: float) -> str:
    """Duração no formato '1h2m3s', maior unidade primeiro."""
    return _format_micros(int(round(seconds * _MICROS_PER_SECOND)))


def format_elapsed(delta: timedelta) -> str:
    micros = (delta.days * 86_400 + delta.seconds) * _MICROS_PER_SECOND + delta.microseconds
    return _format_micros(micros)


def format_value(
    value: float,
    conversion: Union[MetricConversion, str, None],
    tz: Optional[tzinfo] = None,
) -> str:
    if not isinstance(conversion, MetricConversion):
        conversion = MetricConversion.parse(conversion)

    if conversion is MetricConversion.UPDOWN:
        return "up" if value == 1.0 else "down"

    if conversion is MetricConversion.DURATION and math.isfinite(value):
        return format_duration(int(value))

    if conversion is MetricConversion.TIMESTAMP and math.isfinite(value):
        try:
            return format_datetime(datetime.fromtimestamp(int(value), timezone.utc), tz)
        except (OverflowError, OSError, ValueError):
            pass

    return f"{value:.2f}"
