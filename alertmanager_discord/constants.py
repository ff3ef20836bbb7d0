import re
from enum import IntEnum

# Limite de embeds por mensagem imposto pelo Discord
MAX_DISCORD_EMBEDS = 10

DEFAULT_LISTEN_ADDRESS = "127.0.0.1:9094"

DISCORD_WEBHOOK_PATTERN = re.compile(
    r"https://discord(?:app)?\.com/api/webhooks/[0-9]{18,19}/[a-zA-Z0-9_-]+"
)

# Log de payload não reconhecido é truncado neste tamanho
RAW_LOG_LIMIT = 1024


class Color(IntEnum):
    RED = 0x992D22
    ORANGE = 0xF0B816
    GREEN = 0x2ECC71
    GREY = 0x95A5A6
    BLUE = 0x58B9FF


SEVERITY_COLORS = {
    "debug": Color.GREY,
    "info": Color.BLUE,
    "warning": Color.ORANGE,
    "critical": Color.RED,
}

STATUS_FIRING = "firing"
STATUS_RESOLVED = "resolved"
STATUS_NORMAL = "normal"

SEVERITY_LABEL = "severity"
METRICS_LABEL_PREFIX = "metrics_"
METRICS_VALUE_LABEL = "metrics_value"
METRICS_CONV_LABEL = "metrics_conv"
HIDDEN_LABELS = {"value"}

SECTION_SEPARATOR = "------"

MISCONFIGURED_TITLE = "You have misconfigured this software"
MISCONFIGURED_DESCRIPTION = (
    "This program is suppose to be fed by alertmanager.\n"
    "It is not a replacement for alertmanager, it is a \n"
    "webhook target for it. Please read the README.md  \n"
    "for guidance on how to configure it for alertmanager\n"
    "or https://prometheus.io/docs/alerting/latest/configuration/#webhook_config"
)
