import logging
from typing import List, Optional

from flask import Flask, request

from .batching import batch_units
from .config import Config
from .constants import MISCONFIGURED_DESCRIPTION, MISCONFIGURED_TITLE, RAW_LOG_LIMIT
from .detection import PayloadKind, decode_payload
from .formatters import build_misconfiguration_message, render_alert
from .models import AlertGroup, OutboundMessage
from .services import WebhookClient

logger = logging.getLogger(__name__)

# Lista explícita inclui HEAD e OPTIONS para o Flask não respondê-los sozinho
ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS', 'TRACE', 'CONNECT']


class AlertRelay:
    """Pipeline de um request: decodifica, renderiza, agrupa e envia."""

    def __init__(self, config: Config, client: Optional[WebhookClient] = None):
        self.config = config
        self.client = client or WebhookClient(config)

    def build_messages(self, group: AlertGroup) -> List[OutboundMessage]:
        tz = self.config.display_timezone
        units = [render_alert(alert, tz) for alert in group.alerts]
        return batch_units(units, group.header)

    def handle(self, raw: bytes) -> None:
        if self.config.debug:
            logger.debug(f"[DEBUG] Receive webhook: {raw.decode('utf-8', errors='replace')}")

        outcome = decode_payload(raw)

        if outcome.kind is PayloadKind.DECODED:
            self.client.send_all(self.build_messages(outcome.group))
        elif outcome.kind is PayloadKind.FOREIGN:
            self.warn_misconfigured()
        else:
            self.log_unparseable(raw)

    def warn_misconfigured(self) -> None:
        logger.warning(f"/!\\ -- {MISCONFIGURED_TITLE} -- /!\\")
        logger.warning(MISCONFIGURED_DESCRIPTION)
        self.client.send(build_misconfiguration_message())

    @staticmethod
    def log_unparseable(raw: bytes) -> None:
        text = raw[:RAW_LOG_LIMIT].decode('utf-8', errors='replace')
        if len(raw) > RAW_LOG_LIMIT:
            text += "..."
        logger.warning(f"Failed to unpack inbound alert request - {text}")


def create_app(config: Config, relay: Optional[AlertRelay] = None):
    app = Flask(__name__)
    relay = relay or AlertRelay(config)

    @app.route('/', defaults={'path': ''}, methods=ALL_METHODS)
    @app.route('/<path:path>', methods=ALL_METHODS)
    def webhook(path):
        logger.info(f"{request.host} - [{request.method}] {request.url}")
        try:
            relay.handle(request.get_data())
        except Exception:
            # O Alertmanager não deve reenfileirar por falhas nossas
            logger.exception("Erro inesperado ao processar alerta")
        return '', 200

    return app
