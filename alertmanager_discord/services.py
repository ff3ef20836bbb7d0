import json
import logging
from typing import Iterable, Optional

import requests

from .config import Config
from .models import OutboundMessage

logger = logging.getLogger(__name__)


class WebhookClient:
    """Envia mensagens para o webhook do Discord. Sem retentativas: cada envio é best-effort."""

    def __init__(self, config: Config):
        self.url = config.webhook_url
        self.debug = config.debug

    def send(self, message: OutboundMessage) -> Optional[requests.Response]:
        payload = message.to_payload()
        if self.debug:
            logger.debug(f"[DEBUG] Send webhook: {json.dumps(payload, ensure_ascii=False)}")

        try:
            resp = requests.post(self.url, json=payload)
        except requests.RequestException as exc:
            logger.error(f"Send discord error -: {exc}")
            return None

        if resp.status_code >= 400:
            logger.error(f"Discord server return error -: {resp.status_code} {resp.text}")
        elif self.debug:
            logger.debug(f"[DEBUG] Discord response: {resp.status_code}")
        return resp

    def send_all(self, messages: Iterable[OutboundMessage]) -> None:
        for message in messages:
            self.send(message)
