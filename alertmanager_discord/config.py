import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Mapping, Optional, Tuple
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import DEFAULT_LISTEN_ADDRESS, DISCORD_WEBHOOK_PATTERN

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuração inválida que impede o processo de iniciar."""


def _env_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve o fuso de exibição a partir de um nome IANA (ex: 'America/Sao_Paulo').
    Nome vazio ou desconhecido retorna None: fuso local do sistema, com horário de verão.
    """
    name = (name or "").strip()
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.warning(f"Fuso horário '{name}' inválido, usando horário local do sistema")
    return None


def parse_listen_address(address: str) -> Tuple[str, int]:
    host, sep, port = address.strip().rpartition(":")
    if not sep or not port.isdigit():
        raise ConfigError(f"Listen address '{address}' must be in the form host:port")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise ConfigError(f"Listen address '{address}' has an invalid port")
    # ':9094' escuta em todas as interfaces
    return host.strip("[]") or "0.0.0.0", port_number


def validate_webhook_url(url: Optional[str]) -> str:
    if not url:
        raise ConfigError(
            "Environment variable 'DISCORD_WEBHOOK_URL' or CLI parameter 'webhook.url' not found."
        )
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise ConfigError("The Discord WebHook URL doesn't seem to be a valid URL.") from exc
    if not parsed.scheme or not parsed.netloc:
        raise ConfigError("The Discord WebHook URL doesn't seem to be a valid URL.")

    if not DISCORD_WEBHOOK_PATTERN.match(url):
        logger.warning("The Discord WebHook URL doesn't seem to be valid.")
    return url


@dataclass(frozen=True)
class Config:
    webhook_url: str
    listen_host: str = "127.0.0.1"
    listen_port: int = 9094
    debug: bool = False
    timezone: Optional[tzinfo] = None

    @property
    def listen_address(self) -> str:
        return f"{self.listen_host}:{self.listen_port}"

    @property
    def display_timezone(self) -> Optional[tzinfo]:
        # None = fuso local resolvido a cada conversão
        return self.timezone

    @classmethod
    def build(
        cls,
        webhook_url: Optional[str],
        listen_address: Optional[str] = None,
        debug: bool = False,
        timezone_name: Optional[str] = None,
    ) -> "Config":
        url = validate_webhook_url(webhook_url)
        host, port = parse_listen_address(listen_address or DEFAULT_LISTEN_ADDRESS)
        return cls(
            webhook_url=url,
            listen_host=host,
            listen_port=port,
            debug=debug,
            timezone=resolve_timezone(timezone_name),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        """
        Monta a configuração a partir das variáveis de ambiente.
        Valores em `overrides` (vindos da linha de comando) têm prioridade quando não são None.
        """
        env = os.environ if environ is None else environ
        values = {
            "webhook_url": env.get("DISCORD_WEBHOOK_URL") or env.get("DISCORD_WEBHOOK"),
            "listen_address": env.get("LISTEN_ADDRESS"),
            "debug": _env_flag(env.get("DEBUG_MODE")) or _env_flag(env.get("DEBUG")),
            "timezone_name": env.get("TZ"),
        }
        for key, value in overrides.items():
            if value is not None:
                values[key] = value
        return cls.build(**values)
