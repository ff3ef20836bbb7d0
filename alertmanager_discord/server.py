import argparse
import logging
import sys

from .config import Config, ConfigError
from .controller import create_app

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Alertmanager webhook relay to Discord.")
    parser.add_argument("--webhook.url", dest="webhook_url", help="Discord WebHook URL.")
    parser.add_argument("--listen.address", dest="listen_address", help="Address:Port to listen on.")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug mode.")
    parser.add_argument("--timezone", dest="timezone_name", help="Timezone used to render timestamps.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = Config.from_env(**vars(args))
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO)
        logger.critical(str(exc))
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(config)
    logger.info(f"Listening on: {config.listen_address}")
    try:
        app.run(host=config.listen_host, port=config.listen_port, threaded=True, use_reloader=False)
    except OSError as exc:
        logger.critical(f"Failed to listen on HTTP: {exc}")
        sys.exit(1)


if __name__ == '__main__':
    main()
