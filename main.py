"""
Riyadah Elite Backend - Main entry point.

Gaming rewards platform API: accounts, tournaments, points and reward claims.
"""

import asyncio
import logging
import sys
from aiohttp import web
from config.settings import settings
from adapters.api.app import create_app
from adapters.api.loader import build_services

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("server.log", encoding="utf-8"),
    ],
)
logger = logging.getLogger(__name__)

# Set DEBUG level only for our app loggers, not for noisy libraries
if settings.debug:
    for name in ['adapters', 'core', 'infrastructure', '__main__']:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # Silence noisy HTTP debug logs
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)


async def main():
    """Main function - validates config, wires services and serves the API."""

    logger.info("=== Riyadah Elite Backend Starting ===")
    logger.info(f"  env: {settings.env}")
    logger.info(f"  storage: {settings.storage_backend}")
    logger.info(f"  debug: {settings.debug}")

    try:
        settings.check_ready()
    except RuntimeError as e:
        logger.error(str(e))
        sys.exit(1)

    services = build_services(settings)
    app = create_app(services)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.host, settings.port)
    await site.start()
    logger.info(f"Server running on http://{settings.host}:{settings.port}")

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
        logger.info("HTTP server stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user (Ctrl+C)")
    except SystemExit as e:
        sys.exit(e.code)
