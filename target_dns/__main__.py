"""
Main entry point for Target-DNS.
"""

import asyncio
import logging
import sys
from pathlib import Path

from target_dns.config.config import Config
from target_dns.controller.controller import Controller
from target_dns.provider.cloudflare import CloudflareProvider, build_client
from target_dns.server.trigger import TriggerServer
from target_dns.source.inventory import InventorySource
from target_dns.utils.errors import TargetDNSError


def setup_logging(level_name: str = "info") -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    logging.getLogger().setLevel(log_level)
    # Set httpx logger level to WARNING unless root is DEBUG
    httpx_log_level = logging.DEBUG if log_level == logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(httpx_log_level)


def build_controller(config: Config) -> Controller:
    """Wire the source, provider and controller from configuration."""
    config.validate_credentials()
    client = build_client(
        api_token=config.api_token,
        user_email=config.user_email,
        api_key=config.api_key,
    )
    source = InventorySource(client, config.account_id)
    provider = CloudflareProvider(
        client,
        config.zone_id,
        config.dns_suffix,
        dry_run=config.dry_run,
    )
    return Controller(
        source, provider, interval=Config.parse_duration(config.interval)
    )


async def run(config: Config) -> None:
    """Run once, or serve triggers alongside the scheduled loop."""
    logger = logging.getLogger("target-dns")
    controller = build_controller(config)

    if config.once:
        result = await controller.run_once()
        logger.info(
            f"Run complete: applied={result.applied}, "
            f"{result.creates} creates, {result.deletes} deletes"
        )
        return

    server = None
    if config.server_enabled:
        server = TriggerServer(
            controller,
            asyncio.get_running_loop(),
            host=config.server_host,
            port=config.server_port,
        )
        server.start()

    try:
        await controller.run_reconciliation_loop()
    finally:
        if server:
            server.stop()


def main() -> None:
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    config = Config.from_yaml(config_path)
    setup_logging(config.log_level)
    logger = logging.getLogger("target-dns")
    logger.info("Starting Target-DNS")

    try:
        asyncio.run(run(config))
    except TargetDNSError as e:
        logger.error(f"DNS synchronization failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nShutting down Target-DNS")
        sys.exit(0)


if __name__ == "__main__":
    main()
