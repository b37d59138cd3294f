"""Tests for wiring components from configuration."""

import pytest

from target_dns.__main__ import build_controller
from target_dns.config.config import Config
from target_dns.provider.cloudflare import CloudflareProvider
from target_dns.source.inventory import InventorySource
from target_dns.utils.errors import ConfigurationError


def test_build_controller_wires_components() -> None:
    config = Config(
        zone_id="zone-1",
        account_id="acct-1",
        api_token="token",
        dns_suffix="internal.example",
        interval="5m",
        dry_run=True,
    )

    controller = build_controller(config)

    assert isinstance(controller.source, InventorySource)
    assert isinstance(controller.provider, CloudflareProvider)
    assert controller.source.account_id == "acct-1"
    assert controller.provider.zone_id == "zone-1"
    assert controller.provider.suffix == "internal.example"
    assert controller.provider.dry_run is True
    assert controller.interval == 300


def test_build_controller_rejects_missing_credentials() -> None:
    with pytest.raises(ConfigurationError):
        build_controller(Config(zone_id="zone-1", dns_suffix="internal.example"))
