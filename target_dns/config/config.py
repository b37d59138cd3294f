"""
Configuration module for Target-DNS.
"""

import os
import re
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel

from target_dns.utils.errors import ConfigurationError

# Secret names used when a value is not set in the YAML file
ENV_FALLBACKS = {
    "zone_id": "CLOUDFLARE_ZONE_ID",
    "dns_suffix": "DNS_SUFFIX",
    "account_id": "ACCOUNT_ID",
    "user_email": "USER_EMAIL",
    "api_key": "API_KEY",
    "api_token": "CLOUDFLARE_API_TOKEN",
}


class Config(BaseModel):
    """Configuration for Target-DNS."""

    # Cloudflare configuration
    zone_id: str = ""
    account_id: str = ""
    user_email: str = ""
    api_key: str = ""
    api_token: str = ""

    # DNS configuration
    dns_suffix: str = ""

    # Controller configuration
    interval: str = "1h"
    once: bool = False
    dry_run: bool = False

    # Trigger server configuration
    server_enabled: bool = True
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # Logging configuration
    log_level: str = "info"

    @classmethod
    def from_yaml(cls, config_path: Optional[Union[str, Path]] = None) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config: Config instance populated with values from the YAML file
        """
        default_paths = [
            Path("./target-dns.yaml"),
            Path("./target-dns.yml"),
            Path("/etc/target-dns/target-dns.yaml"),
            Path("/etc/target-dns/config.yaml"),
        ]

        if config_path:
            paths = [Path(config_path)]
        else:
            paths = default_paths

        config_data = {}
        for path in paths:
            if path.exists():
                with open(path, "r") as f:
                    yaml_content = cls._substitute_env_vars(f.read())
                    config_data = yaml.safe_load(yaml_content) or {}
                break

        return cls(**cls._flatten_config(config_data))

    @staticmethod
    def _substitute_env_vars(content: str) -> str:
        """
        Substitute environment variables in the configuration content.

        Args:
            content: Configuration content

        Returns:
            str: Configuration content with environment variables substituted
        """
        # Pattern for ${ENV_VAR} or ${ENV_VAR:-default}
        pattern = r"\${([^}]+)}"

        def replace_env_var(match):
            env_var = match.group(1)
            if ":-" in env_var:
                env_var, default = env_var.split(":-", 1)
                return os.environ.get(env_var, default)
            return os.environ.get(env_var, "")

        return re.sub(pattern, replace_env_var, content)

    @staticmethod
    def _flatten_config(config_data: dict) -> dict:
        """
        Flatten nested configuration, falling back to environment secrets.

        Args:
            config_data: Nested configuration data

        Returns:
            dict: Flattened configuration data
        """
        flat_config = {}

        cloudflare = config_data.get("cloudflare") or {}
        flat_config["zone_id"] = cloudflare.get("zone_id")
        flat_config["account_id"] = cloudflare.get("account_id")
        flat_config["user_email"] = cloudflare.get("user_email")
        flat_config["api_key"] = cloudflare.get("api_key")
        flat_config["api_token"] = cloudflare.get("api_token")

        dns = config_data.get("dns") or {}
        flat_config["dns_suffix"] = dns.get("suffix")

        for key, env_var in ENV_FALLBACKS.items():
            if not flat_config[key]:
                flat_config[key] = os.environ.get(env_var, "")

        controller = config_data.get("controller") or {}
        flat_config["interval"] = str(controller.get("interval", "1h"))
        flat_config["once"] = controller.get("once", False)
        flat_config["dry_run"] = controller.get("dry_run", False)

        server = config_data.get("server") or {}
        flat_config["server_enabled"] = server.get("enabled", True)
        flat_config["server_host"] = server.get("host", "0.0.0.0")
        flat_config["server_port"] = server.get("port", 8080)

        logging = config_data.get("logging") or {}
        flat_config["log_level"] = logging.get("level", "info")

        return flat_config

    def validate_credentials(self) -> None:
        """
        Check that everything a reconciliation run needs is present.

        Raises:
            ConfigurationError: If a required value is missing
        """
        has_auth = bool(self.api_token) or bool(self.user_email and self.api_key)
        if not self.account_id or not has_auth:
            raise ConfigurationError(
                "Cloudflare API credentials (ACCOUNT_ID and either CLOUDFLARE_API_TOKEN "
                "or USER_EMAIL + API_KEY) are not set"
            )
        if not self.zone_id:
            raise ConfigurationError("CLOUDFLARE_ZONE_ID is not set")
        if not self.dns_suffix:
            raise ConfigurationError("DNS_SUFFIX is not set")

    @staticmethod
    def parse_duration(duration_str: str) -> int:
        """
        Parse a duration string like '15m' into seconds.

        Args:
            duration_str: Duration string

        Returns:
            int: Duration in seconds
        """
        if not duration_str:
            return 3600

        match = re.match(r"^(\d+)([smhd]?)$", str(duration_str).strip())
        if not match:
            return 3600

        value, unit = match.groups()
        multipliers = {"": 1, "s": 1, "m": 60, "h": 60 * 60, "d": 60 * 60 * 24}
        return int(value) * multipliers[unit]
