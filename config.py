"""
Stack configuration loaded from environment variables.

Provides a typed, immutable view of the deployment target. Every key is
required: ACCOUNT_ID and AWS_REGION pin the AWS provider, DOMAIN_NAME names
the existing hosted zone the site lives under. Used by __main__.main() before
any provider or resource is declared, so a missing variable aborts the
program without touching AWS.
"""

from dataclasses import dataclass
from typing import Callable, Mapping

from components._helpers import s3_interface_service_name, site_fqdn

USAGE: str = (
    "Please set ACCOUNT_ID, AWS_REGION, and DOMAIN_NAME environment variables."
)

# Leading label of the site under DOMAIN_NAME.
SITE_SUBDOMAIN: str = "site1"


class ConfigError(ValueError):
    """Raised when required environment variables are unset or empty."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"{USAGE} Missing: {', '.join(missing)}")


def _str(raw: str) -> str:
    return raw


def _domain(raw: str) -> str:
    return raw.lower().rstrip(".")


# (env var, field, parser); parser receives the stripped, non-empty value.
_CONFIG_SPEC: list[tuple[str, str, Callable[[str], str]]] = [
    ("ACCOUNT_ID", "account_id", _str),
    ("AWS_REGION", "region", _str),
    ("DOMAIN_NAME", "domain_name", _domain),
]


@dataclass(frozen=True)
class StackConfig:
    """
    Deployment target from the environment.

    Attributes:
        account_id: AWS account the provider is restricted to (required).
        region: AWS region for every resource and lookup (required).
        domain_name: Existing Route 53 hosted zone, e.g. "example.com" (required).
    """

    account_id: str
    region: str
    domain_name: str

    @property
    def site_fqdn(self) -> str:
        """Bucket name, host-header match and DNS record name."""
        return site_fqdn(self.domain_name, SITE_SUBDOMAIN)

    @property
    def s3_service_name(self) -> str:
        return s3_interface_service_name(self.region)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "StackConfig":
        """
        Build StackConfig from an environment mapping (usually os.environ).

        Raises:
            ConfigError: if any variable in _CONFIG_SPEC is unset or blank.
                All missing names are reported at once.
        """
        kwargs = {}
        missing = []
        for env_key, field, parser in _CONFIG_SPEC:
            raw = (environ.get(env_key) or "").strip()
            if not raw:
                missing.append(env_key)
                continue
            kwargs[field] = parser(raw)
        if missing:
            raise ConfigError(missing)
        return cls(**kwargs)
