"""Tests for environment-driven stack configuration"""

import pytest

from config import USAGE, ConfigError, StackConfig

FULL_ENV = {
    "ACCOUNT_ID": "123456789012",
    "AWS_REGION": "us-east-1",
    "DOMAIN_NAME": "example.com",
}


class TestFromEnviron:
    def test_reads_all_keys(self):
        config = StackConfig.from_environ(FULL_ENV)
        assert config == StackConfig(
            account_id="123456789012",
            region="us-east-1",
            domain_name="example.com",
        )

    @pytest.mark.parametrize("key", sorted(FULL_ENV))
    def test_missing_key_raises(self, key):
        env = {k: v for k, v in FULL_ENV.items() if k != key}
        with pytest.raises(ConfigError) as excinfo:
            StackConfig.from_environ(env)
        assert excinfo.value.missing == [key]
        assert USAGE in str(excinfo.value)

    def test_blank_value_counts_as_missing(self):
        with pytest.raises(ConfigError) as excinfo:
            StackConfig.from_environ({**FULL_ENV, "AWS_REGION": "   "})
        assert excinfo.value.missing == ["AWS_REGION"]

    def test_reports_every_missing_key(self):
        with pytest.raises(ConfigError) as excinfo:
            StackConfig.from_environ({})
        assert excinfo.value.missing == ["ACCOUNT_ID", "AWS_REGION", "DOMAIN_NAME"]

    def test_domain_is_normalized(self):
        config = StackConfig.from_environ({**FULL_ENV, "DOMAIN_NAME": " Example.COM. "})
        assert config.domain_name == "example.com"

    def test_is_immutable(self):
        config = StackConfig.from_environ(FULL_ENV)
        with pytest.raises(AttributeError):
            config.region = "eu-west-1"


class TestDerivedNames:
    def test_site_fqdn(self):
        assert StackConfig.from_environ(FULL_ENV).site_fqdn == "site1.example.com"

    def test_s3_service_name(self):
        config = StackConfig.from_environ(FULL_ENV)
        assert config.s3_service_name == "com.amazonaws.us-east-1.s3"

    def test_site_fqdn_prefixes_domain_already_starting_with_site1(self):
        config = StackConfig.from_environ({**FULL_ENV, "DOMAIN_NAME": "site1.example.com"})
        assert config.site_fqdn == "site1.site1.example.com"
