"""Tests for pure helpers"""

import pytest

from components import _helpers


class TestSiteFqdn:
    def test_builds_site1_subdomain(self):
        assert _helpers.site_fqdn("example.com", "site1") == "site1.example.com"

    def test_domain_with_trailing_dot(self):
        assert _helpers.site_fqdn("example.com.", "site1") == "site1.example.com"

    def test_always_prefixes_subdomain(self):
        assert (
            _helpers.site_fqdn("site1.example.com", "site1")
            == "site1.site1.example.com"
        )


class TestS3InterfaceServiceName:
    def test_uses_region(self):
        assert (
            _helpers.s3_interface_service_name("eu-west-1")
            == "com.amazonaws.eu-west-1.s3"
        )


class TestRequireInterfaceIds:
    def test_returns_ids_when_count_matches(self):
        ids = _helpers.require_interface_ids(("eni-a", "eni-b"), expected=2)
        assert ids == ["eni-a", "eni-b"]

    def test_returns_ids_sorted(self):
        ids = _helpers.require_interface_ids({"eni-b", "eni-a"}, expected=2)
        assert ids == ["eni-a", "eni-b"]

    def test_too_few_interfaces(self):
        with pytest.raises(_helpers.InterfaceCountError, match="has 1 network"):
            _helpers.require_interface_ids(["eni-a"], expected=2)

    def test_too_many_interfaces(self):
        with pytest.raises(_helpers.InterfaceCountError, match="expected 2"):
            _helpers.require_interface_ids(["eni-a", "eni-b", "eni-c"], expected=2)

    def test_none_is_zero_interfaces(self):
        with pytest.raises(_helpers.InterfaceCountError):
            _helpers.require_interface_ids(None, expected=2)

    def test_is_a_value_error(self):
        assert issubclass(_helpers.InterfaceCountError, ValueError)


class TestBucketPolicyDocument:
    ARN = "arn:aws:s3:::site1.example.com"

    def test_single_allow_statement_on_objects(self):
        doc = _helpers.bucket_policy_document(self.ARN, "vpce-123")
        [statement] = doc["Statement"]
        assert statement["Effect"] == "Allow"
        assert statement["Action"] == "s3:*"
        assert statement["Principal"] == {"AWS": "*"}
        assert statement["Resource"] == f"{self.ARN}/*"

    def test_conditioned_on_source_endpoint(self):
        doc = _helpers.bucket_policy_document(self.ARN, "vpce-123")
        [statement] = doc["Statement"]
        assert statement["Condition"] == {
            "StringEquals": {"aws:sourceVpce": "vpce-123"}
        }

    def test_no_unconditional_grant(self):
        doc = _helpers.bucket_policy_document(self.ARN, "vpce-123")
        assert all("Condition" in statement for statement in doc["Statement"])
        assert all(statement["Effect"] != "Deny" for statement in doc["Statement"])


class TestHealthyHttpCodes:
    def test_joins_codes(self):
        assert _helpers.healthy_http_codes((200, 307, 405)) == "200,307,405"

    def test_single_code(self):
        assert _helpers.healthy_http_codes([200]) == "200"
