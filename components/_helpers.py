"""
Pure helpers for naming, endpoint topology and policy documents. Testable
without Pulumi runtime.

Used by the network component (s3_interface_service_name,
require_interface_ids), the storage component (bucket_policy_document), the
routing component (healthy_http_codes) and by config (site_fqdn). No Pulumi
types; all functions accept and return plain Python types so they can be
unit-tested without a Pulumi stack.
"""

from typing import Iterable, Sequence


class InterfaceCountError(ValueError):
    """The VPC endpoint reported a different number of ENIs than targeted."""


def site_fqdn(
    domain: str,
    subdomain: str,
) -> str:
    """
    Build an FQDN like 'site1.example.com' from domain and subdomain.

    AWS (S3 bucket names, ALB host-header conditions, Route 53 record names)
    takes names without the trailing dot, so any trailing dot on domain is
    dropped.
    """
    return f"{subdomain}.{domain.rstrip('.')}"


def s3_interface_service_name(
    region: str,
) -> str:
    """Endpoint service name of S3 in region, e.g. 'com.amazonaws.eu-west-1.s3'."""
    return f"com.amazonaws.{region}.s3"


def require_interface_ids(
    interface_ids: Iterable[str] | None,
    expected: int,
) -> list[str]:
    """
    Return the endpoint's ENI ids sorted, checking there are exactly ``expected``.

    Target-group attachments are declared per expected interface, so a
    mismatch would otherwise leave targets missing or point them at the
    wrong address. The provider reports the ids as an unordered set; sorting
    keeps each index-named attachment bound to the same interface across runs.

    Raises:
        InterfaceCountError: if the count differs from expected.
    """
    ids = sorted(interface_ids or [])
    if len(ids) != expected:
        raise InterfaceCountError(
            f"VPC endpoint has {len(ids)} network interface(s), expected {expected}: {ids}"
        )
    return ids


def bucket_policy_document(
    bucket_arn: str,
    vpc_endpoint_id: str,
) -> dict:
    """
    Bucket policy allowing every S3 action on objects, only via the endpoint.

    The statement grants to any principal; the aws:sourceVpce condition is the
    sole authorization signal. Requests that don't arrive through the endpoint
    match no statement and fall through to S3's implicit deny.
    """
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"AWS": "*"},
                "Action": "s3:*",
                "Resource": f"{bucket_arn}/*",
                "Condition": {
                    "StringEquals": {"aws:sourceVpce": vpc_endpoint_id},
                },
            }
        ],
    }


def healthy_http_codes(
    codes: Sequence[int],
) -> str:
    """Target group matcher string, e.g. (200, 307, 405) -> '200,307,405'."""
    return ",".join(str(code) for code in codes)
