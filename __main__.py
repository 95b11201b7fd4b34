"""
Private S3 website router - Pulumi entrypoint.

Wires four ComponentResources with output chaining, all under one AWS
provider pinned to ACCOUNT_ID and AWS_REGION:

- **Network**: default VPC and an S3 interface endpoint. Its id feeds the
  bucket policy; its resolved private IPs feed the load balancer targets.
- **Storage**: bucket named site1.<DOMAIN_NAME> with the ./site content,
  readable only through the endpoint.
- **Routing**: public ALB; Host site1.<DOMAIN_NAME> is forwarded to the
  endpoint IPs, anything else gets a 404.
- **DNS**: CNAME site1.<DOMAIN_NAME> -> ALB in the existing hosted zone.

Stack exports: site_url, bucket_name, bucket_arn, website_endpoint,
endpoint_id, endpoint_ips, load_balancer_dns_name, load_balancer_zone_id,
target_group_arn, hosted_zone_id, record_name.
"""

import os
import sys
from pathlib import Path

import pulumi
import pulumi_aws as aws

from components import NetworkInfra, RoutingInfra, SiteDns, SiteStorage
from config import ConfigError, StackConfig

SITE_PATH: str = str(Path(__file__).resolve().parent / "site")


def _component_name(prefix: str) -> str:
    return f"{prefix}-{pulumi.get_stack()}"


def main():
    """
    Build the network, storage, routing and DNS components and export outputs.

    Reads ACCOUNT_ID, AWS_REGION and DOMAIN_NAME; exits with status 1 and the
    usage message before declaring anything if one is missing.
    """
    try:
        config = StackConfig.from_environ(os.environ)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    pulumi.log.info(
        f"Routing http://{config.site_fqdn} via S3 endpoint in {config.region}"
    )

    provider = aws.Provider(
        "aws-pinned",
        region=config.region,
        allowed_account_ids=[config.account_id],
    )
    component_opts = pulumi.ResourceOptions(providers=[provider])

    network = NetworkInfra(
        name=_component_name("network"),
        service_name=config.s3_service_name,
        opts=component_opts,
    )

    # Same endpoint id as the resolved IPs; a mismatch would lock the site out.
    storage = SiteStorage(
        name=_component_name("storage"),
        bucket_name=config.site_fqdn,
        site_path=SITE_PATH,
        vpc_endpoint_id=network.endpoint_id,
        opts=component_opts,
    )

    routing = RoutingInfra(
        name=_component_name("routing"),
        vpc_id=network.vpc_id,
        subnet_ids=network.subnet_ids,
        target_ips=network.private_ips,
        host_name=config.site_fqdn,
        opts=component_opts,
    )

    dns = SiteDns(
        name=_component_name("dns"),
        domain_name=config.domain_name,
        record_name=config.site_fqdn,
        target=routing.dns_name,
        opts=component_opts,
    )

    for output_name, value in [
        ("site_url", f"http://{config.site_fqdn}"),
        ("bucket_name", storage.bucket_name),
        ("bucket_arn", storage.bucket_arn),
        ("website_endpoint", storage.website_endpoint),
        ("endpoint_id", network.endpoint_id),
        ("endpoint_ips", pulumi.Output.all(*network.private_ips)),
        ("load_balancer_dns_name", routing.dns_name),
        ("load_balancer_zone_id", routing.zone_id),
        ("target_group_arn", routing.target_group_arn),
        ("hosted_zone_id", dns.zone_id),
        ("record_name", dns.record_name),
    ]:
        pulumi.export(output_name, value)


if __name__ == "__main__":
    main()
