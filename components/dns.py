"""
Route 53: CNAME for the site in an existing public hosted zone.

The zone is looked up by domain name, not created; a missing zone fails the
deployment. The record maps the site FQDN to the load balancer DNS name,
which may be a plain string or an ``Output[str]`` from the routing component.
"""

import pulumi
import pulumi_aws as aws

ID: str = "s3router:aws:SiteDns"

# CNAME target may be known now (str) or only after the load balancer exists
# (pulumi.Output[str]).
DnsTarget = str | pulumi.Output[str]


class SiteDns(pulumi.ComponentResource):
    """CNAME ``<record_name>`` -> target in the hosted zone for domain_name."""

    def __init__(
        self,
        name: str,
        domain_name: str,
        record_name: str,
        target: DnsTarget,
        ttl: int = 300,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__(ID, name, None, opts)

        zone = aws.route53.get_zone_output(
            name=domain_name,
            private_zone=False,
            opts=pulumi.InvokeOptions(parent=self),
        )

        self.record = aws.route53.Record(
            resource_name=f"{name}-cname",
            zone_id=zone.zone_id,
            name=record_name,
            type="CNAME",
            ttl=ttl,
            records=[target],
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.zone_id: pulumi.Output[str] = zone.zone_id
        self.record_name: pulumi.Output[str] = self.record.name
        self.register_outputs(
            {"zone_id": self.zone_id, "record_name": self.record_name}
        )
