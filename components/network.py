"""
AWS networking: default VPC lookup + S3 interface endpoint + ENI resolution.

This component looks up the account's default VPC, creates an interface VPC
endpoint for S3 (reachable on port 80 from inside the VPC) and resolves the
endpoint's network interfaces to their private IP addresses in two stages:

1. the endpoint's ``network_interface_ids`` are checked against the number of
   subnets the endpoint was placed in (``interface_count``);
2. each interface id is looked up with ``ec2:DescribeNetworkInterfaces`` for
   its private IP.

The resulting ``private_ips`` are a list of ``Output[str]`` with one entry per
expected interface, so callers (the routing component) can declare a fixed
number of IP targets. ``endpoint_id`` is the single source of truth for the
bucket policy condition.
"""

import pulumi
import pulumi_aws as aws

from components._helpers import require_interface_ids

ID: str = "s3router:aws:NetworkInfra"

# ENIs the endpoint gets: one per subnet it is placed in.
DEFAULT_INTERFACE_COUNT: int = 2
ENDPOINT_PORT: int = 80


class NetworkInfra(pulumi.ComponentResource):
    """
    Default VPC, S3 interface endpoint and its resolved private IPs.

    Resources: SecurityGroup (endpoint ingress), VpcEndpoint. Lookups: default
    VPC, its default-for-az subnets, and one network interface per ENI.
    """

    def __init__(
        self,
        name: str,
        service_name: str,
        interface_count: int = DEFAULT_INTERFACE_COUNT,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Look up the network, create the endpoint and resolve its addresses.

        Args:
            name: Pulumi resource name prefix for the endpoint and its group.
            service_name: Endpoint service, e.g. "com.amazonaws.us-east-1.s3".
            interface_count: Number of subnets (and so ENIs) for the endpoint.
                Resolution fails with InterfaceCountError if AWS reports a
                different number of interfaces.
            opts: Component options; pass ``providers=[...]`` to pin the
                account and region.

        Outputs (set on self, registered for the component):
            vpc_id: Default VPC id.
            subnet_ids: All default-for-az subnets (for the load balancer).
            endpoint_id: VPC endpoint id (bucket policy condition).
            interface_ids: Checked ENI ids of the endpoint.
            private_ips: One Output[str] per expected ENI.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        # Lookups inherit the provider from this component.
        invoke_opts = pulumi.InvokeOptions(parent=self)

        vpc = aws.ec2.get_vpc_output(default=True, opts=invoke_opts)
        subnets = aws.ec2.get_subnets_output(
            filters=[
                aws.ec2.GetSubnetsFilterArgs(name="vpc-id", values=[vpc.id]),
                aws.ec2.GetSubnetsFilterArgs(name="default-for-az", values=["true"]),
            ],
            opts=invoke_opts,
        )
        self.vpc_id: pulumi.Output[str] = vpc.id
        self.subnet_ids: pulumi.Output[list[str]] = subnets.ids.apply(sorted)

        # Interface endpoints only accept traffic their security group lets in.
        endpoint_sg = aws.ec2.SecurityGroup(
            resource_name=f"{name}-endpoint-sg",
            vpc_id=vpc.id,
            description="S3 interface endpoint",
            ingress=[
                aws.ec2.SecurityGroupIngressArgs(
                    protocol="tcp",
                    from_port=ENDPOINT_PORT,
                    to_port=ENDPOINT_PORT,
                    cidr_blocks=[vpc.cidr_block],
                )
            ],
            opts=child_opts,
        )

        # Pin the endpoint to interface_count subnets so the ENI count is known
        # while the program runs and target attachments can be declared up front.
        endpoint_subnets = self.subnet_ids.apply(lambda ids: ids[:interface_count])
        self.endpoint = aws.ec2.VpcEndpoint(
            resource_name=f"{name}-s3-endpoint",
            vpc_id=vpc.id,
            service_name=service_name,
            vpc_endpoint_type="Interface",
            subnet_ids=endpoint_subnets,
            security_group_ids=[endpoint_sg.id],
            private_dns_enabled=False,
            opts=child_opts,
        )
        self.endpoint_id: pulumi.Output[str] = self.endpoint.id

        # Stage 1: endpoint -> interface ids, with the count check.
        self.interface_ids: pulumi.Output[list[str]] = (
            self.endpoint.network_interface_ids.apply(
                lambda ids: require_interface_ids(ids, interface_count)
            )
        )

        # Stage 2: interface id -> private IP, one lookup per interface.
        self.private_ips: list[pulumi.Output[str]] = [
            aws.ec2.get_network_interface_output(
                id=self.interface_ids[index],
                opts=invoke_opts,
            ).private_ip
            for index in range(interface_count)
        ]
        pulumi.log.debug(
            f"Resolving {interface_count} S3 endpoint interface(s) for {service_name}",
            resource=self,
        )

        self.register_outputs(
            {
                "vpc_id": self.vpc_id,
                "endpoint_id": self.endpoint_id,
                "interface_ids": self.interface_ids,
                "private_ips": self.private_ips,
            }
        )
