"""
AWS routing: public ALB forwarding one hostname to the S3 endpoint IPs.

This component creates an internet-facing Application Load Balancer with a
security group open on TCP/80, and a single HTTP listener. The listener's
default action answers 404 (``text/plain``, ``Not Found``); one rule at
priority 1 forwards requests whose Host header is the site FQDN to a target
group of static IP targets, the private addresses of the S3 interface
endpoint. S3 serves the bucket named after the Host header, so no rewriting is
needed.

Health checks hit ``GET /`` on the endpoint IPs every five minutes. S3 answers
that path with 307 or 405 rather than 200, so those count as healthy too.
"""

import pulumi
import pulumi_aws as aws

from components._helpers import healthy_http_codes

ID: str = "s3router:aws:RoutingInfra"

TARGET_GROUP_NAME: str = "S3Endpoints"
HTTP_PORT: int = 80
HOST_RULE_PRIORITY: int = 1
HEALTH_CHECK_PATH: str = "/"
HEALTH_CHECK_INTERVAL_SECONDS: int = 300
HEALTHY_HTTP_CODES: tuple[int, ...] = (200, 307, 405)

NOT_FOUND_RESPONSE: dict[str, str] = {
    "status_code": "404",
    "content_type": "text/plain",
    "message_body": "Not Found",
}

ANYWHERE_IPV4: str = "0.0.0.0/0"


class RoutingInfra(pulumi.ComponentResource):
    """
    ALB + HTTP listener with host-header routing to S3 endpoint IPs.

    Resources: TargetGroup, one TargetGroupAttachment per IP, SecurityGroup,
    LoadBalancer, Listener (default 404) and ListenerRule (priority 1).
    """

    def __init__(
        self,
        name: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: pulumi.Input[list[str]],
        target_ips: list[pulumi.Input[str]],
        host_name: str,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the target group, load balancer, listener and routing rule.

        Args:
            name: Pulumi resource name prefix for the load balancer and children.
            vpc_id: VPC of the load balancer and target group.
            subnet_ids: Public subnets for the load balancer (at least two AZs).
            target_ips: Static IP targets, one attachment each.
            host_name: Host header value forwarded to the targets; every other
                host gets the default 404.
            opts: Component options; pass ``providers=[...]`` to pin the
                account and region.

        Outputs (set on self, registered for the component):
            dns_name: Load balancer DNS name (CNAME target).
            zone_id: Load balancer canonical hosted zone id.
            target_group_arn: ARN of the S3 endpoint target group.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.target_group = aws.lb.TargetGroup(
            resource_name=f"{name}-s3-endpoints",
            name=TARGET_GROUP_NAME,
            port=HTTP_PORT,
            protocol="HTTP",
            target_type="ip",
            vpc_id=vpc_id,
            health_check=aws.lb.TargetGroupHealthCheckArgs(
                enabled=True,
                protocol="HTTP",
                path=HEALTH_CHECK_PATH,
                interval=HEALTH_CHECK_INTERVAL_SECONDS,
                matcher=healthy_http_codes(HEALTHY_HTTP_CODES),
            ),
            opts=child_opts,
        )

        self.attachments = [
            aws.lb.TargetGroupAttachment(
                resource_name=f"{name}-s3-endpoint-{index}",
                target_group_arn=self.target_group.arn,
                target_id=ip,
                port=HTTP_PORT,
                opts=child_opts,
            )
            for index, ip in enumerate(target_ips)
        ]

        alb_sg = aws.ec2.SecurityGroup(
            resource_name=f"{name}-alb-sg",
            vpc_id=vpc_id,
            description="Public HTTP ingress for the site load balancer",
            ingress=[
                aws.ec2.SecurityGroupIngressArgs(
                    protocol="tcp",
                    from_port=HTTP_PORT,
                    to_port=HTTP_PORT,
                    cidr_blocks=[ANYWHERE_IPV4],
                )
            ],
            egress=[
                aws.ec2.SecurityGroupEgressArgs(
                    protocol="-1",
                    from_port=0,
                    to_port=0,
                    cidr_blocks=[ANYWHERE_IPV4],
                )
            ],
            opts=child_opts,
        )

        self.load_balancer = aws.lb.LoadBalancer(
            resource_name=f"{name}-alb",
            load_balancer_type="application",
            internal=False,
            security_groups=[alb_sg.id],
            subnets=subnet_ids,
            opts=child_opts,
        )

        self.listener = aws.lb.Listener(
            resource_name=f"{name}-http",
            load_balancer_arn=self.load_balancer.arn,
            port=HTTP_PORT,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="fixed-response",
                    fixed_response=aws.lb.ListenerDefaultActionFixedResponseArgs(
                        **NOT_FOUND_RESPONSE,
                    ),
                )
            ],
            opts=child_opts,
        )

        # Only rule on the listener; anything else falls through to the 404.
        self.host_rule = aws.lb.ListenerRule(
            resource_name=f"{name}-s3",
            listener_arn=self.listener.arn,
            priority=HOST_RULE_PRIORITY,
            actions=[
                aws.lb.ListenerRuleActionArgs(
                    type="forward",
                    target_group_arn=self.target_group.arn,
                )
            ],
            conditions=[
                aws.lb.ListenerRuleConditionArgs(
                    host_header=aws.lb.ListenerRuleConditionHostHeaderArgs(
                        values=[host_name],
                    ),
                )
            ],
            opts=child_opts,
        )

        self.dns_name: pulumi.Output[str] = self.load_balancer.dns_name
        self.zone_id: pulumi.Output[str] = self.load_balancer.zone_id
        self.target_group_arn: pulumi.Output[str] = self.target_group.arn
        self.register_outputs(
            {
                "dns_name": self.dns_name,
                "zone_id": self.zone_id,
                "target_group_arn": self.target_group_arn,
            }
        )
