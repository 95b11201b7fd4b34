"""
AWS infrastructure components for the private S3 website router.

Each concern is encapsulated in its own ComponentResource for clear ownership,
testability, and reuse. Use from the Pulumi entrypoint (__main__.py) with
output chaining:

- **NetworkInfra**: default VPC + S3 interface endpoint; exposes endpoint_id
  and one private IP per endpoint interface.
- **SiteStorage**: website bucket + synced content; the bucket policy only
  admits requests through the endpoint id it is given.
- **RoutingInfra**: internet-facing ALB; host-header rule forwards to the
  endpoint IPs, everything else gets 404. Exposes dns_name.
- **SiteDns**: CNAME in an existing hosted zone pointing at the ALB.
"""

from components.dns import SiteDns
from components.network import NetworkInfra
from components.routing import RoutingInfra
from components.storage import SiteStorage

__all__ = ["NetworkInfra", "RoutingInfra", "SiteDns", "SiteStorage"]
