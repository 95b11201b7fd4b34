"""
AWS site storage: S3 website bucket + synced content + endpoint-only policy.

This component creates the bucket that backs the site. The bucket is named
after the site FQDN, configured for static website hosting (index.html) and
created with ``force_destroy`` so that destroying the stack also deletes its
objects. Block Public Access is always on; the only grant is a bucket policy
that allows every object action to requests arriving through the S3 VPC
endpoint (``aws:sourceVpce``).

Local site assets are uploaded with a synced folder. Objects are managed by
Pulumi, so each deployment makes the bucket match the folder: changed files
are replaced and files deleted locally are deleted from the bucket.
"""

import json

import pulumi
import pulumi_aws as aws
import pulumi_synced_folder as synced_folder

from components._helpers import bucket_policy_document

ID: str = "s3router:aws:SiteStorage"

INDEX_DOCUMENT: str = "index.html"

# The endpoint-only policy is not "public" to S3, so all four can stay on.
S3_BLOCK_PUBLIC_ACCESS: dict[str, bool] = {
    "block_public_acls": True,
    "block_public_policy": True,
    "ignore_public_acls": True,
    "restrict_public_buckets": True,
}


class SiteStorage(pulumi.ComponentResource):
    """
    Website bucket reachable only through the S3 interface endpoint.

    Resources: Bucket, BucketOwnershipControls, BucketPublicAccessBlock,
    S3BucketFolder (content) and BucketPolicy.
    """

    def __init__(
        self,
        name: str,
        bucket_name: str,
        site_path: str,
        vpc_endpoint_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the bucket, upload the site and attach the bucket policy.

        Args:
            name: Pulumi resource name prefix for the bucket and children.
            bucket_name: Physical bucket name; the site FQDN so the ALB can
                forward the Host header unchanged.
            site_path: Local directory uploaded verbatim as bucket content.
            vpc_endpoint_id: Id of the endpoint the load balancer targets.
                Must be the same value the target IPs were resolved from.
            opts: Component options; pass ``providers=[...]`` to pin the
                account and region.

        Outputs (set on self, registered for the component):
            bucket_name: Physical bucket name.
            bucket_arn: Bucket ARN.
            website_endpoint: S3 website endpoint host.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # force_destroy empties the bucket on delete, so teardown leaves no objects.
        self.bucket = aws.s3.Bucket(
            resource_name=f"{name}-bucket",
            bucket=bucket_name,
            website=aws.s3.BucketWebsiteArgs(
                index_document=INDEX_DOCUMENT,
            ),
            force_destroy=True,
            opts=child_opts,
        )

        ownership_controls = aws.s3.BucketOwnershipControls(
            resource_name=f"{name}-ownership",
            bucket=self.bucket.id,
            rule=aws.s3.BucketOwnershipControlsRuleArgs(
                object_ownership="BucketOwnerPreferred",
            ),
            opts=child_opts,
        )

        self.public_access_block = aws.s3.BucketPublicAccessBlock(
            resource_name=f"{name}-block-public",
            bucket=self.bucket.id,
            opts=child_opts,
            **S3_BLOCK_PUBLIC_ACCESS,
        )

        # Uploaded only once the bucket accepts object ACLs.
        self.content = synced_folder.S3BucketFolder(
            f"{name}-content",
            path=site_path,
            bucket_name=self.bucket.bucket,
            acl="private",
            managed_objects=True,
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[ownership_controls, self.public_access_block],
            ),
        )

        policy = pulumi.Output.all(self.bucket.arn, vpc_endpoint_id).apply(
            lambda args: json.dumps(bucket_policy_document(args[0], args[1]))
        )
        # S3 rejects policy writes racing the public access block update.
        self.policy = aws.s3.BucketPolicy(
            resource_name=f"{name}-policy",
            bucket=self.bucket.id,
            policy=policy,
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[self.public_access_block],
            ),
        )

        self.bucket_name: pulumi.Output[str] = self.bucket.bucket
        self.bucket_arn: pulumi.Output[str] = self.bucket.arn
        self.website_endpoint: pulumi.Output[str] = self.bucket.website_endpoint
        self.register_outputs(
            {
                "bucket_name": self.bucket_name,
                "bucket_arn": self.bucket_arn,
                "website_endpoint": self.website_endpoint,
            }
        )
