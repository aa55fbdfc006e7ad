"""CDK constructs describing Lambda layer versions and who may use them."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from aws_cdk import RemovalPolicy
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

logger = logging.getLogger(__name__)

# Lambda rejects layers that declare more runtimes than this
MAX_COMPATIBLE_RUNTIMES = 15

GET_LAYER_VERSION_ACTION = "lambda:GetLayerVersion"


@dataclass
class LayerVersionPermission:
    """Data class for a layer usage grant.

    ``organization_id`` restricts a ``"*"`` grant to the accounts of a single
    AWS Organization.
    """

    account_id: str
    organization_id: Optional[str] = None


class LayerVersionBase(Construct):
    """Behaviour shared by owned and imported layer versions."""

    layer_version_arn: str
    compatible_runtimes: Optional[list[lambda_.Runtime]] = None
    _lambda_layer: Optional[lambda_.ILayerVersion] = None

    def add_permission(
        self, id: str, permission: LayerVersionPermission
    ) -> lambda_.CfnLayerVersionPermission:
        """Grant an account or organization usage of this layer.

        Parameters
        ----------
        id : str
            Construct id of the permission resource
        permission : LayerVersionPermission
            The account (and optional organization) being granted access

        Returns
        -------
        aws_lambda.CfnLayerVersionPermission
            The permission resource that was added to the layer
        """
        if (
            permission.organization_id is not None
            and permission.account_id != "*"
        ):
            raise ValueError(
                "OrganizationId can only be specified if AwsAccountId is '*', "
                f"but it is {permission.account_id}"
            )

        logger.info(
            "Granting %s on %s to account %s (organization: %s)",
            GET_LAYER_VERSION_ACTION,
            self.node.path,
            permission.account_id,
            permission.organization_id,
        )
        return lambda_.CfnLayerVersionPermission(
            self,
            id,
            action=GET_LAYER_VERSION_ACTION,
            layer_version_arn=self.layer_version_arn,
            principal=permission.account_id,
            organization_id=permission.organization_id,
        )

    def grant_usage(
        self,
        account_ids: Sequence[str] = (),
        organization_id: Optional[str] = None,
    ) -> list[lambda_.CfnLayerVersionPermission]:
        """Share the layer with a set of accounts and/or an organization.

        Each account gets a ``GrantUsage-<account>`` permission. An
        organization gets a single ``GrantUsage-<organization>`` permission
        on the ``"*"`` principal.

        Parameters
        ----------
        account_ids : Sequence[str]
            Account ids allowed to use the layer
        organization_id : str, optional
            AWS Organization whose accounts may use the layer

        Returns
        -------
        list[aws_lambda.CfnLayerVersionPermission]
            The permission resources, accounts first
        """
        permissions = [
            self.add_permission(
                f"GrantUsage-{account_id}",
                LayerVersionPermission(account_id=account_id),
            )
            for account_id in account_ids
        ]
        if organization_id is not None:
            permissions.append(
                self.add_permission(
                    f"GrantUsage-{organization_id}",
                    LayerVersionPermission(
                        account_id="*", organization_id=organization_id
                    ),
                )
            )
        return permissions

    def as_lambda_layer(self) -> lambda_.ILayerVersion:
        """Return a view of this layer that ``aws_lambda.Function`` accepts."""
        if self._lambda_layer is None:
            self._lambda_layer = lambda_.LayerVersion.from_layer_version_attributes(
                self,
                "LambdaLayer",
                layer_version_arn=self.layer_version_arn,
                compatible_runtimes=self.compatible_runtimes,
            )
        return self._lambda_layer


class ImportedLayerVersion(LayerVersionBase):
    """A layer version that was defined outside of this app."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        layer_version_arn: str,
        compatible_runtimes: Optional[list[lambda_.Runtime]] = None,
    ) -> None:
        """Reference an existing layer version by ARN.

        Parameters
        ----------
        scope : Construct
            Parent construct
        id : str
            A unique string identifier for this construct
        layer_version_arn : str
            ARN of the existing layer version
        compatible_runtimes : list[aws_lambda.Runtime], optional
            Runtimes the existing layer supports
        """
        super().__init__(scope, id)
        self.layer_version_arn = layer_version_arn
        self.compatible_runtimes = compatible_runtimes


class LayerVersion(LayerVersionBase):
    """A new version of a Lambda layer.

    The construct translates its properties onto a single
    ``AWS::Lambda::LayerVersion`` resource. Usage grants are added afterwards
    with :meth:`add_permission` or :meth:`grant_usage`.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        code: lambda_.Code,
        compatible_runtimes: Optional[list[lambda_.Runtime]] = None,
        compatible_architectures: Optional[list[lambda_.Architecture]] = None,
        description: Optional[str] = None,
        license: Optional[str] = None,
        layer_version_name: Optional[str] = None,
        removal_policy: Optional[RemovalPolicy] = None,
    ) -> None:
        """Create the layer version resource.

        Parameters
        ----------
        scope : Construct
            Parent construct
        id : str
            A unique string identifier for this construct
        code : aws_lambda.Code
            The layer content. Must resolve to an S3 location.
        compatible_runtimes : list[aws_lambda.Runtime], optional
            Runtimes the layer supports. Omitted from the template when None.
        compatible_architectures : list[aws_lambda.Architecture], optional
            Instruction set architectures the layer supports
        description : str, optional
            Description of the layer version
        license : str, optional
            SPDX identifier or license URL of the layer content
        layer_version_name : str, optional
            Name of the layer. CloudFormation generates one when omitted.
        removal_policy : RemovalPolicy, optional
            What happens to the version when it leaves the stack. When None no
            policy is written and CloudFormation deletes the version.
        """
        super().__init__(scope, id)

        if compatible_runtimes is not None:
            if len(compatible_runtimes) == 0:
                raise ValueError(
                    "Attempted to define a Lambda layer that supports no runtime!"
                )
            if len(compatible_runtimes) > MAX_COMPATIBLE_RUNTIMES:
                raise ValueError(
                    f"Lambda layers support at most {MAX_COMPATIBLE_RUNTIMES} "
                    f"runtimes, got {len(compatible_runtimes)}"
                )
        if compatible_architectures is not None and len(compatible_architectures) == 0:
            raise ValueError(
                "Attempted to define a Lambda layer that supports no architecture!"
            )

        code_config = code.bind(self)
        if code_config.inline_code is not None:
            raise ValueError("Inline code is not supported for AWS Lambda layers")
        if code_config.s3_location is None:
            raise ValueError("Lambda layer code must be an S3 location")

        location = code_config.s3_location
        resource = lambda_.CfnLayerVersion(
            self,
            "Resource",
            content=lambda_.CfnLayerVersion.ContentProperty(
                s3_bucket=location.bucket_name,
                s3_key=location.object_key,
                s3_object_version=location.object_version,
            ),
            compatible_runtimes=(
                [runtime.name for runtime in compatible_runtimes]
                if compatible_runtimes is not None
                else None
            ),
            compatible_architectures=(
                [architecture.name for architecture in compatible_architectures]
                if compatible_architectures is not None
                else None
            ),
            description=description,
            layer_name=layer_version_name,
            license_info=license,
        )
        if removal_policy is not None:
            resource.apply_removal_policy(removal_policy)

        # Adds the aws:asset:* metadata when asset metadata is enabled
        code.bind_to_resource(resource, resource_property="Content")

        self.resource = resource
        self.layer_version_arn = resource.ref
        self.compatible_runtimes = compatible_runtimes
        self.compatible_architectures = compatible_architectures
        logger.debug("Defined layer version %s", self.node.path)

    @classmethod
    def from_layer_version_arn(
        cls, scope: Construct, id: str, layer_version_arn: str
    ) -> ImportedLayerVersion:
        """Reference an existing layer version that supports any runtime."""
        return ImportedLayerVersion(scope, id, layer_version_arn)

    @classmethod
    def from_layer_version_attributes(
        cls,
        scope: Construct,
        id: str,
        layer_version_arn: str,
        compatible_runtimes: Optional[list[lambda_.Runtime]] = None,
    ) -> ImportedLayerVersion:
        """Reference an existing layer version with known runtimes."""
        if compatible_runtimes is not None and len(compatible_runtimes) == 0:
            raise ValueError(
                "Invalid AWS Lambda layer version: it supports no runtime!"
            )
        return ImportedLayerVersion(
            scope,
            id,
            layer_version_arn,
            compatible_runtimes=compatible_runtimes,
        )
