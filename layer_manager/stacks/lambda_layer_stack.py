"""CDK stack to create and share a Lambda Layer."""

import aws_cdk as cdk
from aws_cdk import Stack
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from layer_manager.constructs.lambda_layer_construct import LambdaLayerConstruct


class LambdaLayerStack(Stack):
    """Lambda Layer Stack."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        layer_code_directory: str,
        runtime: lambda_.Runtime = lambda_.Runtime.PYTHON_3_12,
        architectures: list[lambda_.Architecture] = None,
        shared_accounts: list[str] = (),
        organization_id: str = None,
        bundle: bool = True,
        removal_policy: cdk.RemovalPolicy = cdk.RemovalPolicy.DESTROY,
        description: str = None,
        **kwargs,
    ) -> None:
        """Create layer stack.

        In layer code directory, there should exist a requirements.txt file
        which is used to install the dependencies for the lambda layer.


        Parameters
        ----------
        scope : obj
            Parent construct
        id : str
            A unique string identifier for this construct
        layer_code_directory : str
            Directory containing the lambda layer code
        runtime : aws_lambda.Runtime
            Runtime the layer is built for
        architectures : list[aws_lambda.Architecture], optional
            Architectures the layer is compatible with
        shared_accounts : list[str]
            Account ids allowed to use the layer
        organization_id : str, optional
            AWS Organization whose accounts may use the layer
        bundle : bool
            Whether to install the requirements into the asset
        removal_policy : RemovalPolicy
            Removal policy of the layer version
        description : str, optional
            Description of the layer version
        kwargs : dict
            Keyword arguments
        """
        super().__init__(scope, id, **kwargs)

        layer_construct = LambdaLayerConstruct(
            self,
            id=f"{id}-Construct",
            layer_dependencies_dir=layer_code_directory,
            runtime=runtime,
            architectures=architectures,
            bundle=bundle,
            removal_policy=removal_policy,
            description=description,
        )
        self.layer = layer_construct.layer
        self.layer.grant_usage(
            account_ids=shared_accounts, organization_id=organization_id
        )

        # Output the layer ARN that other lambda functions can import and use
        layer_arn = self.layer.layer_version_arn
        cdk.CfnOutput(self, f"{id}-Arn", export_name=id, value=layer_arn)
