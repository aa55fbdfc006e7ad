"""CDK construct to create a Lambda Layer."""

import logging
from pathlib import Path

import aws_cdk as cdk
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from layer_manager.constructs.layer_version import LayerVersion

logger = logging.getLogger(__name__)


class LambdaLayerConstruct(Construct):
    """Lambda Layer Construct."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        layer_dependencies_dir: str,
        runtime: lambda_.Runtime = lambda_.Runtime.PYTHON_3_12,
        architectures: list[lambda_.Architecture] = None,
        bundle: bool = True,
        removal_policy: cdk.RemovalPolicy = cdk.RemovalPolicy.DESTROY,
        description: str = None,
        **kwargs,
    ) -> None:
        """Create layer.

        In layer code directory, there should exist a requirements.txt file
        which is used to install the dependencies for the lambda layer.
        Bundling runs inside the runtime's bundling image, so it needs Docker
        at synth time. Pass ``bundle=False`` to package the directory as-is.

        Parameters
        ----------
        scope : obj
            Parent construct
        id : str
            A unique string identifier for this construct
        layer_dependencies_dir : str
            Directory containing the lambda layer requirements.txt file
        runtime : aws_lambda.Runtime
            Runtime the layer is built for and compatible with
        architectures : list[aws_lambda.Architecture], optional
            Architectures the layer is compatible with
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

        if not Path(layer_dependencies_dir).is_dir():
            raise FileNotFoundError(
                f"Layer dependencies directory not found: {layer_dependencies_dir}"
            )

        if bundle:
            code_bundle = lambda_.Code.from_asset(
                layer_dependencies_dir,
                bundling=cdk.BundlingOptions(
                    image=runtime.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        (
                            "pip install -r requirements.txt -t /asset-output/python && "
                            "cp -au . /asset-output/python"
                        ),
                    ],
                ),
            )
        else:
            logger.info("Packaging %s without bundling", layer_dependencies_dir)
            code_bundle = lambda_.Code.from_asset(layer_dependencies_dir)

        self.layer = LayerVersion(
            self,
            id=f"{id}-Layer",
            code=code_bundle,
            compatible_runtimes=[runtime],
            compatible_architectures=architectures,
            description=description,
            removal_policy=removal_policy,
        )
