"""Module with helper functions for creating standard sets of stacks."""

from pathlib import Path

from aws_cdk import App, Environment

from layer_manager.stacks.lambda_layer_stack import LambdaLayerStack
from layer_manager.utils.layer_config import get_layer_configs


def build_layers(
    scope: App,
    env: Environment,
    account_config: dict,
    base_dir: Path = Path(__file__).parent.parent.parent,
):
    """Build one stack per layer configured for the account.

    Parameters
    ----------
    scope : Construct
        Parent construct.
    env : Environment
        Account and region
    account_config : dict
        Account configuration (layers and other account specific configurations)
    base_dir : Path
        Directory the layer code directories are relative to

    Returns
    -------
    dict
        The created stacks, keyed by layer name
    """
    stacks = {}
    for layer_config in get_layer_configs(account_config, base_dir):
        stacks[layer_config.name] = LambdaLayerStack(
            scope,
            layer_config.name,
            layer_code_directory=layer_config.code_directory,
            runtime=layer_config.runtime,
            architectures=layer_config.architectures,
            shared_accounts=layer_config.shared_accounts,
            organization_id=layer_config.organization_id,
            bundle=layer_config.bundle,
            removal_policy=layer_config.removal_policy,
            description=layer_config.description,
            env=env,
        )

    return stacks
