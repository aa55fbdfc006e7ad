"""Read Lambda layer definitions from the account section of cdk.json."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from aws_cdk import RemovalPolicy
from aws_cdk import aws_lambda as lambda_

logger = logging.getLogger(__name__)

ARCHITECTURES = {
    lambda_.Architecture.X86_64.name: lambda_.Architecture.X86_64,
    lambda_.Architecture.ARM_64.name: lambda_.Architecture.ARM_64,
}

REMOVAL_POLICIES = {
    "retain": RemovalPolicy.RETAIN,
    "destroy": RemovalPolicy.DESTROY,
    "snapshot": RemovalPolicy.SNAPSHOT,
}


def get_runtime(name):
    """Look up a Lambda runtime by its name, e.g. ``python3.12``."""
    for runtime in lambda_.Runtime.ALL:
        if runtime.name == name:
            return runtime
    raise ValueError(f"Unknown Lambda runtime: {name}")


def get_architecture(name):
    """Look up an instruction set architecture by name, e.g. ``arm64``."""
    try:
        return ARCHITECTURES[name]
    except KeyError:
        raise ValueError(
            f"Unknown architecture: {name}, expected one of {sorted(ARCHITECTURES)}"
        ) from None


def get_removal_policy(name):
    """Map a removal policy name onto ``RemovalPolicy``."""
    try:
        return REMOVAL_POLICIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown removal policy: {name}, "
            f"expected one of {sorted(REMOVAL_POLICIES)}"
        ) from None


@dataclass
class LayerConfig:
    """Data class for one layer entry of an account configuration."""

    name: str
    code_directory: str
    runtime: lambda_.Runtime
    architectures: Optional[list] = None
    shared_accounts: list[str] = field(default_factory=list)
    organization_id: Optional[str] = None
    removal_policy: RemovalPolicy = RemovalPolicy.DESTROY
    bundle: bool = True
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, name, data, base_dir="."):
        """Create a layer configuration from its cdk.json entry.

        Parameters
        ----------
        name : str
            Name of the layer, used as the stack id
        data : dict
            The layer entry, e.g.
            ``{"code_directory": "layers/db", "runtime": "python3.12"}``
        base_dir : str or Path
            Directory relative code directories are resolved against

        Returns
        -------
        LayerConfig
            The parsed configuration
        """
        if "code_directory" not in data:
            raise KeyError(f"Layer '{name}' is missing 'code_directory'.")

        code_directory = Path(data["code_directory"])
        if not code_directory.is_absolute():
            code_directory = Path(base_dir) / code_directory

        architectures = data.get("architectures")
        if architectures is not None:
            architectures = [get_architecture(arch) for arch in architectures]

        return cls(
            name=name,
            code_directory=str(code_directory),
            runtime=get_runtime(data.get("runtime", "python3.12")),
            architectures=architectures,
            shared_accounts=list(data.get("shared_accounts", [])),
            organization_id=data.get("organization_id"),
            removal_policy=get_removal_policy(data.get("removal_policy", "destroy")),
            bundle=data.get("bundle", True),
            description=data.get("description"),
        )


def get_layer_configs(account_config, base_dir="."):
    """Return the layer configurations of an account.

    Parameters
    ----------
    account_config : dict
        The account section of cdk.json
    base_dir : str or Path
        Directory relative code directories are resolved against

    Returns
    -------
    list[LayerConfig]
        One entry per configured layer, in declaration order
    """
    layers = account_config.get("layers", {})
    configs = [
        LayerConfig.from_dict(name, data, base_dir) for name, data in layers.items()
    ]
    logger.info(
        "Found %d layer(s) for account %s",
        len(configs),
        account_config.get("account_name"),
    )
    return configs
