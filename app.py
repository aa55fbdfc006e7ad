#!/usr/bin/env python3
"""Serves as the dev and production deployment app.

The app defaults to a dev deployment via a default `account_name` value in
`cdk.json.`

To deploy to prod, specify `--context account_name=prod`.
"""

import logging

from aws_cdk import App, Environment

from layer_manager.utils.stackbuilder import build_layers

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = App()

# Grab values from context
# account_name is the section we are looking for parameters in
# within the cdk.json file:
#    "account_name": {"account": "0123", "region": "us-west-2", "layers": {...}}
# This can be overridden via the command line: `--context account_name=prod`
account_name = app.node.get_context("account_name")

# once we have the account_name, get that section out of cdk.json
account_config = app.node.get_context(account_name)
# Add the account_name to the account_config for later lookup
account_config["account_name"] = account_name
account = account_config["account"]
region = account_config["region"]

env = Environment(account=account, region=region)
logger.info(f"Using the {account_name} account [{account}] in the {region} region.")

build_layers(app, env=env, account_config=account_config)

app.synth()
