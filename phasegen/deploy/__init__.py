"""Deployment manifests for generated operators."""

from phasegen.deploy.deployment import build_deployment, deployment_yaml

__all__ = ["build_deployment", "deployment_yaml"]
