"""Kubernetes Deployment manifest for a generated operator.

Builds the Deployment that runs the operator image as a plain dict, ready to
be dumped to YAML.  Only the operator name is taken from the project; the
image is a placeholder to be replaced at release time.
"""

from __future__ import annotations

from typing import Any

import yaml

from phasegen.codegen.models import TemplateData

IMAGE_PLACEHOLDER = "REPLACE_IMAGE"

# Environment variables the generated entrypoint reads at startup.
WATCH_NAMESPACE_ENV_VAR = "WATCH_NAMESPACE"
POD_NAME_ENV_VAR = "POD_NAME"
OPERATOR_NAME_ENV_VAR = "OPERATOR_NAME"


def build_deployment(data: TemplateData) -> dict[str, Any]:
    """Return the ``apps/v1`` Deployment for the operator described by *data*."""
    name = data.operator_name
    labels = {"name": name}
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": name},
        "spec": {
            "replicas": 1,
            "selector": {"matchLabels": dict(labels)},
            "template": {
                "metadata": {"name": name, "labels": dict(labels)},
                "spec": {
                    "serviceAccountName": name,
                    "containers": [
                        {
                            "name": name,
                            "image": IMAGE_PLACEHOLDER,
                            "command": [name],
                            "imagePullPolicy": "Always",
                            "env": [
                                _field_ref_env(WATCH_NAMESPACE_ENV_VAR, "metadata.namespace"),
                                _field_ref_env(POD_NAME_ENV_VAR, "metadata.name"),
                                {"name": OPERATOR_NAME_ENV_VAR, "value": name},
                            ],
                        }
                    ],
                },
            },
        },
    }


def deployment_yaml(data: TemplateData) -> str:
    """Serialise :func:`build_deployment` as a YAML document."""
    return yaml.safe_dump(build_deployment(data), sort_keys=False, default_flow_style=False)


def _field_ref_env(name: str, field_path: str) -> dict[str, Any]:
    """Env var populated from the pod's own metadata via the downward API."""
    return {"name": name, "valueFrom": {"fieldRef": {"fieldPath": field_path}}}
