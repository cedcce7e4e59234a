"""Fixed references for the Elastic APM Java agent injected into pods."""

from __future__ import annotations

import copy
from typing import Any, Dict, List

VOLUME_NAME = "elastic-apm-agent"
MOUNT_PATH = "/elastic/apm/agent"

INIT_CONTAINER_NAME = "elastic-java-agent"
AGENT_IMAGE = "docker.elastic.co/observability/apm-agent-java:1.23.0"
AGENT_JAR_PATH = "/usr/agent/elastic-apm-agent.jar"
INIT_COMMAND = ("cp", "-v", AGENT_JAR_PATH, MOUNT_PATH)

SECRET_TOKEN_ENV = "ELASTIC_APM_SECRET_TOKEN"
SECRET_NAME = "apm-server-apm-token"
SECRET_KEY = "secret-token"

_AGENT_VOLUME: Dict[str, Any] = {"name": VOLUME_NAME, "emptyDir": {}}
_AGENT_VOLUME_MOUNT: Dict[str, Any] = {"name": VOLUME_NAME, "mountPath": MOUNT_PATH}


def agent_volume() -> Dict[str, Any]:
    return copy.deepcopy(_AGENT_VOLUME)


def agent_volume_mount() -> Dict[str, Any]:
    return dict(_AGENT_VOLUME_MOUNT)


def agent_init_container() -> Dict[str, Any]:
    """Init container that stages the agent jar into the shared volume."""

    return {
        "name": INIT_CONTAINER_NAME,
        "image": AGENT_IMAGE,
        "volumeMounts": [agent_volume_mount()],
        "command": list(INIT_COMMAND),
    }


def secret_token_env() -> Dict[str, Any]:
    return {
        "name": SECRET_TOKEN_ENV,
        "valueFrom": {"secretKeyRef": {"name": SECRET_NAME, "key": SECRET_KEY}},
    }


def configured_env_names(environment: Dict[str, str]) -> List[str]:
    return [SECRET_TOKEN_ENV, *sorted(environment)]


__all__ = [
    "AGENT_IMAGE",
    "AGENT_JAR_PATH",
    "INIT_COMMAND",
    "INIT_CONTAINER_NAME",
    "MOUNT_PATH",
    "SECRET_KEY",
    "SECRET_NAME",
    "SECRET_TOKEN_ENV",
    "VOLUME_NAME",
    "agent_init_container",
    "agent_volume",
    "agent_volume_mount",
    "configured_env_names",
    "secret_token_env",
]
