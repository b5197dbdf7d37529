from __future__ import annotations

from typing import List, Optional, Protocol

from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from kns.errors import ClusterQueryError
from kns.logger import logger


class NamespaceLister(Protocol):
    def list_namespaces(self) -> List[str]: ...


class KubernetesNamespaceLister:
    """
    Lists namespace names through the Kubernetes API.

    The API client is built from the kubeconfig file, so authentication
    (certificates, tokens, exec and OIDC plugins) is handled by the kubernetes
    client library. ``context`` only selects the connection; it never changes
    what the file considers the current context.
    """

    def __init__(self, config_file: str, context: Optional[str] = None) -> None:
        self.config_file = config_file
        self.context = context

    def list_namespaces(self) -> List[str]:
        try:
            api_client = k8s_config.new_client_from_config(
                config_file=self.config_file, context=self.context
            )
        except (ConfigException, OSError) as e:
            raise ClusterQueryError(e) from e

        try:
            namespaces = client.CoreV1Api(api_client).list_namespace()
        except (ApiException, HTTPError) as e:
            raise ClusterQueryError(e) from e
        finally:
            api_client.close()

        names = [
            ns.metadata.name for ns in namespaces.items if ns.metadata is not None
        ]
        logger.debug(f"Cluster returned {len(names)} namespace(s)")
        return names
