from __future__ import annotations

from typing import List, Optional, Tuple

from kns.config import RawConfiguration, read_kubeconfig
from kns.errors import MissingContextError
from kns.k8s import KubernetesNamespaceLister, NamespaceLister
from kns.logger import logger


class ConfigLoader:
    """
    Loads the kubeconfig and the namespaces the cluster currently knows about.

    Args:
        kubeconfig_path (str): The kubeconfig file to read.
        lister (Optional[NamespaceLister]): Where namespace names come from.
            Defaults to the Kubernetes API of the cluster in the kubeconfig.
        context (Optional[str]): The context used to reach the cluster when the
            default lister is built.
    """

    def __init__(
        self,
        kubeconfig_path: str,
        lister: Optional[NamespaceLister] = None,
        context: Optional[str] = None,
    ) -> None:
        self.kubeconfig_path = kubeconfig_path
        self.context = context
        if lister is None:
            lister = KubernetesNamespaceLister(kubeconfig_path, context)
        self.lister = lister

    def load(self) -> Tuple[RawConfiguration, List[str]]:
        """
        Reads the configuration, then queries the cluster once.

        Returns:
            Tuple[RawConfiguration, List[str]]: The configuration and the
            namespace names in the order the API returned them.

        Raises:
            ConfigLoadError: If the kubeconfig can not be read or parsed.
            MissingContextError: If no context override is given and the
                current context is not defined, the cluster can not be reached.
            ClusterQueryError: If listing namespaces fails.
        """
        logger.debug(f"Using kubeconfig {self.kubeconfig_path}")
        config = read_kubeconfig(self.kubeconfig_path)
        if self.context is None and config.current_context not in config.contexts:
            raise MissingContextError(config.current_context)
        namespaces = self.lister.list_namespaces()
        return config, namespaces
