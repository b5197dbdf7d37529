from __future__ import annotations

import os
from typing import List, Optional

from kns.constants import DEFAULT_KUBECONFIG_PATH, KUBECONFIG_ENV_VAR


def split_kubeconfig_env(value: str) -> List[str]:
    """
    Splits the value of the KUBECONFIG environment variable into paths.

    Empty entries are dropped, duplicates keep their first position.

    Args:
        value (str): The raw value of the environment variable.

    Returns:
        List[str]: The paths in the order they appear.

    Example:
        >>> split_kubeconfig_env("/a:/b::/a")
        ['/a', '/b']
    """
    paths: List[str] = []
    for entry in value.split(os.pathsep):
        if entry and entry not in paths:
            paths.append(entry)
    return paths


def resolve_kubeconfig_path(explicit_path: Optional[str] = None) -> str:
    """
    Determines which kubeconfig file to work with.

    The explicit path (the --kubeconfig flag) wins. Otherwise the KUBECONFIG
    environment variable is consulted: the first listed file that exists is
    used, or the first listed file when none exist. Without either, the default
    ~/.kube/config is used.

    Args:
        explicit_path (Optional[str]): A path given on the command line.

    Returns:
        str: The kubeconfig path with ``~`` expanded.
    """
    if explicit_path:
        return os.path.expanduser(explicit_path)

    env_paths = split_kubeconfig_env(os.environ.get(KUBECONFIG_ENV_VAR, ""))
    for path in env_paths:
        expanded = os.path.expanduser(path)
        if os.path.exists(expanded):
            return expanded
    if env_paths:
        return os.path.expanduser(env_paths[0])

    return os.path.expanduser(DEFAULT_KUBECONFIG_PATH)

