from __future__ import annotations

from typing import Optional

from kubernetes.client.exceptions import ApiException


class KnsError(Exception):
    """
    Base class for every error that terminates an invocation.

    The message is a single human readable line, it is what the command prints
    before exiting with a non-zero status.
    """


class ArgumentCountError(KnsError):
    def __init__(self) -> None:
        super().__init__("either one or no arguments are allowed")


class ConfigLoadError(KnsError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"failed to load kubeconfig {path}: {reason}")


class ClusterQueryError(KnsError):
    """
    Raised when the namespace listing can not be obtained from the cluster.

    Wraps connection setup, transport, authentication and authorization
    failures alike. The wrapped exception is kept in ``cause``.
    """

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        message = "failed to get namespaces"
        if cause is not None:
            message = f"{message}: {describe_error(cause)}"
        super().__init__(message)


class MissingContextError(KnsError):
    def __init__(self, context_name: str) -> None:
        self.context_name = context_name
        super().__init__(
            f"current context {context_name} not found anymore in the configuration"
        )


class NamespaceNotFoundError(KnsError):
    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        super().__init__(f'can\'t change namespace, "{namespace}" does not exist')


class ConfigPersistError(KnsError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"failed to write kubeconfig {path}: {reason}")


def describe_error(error: BaseException) -> str:
    """
    Condenses an exception into one line.

    ``ApiException`` renders headers and the response body over several lines,
    only the status and reason are kept for it.
    """
    if isinstance(error, ApiException):
        if error.status:
            return f"({error.status}) {error.reason}"
        return str(error.reason or type(error).__name__)
    text = " ".join(str(error).split())
    return text or type(error).__name__
