from __future__ import annotations

from typing import IO, Iterator, List, Optional

import typer

from kns.config import Context, RawConfiguration
from kns.constants import HIGHLIGHT_COLOR
from kns.errors import MissingContextError, NamespaceNotFoundError
from kns.logger import logger
from kns.validator import InvocationRequest


class NamespaceController:
    """
    Lists the cluster's namespaces or switches the current context to one.

    Args:
        config (RawConfiguration): The loaded kubeconfig.
        namespaces (List[str]): The namespace names reported by the cluster.
        out (Optional[IO[str]]): Where output lines go. Defaults to stdout.
        color (Optional[bool]): Force colour on or off. By default colour is
            used only when ``out`` is a terminal.
    """

    def __init__(
        self,
        config: RawConfiguration,
        namespaces: List[str],
        out: Optional[IO[str]] = None,
        color: Optional[bool] = None,
    ) -> None:
        self.config = config
        self.namespaces = namespaces
        self.out = out
        self.color = color

    def run(self, request: InvocationRequest) -> None:
        if request.is_switch:
            assert request.target is not None
            self.switch(request.target)
        else:
            self.display()

    def current_context(self) -> Context:
        name = self.config.current_context
        context = self.config.contexts.get(name)
        if context is None:
            raise MissingContextError(name)
        return context

    def iter_namespaces(self) -> Iterator[str]:
        for namespace in self.namespaces:
            yield namespace

    def display(self) -> None:
        active = self.current_context().namespace
        highlighted = False

        for namespace in self.iter_namespaces():
            if not highlighted and namespace == active:
                highlighted = True
                typer.secho(
                    namespace, file=self.out, color=self.color, fg=HIGHLIGHT_COLOR
                )
            else:
                typer.echo(namespace, file=self.out, color=self.color)

    def switch(self, target: str) -> None:
        """
        Makes target the namespace of the current context and saves the
        kubeconfig.

        Nothing is written or printed when target is already active.

        Raises:
            MissingContextError: If the current context is not defined.
            NamespaceNotFoundError: If the cluster has no such namespace.
            ConfigPersistError: If the kubeconfig can not be written.
        """
        active = self.current_context().namespace
        if target == active:
            logger.debug(f'Namespace is already "{target}"')
            return

        if target not in self.namespaces:
            raise NamespaceNotFoundError(target)

        self.config.set_namespace(self.config.current_context, target)
        self.config.save()

        typer.echo(f'namespace set to "{target}"', file=self.out, color=self.color)
