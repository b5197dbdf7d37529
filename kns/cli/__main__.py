from __future__ import annotations

from typing import List, Optional

import typer

from kns import __version__
from kns.controller import NamespaceController
from kns.errors import KnsError
from kns.loader import ConfigLoader
from kns.logger import logger, setup_logger
from kns.utils import resolve_kubeconfig_path
from kns.validator import validate

NS_EXAMPLE = """
\b
# view the current namespace alongside all available namespaces
kubectl ns

\b
# switch namespace to foo
kubectl ns foo
"""


def version_callback(version: bool) -> None:
    if version:
        typer.echo(f"kns version: {__version__}")
        raise typer.Exit()


cli = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@cli.command(epilog=NS_EXAMPLE)
def ns(
    namespace: Optional[List[str]] = typer.Argument(
        None,
        help="The namespace to switch to. Without it, all namespaces are listed "
        "and the current one is highlighted. An empty string is treated as a "
        "namespace name, not as a missing argument.",
        show_default=False,
    ),
    kubeconfig: Optional[str] = typer.Option(
        None,
        "--kubeconfig",
        help="Path to the kubeconfig file. Defaults to the KUBECONFIG "
        "environment variable, then ~/.kube/config.",
    ),
    context: Optional[str] = typer.Option(
        None,
        "--context",
        help="The kubeconfig context used to connect to the cluster.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Display or switch the namespace of the current kubeconfig context.
    """
    setup_logger(verbose)

    try:
        # Argument shape is checked before touching the file or the network
        request = validate(namespace or [])

        kubeconfig_path = resolve_kubeconfig_path(kubeconfig)
        if context:
            logger.debug(f"Connecting through context {context}")
        config, namespaces = ConfigLoader(kubeconfig_path, context=context).load()

        NamespaceController(config, namespaces).run(request)
    except KnsError as e:
        logger.error(str(e))
        if e.__cause__ is not None:
            logger.debug(f"Caused by: {e.__cause__!r}")
        raise typer.Exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
