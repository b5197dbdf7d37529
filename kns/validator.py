from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from kns.errors import ArgumentCountError


class InvocationRequest(BaseModel):
    """
    What the user asked for: a namespace to switch to, or nothing to list.
    """

    model_config = ConfigDict(frozen=True)

    target: Optional[str] = None

    @property
    def is_switch(self) -> bool:
        return self.target is not None


def validate(args: Sequence[str]) -> InvocationRequest:
    """
    Turns the positional arguments into an InvocationRequest.

    The single argument is taken verbatim, no trimming or case folding. An
    empty string is a switch to the namespace "", not a request to list.

    Args:
        args (Sequence[str]): The positional arguments.

    Returns:
        InvocationRequest: Empty for display mode, with a target for switch mode.

    Raises:
        ArgumentCountError: If more than one argument is given.
    """
    if len(args) > 1:
        raise ArgumentCountError()

    if len(args) == 1:
        return InvocationRequest(target=args[0])

    return InvocationRequest()
