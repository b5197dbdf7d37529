from __future__ import annotations

import os
import tempfile
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kns.errors import ConfigLoadError, ConfigPersistError, describe_error
from kns.logger import logger


class KubeBaseModel(BaseModel):
    # kubeconfig files carry plenty of keys we never look at
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Context(KubeBaseModel):
    """
    The body of a kubeconfig context entry.
    """

    cluster: Optional[str] = Field(None, description="The cluster to talk to.")
    user: Optional[str] = Field(None, description="The credentials to use.")
    namespace: str = Field(
        "",
        description="The namespace requests default to. Empty means the "
        "cluster's default namespace.",
    )

    @field_validator("namespace", mode="before")
    def validate_namespace(cls, v: Any) -> Any:
        # `namespace:` with no value is parsed as None
        if v is None:
            return ""
        return v


class NamedContext(KubeBaseModel):
    name: str
    context: Context = Field(default_factory=Context)

    @field_validator("context", mode="before")
    def validate_context(cls, v: Any) -> Any:
        if v is None:
            return {}
        return v


class KubeConfig(KubeBaseModel):
    """
    The subset of the kubeconfig schema this tool depends on.
    """

    current_context: str = Field("", alias="current-context")
    contexts: List[NamedContext] = Field(default_factory=list)

    @field_validator("current_context", mode="before")
    def validate_current_context(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v

    @field_validator("contexts", mode="before")
    def validate_contexts(cls, v: Any) -> Any:
        if v is None:
            return []
        return v


class RawConfiguration:
    """
    A kubeconfig document together with the file it was read from.

    The round-trip document is the source of truth for persistence, so keys,
    ordering and comments that are not modelled survive a rewrite. The parsed
    ``KubeConfig`` gives typed access to contexts.
    """

    def __init__(self, path: str, document: Any) -> None:
        self.path = path
        self.document = document
        self._model = KubeConfig.model_validate(dict(document))
        self._contexts: Dict[str, Context] = {}
        for entry in self._model.contexts:
            # first definition wins, same as the entry set_namespace updates
            self._contexts.setdefault(entry.name, entry.context)

    @property
    def current_context(self) -> str:
        return self._model.current_context

    @property
    def contexts(self) -> Dict[str, Context]:
        return self._contexts

    def set_namespace(self, context_name: str, namespace: str) -> None:
        """
        Sets the namespace of a context, both in the typed view and in the
        underlying document.

        Args:
            context_name (str): The name of the context to update.
            namespace (str): The new namespace.

        Raises:
            KeyError: If no context with the given name exists.
        """
        context = self._contexts[context_name]
        for entry in self.document.get("contexts") or []:
            if entry.get("name") == context_name:
                if entry.get("context") is None:
                    entry["context"] = {}
                entry["context"]["namespace"] = namespace
                break
        context.namespace = namespace

    def save(self) -> None:
        save_kubeconfig(self.path, self.document)


def _yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    return yaml


def read_kubeconfig(path: str) -> RawConfiguration:
    """
    Reads and validates a kubeconfig file.

    An empty file is treated as an empty configuration.

    Args:
        path (str): The path to the kubeconfig file.

    Returns:
        RawConfiguration: The loaded configuration.

    Raises:
        ConfigLoadError: If the file can not be read, is not YAML, or does not
            look like a kubeconfig.
    """
    try:
        with open(path, "r", encoding="utf-8") as file:
            document = _yaml().load(file)
    except OSError as e:
        raise ConfigLoadError(path, e.strerror or str(e)) from e
    except YAMLError as e:
        raise ConfigLoadError(path, f"invalid YAML: {describe_error(e)}") from e
    except UnicodeDecodeError as e:
        raise ConfigLoadError(path, f"not valid UTF-8: {describe_error(e)}") from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ConfigLoadError(path, "expected a mapping at the top level")

    try:
        config = RawConfiguration(path, document)
    except ValidationError as e:
        errors = e.errors()
        location = ".".join(str(loc) for loc in errors[0]["loc"])
        raise ConfigLoadError(
            path, f"invalid kubeconfig at {location}: {errors[0]['msg']}"
        ) from e

    logger.debug(
        f"Loaded kubeconfig {path} with {len(config.contexts)} context(s), "
        f"current context '{config.current_context}'"
    )
    return config


def save_kubeconfig(path: str, document: Any) -> None:
    """
    Writes a whole kubeconfig document over the file at path.

    The document is written to a temporary file next to the target, synced and
    then moved into place, so the target holds either the old or the new
    content. A symlinked path is resolved first so the link stays intact.

    Args:
        path (str): The kubeconfig file to overwrite.
        document (Any): The round-trip YAML document.

    Raises:
        ConfigPersistError: If any step of the write fails.
    """
    target = os.path.realpath(path)
    logger.debug(f"Writing kubeconfig to {target}")

    try:
        mode: Optional[int] = os.stat(target).st_mode & 0o777
    except FileNotFoundError:
        mode = None
    except OSError as e:
        raise ConfigPersistError(path, e.strerror or str(e)) from e

    tmp_file = None
    try:
        fd, tmp_file = tempfile.mkstemp(
            dir=os.path.dirname(target), prefix=".kubeconfig-", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as tf:
            _yaml().dump(document, tf)
            tf.flush()
            os.fsync(tf.fileno())
        if mode is not None:
            os.chmod(tmp_file, mode)
        os.replace(tmp_file, target)
        tmp_file = None
    except OSError as e:
        raise ConfigPersistError(path, e.strerror or str(e)) from e
    finally:
        if tmp_file is not None and os.path.exists(tmp_file):
            os.remove(tmp_file)
