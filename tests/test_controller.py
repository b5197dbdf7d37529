from io import StringIO
from unittest.mock import MagicMock

import pytest

from kns.config import RawConfiguration, read_kubeconfig
from kns.controller import NamespaceController
from kns.errors import (
    ConfigPersistError,
    MissingContextError,
    NamespaceNotFoundError,
)
from kns.k8s import NamespaceLister
from kns.loader import ConfigLoader
from kns.validator import InvocationRequest, validate

RED = "\x1b[31m"
RESET = "\x1b[0m"

KUBECONFIG = """\
apiVersion: v1
kind: Config
clusters:
- cluster:
    server: https://dev.example.com
  name: dev-cluster
contexts:
- context:
    cluster: dev-cluster
    namespace: default
    user: dev-user
  name: dev
- context:
    cluster: dev-cluster
    namespace: prod
    user: dev-user
  name: ops
current-context: dev
users:
- name: dev-user
  user:
    token: secret
"""

NAMESPACES = ["default", "staging", "prod"]


def make_config(
    current_context: str = "dev", namespace: str = "default"
) -> RawConfiguration:
    document = {
        "contexts": [{"name": "dev", "context": {"namespace": namespace}}],
        "current-context": current_context,
    }
    config = RawConfiguration("/path/to/config", document)
    config.save = MagicMock()  # type: ignore[method-assign]
    return config


def run(config: RawConfiguration, request: InvocationRequest, namespaces=NAMESPACES):
    out = StringIO()
    NamespaceController(config, namespaces, out=out, color=True).run(request)
    return out.getvalue()


def test_display_highlights_active_namespace() -> None:
    output = run(make_config(), validate([]))

    assert output.splitlines() == [f"{RED}default{RESET}", "staging", "prod"]


def test_display_without_color() -> None:
    out = StringIO()
    NamespaceController(make_config(), NAMESPACES, out=out, color=False).display()

    assert out.getvalue() == "default\nstaging\nprod\n"


def test_display_keeps_api_order() -> None:
    namespaces = ["zeta", "alpha", "default", "beta"]
    output = run(make_config(namespace="alpha"), validate([]), namespaces)

    assert output.splitlines() == ["zeta", f"{RED}alpha{RESET}", "default", "beta"]


def test_display_active_namespace_not_listed() -> None:
    output = run(make_config(namespace="gone"), validate([]))

    assert output.splitlines() == NAMESPACES
    assert RED not in output


def test_display_empty_active_namespace() -> None:
    output = run(make_config(namespace=""), validate([]))

    assert output.splitlines() == NAMESPACES


def test_display_duplicates_highlight_once() -> None:
    namespaces = ["default", "staging", "default"]
    output = run(make_config(), validate([]), namespaces)

    assert output.splitlines() == [f"{RED}default{RESET}", "staging", "default"]
    assert output.count(RED) == 1


def test_display_match_is_case_sensitive() -> None:
    output = run(make_config(namespace="Default"), validate([]))

    assert RED not in output


def test_display_does_not_save() -> None:
    config = make_config()
    run(config, validate([]))

    config.save.assert_not_called()  # type: ignore[attr-defined]


def test_iter_namespaces_is_single_pass() -> None:
    controller = NamespaceController(make_config(), NAMESPACES)
    it = controller.iter_namespaces()

    assert list(it) == NAMESPACES
    assert list(it) == []


@pytest.mark.parametrize("request_args", [[], ["staging"]])
def test_missing_current_context(request_args) -> None:
    config = make_config(current_context="gone")

    with pytest.raises(MissingContextError) as exc_info:
        run(config, validate(request_args))

    assert str(exc_info.value) == (
        "current context gone not found anymore in the configuration"
    )
    config.save.assert_not_called()  # type: ignore[attr-defined]


def test_switch_to_current_namespace_is_noop() -> None:
    config = make_config()
    output = run(config, validate(["default"]))

    assert output == ""
    config.save.assert_not_called()  # type: ignore[attr-defined]


def test_switch_noop_does_not_need_namespace_listed() -> None:
    config = make_config(namespace="gone")
    output = run(config, validate(["gone"]))

    assert output == ""
    config.save.assert_not_called()  # type: ignore[attr-defined]


def test_switch_to_unknown_namespace() -> None:
    config = make_config()

    with pytest.raises(NamespaceNotFoundError) as exc_info:
        run(config, validate(["missing"]))

    assert str(exc_info.value) == 'can\'t change namespace, "missing" does not exist'
    assert config.contexts["dev"].namespace == "default"
    config.save.assert_not_called()  # type: ignore[attr-defined]


def test_switch_to_empty_namespace_not_listed() -> None:
    config = make_config()

    with pytest.raises(NamespaceNotFoundError):
        run(config, validate([""]))


def test_switch() -> None:
    config = make_config()
    output = run(config, validate(["staging"]))

    assert output == 'namespace set to "staging"\n'
    assert config.contexts["dev"].namespace == "staging"
    assert config.document["contexts"][0]["context"]["namespace"] == "staging"
    config.save.assert_called_once_with()  # type: ignore[attr-defined]


def test_switch_persist_error_prints_nothing() -> None:
    config = make_config()
    config.save.side_effect = ConfigPersistError(  # type: ignore[attr-defined]
        "/path/to/config", "Permission denied"
    )

    out = StringIO()
    with pytest.raises(ConfigPersistError):
        NamespaceController(config, NAMESPACES, out=out).run(validate(["staging"]))

    assert out.getvalue() == ""


def write_kubeconfig(tmp_path) -> str:
    path = tmp_path / "config"
    path.write_text(KUBECONFIG)
    return str(path)


def make_lister(namespaces=NAMESPACES) -> MagicMock:
    lister = MagicMock(spec=NamespaceLister)
    lister.list_namespaces.return_value = list(namespaces)
    return lister


def test_switch_writes_file(tmp_path) -> None:
    path = write_kubeconfig(tmp_path)
    config, namespaces = ConfigLoader(path, make_lister()).load()

    out = StringIO()
    NamespaceController(config, namespaces, out=out).run(validate(["staging"]))

    assert out.getvalue() == 'namespace set to "staging"\n'
    with open(path) as f:
        assert f.read() == KUBECONFIG.replace(
            "namespace: default", "namespace: staging"
        )


def test_switch_unknown_namespace_leaves_file_untouched(tmp_path) -> None:
    path = write_kubeconfig(tmp_path)
    with open(path, "rb") as f:
        before = f.read()
    config, namespaces = ConfigLoader(path, make_lister()).load()

    with pytest.raises(NamespaceNotFoundError):
        NamespaceController(config, namespaces, out=StringIO()).run(
            validate(["missing"])
        )

    with open(path, "rb") as f:
        assert f.read() == before


def test_switch_round_trip(tmp_path) -> None:
    path = write_kubeconfig(tmp_path)
    config, namespaces = ConfigLoader(path, make_lister()).load()
    NamespaceController(config, namespaces, out=StringIO()).run(validate(["prod"]))

    reloaded = read_kubeconfig(path)

    assert reloaded.current_context == "dev"
    assert reloaded.contexts["dev"].namespace == "prod"
    # other contexts are left alone
    assert reloaded.contexts["ops"].namespace == "prod"
    assert reloaded.contexts["ops"].cluster == "dev-cluster"


def test_run_dispatches_on_request_kind() -> None:
    controller = NamespaceController(make_config(), NAMESPACES, out=StringIO())
    controller.display = MagicMock()  # type: ignore[method-assign]
    controller.switch = MagicMock()  # type: ignore[method-assign]

    controller.run(InvocationRequest())
    controller.display.assert_called_once_with()
    controller.switch.assert_not_called()

    controller.run(InvocationRequest(target=""))
    controller.switch.assert_called_once_with("")
