# The name of the project
PROJECT_NAME = "kns"

# The environment variable that lists kubeconfig files
KUBECONFIG_ENV_VAR = "KUBECONFIG"

# The kubeconfig file used when nothing else is specified
DEFAULT_KUBECONFIG_PATH = "~/.kube/config"

# The colour used to mark the active namespace
HIGHLIGHT_COLOR = "red"
