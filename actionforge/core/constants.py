"""Constants used throughout the ActionForge application."""


# Workflow runner settings
RUNNER_IMAGE = "ubuntu-latest"
TRIGGER_BRANCH = "main"

# Pinned action versions
CHECKOUT_ACTION = "actions/checkout@v4"
QEMU_ACTION = "docker/setup-qemu-action@v3"
BUILDX_ACTION = "docker/setup-buildx-action@v3"
LOGIN_ACTION = "docker/login-action@v3"
BUILD_PUSH_ACTION = "docker/build-push-action@v5"
UPLOAD_ARTIFACT_ACTION = "actions/upload-artifact@v4"
SETUP_NODE_ACTION = "actions/setup-node@v4"
UPLOAD_PAGES_ARTIFACT_ACTION = "actions/upload-pages-artifact@v3"
DEPLOY_PAGES_ACTION = "actions/deploy-pages@v4"

# OCI export
OCI_OUTPUT_PATH = "/tmp/oci-image.tar"
OCI_ARTIFACT_NAME = "oci-image"
OCI_ARTIFACT_RETENTION_DAYS = 1

# Reproducible builds
SOURCE_DATE_EPOCH = "SOURCE_DATE_EPOCH"
SOURCE_DATE_EPOCH_COMMAND = "$(git log -1 --pretty=%ct)"

# Pages
PAGES_CONCURRENCY_GROUP = "pages"
PAGES_ENVIRONMENT = "github-pages"
NPM_CACHED_INSTALL = "npm ci"
NPM_INSTALL = "npm install"

# Platforms offered for selection
SUPPORTED_PLATFORMS = [
    "linux/amd64",
    "linux/arm64",
    "linux/arm/v7",
    "linux/riscv64",
]
DEFAULT_PLATFORMS = ["linux/amd64", "linux/arm64"]

# Placeholders for newly added build arguments
NEW_BUILD_ARG_KEY = "NEW_ARG"
NEW_BUILD_ARG_VALUE = "value"

# Dockerfile generation
DEFAULT_GENERATION_MODEL = "gemini-2.5-flash"
GENERATION_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
GENERATION_TIMEOUT = 120  # 2 minutes
API_KEY_ENV_VARS = ["GEMINI_API_KEY", "API_KEY"]
MODEL_ENV_VAR = "ACTIONFORGE_MODEL"

DOCKERFILE_PROMPT = """You are a DevOps expert. Write a production-ready Multi-stage Dockerfile based on this description:
"{description}"

Requirements:
- Use alpine or slim images where possible for size.
- Follow best practices (layer caching, non-root user).
- Return ONLY the Dockerfile content. No markdown code fences, no explanation.
"""
