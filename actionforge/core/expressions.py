"""Workflow expression helpers."""


def expr(expression: str) -> str:
    """Wrap an expression in workflow ``${{ }}`` syntax."""
    return "${{ " + expression + " }}"


def env_ref(name: str) -> str:
    """Reference a job environment variable."""
    return expr(f"env.{name}")
