"""Runtime configuration for Guide MCP server."""

from dataclasses import dataclass
import os

DEFAULT_TARGET_DIRS = ("api", "common", "management", "migration")
DEFAULT_SKIP_DIRS = ("image", "node_modules", "dist")
DEFAULT_ROOT_README = "README.md"
DEFAULT_API_CATALOG = "common/api.md"


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class GuideConfig:
    docs_path: str
    target_dirs: tuple[str, ...]
    skip_dirs: tuple[str, ...]
    root_readme: str
    api_catalog: str
    log_level: str


def get_guide_config() -> GuideConfig:
    """Load guide config from environment variables."""
    return GuideConfig(
        docs_path=_env_str("GUIDE_MCP_DOCS_PATH", os.getcwd()),
        target_dirs=_env_list("GUIDE_MCP_TARGET_DIRS", DEFAULT_TARGET_DIRS),
        skip_dirs=_env_list("GUIDE_MCP_SKIP_DIRS", DEFAULT_SKIP_DIRS),
        root_readme=_env_str("GUIDE_MCP_ROOT_README", DEFAULT_ROOT_README),
        api_catalog=_env_str("GUIDE_MCP_API_CATALOG", DEFAULT_API_CATALOG),
        log_level=_env_str("GUIDE_MCP_LOG_LEVEL", "INFO").upper(),
    )
