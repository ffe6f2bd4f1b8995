"""Centralised settings for the kernel updater.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_rows(name: str, default: str) -> tuple[int, ...]:
    raw = os.environ.get(name, default)
    return tuple(int(part) for part in raw.split(",") if part.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Upstream index
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "KUPDATER_BASE_URL", "https://kernel.ubuntu.com/mainline"
        ).rstrip("/")
    )
    catalog_query: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_CATALOG_QUERY", "?C=N;O=D")
    )
    arch: str = field(default_factory=lambda: os.environ.get("KUPDATER_ARCH", "amd64"))
    flavour: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_FLAVOUR", "generic")
    )

    @property
    def catalog_url(self) -> str:
        """URL of the listing page with every published version folder."""
        return f"{self.base_url}/{self.catalog_query}"

    def detail_url(self, version: str) -> str:
        """URL of the architecture-specific listing for *version*."""
        return f"{self.base_url}/v{version}/{self.arch}/"

    def download_url(self, version: str, file_name: str) -> str:
        return f"{self.detail_url(version)}{file_name}"

    # ------------------------------------------------------------------
    # Catalog / resolver
    # ------------------------------------------------------------------
    max_versions: int = field(
        default_factory=lambda: int(os.environ.get("KUPDATER_MAX_VERSIONS", "10"))
    )
    detail_rows: tuple[int, ...] = field(
        default_factory=lambda: _env_rows("KUPDATER_DETAIL_ROWS", "6,7,8,9")
    )
    selection: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_SELECTION", "positional")
    )

    # ------------------------------------------------------------------
    # Network / transfers (0 disables the timeout)
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("KUPDATER_REQUEST_TIMEOUT", "0"))
    )
    download_timeout: float = field(
        default_factory=lambda: float(os.environ.get("KUPDATER_DOWNLOAD_TIMEOUT", "0"))
    )
    download_command: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_DOWNLOAD_COMMAND", "curl")
    )

    # ------------------------------------------------------------------
    # Staging / install
    # ------------------------------------------------------------------
    staging_root: Path = field(
        default_factory=lambda: Path(
            os.environ.get("KUPDATER_STAGING_ROOT", "/var/tmp/kernel-updater")
        )
    )
    privilege_command: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_PRIVILEGE_COMMAND", "sudo")
    )
    package_manager: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_PACKAGE_MANAGER", "dpkg")
    )
    ignore_install_status: bool = field(
        default_factory=lambda: _env_bool("KUPDATER_IGNORE_INSTALL_STATUS")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("KUPDATER_LOG_LEVEL", "WARNING")
    )

    def timeout_or_none(self, value: float) -> float | None:
        """Map the ``0 = no timeout`` convention onto ``None``."""
        return value if value > 0 else None


# Module-level singleton, import this everywhere:
#   from kupdater.config import settings
settings = Settings()
