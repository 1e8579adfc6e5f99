from __future__ import annotations

from pathlib import Path

import config


BASE_DIR = config.BASE_DIR


def _resolve_path(raw_value: str | Path | None, default_relative: str) -> Path:
    if raw_value is None or str(raw_value).strip() == "":
        path = BASE_DIR / default_relative
    else:
        path = Path(raw_value)
        if not path.is_absolute():
            path = BASE_DIR / path
    return path.resolve()


def resolve_credentials_path(path: str | Path | None = None) -> Path:
    return _resolve_path(path or config.GOOGLE_CREDENTIALS_FILE, "credentials.json")


def resolve_token_path(path: str | Path | None = None) -> Path:
    return _resolve_path(path or config.GOOGLE_TOKEN_FILE, "token.json")
