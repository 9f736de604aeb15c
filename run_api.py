"""Local dev entrypoint for the ruleforge API."""

from __future__ import annotations

import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    root_dir = Path(__file__).resolve().parent
    src_dir = root_dir / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


if __name__ == "__main__":
    _ensure_src_on_path()

    import uvicorn

    from ruleforge.config import ValidationConfig

    config = ValidationConfig.from_env()
    uvicorn.run(
        "ruleforge.api:create_app",
        factory=True,
        host="127.0.0.1",
        port=config.port,
        reload=True,
        log_level=config.log_level,
    )
