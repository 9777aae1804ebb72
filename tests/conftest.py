from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest
from loguru import logger


@pytest.fixture
def loguru_messages():
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(str(message).rstrip("\n")),
        level="DEBUG",
        format="{level}|{message}",
    )
    logger.enable("json2struct")
    yield messages
    logger.disable("json2struct")
    logger.remove(handler_id)


@pytest.fixture
def write_json_file(tmp_path: Path):
    def _write(text: str, name: str = "input.json") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
