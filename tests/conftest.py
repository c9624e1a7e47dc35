"""Pytest configuration for all tests."""

import json
import shutil

import pytest

from src.build_pipeline.config import DEFAULT_TEMPLATES_DIR, StackSettings
from src.build_pipeline.main import configure_logging
from src.build_pipeline.stack import PipelineStackAssembler


@pytest.fixture
def templates_dir(tmp_path):
    """Writable copy of the packaged policy templates."""
    target = tmp_path / "assets"
    shutil.copytree(DEFAULT_TEMPLATES_DIR, target)
    return target


@pytest.fixture
def write_template(templates_dir):
    """Overwrite a template in the writable copy with a document or raw text."""

    def _write(name, document):
        text = document if isinstance(document, str) else json.dumps(document)
        (templates_dir / name).write_text(text, encoding="utf-8")
        return templates_dir / name

    return _write


@pytest.fixture
def settings(templates_dir):
    return StackSettings(templates_dir=templates_dir)


@pytest.fixture
def stack_assembler(settings):
    return PipelineStackAssembler(settings=settings)


@pytest.fixture(scope="session", autouse=True)
def structured_logging():
    """Route structlog through stdlib logging so stdout carries only output."""
    configure_logging("DEBUG", json_output=True)
