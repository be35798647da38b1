"""Shared test fixtures for pagescore tests."""

import json
import logging
from typing import Any

import pytest
import yaml

from pagescore.core.store import AuditResultStore
from pagescore.core.validation import validate
from pagescore.models.config import ConfigModel
from pagescore.models.results import AuditResult, ScoreDisplayMode
from pagescore.utils.config import PageScoreConfig, set_config
from pagescore.utils.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def isolate_global_state():
    """Keep tool settings files and CLI logging setup from leaking between tests."""
    set_config(PageScoreConfig())
    yield
    set_config(None)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A small but complete configuration document."""
    return {
        "settings": {"locale": "en-US"},
        "passes": [
            {
                "passName": "defaultPass",
                "recordTrace": True,
                "gatherers": ["meta-elements", "seo/font-size"],
            },
            {
                "passName": "offlinePass",
                "gatherers": ["offline"],
            },
        ],
        "audits": [
            "audit-a",
            "audit-b",
            "metrics/speed-index",
            "manual/manual-check",
            "seo/font-size",
        ],
        "groups": {
            "group-one": {"title": "Group One"},
            "group-two": {"title": "Group Two", "description": "The second group"},
        },
        "categories": {
            "quality": {
                "title": "Quality",
                "description": "Overall quality",
                "manualDescription": "Check these by hand",
                "auditRefs": [
                    {"id": "audit-a", "weight": 3, "group": "group-one"},
                    {"id": "audit-b", "weight": 1, "group": "group-two"},
                    {"id": "manual-check", "weight": 0},
                ],
            },
            "speed": {
                "title": "Speed",
                "auditRefs": [
                    {"id": "speed-index", "weight": 1, "group": "group-one"},
                    {"id": "audit-a", "weight": 2},
                ],
            },
        },
    }


@pytest.fixture
def sample_config(sample_document: dict[str, Any]) -> ConfigModel:
    """The validated sample configuration."""
    return validate(sample_document)


@pytest.fixture
def sample_results() -> list[AuditResult]:
    """Results for every audit of the sample configuration."""
    return [
        AuditResult(audit_id="audit-a", score=1.0),
        AuditResult(audit_id="audit-b", score=0.0),
        AuditResult(audit_id="speed-index", score=0.5, score_display_mode=ScoreDisplayMode.NUMERIC),
        AuditResult(audit_id="manual-check", score_display_mode=ScoreDisplayMode.MANUAL),
        AuditResult(audit_id="font-size", score=1.0),
    ]


@pytest.fixture
def sample_store(sample_results: list[AuditResult]) -> AuditResultStore:
    """A store holding the sample results."""
    return AuditResultStore(sample_results)


@pytest.fixture
def sample_config_file(tmp_path, sample_document: dict[str, Any]) -> str:
    """The sample configuration written as YAML."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(sample_document, sort_keys=False))
    return str(path)


@pytest.fixture
def sample_results_file(tmp_path) -> str:
    """Sample results in the mapping form keyed by audit id."""
    data = {
        "audits": {
            "audit-a": {"score": 1, "scoreDisplayMode": "binary"},
            "audit-b": {"score": 0, "scoreDisplayMode": "binary"},
            "speed-index": {"score": 0.5, "scoreDisplayMode": "numeric"},
            "manual-check": {"score": None, "scoreDisplayMode": "manual"},
            "font-size": {"score": 1, "scoreDisplayMode": "binary"},
        }
    }
    path = tmp_path / "results.json"
    path.write_text(json.dumps(data))
    return str(path)
