"""
Pytest Configuration and Fixtures

This module provides:
- Timestamped result file generation
- Shared fixtures for all tests
- Test category organization
"""

import pytest
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import Mock

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.sample_data import TEST_CATEGORIES, SCENARIO_TITLE, make_item
from trendtracker.models.trend_item import SourceType
from trendtracker.services.llm_client import CompletionResult


# =============================================================================
# TEST RESULT FILE CONFIGURATION
# =============================================================================

RESULTS_DIR = PROJECT_ROOT / "test_results"


class TestResultCollector:
    """Collects test results for the formatted report."""

    __test__ = False

    def __init__(self):
        self.results: List[Dict[str, Any]] = []
        self.start_time: datetime = None
        self.end_time: datetime = None
        self.categories: Dict[str, List[Dict]] = {}

    def add_result(self, nodeid: str, outcome: str, duration: float, message: str = ""):
        # nodeid format: tests/test_scoring.py::TestClass::test_method
        filename = nodeid.split("::")[0].split("/")[-1]
        category = filename.replace("test_", "").replace(".py", "")
        method_name = nodeid.split("::")[-1]

        result = {
            "nodeid": nodeid,
            "name": method_name.replace("test_", "").replace("_", " ").title(),
            "category": category,
            "outcome": outcome,
            "duration": duration,
            "message": message,
        }
        self.results.append(result)
        self.categories.setdefault(category, []).append(result)

    def get_summary(self) -> Dict[str, int]:
        return {
            "total": len(self.results),
            "passed": sum(1 for r in self.results if r["outcome"] == "passed"),
            "failed": sum(1 for r in self.results if r["outcome"] == "failed"),
            "skipped": sum(1 for r in self.results if r["outcome"] == "skipped"),
        }


_collector = TestResultCollector()


def pytest_configure(config):
    _collector.start_time = datetime.now()
    RESULTS_DIR.mkdir(exist_ok=True)


def pytest_runtest_logreport(report):
    if report.when == "call":
        _collector.add_result(
            nodeid=report.nodeid,
            outcome=report.outcome,
            duration=report.duration,
            message=str(report.longrepr) if report.longrepr else "",
        )


def pytest_sessionfinish(session, exitstatus):
    _collector.end_time = datetime.now()
    if not _collector.results:
        return

    filepath = RESULTS_DIR / f"test_results_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(generate_formatted_report(_collector))


def generate_formatted_report(collector: TestResultCollector) -> str:
    """Generate a formatted test report."""
    summary = collector.get_summary()
    duration = (collector.end_time - collector.start_time).total_seconds()

    lines = [
        "=" * 80,
        "INDIA TREND TRACKER - TEST RESULTS REPORT",
        "=" * 80,
        f"Run Date:     {collector.start_time.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Duration:     {duration:.2f} seconds",
        f"Total Tests:  {summary['total']}",
        f"Passed:       {summary['passed']} ✓",
        f"Failed:       {summary['failed']} ✗",
        f"Skipped:      {summary['skipped']} ○",
        "",
    ]

    for category, results in sorted(collector.categories.items()):
        info = TEST_CATEGORIES.get(category, {
            "name": category.replace("_", " ").title(),
            "description": "Test category",
            "protects_against": [],
        })
        lines.append(f"{info['name']} - {info['description']}")
        for protection in info.get("protects_against", []):
            lines.append(f"  • protects against: {protection}")
        for result in results:
            status = "✓" if result["outcome"] == "passed" else "✗" if result["outcome"] == "failed" else "○"
            lines.append(f"    {status} {result['name']:<60} ({result['duration'] * 1000:.0f}ms)")
            if result["outcome"] == "failed" and result["message"]:
                for msg_line in result["message"].split("\n")[:3]:
                    if msg_line.strip():
                        lines.append(f"      └─ {msg_line[:70]}")
        lines.append("")

    lines.append("=" * 80)
    return "\n".join(lines)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def scenario_items():
    """The same headline seen as news (score 20) and as a video (score 10)."""
    return {
        SourceType.NEWS: [make_item(SCENARIO_TITLE, SourceType.NEWS, score=20, source="NDTV")],
        SourceType.VIDEO: [make_item(SCENARIO_TITLE, SourceType.VIDEO, score=10, source="Aaj Tak", views=50000)],
    }


@pytest.fixture
def mixed_items():
    """One item per source type."""
    return [
        make_item("BREAKING: India live updates", SourceType.NEWS, score=25),
        make_item("Live match", SourceType.VIDEO, score=0, views=600_000),
        make_item("#Victory", SourceType.SOCIAL_TREND, score=30),
        make_item("Gold price today", SourceType.SEARCH_TREND, score=0),
        make_item("Protest outside court", SourceType.FORUM_POST, score=20, upvotes=1200, comments=80),
    ]


@pytest.fixture
def model_client():
    """A configured model client whose reply each test sets."""
    client = Mock()
    client.is_available.return_value = True
    client.model = "test-model"

    def reply(text: str):
        client.complete.return_value = CompletionResult(success=True, text=text, model="test-model")
        return client

    client.reply = reply
    return client


@pytest.fixture
def unavailable_client():
    """A model client without credentials."""
    client = Mock()
    client.is_available.return_value = False
    client.model = "test-model"
    return client
