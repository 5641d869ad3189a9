"""
Tests for the command-line interface.

The pipeline is patched in ``main`` so no command reaches the network.
"""

import json
from datetime import datetime
from unittest.mock import patch

import pytest

from main import create_parser, format_report, main
from tests.sample_data import SCENARIO_TITLE, make_item
from trendtracker.analysis.matcher import match
from trendtracker.analysis.ranker import rank
from trendtracker.models.trend_item import SourceType
from trendtracker.pipeline import PipelineResult, SourceResult, group_by_source_type


@pytest.fixture
def result():
    source_results = [
        SourceResult("gnews", SourceType.NEWS, [make_item(SCENARIO_TITLE, score=20, source="NDTV")]),
        SourceResult("youtube", SourceType.VIDEO, [
            make_item(SCENARIO_TITLE, SourceType.VIDEO, score=10, source="Aaj Tak", views=50000),
        ]),
    ]
    grouped = group_by_source_type(source_results)
    return PipelineResult(
        started_at=datetime.now(),
        finished_at=datetime.now(),
        source_results=source_results,
        items_by_source=grouped,
        themes=match(grouped),
        viral=rank([item for items in grouped.values() for item in items]),
    )


@pytest.fixture
def mock_pipeline(result):
    with patch("main.TrendPipeline") as pipeline_cls:
        pipeline_cls.return_value.run.return_value = result
        yield pipeline_cls


class TestParser:

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.sources is None
        assert args.no_model is False
        assert args.json is False

    def test_source_selection(self):
        args = create_parser().parse_args(["--sources", "reddit", "twitter", "--no-model"])
        assert args.sources == ["reddit", "twitter"]
        assert args.no_model is True

    def test_rejects_unknown_source(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--sources", "hackernews"])


class TestFormatReport:

    def test_sections(self, result):
        report = format_report(result)

        assert "📰 TOP NEWS" in report
        assert f" 1. {SCENARIO_TITLE} [NDTV] (score: 20)" in report
        assert "👁 50,000" in report
        assert "(nothing found)" in report
        assert "breaking modi announces (total: 30) - News, YouTube" in report
        assert "🔥 VIRAL RANKING" in report


class TestMain:

    def test_json_output(self, mock_pipeline, capsys):
        exit_code = main(["--json", "--no-model", "--sources", "gnews", "youtube"])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["totalNews"] == 1
        config = mock_pipeline.call_args.args[0]
        assert config.sources == ["gnews", "youtube"]
        assert config.use_model is False

    def test_report_output(self, mock_pipeline, capsys):
        assert main([]) == 0
        output = capsys.readouterr().out
        assert "TREND ANALYSIS SUMMARY" in output

    def test_pipeline_errors_exit_1(self, mock_pipeline, result):
        result.errors.append("Pipeline error: boom")
        assert main(["--json"]) == 1

    def test_no_items_exit_1(self, mock_pipeline, result):
        result.items_by_source = group_by_source_type([])
        assert main(["--json"]) == 1

    def test_keyboard_interrupt(self, mock_pipeline):
        mock_pipeline.return_value.run.side_effect = KeyboardInterrupt
        assert main([]) == 130

    def test_show_config(self, capsys):
        with patch("main.TrendPipeline") as pipeline_cls:
            assert main(["--show-config"]) == 0
            pipeline_cls.assert_not_called()
        assert "India Trend Tracker Configuration" in capsys.readouterr().out
