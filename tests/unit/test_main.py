from unittest.mock import MagicMock, patch

import pytest

from bodycomp.config.settings import Settings
from bodycomp.insights.exceptions import InsightError
from bodycomp.main import build_parser, main, run_add, run_compare, run_evaluate
from bodycomp.processor.exceptions import SubjectNotFoundError


class TestBuildParser:
    def test_process(self) -> None:
        args = build_parser().parse_args(["process", "12"])
        assert args.command == "process"
        assert args.upload_id == 12

    def test_compare(self) -> None:
        args = build_parser().parse_args(["compare", "1", "2"])
        assert (args.first_subject_id, args.second_subject_id) == (1, 2)

    def test_add_collects_form_options(self) -> None:
        args = build_parser().parse_args(
            ["add", "1", "--weight", "80", "--body-fat-percent", "29,5", "--upload", "4"]
        )
        assert args.command == "add"
        assert args.subject_id == 1
        assert args.upload_id == 4
        assert args.weight == "80"
        assert args.body_fat_percent == "29,5"
        assert args.bmi is None

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_ids_must_be_integers(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["evaluate", "abc"])


class TestMain:
    @pytest.fixture
    def pool(self):
        with patch("bodycomp.main.init_pool") as init_pool, patch(
            "bodycomp.main.close_pool"
        ) as close_pool:
            yield init_pool, close_pool

    def test_dispatches_process(self, pool: tuple[MagicMock, MagicMock]) -> None:
        with patch("bodycomp.main.run_process", return_value=0) as run_process:
            assert main(["process", "3"]) == 0
        assert run_process.call_args.args[1] == 3
        pool[0].assert_called_once()
        pool[1].assert_called_once()

    def test_dispatches_evaluate(self, pool: tuple[MagicMock, MagicMock]) -> None:
        with patch("bodycomp.main.run_evaluate", return_value=1) as run_evaluate:
            assert main(["evaluate", "8"]) == 1
        run_evaluate.assert_called_once_with(8)

    def test_dispatches_compare(self, pool: tuple[MagicMock, MagicMock]) -> None:
        with patch("bodycomp.main.run_compare", return_value=0) as run_compare:
            main(["compare", "1", "2"])
        assert run_compare.call_args.args[1:] == (1, 2)

    def test_pool_closed_on_error(self, pool: tuple[MagicMock, MagicMock]) -> None:
        with patch("bodycomp.main.run_evaluate", side_effect=RuntimeError("db")):
            with pytest.raises(RuntimeError):
                main(["evaluate", "8"])
        pool[1].assert_called_once()

    def test_dispatches_add_with_entered_fields_only(
        self, pool: tuple[MagicMock, MagicMock]
    ) -> None:
        with patch("bodycomp.main.run_add", return_value=0) as run_add_mock:
            assert main(["add", "5", "--weight", "80", "--status", "stable"]) == 0
        run_add_mock.assert_called_once_with(5, {"weight": "80", "status": "stable"}, None)


class TestCommandErrors:
    def test_evaluate_unknown_subject(self) -> None:
        with patch("bodycomp.main.SubjectRepository") as repo:
            repo.return_value.find_by_id.side_effect = SubjectNotFoundError("Subject 9 not found")
            assert run_evaluate(9) == 1

    def test_compare_insight_failure(self) -> None:
        with patch("bodycomp.main.ChatClientFactory"), patch(
            "bodycomp.main.SubjectRepository"
        ), patch("bodycomp.main.MeasurementRepository"), patch(
            "bodycomp.main.summarize"
        ), patch("bodycomp.main.ComparisonAnalyzer") as analyzer:
            analyzer.return_value.compare.side_effect = InsightError("AI down")
            assert run_compare(Settings(), 1, 2) == 1

    def test_add_unparseable_value(self) -> None:
        with patch("bodycomp.main.SubjectRepository"), patch(
            "bodycomp.main.MeasurementRepository"
        ) as measurements, patch("bodycomp.main.ReportUploadsRepository"):
            assert run_add(1, {"weight": "eighty"}) == 1
        measurements.return_value.insert.assert_not_called()

    def test_add_saves_measurement(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("bodycomp.main.SubjectRepository") as subjects, patch(
            "bodycomp.main.MeasurementRepository"
        ) as measurements, patch("bodycomp.main.ReportUploadsRepository"):
            subjects.return_value.find_by_id.return_value.name = "Alex"
            measurements.return_value.count_for_subject.return_value = 2
            measurements.return_value.insert.return_value = 17
            assert run_add(1, {"weight": "80"}) == 0
        assert measurements.return_value.insert.call_args.args[1] == 3
        assert "Saved measurement 17 for Alex" in capsys.readouterr().out
