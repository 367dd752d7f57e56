import argparse
import sys
from collections.abc import Sequence

from bodycomp.ai.factory import ChatClientFactory
from bodycomp.config.settings import Settings
from bodycomp.database.connection import close_pool, init_pool
from bodycomp.database.repositories.measurement_repository import MeasurementRepository
from bodycomp.database.repositories.report_uploads_repository import ReportUploadsRepository
from bodycomp.database.repositories.subject_repository import SubjectRepository
from bodycomp.insights.exceptions import InsightError
from bodycomp.insights.generator import ComparisonAnalyzer
from bodycomp.logging.logger import Log
from bodycomp.measurements.exceptions import MeasurementFormError
from bodycomp.measurements.form import FORM_FIELDS
from bodycomp.measurements.service import MeasurementService
from bodycomp.measurements.summary import summarize
from bodycomp.processor.exceptions import ProcessorError
from bodycomp.processor.manual_entry import ManualEntry
from bodycomp.processor.processor import build_processor
from bodycomp.processor.report_runner import ReportRunner
from bodycomp.scoring.evaluator import evaluate
from bodycomp.scoring.protein import protein_range


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bodycomp",
        description="Body-composition report processing and scoring.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    process = commands.add_parser("process", help="Extract, save and score one report upload")
    process.add_argument("upload_id", type=int)

    evaluate_cmd = commands.add_parser("evaluate", help="Score a subject's latest measurement")
    evaluate_cmd.add_argument("subject_id", type=int)

    compare = commands.add_parser("compare", help="Comparative insights for two subjects")
    compare.add_argument("first_subject_id", type=int)
    compare.add_argument("second_subject_id", type=int)

    add = commands.add_parser(
        "add",
        help="Save a manually entered measurement, optionally completing an upload",
    )
    add.add_argument("subject_id", type=int)
    add.add_argument(
        "--upload",
        type=int,
        dest="upload_id",
        help="Upload awaiting manual entry; blank fields keep its extracted values",
    )
    for name in FORM_FIELDS:
        add.add_argument(f"--{name.replace('_', '-')}", dest=name, metavar="VALUE")
    return parser


def run_process(settings: Settings, upload_id: int) -> int:
    runner = ReportRunner(build_processor(settings), ReportUploadsRepository())
    return 0 if runner.run(upload_id) else 1


def run_evaluate(subject_id: int) -> int:
    try:
        subject = SubjectRepository().find_by_id(subject_id)
    except ProcessorError as exc:
        Log.error(str(exc))
        return 1
    latest = MeasurementRepository().latest_for_subject(subject_id)
    if latest is None:
        Log.warning(f"Subject {subject_id} has no measurements")
        return 1

    evaluation = evaluate(latest.reading.to_metric_reading(), subject.gender)
    print(f"{subject.name} - week {latest.week_number} ({latest.measurement_date.isoformat()})")
    for metric in evaluation.per_metric:
        print(
            f"  {metric.label:<14} {metric.raw_display_value:>8}  "
            f"ideal {metric.ideal_band_display:<10} score {metric.score:.0f}"
        )
    overall = evaluation.overall
    print(f"Overall: {overall.score} ({overall.label})")
    if latest.reading.weight is not None:
        protein = protein_range(latest.reading.weight, subject.protein_profile)
        print(
            f"Daily protein: {protein.min}-{protein.max} g "
            f"(recommended {protein.recommended} g)"
        )
    return 0


def run_compare(settings: Settings, first_id: int, second_id: int) -> int:
    subjects = SubjectRepository()
    measurements = MeasurementRepository()
    analyzer = ComparisonAnalyzer(
        client=ChatClientFactory.create(settings),
        model=settings.insights_model_name,
    )
    try:
        summaries = [
            summarize(subjects.find_by_id(sid), measurements.list_for_subject(sid))
            for sid in (first_id, second_id)
        ]
        text = analyzer.compare(summaries[0], summaries[1])
    except (ProcessorError, InsightError) as exc:
        Log.error(f"Comparison failed: {exc}")
        return 1
    print(text)
    return 0


def run_add(subject_id: int, form: dict[str, str], upload_id: int | None = None) -> int:
    manual_entry = ManualEntry(
        MeasurementService(MeasurementRepository()),
        ReportUploadsRepository(),
    )
    try:
        subject = SubjectRepository().find_by_id(subject_id)
        measurement_id = manual_entry.save(subject, form, upload_id)
    except (ProcessorError, MeasurementFormError) as exc:
        Log.error(f"Measurement not saved: {exc}")
        return 1
    print(f"Saved measurement {measurement_id} for {subject.name}")
    return 0


def _form_values(args: argparse.Namespace) -> dict[str, str]:
    return {name: getattr(args, name) for name in FORM_FIELDS if getattr(args, name) is not None}


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> logging -> pool -> command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        if args.command == "process":
            return run_process(settings, args.upload_id)
        if args.command == "evaluate":
            return run_evaluate(args.subject_id)
        if args.command == "add":
            return run_add(args.subject_id, _form_values(args), args.upload_id)
        return run_compare(settings, args.first_subject_id, args.second_subject_id)
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
