"""CLI entry points."""

from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence
import argparse
import hashlib
import json
import logging

from predboard.config import Config
from predboard.evaluation import evaluate
from predboard.exceptions import PredBoardError, ValidationError
from predboard.ingestion import build_data_source
from predboard.normalization import parse_csv_dataset
from predboard.ops import get_metrics_recorder
from predboard.ops.metrics import EVALUATION_TIMING
from predboard.ops.logging import configure_logging
from predboard.registry import DatasetRegistry
from predboard.reporting import (
    build_accuracy_frame,
    build_prediction_table,
    render_summary,
    summarize_report,
    write_table_csv,
)
from predboard.runtime.manifest import RunManifest
from predboard.storage import JsonStorage

logger = logging.getLogger(__name__)


def _hash_config(config: Config) -> str:
    payload = json.dumps(asdict(config), sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def _write_manifest(manifest: RunManifest, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / f"manifest_{manifest.run_id}.json"
    manifest.outputs["manifest"] = str(manifest_path)
    manifest_path.write_text(
        json.dumps(manifest.to_dict(), indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return manifest_path


def _read_text_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise ValidationError(f"{path.name} is not valid UTF-8 text.")


def _read_json_file(path: Path):
    text = _read_text_file(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path.name} is not a valid JSON export: {exc}")


def _build_registry(config: Config) -> DatasetRegistry:
    return DatasetRegistry(
        build_data_source(config),
        metrics=get_metrics_recorder(),
        catalogue_path=config.catalogue_path,
        catalogue_ttl=config.catalogue_ttl,
    )


def run_list_datasets(config_path: Optional[str] = None, as_json: bool = False) -> int:
    """Print the built-in catalogue."""
    try:
        config = Config.load(config_path=config_path)
        configure_logging(level_name=config.log_level)
        entries = _build_registry(config).list_datasets()
    except PredBoardError as exc:
        logger.error("%s", exc)
        return 1

    if as_json:
        print(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return 0
    for entry in entries:
        window = f"{entry.feature_window} steps" if entry.feature_window else "-"
        features = ", ".join(entry.features) or "-"
        print(f"{entry.id}\t{entry.name}\t{window}\t{features}")
    return 0


def run_evaluate(
    config_path: Optional[str] = None,
    dataset_id: Optional[str] = None,
    csv_path: Optional[str] = None,
    json_path: Optional[str] = None,
    name: Optional[str] = None,
    output_dir: Optional[str] = None,
) -> int:
    """Load or upload a dataset, score it and write the report artifacts."""
    manifest = RunManifest()
    try:
        config = Config.load(config_path=config_path)
    except PredBoardError as exc:
        configure_logging(run_id=manifest.run_id)
        logger.error("%s", exc)
        return 1
    manifest.config_hash = _hash_config(config)
    configure_logging(run_id=manifest.run_id, level_name=config.log_level)

    metrics = get_metrics_recorder()
    registry = _build_registry(config)
    try:
        if csv_path:
            path = Path(csv_path)
            entry = registry.register_csv_dataset(
                name or path.stem or config.default_label,
                _read_text_file(path),
            )
            dataset_id = entry.id
        elif json_path:
            path = Path(json_path)
            entry = registry.register_custom_dataset(name or path.stem, _read_json_file(path))
            dataset_id = entry.id

        dataset = registry.load_dataset(dataset_id)
        with metrics.timed(EVALUATION_TIMING):
            report = evaluate(dataset)
    except (PredBoardError, OSError) as exc:
        logger.error("Unable to evaluate the predictions: %s", exc)
        return 1

    manifest.dataset_id = dataset_id
    manifest.dataset_label = report.metadata.label

    summary = summarize_report(report)
    print(render_summary(summary))

    run_dir = Path(output_dir) if output_dir else Path(config.output_dir) / "runs"
    predictions_path = run_dir / f"predictions_{manifest.run_id}.csv"
    accuracy_path = run_dir / f"accuracy_{manifest.run_id}.csv"
    manifest.outputs["predictions_csv"] = write_table_csv(build_prediction_table(report), str(predictions_path))
    manifest.outputs["accuracy_csv"] = write_table_csv(build_accuracy_frame(report), str(accuracy_path))
    manifest.outputs["report_json"] = JsonStorage(str(run_dir)).write_document(
        f"report_{manifest.run_id}",
        report.to_dict(),
    )
    manifest.summary = {
        "dataset_accuracy": report.dataset_accuracy,
        "stocks": len(report.stock_metrics),
        "predictions": dataset.prediction_count,
    }

    manifest_path = _write_manifest(manifest, run_dir)
    logger.info("Evaluation metrics: %s", metrics.snapshot())
    logger.info("Run manifest written to %s", manifest_path)
    return 0


def run_export(csv_path: str, output_path: str, name: Optional[str] = None) -> int:
    """Convert a CSV dataset into the JSON dataset file shape."""
    configure_logging()
    source = Path(csv_path)
    target = Path(output_path)
    try:
        dataset = parse_csv_dataset(_read_text_file(source), name or source.stem)
    except (PredBoardError, OSError) as exc:
        logger.error("Unable to export %s: %s", source, exc)
        return 1

    written = JsonStorage(str(target.parent)).write_document(target.stem, dataset.to_dict())
    logger.info("Exported %d stocks to %s", len(dataset.stocks), written)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stock direction-prediction accuracy dashboard")
    subparsers = parser.add_subparsers(dest="command", required=True)

    listing = subparsers.add_parser("list-datasets", help="List the dataset catalogue")
    listing.add_argument("--config", dest="config_path", help="Path to config file")
    listing.add_argument("--json", dest="as_json", action="store_true", help="Print entries as JSON")

    run = subparsers.add_parser("evaluate", help="Evaluate a dataset's predictions")
    run.add_argument("--config", dest="config_path", help="Path to config file")
    source = run.add_mutually_exclusive_group(required=True)
    source.add_argument("--dataset", dest="dataset_id", help="Catalogue dataset id")
    source.add_argument("--csv", dest="csv_path", help="Upload a CSV dataset")
    source.add_argument("--json", dest="json_path", help="Upload a JSON dataset export")
    run.add_argument("--name", dest="name", help="Label for an uploaded dataset")
    run.add_argument("--output-dir", dest="output_dir", help="Output directory for run artifacts")

    export = subparsers.add_parser("export", help="Convert a CSV dataset to JSON")
    export.add_argument("--csv", dest="csv_path", required=True, help="CSV dataset path")
    export.add_argument("--output", dest="output_path", required=True, help="Output .json path")
    export.add_argument("--name", dest="name", help="Dataset label when the CSV has none")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "list-datasets":
        return run_list_datasets(
            config_path=args.config_path,
            as_json=getattr(args, "as_json", False),
        )
    if args.command == "evaluate":
        return run_evaluate(
            config_path=args.config_path,
            dataset_id=getattr(args, "dataset_id", None),
            csv_path=getattr(args, "csv_path", None),
            json_path=getattr(args, "json_path", None),
            name=getattr(args, "name", None),
            output_dir=getattr(args, "output_dir", None),
        )
    if args.command == "export":
        return run_export(
            csv_path=args.csv_path,
            output_path=args.output_path,
            name=getattr(args, "name", None),
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
