"""
Exam Scanner: batch question detection.

Scans every page image in the input directory with each configured
provider/model and writes the detected questions as JSON.
"""

import json
from pathlib import Path

from exam_scanner.config import Provider, ModelConfig, load_config
from exam_scanner.config.loader import AppConfig
from exam_scanner.scanner import scan_page_detailed
from exam_scanner.schemas import ScanResult
from exam_scanner.services import get_provider_models
from exam_scanner.utils import log, log_error, get_tracker, reset_tracker

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp"}


def sanitize_name(name: str) -> str:
    """Sanitize name for use in file paths."""
    return name.replace(".", "_").replace("/", "_").replace(":", "_")


def get_output_path(
    base_output_dir: Path,
    provider: Provider,
    model_config: ModelConfig,
    image_stem: str,
) -> Path:
    """
    Generate output path with provider/model directory structure.

    Structure: output/{provider}/{model}/{image_stem}.json
    """
    provider_name = sanitize_name(provider.value)
    model_name = sanitize_name(model_config.model_id)

    return base_output_dir / provider_name / model_name / f"{image_stem}.json"


def save_result(result: ScanResult, output_path: Path) -> None:
    """Save a scan result to a JSON file in wire format."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.to_wire(), f, indent=2)

    log(f"Output saved to {output_path}")


def find_images(input_dir: Path) -> list[Path]:
    """List page images in a directory, sorted by name."""
    if not input_dir.is_dir():
        return []
    return sorted(p for p in input_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)


def run_scans(
    image_files: list[Path],
    output_dir: Path,
    config: AppConfig,
) -> dict[str, int]:
    """
    Scan every image with every configured provider/model.

    Returns:
        Counts of successful and failed scans
    """
    scan_configs: list[tuple[Provider, ModelConfig]] = []
    for provider in Provider:
        for model_config in get_provider_models(provider, config):
            scan_configs.append((provider, model_config))

    if not scan_configs:
        log("No models configured. Check your config.yaml")
        return {"succeeded": 0, "failed": 0}

    counts = {"succeeded": 0, "failed": 0}
    total_runs = len(scan_configs) * len(image_files)
    run_count = 0

    for image_path in image_files:
        log("=" * 70)
        log(f"Page: {image_path.name}")
        log("=" * 70)

        for provider, model_config in scan_configs:
            run_count += 1
            log(f"[{run_count}/{total_runs}] {provider.value} / {model_config.model_id}")

            outcome = scan_page_detailed(
                image_path,
                provider=provider,
                config=config,
                model_config=model_config,
            )
            if outcome.ok:
                output_path = get_output_path(output_dir, provider, model_config, image_path.stem)
                save_result(outcome.result, output_path)
                counts["succeeded"] += 1
            else:
                log_error(
                    f"FAILED: {image_path.name} with {provider.value}/{model_config.model_id}: "
                    f"{outcome.failure.value} {outcome.detail}"
                )
                counts["failed"] += 1

    return counts


def main():
    """Main entry point."""
    reset_tracker()

    config = load_config()
    input_dir = Path(config.output.input_dir)
    output_dir = Path(config.output.output_dir)

    image_files = find_images(input_dir)
    if not image_files:
        log(f"No page images found in {input_dir}")
        return

    log(f"Found {len(image_files)} page image(s) to scan")

    counts = run_scans(image_files, output_dir, config)

    log("=" * 70)
    log(f"Scan complete: {counts['succeeded']} succeeded, {counts['failed']} failed")
    log("=" * 70)
    get_tracker().print_summary()


if __name__ == "__main__":
    main()
