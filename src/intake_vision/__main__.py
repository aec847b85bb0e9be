"""CLI entry point for intake-vision."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
import yaml

from . import __version__
from .exceptions import IntakeVisionError

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="intake-vision")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Intake vision — marker pattern and intake presence tooling."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format=_LOG_FORMAT
    )


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", default=None, help="Config file path")
@click.option("--out", "out_path", default=None, help="Write the annotated frame here")
def classify(image: str, config_path: str | None, out_path: str | None) -> None:
    """Classify a still IMAGE and print the region saturations."""
    import cv2

    from .config import load_config
    from .perception.pattern_classifier import RegionPatternClassifier
    from .perception.regions import REGION_NAMES

    try:
        config = load_config(config_path)
        frame = cv2.imread(image, cv2.IMREAD_COLOR)
        if frame is None:
            raise IntakeVisionError(f"Cannot read image: {image}")
        result, annotated = RegionPatternClassifier(config.classifier).classify(frame)
    except IntakeVisionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    for name, sat in zip(REGION_NAMES, result.region_saturations):
        click.echo(f"{name:>6} saturation: {sat}")
    click.echo(
        f"Pattern: {int(result.pattern_index)} ({result.pattern_index.name.lower()})"
    )

    if out_path:
        if not cv2.imwrite(out_path, annotated):
            click.echo(f"Error: cannot write {out_path}", err=True)
            raise SystemExit(1)
        click.echo(f"Annotated frame saved to {out_path}")


@main.command()
@click.option("--config", "config_path", default=None, help="Config file path")
@click.option(
    "--image", "image_path", default=None, help="Use a still image instead of a camera"
)
@click.option(
    "--distance",
    "distances",
    multiple=True,
    type=float,
    help="Simulated sensor reading in mm (repeat to script a sequence)",
)
@click.option("--ticks", default=None, type=int, help="Stop after N ticks")
@click.option(
    "--print-every", default=None, type=int, help="Print telemetry every N ticks"
)
def watch(
    config_path: str | None,
    image_path: str | None,
    distances: tuple[float, ...],
    ticks: int | None,
    print_every: int | None,
) -> None:
    """Run the tick loop against the configured camera and print telemetry.

    The distance sensor is simulated; pass --distance to script its readings.
    """
    from .camera.factory import create_camera
    from .config import load_config
    from .loop import TickDriver, TickReport, run_loop
    from .perception.pattern_classifier import RegionPatternClassifier
    from .sensors.presence import SampledPresenceDetector
    from .sensors.simulated import SimulatedDistanceSensor
    from .telemetry import collect_telemetry, format_telemetry

    try:
        config = load_config(config_path)
    except IntakeVisionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if image_path:
        config.camera.type = "file"
        config.camera.path = image_path

    sensor = SimulatedDistanceSensor(list(distances) or 100.0)
    detector = SampledPresenceDetector(sensor, config.presence)
    classifier = RegionPatternClassifier(config.classifier)
    driver = TickDriver(detector, classifier)
    every = print_every or max(1, int(config.driver.tick_hz))

    def on_report(report: TickReport) -> None:
        if report.tick % every == 0:
            data = collect_telemetry(detector, classifier, driver.frame_stats)
            click.echo(f"[{report.tick:>6}] {format_telemetry(data)}")

    async def _run() -> int:
        camera = create_camera(config.camera)
        try:
            await camera.open()
            detector.set_enabled(True)
            return await run_loop(
                driver,
                camera,
                tick_hz=config.driver.tick_hz,
                max_ticks=ticks,
                on_report=on_report,
            )
        finally:
            await camera.close()

    try:
        ran = asyncio.run(_run())
    except IntakeVisionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except KeyboardInterrupt:
        click.echo("\nStopped.")
        return
    click.echo(f"Ran {ran} ticks, final pattern {int(classifier.pattern)}")


@main.command("init-config")
@click.option("--config", "config_path", default=None, help="Config file path")
@click.option("--force", is_flag=True, help="Overwrite an existing config")
def init_config(config_path: str | None, force: bool) -> None:
    """Write the default configuration file."""
    from .config import DEFAULT_CONFIG_PATH, IntakeVisionConfig, save_config

    target = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
    if target.exists() and not force:
        click.echo(f"Config already exists: {target} (use --force to overwrite)")
        raise SystemExit(1)
    path = save_config(IntakeVisionConfig(), target)
    click.echo(f"Config written to {path}")


@main.command("show-config")
@click.option("--config", "config_path", default=None, help="Config file path")
def show_config(config_path: str | None) -> None:
    """Print the effective configuration."""
    from .config import load_config

    try:
        config = load_config(config_path)
    except IntakeVisionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    main()
