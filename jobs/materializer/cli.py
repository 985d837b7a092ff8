"""CLI entry point for the materializer."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Callable, Optional, Sequence

from sqlalchemy.engine import Engine

from common.config import get_settings

from .benchmark import BenchmarkHarness, time_run
from .config import MaterializerConfig
from .errors import MaterializerError
from .progress import LoggingProgressObserver
from .report import format_report, format_run
from .runner import PipelineRunner
from .stores import EventStoreReader, MaterializedViewWriter, init_schema, open_engine

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n <= 0:
        raise argparse.ArgumentTypeError("iterations must be a positive integer")
    return n


def build_parser(default_progress_every: int = 1000, default_log_level: str = "INFO") -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="iot-materializer",
        description="Materialize event_store into materialized_view (latency + danger level)",
    )
    p.add_argument("--log-level", default=default_log_level)
    p.add_argument("--progress-every", type=int, default=default_progress_every)
    p.add_argument("--init-schema", action="store_true", help="create tables if missing")
    sub = p.add_subparsers(dest="command")

    sub.add_parser("run", help="execute the materialize process once")

    bench = sub.add_parser("benchmark", help="execute the materialize microbenchmark")
    bench.add_argument("--iterations", "-n", type=_positive_int, required=True)
    bench.add_argument("--json", action="store_true", help="print statistics as JSON")

    sub.add_parser("menu", help="interactive menu (default)")
    return p


def build_runner(engine: Engine, progress_every: int) -> tuple[PipelineRunner, LoggingProgressObserver]:
    observer = LoggingProgressObserver(every=progress_every)
    runner = PipelineRunner(
        source=EventStoreReader(engine),
        sink=MaterializedViewWriter(engine),
        observer=observer,
    )
    return runner, observer


def materialize_once(runner: PipelineRunner, output: OutputFn = print) -> int:
    output("Starting materialize process...")
    timing = time_run(runner)
    output(format_run(timing))
    return timing.record_count


def benchmark(
    runner: PipelineRunner,
    observer: LoggingProgressObserver,
    iterations: int,
    json_output: bool = False,
    output: OutputFn = print,
) -> None:
    output("Starting microbenchmark...")
    stats = BenchmarkHarness(runner, observer=observer).benchmark(iterations)
    output("Microbenchmark finished\n")
    if json_output:
        output(json.dumps(stats.to_dict(), indent=2))
    else:
        output(format_report(stats))


def _read_int(prompt: str, input_fn: InputFn) -> Optional[int]:
    try:
        return int(input_fn(prompt).strip())
    except ValueError:
        return None


def run_menu(
    runner: PipelineRunner,
    observer: LoggingProgressObserver,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> None:
    """Menú interactivo. Solo despacha a run() / benchmark(n)."""
    while True:
        output("")
        output("0: Exit")
        output("1: Execute materialize process")
        output("2: Execute materialize microbenchmark")
        try:
            choice = _read_int("Select a function: ", input_fn)
            if choice == 0:
                return
            if choice == 1:
                materialize_once(runner, output=output)
            elif choice == 2:
                iterations = _read_int("How many iterations?: ", input_fn)
                while iterations is None or iterations <= 0:
                    iterations = _read_int("Please input a correct number: ", input_fn)
                benchmark(runner, observer, iterations, output=output)
        except EOFError:
            return


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("Configuración inválida: %s", e)
        return 1

    args = build_parser(settings.progress_every, settings.log_level).parse_args(argv)
    logging.getLogger().setLevel(getattr(logging, str(args.log_level).upper(), logging.INFO))

    cfg = MaterializerConfig(
        command=args.command or "menu",
        iterations=getattr(args, "iterations", 0),
        progress_every=args.progress_every,
        json_output=bool(getattr(args, "json", False)),
        init_schema=bool(args.init_schema),
    )
    logger.info("Materializer started command=%s progress_every=%d", cfg.command, cfg.progress_every)

    try:
        engine = open_engine(settings)
    except MaterializerError as e:
        logger.error("No se pudo conectar a la BD: %s", e)
        return 1
    print("Connected with database!")

    try:
        if cfg.init_schema:
            init_schema(engine)

        runner, observer = build_runner(engine, cfg.progress_every)
        if cfg.command == "run":
            materialize_once(runner)
        elif cfg.command == "benchmark":
            benchmark(runner, observer, cfg.iterations, json_output=cfg.json_output)
        else:
            run_menu(runner, observer)
    except MaterializerError as e:
        logger.error("Materializer abortado: %s", e)
        return 1
    finally:
        engine.dispose()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
