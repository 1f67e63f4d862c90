"""Main CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import pydantic

from .config import FixerConfig
from .dump import dump_document
from .exceptions import ChartFixError, ConfigError
from .fix.pipeline import fix_file
from .messages import MessageLog
from .midi_file import load_document
from .practice import load_practice_sections
from .report import FixError, build_report
from .validate import validate_report

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> None:
    """Main CLI entrypoint."""
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "dump":
        _main_dump(argv[1:])
        return
    if argv and argv[0] == "fix":
        argv = argv[1:]
    _main_fix(argv)


def _init_logging(verbose: bool) -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _main_dump(argv: list[str]) -> None:
    parser = argparse.ArgumentParser(
        description="chartfix - list the events of a MIDI file",
        prog="chartfix dump",
    )
    parser.add_argument("midi", help="Path to MIDI file")
    parser.add_argument("--out", default=None, help="Path to output text file (default: stdout)")
    args = parser.parse_args(argv)

    try:
        text = dump_document(load_document(args.midi))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ChartFixError as e:
        print(f"Error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(1)

    if args.out is None:
        sys.stdout.write(text)
        return

    out_path = Path(args.out)
    with open(out_path, "w") as f:
        f.write(text)
    print(f"Wrote dump to {out_path}")


def _main_fix(argv: list[str]) -> None:
    parser = argparse.ArgumentParser(
        description="chartfix - repair a sequencer MIDI export into a drum chart",
        prog="chartfix",
    )
    parser.add_argument("midi", help="Path to MIDI file")
    parser.add_argument(
        "--out",
        default=None,
        help="Path to fixed MIDI file (default: <name>_clean.mid next to the input)",
    )
    parser.add_argument("--report", default=None, help="Path to output JSON report")
    parser.add_argument(
        "--practice-sections",
        default=None,
        help="Practice section list (default: bundled list)",
    )
    parser.add_argument(
        "--ppq",
        type=int,
        default=FixerConfig().ticks_per_quarter,
        help="Ticks per quarter note of the output. Default: 480",
    )
    parser.add_argument(
        "--velocity",
        type=int,
        default=FixerConfig().default_velocity,
        help="Velocity given to every note. Default: 96",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    _init_logging(args.verbose)

    midi_path = Path(args.midi)
    out_path = Path(args.out) if args.out else midi_path.with_name(f"{midi_path.stem}_clean.mid")
    try:
        config = FixerConfig(ticks_per_quarter=args.ppq, default_velocity=args.velocity)
    except pydantic.ValidationError as e:
        details = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
        print(f"Error [{ConfigError.code}]: Invalid options ({details})", file=sys.stderr)
        sys.exit(1)

    log = MessageLog(listener=print)

    error: FixError | None = None
    try:
        practice_sections = load_practice_sections(args.practice_sections)
        fix_file(midi_path, out_path, practice_sections, log, config)
        print(f"Wrote fixed MIDI to {out_path}")
    except FileNotFoundError as e:
        error = FixError(code="E_FILE_NOT_FOUND", message=str(e))
        print(f"Error: {e}", file=sys.stderr)
    except ChartFixError as e:
        error = FixError(code=e.code, message=str(e))
        print(f"Error [{e.code}]: {e}", file=sys.stderr)

    if args.report:
        report = build_report(
            midi_path,
            None if error else out_path,
            config.ticks_per_quarter,
            log,
            error,
        )
        data = report.model_dump()
        validate_report(data)
        report_path = Path(args.report)
        with open(report_path, "w") as f:
            json.dump(data, f, indent=2)
        print(f"Wrote report to {report_path}")

    if error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
