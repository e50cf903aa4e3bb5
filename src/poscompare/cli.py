from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .compare import ZERO_DIVISION_POLICIES, compare_tables
from .plotting import plot_confusion_counts, plot_metrics
from .positions import read_positions
from .reference import reference_contig_lengths
from .report import format_report, render_report
from .toy_data import make_toy_data
from .utils import dataclass_to_jsonable, ensure_outdir, write_json

_EPILOG = """\
Example:
  poscompare --variants-true variants.tsv --variants-detected variants-detected.tsv \\
    --reference-genome reference.fasta
"""


def _setup_logging(verbosity: int, *, logfile: Optional[Path] = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    log_fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(level=level, format=log_fmt, stream=sys.stderr)

    if logfile is not None:
        logfile.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(logfile)
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(log_fmt))
        logging.getLogger().addHandler(fh)


def _path_exists(p: str) -> str:
    if not Path(p).exists():
        raise argparse.ArgumentTypeError(f"Path does not exist: {p}")
    return p


def _handle_error(err: Exception, *, log_path: Optional[Path] = None) -> int:
    sys.stderr.write(f"{err.__class__.__name__}: {err}\n")
    if log_path is not None:
        sys.stderr.write(f"See log: {log_path}\n")
    return 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="poscompare",
        description=(
            "Compare two variant position tables (true vs detected) and report "
            "TP/FP/TN/FN with accuracy, specificity, sensitivity, precision and FP rate."
        ),
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"poscompare {__version__}")

    p.add_argument(
        "--variants-true",
        default=None,
        type=_path_exists,
        help="The true variants table (required).",
    )
    p.add_argument(
        "--variants-detected",
        default=None,
        type=_path_exists,
        help="The detected variants table (required).",
    )
    p.add_argument(
        "--reference-genome",
        default=None,
        type=_path_exists,
        help=(
            "The reference genome in FASTA format (required). Its total length is the number of "
            "positions used to count true negatives."
        ),
    )
    p.add_argument(
        "--zero-division",
        choices=ZERO_DIVISION_POLICIES,
        default="nan",
        help="How to report a rate whose denominator is zero: NaN (default) or fail.",
    )
    p.add_argument(
        "--outdir",
        default=None,
        help="Also write summary.json, report.html, plots and a log into this directory.",
    )
    p.add_argument(
        "--make-toy-data",
        metavar="OUTDIR",
        default=None,
        help="Write a tiny reference and a true/detected table pair into OUTDIR, then exit.",
    )
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v/-vv).")
    return p


_REQUIRED_INPUTS = (
    ("variants_true", "--variants-true"),
    ("variants_detected", "--variants-detected"),
    ("reference_genome", "--reference-genome"),
)


def cmd_make_toy_data(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose, logfile=None)
    try:
        summary = make_toy_data(outdir=Path(args.make_toy_data).expanduser().resolve())
    except Exception as e:
        return _handle_error(e, log_path=None)
    print(json.dumps(summary, indent=2))
    return 0


def run_compare(args: argparse.Namespace) -> int:
    outdir = Path(args.outdir).expanduser().resolve() if args.outdir else None
    log_path = outdir / "logs" / "compare.log" if outdir is not None else None
    _setup_logging(args.verbose, logfile=log_path)

    logger = logging.getLogger("poscompare")
    logger.info("poscompare %s", __version__)

    try:
        contigs = reference_contig_lengths(args.reference_genome)
        reference_size = sum(contigs.values())
        logger.info("Reference genome size: %d", reference_size)

        true_table = read_positions(args.variants_true)
        detected_table = read_positions(args.variants_detected)

        result = compare_tables(
            true_table,
            detected_table,
            reference_size,
            zero_division=args.zero_division,
        )
        text = format_report(
            reference_genome_file=args.reference_genome,
            variants_true_file=args.variants_true,
            variants_detected_file=args.variants_detected,
            result=result,
        )

        if outdir is not None:
            outdir = ensure_outdir(outdir)
            summary = {
                "version": __version__,
                "reference_genome_file": args.reference_genome,
                "variants_true_file": args.variants_true,
                "variants_detected_file": args.variants_detected,
                "zero_division": args.zero_division,
                "result": dataclass_to_jsonable(result),
            }
            write_json(outdir / "summary.json", summary)

            plots_dir = outdir / "plots"
            plot_confusion_counts(result=result, out_png=plots_dir / "confusion_counts.png")
            plot_metrics(result=result, out_png=plots_dir / "metrics.png")

            render_report(
                outdir=outdir,
                version=__version__,
                reference_genome_file=args.reference_genome,
                true_table=true_table,
                detected_table=detected_table,
                result=result,
                contigs=contigs,
                plots={
                    "confusion_counts": str(Path("plots") / "confusion_counts.png"),
                    "metrics": str(Path("plots") / "metrics.png"),
                },
            )

        sys.stdout.write(text)
        return 0
    except Exception as e:
        return _handle_error(e, log_path=log_path)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.make_toy_data is not None:
        return cmd_make_toy_data(args)

    missing = [flag for dest, flag in _REQUIRED_INPUTS if getattr(args, dest) is None]
    if missing:
        parser.error("the following arguments are required: " + ", ".join(missing))
    return run_compare(args)


if __name__ == "__main__":
    raise SystemExit(main())
