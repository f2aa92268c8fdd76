#!/usr/bin/env python3
"""
Uniformity audit for bounded secure draws.

Draws many values from the system source, checks the histogram with a
chi-squared goodness-of-fit test and reports rejection-sampling cost.

Usage:
    python -m scripts.uniformity_audit --draws 100000
    python -m scripts.uniformity_audit --draws 1000000 --alpha 1e-6 --out out/audit.csv
"""
import argparse
import csv
import math
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from statistics import NormalDist

from securerand.logic.generator import BOUND
from securerand.logic.rng import SecureRandomSource, SystemRandomSource


DEFAULT_DRAWS = 100000
DEFAULT_ALPHA = 1e-4


@dataclass
class AuditStats:
    """Statistics accumulated during an audit run."""
    bound: int
    draws: int = 0
    attempts: int = 0
    bytes_consumed: int = 0
    min_value: int | None = None
    max_value: int | None = None
    counts: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.counts:
            self.counts = [0] * self.bound

    @property
    def rejection_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return (self.attempts - self.draws) / self.attempts

    @property
    def mean_attempts(self) -> float:
        return self.attempts / self.draws if self.draws > 0 else 0.0


def chi_squared_statistic(counts: list[int]) -> float:
    """Pearson chi-squared statistic against a uniform expectation."""
    total = sum(counts)
    if not counts or total == 0:
        raise ValueError("counts must be non-empty with a positive total")
    expected = total / len(counts)
    return sum((c - expected) ** 2 / expected for c in counts)


def chi_squared_critical(df: int, alpha: float) -> float:
    """
    Upper critical value of chi-squared with df degrees of freedom.

    Uses the Wilson-Hilferty approximation, accurate to well under 1% for
    the df values an audit uses (hundreds and up).
    """
    if df <= 0:
        raise ValueError("df must be positive")
    if not 0 < alpha < 1:
        raise ValueError("alpha must be in (0, 1)")
    z = NormalDist().inv_cdf(1 - alpha)
    h = 2 / (9 * df)
    return df * (1 - h + z * math.sqrt(h)) ** 3


def run_audit(
    draws: int,
    bound: int = BOUND,
    source: SecureRandomSource | None = None,
) -> AuditStats:
    """Run draws independent bounded draws and accumulate statistics."""
    if draws <= 0:
        raise ValueError("draws must be positive")
    source = source or SystemRandomSource()
    stats = AuditStats(bound=bound)

    for _ in range(draws):
        draw = source.draw(bound)
        stats.draws += 1
        stats.attempts += draw.attempts
        stats.bytes_consumed += draw.bytes_consumed
        stats.counts[draw.value] += 1
        if stats.min_value is None or draw.value < stats.min_value:
            stats.min_value = draw.value
        if stats.max_value is None or draw.value > stats.max_value:
            stats.max_value = draw.value

    return stats


def expected_rejection_rate(bound: int) -> float:
    """Probability that a single masked candidate is rejected."""
    if bound == 1:
        return 0.0
    span = 1 << (bound - 1).bit_length()
    return (span - bound) / span


def write_csv(stats: AuditStats, chi2: float, critical: float, alpha: float, output_path: str) -> None:
    """Write a one-row audit summary CSV."""
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    row = {
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "bound": stats.bound,
        "draws": stats.draws,
        "min_value": stats.min_value,
        "max_value": stats.max_value,
        "chi2": f"{chi2:.4f}",
        "chi2_critical": f"{critical:.4f}",
        "alpha": alpha,
        "passed": chi2 <= critical,
        "mean_attempts": f"{stats.mean_attempts:.6f}",
        "rejection_rate": f"{stats.rejection_rate:.6f}",
        "expected_rejection_rate": f"{expected_rejection_rate(stats.bound):.6f}",
        "bytes_consumed": stats.bytes_consumed,
    }

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    print(f"CSV written to: {output_path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Uniformity audit for bounded secure draws")
    parser.add_argument(
        "--draws",
        type=int,
        default=DEFAULT_DRAWS,
        help=f"Number of draws (default: {DEFAULT_DRAWS})",
    )
    parser.add_argument(
        "--bound",
        type=int,
        default=BOUND,
        help=f"Exclusive upper bound to audit (default: {BOUND})",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        default=DEFAULT_ALPHA,
        help=f"Significance level of the chi-squared test (default: {DEFAULT_ALPHA})",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Optional output CSV path",
    )
    args = parser.parse_args(argv)

    if args.bound < 2:
        parser.error("--bound must be at least 2 for a goodness-of-fit test")
    if args.draws <= 0:
        parser.error("--draws must be positive")
    if not 0 < args.alpha < 1:
        parser.error("--alpha must be in (0, 1)")

    print(f"Running audit: bound={args.bound}, draws={args.draws}, alpha={args.alpha}")
    stats = run_audit(draws=args.draws, bound=args.bound)

    chi2 = chi_squared_statistic(stats.counts)
    critical = chi_squared_critical(args.bound - 1, args.alpha)

    print(f"\nSummary:")
    print(f"  Draws: {stats.draws}")
    print(f"  Observed range: [{stats.min_value}, {stats.max_value}]")
    print(f"  Chi-squared: {chi2:.4f} (df={args.bound - 1}, critical={critical:.4f})")
    print(f"  Mean attempts per draw: {stats.mean_attempts:.6f}")
    print(f"  Rejection rate: {stats.rejection_rate:.6f} (expected {expected_rejection_rate(args.bound):.6f})")
    print(f"  Entropy bytes consumed: {stats.bytes_consumed}")

    if args.out:
        write_csv(stats, chi2, critical, args.alpha, args.out)

    if stats.max_value is not None and stats.max_value >= args.bound:
        print(f"ASSERTION FAILED: max value ({stats.max_value}) >= bound ({args.bound})")
        return 1
    if chi2 > critical:
        print(f"ASSERTION FAILED: chi-squared ({chi2:.4f}) > critical ({critical:.4f})")
        return 1

    print(f"\nASSERTION PASSED: distribution consistent with uniform at alpha={args.alpha}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
