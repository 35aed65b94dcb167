import logging
from pathlib import Path
import pandas as pd
from .results import DomainResult, DomainStatus, icon_for

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 50


def results_frame(results: list[DomainResult]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "domain": r.domain,
                "status": r.status.value,
                "resolvable": r.resolvable,
                "accessible": r.accessible,
            }
            for r in results
        ],
        columns=["domain", "status", "resolvable", "accessible"],
    )


def status_counts(results: list[DomainResult]) -> dict[DomainStatus, int]:
    """Non-zero counts per status, in DomainStatus order."""
    counts = results_frame(results)["status"].value_counts()
    return {s: int(counts[s.value]) for s in DomainStatus if s.value in counts.index}


def problematic(results: list[DomainResult]) -> list[DomainResult]:
    return [r for r in results if r.status is not DomainStatus.VALID]


def progress_line(result: DomainResult) -> str:
    return f"Checking {result.domain}... {icon_for(result.status)} {result.status.value}"


def render_summary(results: list[DomainResult]) -> list[str]:
    lines = ["", SEPARATOR, "SUMMARY:"]

    for status, n in status_counts(results).items():
        lines.append(f"{icon_for(status)} {status.value}: {n}")
    lines.append(f"📊 Total: {len(results)}")

    bad = problematic(results)
    for r in bad:
        lines.append(f"{icon_for(r.status)} {r.status.value} -> {r.domain}")

    lines.append("")
    if bad:
        lines.append(f"⚠️ Found {len(bad)} problematic domain(s)")
    else:
        lines.append("✅ All domains are valid!")
    return lines


def save_df(df: pd.DataFrame, results_dir: Path, name: str) -> Path | None:
    """
    Persist a DataFrame as CSV under <results_dir>/<name>.csv.
    """
    if df.empty:
        return None

    results_dir.mkdir(parents=True, exist_ok=True)
    out_path = results_dir / f"{name}.csv"
    df.to_csv(out_path, index=False)
    logger.info("Saved %s", out_path)
    return out_path
