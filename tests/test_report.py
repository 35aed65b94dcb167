from pathlib import Path
from domain_checker.report import render_summary, results_frame, save_df, status_counts
from domain_checker.results import DomainResult, DomainStatus


def sample_results():
    return [
        DomainResult("b.example", DomainStatus.TIMEOUT, resolvable=True),
        DomainResult("a.example", DomainStatus.VALID, resolvable=True),
        DomainResult("c.example", DomainStatus.EXPIRED, resolvable=False),
        DomainResult("d.example", DomainStatus.VALID, resolvable=True),
    ]


def test_status_counts_follow_enum_order():
    counts = status_counts(sample_results())

    assert list(counts) == [DomainStatus.VALID, DomainStatus.EXPIRED, DomainStatus.TIMEOUT]
    assert counts[DomainStatus.VALID] == 2


def test_summary_lists_problematic_domains():
    lines = render_summary(sample_results())

    assert "📊 Total: 4" in lines
    assert "⏱️ TIMEOUT -> b.example" in lines
    assert "❌ EXPIRED -> c.example" in lines
    assert not any("a.example" in ln for ln in lines)
    assert lines[-1] == "⚠️ Found 2 problematic domain(s)"


def test_summary_all_valid():
    lines = render_summary([DomainResult("a.example", DomainStatus.VALID, resolvable=True)])

    assert lines[-1] == "✅ All domains are valid!"


def test_save_df_writes_csv(tmp_path: Path):
    out = save_df(results_frame(sample_results()), tmp_path / "results", "run")

    assert out == tmp_path / "results" / "run.csv"
    header = out.read_text(encoding="utf-8").splitlines()[0]
    assert header == "domain,status,resolvable,accessible"


def test_save_df_skips_empty(tmp_path: Path):
    assert save_df(results_frame([]), tmp_path, "run") is None
    assert not (tmp_path / "run.csv").exists()
