from eaws.console import code, highlight
from tests.unit.fakes.fake_runner import recorded


def test_status_symbols(console) -> None:
    console.info("listing")
    console.success("done")
    console.warning("careful")
    console.error("failed")

    out = console.console.export_text()
    assert "ℹ listing" in out
    assert "✓ done" in out
    assert "⚠ careful" in out
    assert "✗ failed" in console.error_console.export_text()
    assert "failed" not in out


def test_timing_only_when_verbose(console) -> None:
    console.timing("List clusters", 0.1234)
    assert "List clusters" not in recorded(console)

    console.verbose = True
    console.timing("List clusters", 0.1234)
    assert "✓ List clusters: 0.12s" in recorded(console)


def test_markup_in_names_is_escaped(console) -> None:
    console.info(f"Using cluster: {highlight('[prod]')}")
    console.info(f"Running {code('[bold]x')}")

    output = recorded(console)
    assert "Using cluster: [prod]" in output
    assert "Running [bold]x" in output
