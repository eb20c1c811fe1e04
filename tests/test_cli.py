from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from flowdocs import cli

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_config(tmp_path: Path, **render: object) -> Path:
    output = tmp_path / "public" / "flow.html"
    expanded = render.get("expanded", [])
    path = tmp_path / "flowdocs.yaml"
    path.write_text(
        f"""
catalog: {REPO_ROOT / "flowdocs" / "data" / "payment_flow.yaml"}
render:
  output: {output}
  expanded: {list(expanded)}
        """.strip()
        + "\n",
        encoding="utf-8",
    )
    return path


def _expanded(path: Path) -> list[str]:
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    return [
        article["data-step-id"]
        for article in soup.select('article.step[data-expanded="true"]')
    ]


def test_render_writes_snapshot(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _write_config(tmp_path)
    cli.render(config=config, expand=[9])
    output = tmp_path / "public" / "flow.html"
    assert capsys.readouterr().out.strip() == f"wrote {output}"
    assert _expanded(output) == ["9"]


def test_render_uses_configured_expansion(tmp_path: Path) -> None:
    config = _write_config(tmp_path, expanded=[2, 6])
    cli.render(config=config)
    assert _expanded(tmp_path / "public" / "flow.html") == ["2", "6"]


def test_render_expand_all_and_output_override(tmp_path: Path) -> None:
    config = _write_config(tmp_path)
    target = tmp_path / "all.html"
    cli.render(config=config, output=target, expand_all=True)
    assert len(_expanded(target)) == 13


def test_render_rejects_unknown_step(tmp_path: Path) -> None:
    config = _write_config(tmp_path)
    with pytest.raises(ValueError, match=r"unknown step\(s\) \[99\]"):
        cli.render(config=config, expand=[99])


def test_render_without_config_file_uses_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    cli.render(config=tmp_path / "absent.yaml")
    assert capsys.readouterr().out.strip() == "wrote public/payment-flow.html"
    assert (tmp_path / "public" / "payment-flow.html").exists()


def test_blocks_lists_fields(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _write_config(tmp_path)
    cli.blocks(config=config, step=11)
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "11. Redirect to Success Page",
        "   - url_parts: Redirect URL Breakdown [url_parts]",
    ]


def test_blocks_labels_untitled_note(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path)
    cli.blocks(config=config, step=8)
    assert "   - note: note [note]" in capsys.readouterr().out.splitlines()


def test_blocks_unknown_step(tmp_path: Path) -> None:
    config = _write_config(tmp_path)
    with pytest.raises(KeyError, match="Unknown step 77"):
        cli.blocks(config=config, step=77)


def test_serve_runs_uvicorn(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls: list[tuple[object, str, int]] = []

    def fake_run(app: object, *, host: str, port: int) -> None:
        calls.append((app, host, port))

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    cli.serve(config=_write_config(tmp_path), port=9001)
    ((app, host, port),) = calls
    assert (host, port) == ("127.0.0.1", 9001)
    assert app.state.expansion.expanded_ids() == []
    assert "serving 13 steps on http://127.0.0.1:9001/" in capsys.readouterr().out
