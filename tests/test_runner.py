"""End-to-end tests for the build pipeline."""

import logging
import threading
import time
from pathlib import Path

import pytest
from rich.console import Console

from article_site.config import AppConfig
from article_site.core.errors import ArticleIOError, ConfigError, TemplateLoadError
from article_site.core.types import RenderFailure, RenderSuccess
from article_site import runner

TEMPLATE = "<html><h1>{{ title }}</h1><time>{{ created_at }}</time>{{ content }}</html>\n"


def _site(tmp_path: Path, workers="unbounded") -> AppConfig:
    src = tmp_path / "src"
    tpl = tmp_path / "tpl"
    src.mkdir()
    tpl.mkdir()
    (tpl / "article.html").write_text(TEMPLATE, encoding="utf-8")

    cfg = AppConfig()
    cfg.paths.source_dir = str(src)
    cfg.paths.output_dir = str(tmp_path / "out")
    cfg.paths.template_dir = str(tpl)
    cfg.render.max_workers = workers
    return cfg


def _write(cfg: AppConfig, name: str, body: str = "# Post\n") -> Path:
    path = Path(cfg.paths.source_dir) / name
    path.write_text(body, encoding="utf-8")
    return path


@pytest.mark.parametrize("workers", ["unbounded", 1, "auto"])
def test_scenario_two_posts_one_bad_name_one_text_file(tmp_path: Path, caplog, workers) -> None:
    cfg = _site(tmp_path, workers)
    _write(cfg, "a.post-one.md")
    _write(cfg, "b.post-two.md")
    _write(cfg, "not-valid.md")
    _write(cfg, "readme.txt", "ignored")
    logger = logging.getLogger("test_scenario")

    with caplog.at_level(logging.INFO, logger="test_scenario"):
        report = runner.run_build(cfg, logger=logger)

    out = tmp_path / "out"
    assert report.total == 2
    assert sorted(r.path for r in report.rendered) == [
        out / "post-one" / "index.html",
        out / "post-two" / "index.html",
    ]
    assert (out / "post-one" / "index.html").exists()
    assert (out / "post-two" / "index.html").exists()
    assert report.skipped == [Path(cfg.paths.source_dir) / "not-valid.md"]

    messages = [record.getMessage() for record in caplog.records]
    assert messages.count("wrong filename format for file not-valid.md") == 1
    assert not any("readme.txt" in message for message in messages)
    assert sum(1 for m in messages if m.startswith("successfully rendered")) == 2
    assert messages[-1] == "finished"


def test_rebuild_is_byte_identical(tmp_path: Path) -> None:
    cfg = _site(tmp_path)
    _write(cfg, "a.one.md", "# One\n\n```\ncode\n```\n")
    _write(cfg, "b.two.md", "| a |\n|---|\n| 1 |\n")
    logger = logging.getLogger("test_rebuild")

    runner.run_build(cfg, logger=logger)
    out = tmp_path / "out"
    first = {p: p.read_bytes() for p in out.rglob("index.html")}
    runner.run_build(cfg, logger=logger)
    second = {p: p.read_bytes() for p in out.rglob("index.html")}

    assert len(first) == 2
    assert first == second


def test_one_blocked_output_does_not_stop_others(tmp_path: Path, caplog) -> None:
    cfg = _site(tmp_path)
    _write(cfg, "a.post-one.md")
    blocked_src = _write(cfg, "b.post-two.md")
    _write(cfg, "c.post-three.md")
    out = tmp_path / "out"
    out.mkdir()
    (out / "post-two").write_text("file where a directory should be", encoding="utf-8")
    logger = logging.getLogger("test_isolation")

    with caplog.at_level(logging.INFO, logger="test_isolation"):
        report = runner.run_build(cfg, logger=logger)

    assert len(report.rendered) == 2
    assert [f.path for f in report.failed] == [blocked_src]
    assert isinstance(report.failed[0].error, ArticleIOError)
    assert not report.ok
    assert any(
        r.getMessage().startswith(f"failed to render {blocked_src}") for r in caplog.records
    )


def test_unreadable_source_dir_reports_discovery_error(tmp_path: Path, caplog) -> None:
    cfg = _site(tmp_path)
    cfg.paths.source_dir = str(tmp_path / "missing")
    logger = logging.getLogger("test_discovery_error")

    with caplog.at_level(logging.INFO, logger="test_discovery_error"):
        report = runner.run_build(cfg, logger=logger)

    assert report.total == 0
    assert len(report.discovery_errors) == 1
    messages = [record.getMessage() for record in caplog.records]
    missing = tmp_path / "missing"
    assert sum(1 for m in messages if m.startswith(f"failed to read source directory {missing}")) == 1
    assert messages[-1] == "finished"


def test_missing_template_aborts_before_any_article(tmp_path: Path) -> None:
    cfg = _site(tmp_path)
    _write(cfg, "a.one.md")
    (Path(cfg.paths.template_dir) / "article.html").unlink()

    with pytest.raises(TemplateLoadError):
        runner.run_build(cfg, logger=logging.getLogger("test_no_template"))

    assert not (tmp_path / "out").exists()


def test_malformed_template_aborts_before_any_article(tmp_path: Path) -> None:
    cfg = _site(tmp_path)
    _write(cfg, "a.one.md")
    (Path(cfg.paths.template_dir) / "article.html").write_text("{% for %}", encoding="utf-8")

    with pytest.raises(TemplateLoadError):
        runner.run_build(cfg, logger=logging.getLogger("test_bad_template"))

    assert not (tmp_path / "out").exists()


def test_missing_paths_are_config_errors(tmp_path: Path) -> None:
    cfg = AppConfig()
    cfg.paths.source_dir = str(tmp_path)

    with pytest.raises(ConfigError) as excinfo:
        runner.run_build(cfg)

    assert "out" in str(excinfo.value)
    assert "tpl" in str(excinfo.value)


def test_unknown_markdown_extension_is_config_error(tmp_path: Path) -> None:
    cfg = _site(tmp_path)
    cfg.render.markdown_extensions = ["no_such_extension_here"]

    with pytest.raises(ConfigError):
        runner.run_build(cfg, logger=logging.getLogger("test_bad_ext"))


@pytest.mark.parametrize("workers", [1, "unbounded"])
def test_slow_article_is_reported_before_finish(tmp_path: Path, caplog, workers) -> None:
    cfg = _site(tmp_path, workers)
    for i in range(8):
        _write(cfg, f"a.post-{i}.md")
    slow = Path(cfg.paths.source_dir) / "a.post-0.md"

    def _handler(job):
        if job.input_path == slow:
            time.sleep(0.3)
        return RenderSuccess(input_path=job.input_path, output_path=job.output_path)

    logger = logging.getLogger("test_slow")
    with caplog.at_level(logging.INFO, logger="test_slow"):
        report = runner.run_build(cfg, logger=logger, handler=_handler)

    messages = [r.getMessage() for r in caplog.records]
    slow_line = f"successfully rendered {tmp_path / 'out' / 'post-0' / 'index.html'}"
    assert report.total == 8
    assert slow_line in messages
    assert messages.index(slow_line) < messages.index("finished")


def test_filename_metadata_policy(tmp_path: Path) -> None:
    cfg = _site(tmp_path)
    cfg.render.metadata = "filename"
    _write(cfg, "hello-world.greeting.md", "body\n")

    report = runner.run_build(cfg, logger=logging.getLogger("test_meta"))

    html = (tmp_path / "out" / "greeting" / "index.html").read_text(encoding="utf-8")
    assert report.ok
    assert "<h1>hello world</h1>" in html


def test_summary_printed_to_console(tmp_path: Path) -> None:
    cfg = _site(tmp_path)
    _write(cfg, "a.one.md")
    console = Console(record=True, width=200)

    runner.run_build(cfg, logger=logging.getLogger("test_console"), console=console)

    assert "rendered=1, failed=0, skipped=0" in console.export_text()


def test_failures_are_logged_at_error_level(tmp_path: Path, caplog) -> None:
    cfg = _site(tmp_path)
    _write(cfg, "a.one.md")

    def _handler(job):
        return RenderFailure(input_path=job.input_path, error=ArticleIOError("denied"))

    logger = logging.getLogger("test_levels")
    with caplog.at_level(logging.INFO, logger="test_levels"):
        runner.run_build(cfg, logger=logger, handler=_handler)

    failed = [r for r in caplog.records if r.getMessage().startswith("failed to render")]
    assert len(failed) == 1
    assert failed[0].levelno == logging.ERROR
    assert failed[0].event == "render_failed"


def test_build_finishes_when_a_render_thread_cannot_start(tmp_path: Path, caplog, monkeypatch) -> None:
    cfg = _site(tmp_path)
    for name in ("a.p0.md", "a.p1.md", "a.p2.md", "a.p3.md"):
        _write(cfg, name)
    real_start = threading.Thread.start

    def _start(thread: threading.Thread) -> None:
        if thread.name == "render-a.p1.md":
            raise RuntimeError("can't start new thread")
        real_start(thread)

    monkeypatch.setattr(threading.Thread, "start", _start)
    logger = logging.getLogger("test_spawn_failure")

    with caplog.at_level(logging.INFO, logger="test_spawn_failure"):
        report = runner.run_build(cfg, logger=logger)

    assert len(report.rendered) == 3
    assert [f.path for f in report.failed] == [Path(cfg.paths.source_dir) / "a.p1.md"]
    assert caplog.records[-1].getMessage() == "finished"
