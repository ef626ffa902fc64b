# File: tests/test_cli.py
"""Тесты для CLI (`schema_harvest/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `harvest`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import json

import pytest
import schema_harvest.cli as cli_module
from click.testing import CliRunner
from schema_harvest.aggregator import ResultRecord, ResultSet
from schema_harvest.cli import cli
from schema_harvest.logger import init_logging


@pytest.fixture()
def project(tmp_path, monkeypatch):
    """Временный проект: конфиг, каталог со списками URL и каталог вывода."""
    url_dir = tmp_path / "site-urls"
    url_dir.mkdir()
    (url_dir / "nl-be-urls.yaml").write_text("- http://a.example/\n- http://b.example/\n", encoding="utf-8")
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(
        json.dumps(
            {
                "url_dir": str(url_dir),
                "output_dir": str(tmp_path / "output"),
                "timeout": 1.0,
                "user_agent": "Agent/1.0",
                "rate_limit": 10.0,
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path, cfg_file


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI перенастраивает логгер на поток CliRunner; возвращаем обычный stdout."""
    yield
    init_logging()


@pytest.fixture(autouse=True)
def patch_start_harvest(monkeypatch):
    """Патчим start_harvest для возвращения фиктивных результатов без сети."""
    calls = []

    async def fake_harvest(cfg, sites, optimize=None, results=None):
        calls.append((list(sites), optimize))
        results.add("Product", ResultRecord.success(sites[0], {"name": "Bike"}))
        results.add_crawl_error(sites[1], "Request failed with status code 404")
        return results

    monkeypatch.setattr(cli_module, "start_harvest", fake_harvest)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SchemaHarvest" in result.output


def test_show_config(project):
    _, cfg_file = project
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["user_agent"] == "Agent/1.0"
    assert data["optimizer"]["enabled"] is False


def test_harvest_writes_csv_and_summary(project, patch_start_harvest):
    tmp_path, cfg_file = project
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "nl-be"])
    assert result.exit_code == 0, result.output

    assert patch_start_harvest == [(["http://a.example/", "http://b.example/"], None)]
    out = tmp_path / "output"
    names = sorted(p.name for p in out.iterdir())
    assert any(n.startswith("nl-be_Product_") and n.endswith(".csv") for n in names)
    assert any(n.startswith("nl-be_CrawlError_") for n in names)
    summary_file = next(out.glob("nl-be_summary_*.json"))
    summary = json.loads(summary_file.read_text(encoding="utf-8"))
    assert summary["total"] == 2
    assert summary["type_breakdown"] == {"Product": 1, "CrawlError": 1}
    assert "Total records: 2" in result.output


def test_harvest_output_dir_and_html(project):
    tmp_path, cfg_file = project
    out = tmp_path / "elsewhere"
    html = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(cfg_file), "harvest", "nl-be", "--output-dir", str(out), "--html", str(html), "--no-optimize"],
    )
    assert result.exit_code == 0, result.output
    assert len(list(out.glob("*.csv"))) == 2
    assert html.exists()
    assert "HTML report" in result.output


def test_harvest_optimize_flag_forwarded(project, patch_start_harvest):
    _, cfg_file = project
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "nl-be", "--optimize"])
    assert result.exit_code == 0, result.output
    assert patch_start_harvest[0][1] is True


def test_harvest_unknown_locale_exits_before_crawl(project, patch_start_harvest):
    _, cfg_file = project
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "xx-yy"])
    assert result.exit_code == 1
    assert "Ошибка загрузки списка URL" in result.output
    assert patch_start_harvest == []


def test_harvest_malformed_list_exits(project, patch_start_harvest):
    tmp_path, cfg_file = project
    (tmp_path / "site-urls" / "bad-urls.yaml").write_text("key: value\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "bad"])
    assert result.exit_code == 1
    assert patch_start_harvest == []


def test_bad_config_exits(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout: -5\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_harvest_empty_list(project, monkeypatch):
    tmp_path, cfg_file = project
    (tmp_path / "site-urls" / "empty-urls.json").write_text("[]", encoding="utf-8")

    async def empty(cfg, sites, optimize=None, results=None):
        return results

    monkeypatch.setattr(cli_module, "start_harvest", empty)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "empty"])
    assert result.exit_code == 0
    assert "No data collected." in result.output


def test_harvest_timeout_saves_partial_results(project, monkeypatch):
    tmp_path, cfg_file = project

    async def slow(cfg, sites, optimize=None, results=None):
        results.add("Product", ResultRecord.success(sites[0], {"name": "Bike"}))
        await asyncio.sleep(2)
        return results

    monkeypatch.setattr(cli_module, "start_harvest", slow)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "nl-be", "--scan-timeout", "0.5"])
    assert result.exit_code == 1
    assert "не завершён" in result.output
    assert "Total records: 1" in result.output
    names = [p.name for p in (tmp_path / "output").iterdir()]
    assert any(n.startswith("nl-be_Product_") for n in names)


def test_harvest_timeout_with_nothing_collected(project, monkeypatch):
    _, cfg_file = project

    async def stalled(cfg, sites, optimize=None, results=None):
        await asyncio.sleep(2)
        return results

    monkeypatch.setattr(cli_module, "start_harvest", stalled)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "harvest", "nl-be", "--scan-timeout", "0.5"])
    assert result.exit_code == 1
    assert "No data collected." in result.output
