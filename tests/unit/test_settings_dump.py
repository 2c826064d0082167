"""Unit tests for the settings dump and its round trip through --config."""

import pytest
import yaml

from desyde.errors import ConfigIOError
from desyde.settings import Config
from desyde.settings.dump import render_settings, settings_to_options, write_config_file
from desyde.settings.types import OptCriterion


@pytest.fixture
def full_tokens(base_tokens, tmp_path):
    tdn = tmp_path / "tdn.cfg"
    tdn.write_text("tdn\n")
    return base_tokens + [
        "--model", "single-rate-with-online-presolve",
        "--search", "gist-optimal",
        "--criteria", "throughput", "--criteria", "power", "--criteria", "latency",
        "--timeout", "1000", "--timeout", "5000",
        "--threads", "8",
        "--th-prop", "max-cycle-ratio",
        "--presolver-model", "no-presolve", "--presolver-model", "one-processor-mappings",
        "--presolver-heuristic", "staged-heuristic",
        "--presolver-timeout", "50", "--presolver-timeout", "70",
        "--out-file-type", "xml",
        "--out-print-freq", "every-n",
        "--print-metrics", "throughput",
        "--log-level", "warning", "--log-level", "debug",
        "--tdn-config", str(tdn),
    ]


class TestRoundTrip:

    def test_dump_then_reparse_yields_equivalent_settings(self, full_tokens, tmp_path):
        original = Config()
        assert original.parse(full_tokens) == 0
        dump = original.dump_config_file(tmp_path / "dump.yaml")

        reparsed = Config()
        assert reparsed.parse(["--config", str(dump)]) == 0

        assert reparsed.settings.model_dump() == original.settings.model_dump()

    def test_round_trip_with_defaults(self, base_tokens, tmp_path):
        original = Config()
        original.parse(base_tokens)
        dump = original.dump_config_file(tmp_path / "dump.yaml")

        reparsed = Config()
        reparsed.parse(["--config", str(dump)])

        assert reparsed.settings.model_dump() == original.settings.model_dump()

    def test_dump_config_option_writes_file(self, full_tokens, tmp_path):
        target = tmp_path / "records" / "run.yaml"

        Config().parse(full_tokens + ["--dump-config", str(target)])

        data = yaml.safe_load(target.read_text())
        assert data["criteria"] == ["throughput", "power", "latency"]
        assert data["timeout"] == [1000, 5000]
        assert data["log_level"] == ["warning", "debug"]

    def test_step_cursor_not_dumped(self, full_tokens):
        config = Config()
        config.parse(full_tokens)
        config.inc_optimization_step()

        assert "optimization_step" not in settings_to_options(config.settings)


class TestRenderSettings:

    def test_lists_every_section(self, full_tokens):
        config = Config()
        config.parse(full_tokens)

        text = config.print_settings()

        for expected in ("DeSyDe Settings", "Paths", "Main search", "Presolver", "Output",
                         "gist-optimal", "throughput, power, latency", "max-cycle-ratio"):
            assert expected in text

    def test_shows_current_step(self, make_settings):
        settings = make_settings(OptCriterion.POWER, OptCriterion.THROUGHPUT)
        settings.optimization_step = 1

        text = render_settings(settings)

        assert "optimization_step" in text
        assert " 1 " in text

    def test_write_to_unwritable_location(self, make_settings, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(ConfigIOError):
            write_config_file(make_settings(), blocker / "dump.yaml")
