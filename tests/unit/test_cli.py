"""Unit tests for the command-line interface."""

from pokefuzz.cli import build_parser, main, to_overrides


class TestOverrides:
    """Tests for flag to override translation."""

    def test_no_flags(self):
        args = build_parser().parse_args([])
        assert to_overrides(args) == []

    def test_flags(self):
        args = build_parser().parse_args([
            "--format=gen5customgame", "--cycles=2", "--seed=7",
            "--max-games=100", "--max-failures=1", "--log", "--forever",
            "showdown.timeout_seconds=30",
        ])
        assert to_overrides(args) == [
            "showdown.timeout_seconds=30",
            "run.format=gen5customgame",
            "run.cycles=2",
            "run.seed=7",
            "run.max_games=100",
            "run.max_failures=1",
            "run.log=true",
            "run.forever=true",
        ]

    def test_print_config_is_not_an_override(self):
        args = build_parser().parse_args(["--print-config"])
        assert args.print_config
        assert to_overrides(args) == []

    def test_dual(self):
        assert to_overrides(build_parser().parse_args(["--dual"])) == ["run.dual=true"]
        assert to_overrides(build_parser().parse_args(["--dual", "debug"])) == [
            "run.dual=true", "run.dual_debug=true",
        ]


class TestMain:
    """Tests for main."""

    def test_missing_data_dir_is_configuration_error(self, tmp_path):
        assert main([f"--data-dir={tmp_path}", "--format=gen7customgame"]) == 2

    def test_print_config(self, capsys):
        assert main(["--print-config", "--cycles=3", "showdown.timeout_seconds=60"]) == 0
        out = capsys.readouterr().out
        assert "cycles: 3" in out
        assert "timeout_seconds: 60" in out
        assert "combo_chance: 0.5" in out
