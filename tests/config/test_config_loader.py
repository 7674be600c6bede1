# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader - the entry point for all config loading in mbench.

We test:
  1. Valid YAML loads into a frozen, correct config object
  2. Missing required fields raise ConfigValidationError
  3. Unknown fields raise ConfigValidationError (extra="forbid")
  4. Broken YAML and missing files raise ConfigLoadError
  5. The snapshot round-trips through the loader
"""

import textwrap
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from mbench.config.exceptions import ConfigError, ConfigLoadError, ConfigValidationError
from mbench.config.loader import config_snapshot, load_config


class TestLoadValidConfig:
    def test_loads_config_with_candidates(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.project_name == "mbench-test"
        assert config.global_config.seed == 42
        assert config.harness.repetitions == 3
        assert config.harness.quantiles == [0.5]
        assert [c.label for c in config.candidates] == ["loop", "generator"]
        assert config.candidates[0].kwargs == {"n": 100}
        assert config.candidates[1].args == [100]

    def test_harness_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "minimal.yaml"
        config_file.write_text('global:\n  config_version: "1.0.0"\n', encoding="utf-8")

        config = load_config(config_file)
        assert config.harness.repetitions == 10
        assert config.harness.warmup == 0
        assert config.harness.order == "input"
        assert config.harness.output_directory is None
        assert config.candidates == []

    def test_example_config_is_valid(self) -> None:
        example = Path(__file__).resolve().parents[2] / "configs" / "example.yaml"
        config = load_config(example)
        assert len(config.candidates) == 4
        assert config.harness.warmup == 5


class TestLoadInvalidConfig:
    def test_missing_required_field_raises_validation_error(
        self, invalid_config_file: Path
    ) -> None:
        with pytest.raises(ConfigValidationError, match="validation failed"):
            load_config(invalid_config_file)

    def test_unknown_field_raises_validation_error(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
            harness:
              repetiions: 5
        """)
        config_file = tmp_path / "typo.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_zero_repetitions_rejected(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
            harness:
              repetitions: 0
        """)
        config_file = tmp_path / "zero.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_broken_yaml_raises_load_error(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError, match="Invalid YAML"):
            load_config(broken_yaml_file)

    def test_missing_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_directory_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="not a file"):
            load_config(tmp_path)

    def test_non_mapping_yaml_raises_load_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(config_file)

    def test_errors_share_a_base_class(self) -> None:
        assert issubclass(ConfigLoadError, ConfigError)
        assert issubclass(ConfigValidationError, ConfigError)


class TestImmutabilityAndSnapshot:
    def test_loaded_config_is_frozen(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(ValidationError):
            config.harness.repetitions = 99  # type: ignore[misc]

    def test_snapshot_round_trips(self, tmp_config_file: Path, tmp_path: Path) -> None:
        config = load_config(tmp_config_file)
        snapshot = config_snapshot(config)
        assert "global" in snapshot
        assert "global_config" not in snapshot

        copy_file = tmp_path / "copy.yaml"
        copy_file.write_text(yaml.safe_dump(snapshot), encoding="utf-8")
        assert load_config(copy_file) == config
