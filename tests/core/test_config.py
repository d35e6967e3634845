#!/usr/bin/env python3
"""配置系统测试模块

测试ConfigManager的配置加载、合并和输出目录管理功能。
"""

import json
import logging
import os
from pathlib import Path

import pytest
import yaml

from dimerprobe.core.config import DEFAULTS, ConfigManager


class TestConfigManagerBasic:
    """基本配置加载测试"""

    def test_empty_config_initialization(self):
        """测试空配置初始化：只有内置默认值"""
        cfg = ConfigManager()
        assert cfg.data == DEFAULTS
        assert cfg.sources == []
        assert cfg.scenario == "cutoff"
        assert cfg.get("cutoff.tol") == pytest.approx(1e-6)
        assert cfg.get("cutoff.num") == 1000
        assert cfg.get("cutoff.detector.type") == "tail_mean"
        assert cfg.get("dimer.cell_size") == pytest.approx(30.0)
        assert cfg.get("sweep.num") == 2000

    def test_builtin_defaults_not_shared(self):
        cfg = ConfigManager()
        cfg.data["cutoff"]["tol"] = 1.0
        cfg.section("dimer")["symbol"] = "Ar"
        assert DEFAULTS["cutoff"]["tol"] == pytest.approx(1e-6)
        assert ConfigManager().get("dimer.symbol") == "H"

    def test_single_file_loading(self, tmp_path):
        """测试单个YAML文件加载"""
        config_file = tmp_path / "test.yaml"
        config_data = {
            "potential": {"type": "ibs", "k": 1.0, "r_cut": 1.2},
            "sweep": {"start": 0.6, "stop": 1.2, "num": 100},
        }
        config_file.write_text(yaml.dump(config_data))

        cfg = ConfigManager(files=[str(config_file)])
        assert cfg.get("potential.type") == "ibs"
        assert cfg.get("sweep.num") == 100
        assert cfg.sources == [str(config_file)]

    def test_multiple_file_merging(self, tmp_path):
        """测试多个配置文件合并"""
        base_config = tmp_path / "base.yaml"
        base_config.write_text(
            yaml.dump({"potential": {"type": "ibs", "k": 1.0}, "cutoff": {"tol": 1e-6}})
        )
        override_config = tmp_path / "override.yaml"
        override_config.write_text(
            yaml.dump({"potential": {"k": 2.0}, "cutoff": {"num": 500}})
        )

        cfg = ConfigManager(files=[str(base_config), str(override_config)])

        assert cfg.get("potential.k") == 2.0  # 被覆盖
        assert cfg.get("potential.type") == "ibs"  # 保持原值
        assert cfg.get("cutoff.tol") == pytest.approx(1e-6)
        assert cfg.get("cutoff.num") == 500  # 新增

    def test_defaults_are_overridden(self, tmp_path):
        """测试默认配置作为最底层"""
        config_file = tmp_path / "test.yaml"
        config_file.write_text(yaml.dump({"sweep": {"num": 10}}))
        cfg = ConfigManager(
            files=[str(config_file)], defaults={"sweep": {"num": 2000, "start": 0.4}}
        )
        assert cfg.get("sweep.num") == 10
        assert cfg.get("sweep.start") == 0.4
        assert cfg.get("sweep.stop") == 2.5  # 内置默认值

    def test_nonexistent_file_handling(self):
        """测试不存在文件的处理：跳过而不是抛出异常"""
        cfg = ConfigManager(files=["nonexistent.yaml"])
        assert cfg.data == DEFAULTS
        assert cfg.sources == []


class TestConfigManagerAccess:
    """配置访问和查询测试"""

    @pytest.fixture
    def sample_config(self, tmp_path):
        config_file = tmp_path / "sample.yaml"
        config_data = {
            "scenario": "cutoff",
            "cutoff": {"tol": 1e-4, "detector": {"type": "tail_mean", "min_tail": 3}},
            "sweep": {"r": [0.8, 1.0, 1.2]},
        }
        config_file.write_text(yaml.dump(config_data))
        return ConfigManager(files=[str(config_file)])

    def test_nested_path_access(self, sample_config):
        assert sample_config.get("scenario") == "cutoff"
        assert sample_config.get("cutoff.detector.min_tail") == 3

    def test_default_value_handling(self, sample_config):
        assert sample_config.get("nonexistent.path") is None
        assert sample_config.get("nonexistent.path", "default") == "default"
        assert sample_config.get("cutoff.missing", 1000) == 1000

    def test_partial_section_keeps_defaults(self, sample_config):
        cutoff = sample_config.section("cutoff")
        assert cutoff["tol"] == pytest.approx(1e-4)
        assert cutoff["num"] == 1000
        assert cutoff["start_fraction"] == pytest.approx(0.5)
        assert cutoff["detector"] == {"type": "tail_mean", "min_tail": 3}

    def test_section_must_be_mapping(self):
        cfg = ConfigManager(defaults={"sweep": [0.8, 1.0]})
        with pytest.raises(ValueError):
            cfg.section("sweep")

    def test_run_name_falls_back_to_scenario(self, sample_config):
        assert sample_config.run_name == "cutoff"
        assert ConfigManager(defaults={"run": {"name": "lj"}}).run_name == "lj"

    def test_scenario_is_lower_case(self):
        assert ConfigManager(defaults={"scenario": "Curve"}).scenario == "curve"

    def test_list_access(self, sample_config):
        assert sample_config.get("sweep.r") == [0.8, 1.0, 1.2]

    def test_path_with_empty_segments(self, sample_config):
        assert sample_config.get("cutoff..tol") is None
        assert sample_config.get(".cutoff.tol") is None


class TestConfigManagerOutput:
    """输出目录管理测试"""

    def test_output_directory_template(self, tmp_path):
        """测试输出目录模板"""
        cfg = ConfigManager(
            defaults={"run": {"output_dir": str(tmp_path / "out" / "{name}_{timestamp}")}}
        )
        output_dir = cfg.make_output_dir("test_run")
        assert Path(output_dir).is_dir()
        assert "test_run" in output_dir

    def test_default_output_directory(self, tmp_path):
        cfg = ConfigManager()
        original_cwd = os.getcwd()
        os.chdir(tmp_path)
        try:
            output_dir = cfg.make_output_dir()
            assert Path(output_dir).is_dir()
            assert output_dir.startswith(os.path.join("runs", "cutoff_"))
        finally:
            os.chdir(original_cwd)

    def test_config_snapshot_saving(self, tmp_path):
        """测试配置快照保存"""
        config_file = tmp_path / "test.yaml"
        config_file.write_text(yaml.dump({"test": {"value": 123}}))
        cfg = ConfigManager(files=[str(config_file)])

        cfg.snapshot(str(tmp_path))

        with open(tmp_path / "resolved_config.yaml") as f:
            assert yaml.safe_load(f)["test"]["value"] == 123
        with open(tmp_path / "manifest.json") as f:
            manifest = json.load(f)
        assert manifest["sources"] == [str(config_file)]
        assert manifest["scenario"] == "cutoff"


class TestConfigManagerEdgeCases:
    """边界情况和错误处理测试"""

    def test_empty_yaml_file(self, tmp_path):
        empty_file = tmp_path / "empty.yaml"
        empty_file.write_text("")
        cfg = ConfigManager(files=[str(empty_file)])
        assert cfg.data == DEFAULTS
        assert cfg.sources == [str(empty_file)]

    def test_unknown_section_warns(self, tmp_path, caplog):
        config_file = tmp_path / "typo.yaml"
        config_file.write_text(yaml.dump({"cutof": {"tol": 1e-3}}))
        with caplog.at_level(logging.WARNING, logger="dimerprobe.core.config"):
            cfg = ConfigManager(files=[str(config_file)])
        assert "cutof" in caplog.text
        assert cfg.get("cutoff.tol") == pytest.approx(1e-6)

    def test_malformed_yaml_handling(self, tmp_path):
        bad_file = tmp_path / "bad.yaml"
        bad_file.write_text("invalid: yaml: content: [unclosed")
        with pytest.raises(yaml.YAMLError):
            ConfigManager(files=[str(bad_file)])
