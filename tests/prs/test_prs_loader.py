"""Tests for PRS asset loading."""

import json

import pytest

from genome_report.prs import PRSAssetError, load_prs_assets
from genome_report.prs.loader import parse_index_map, parse_prs_configs, parse_prs_weights


class TestParsePrsConfigs:
    def test_valid(self):
        configs = parse_prs_configs({"prs_list": [{"name": "a", "lower_cutoff": 0.1}]})
        assert configs[0].name == "a"
        assert configs[0].lower_cutoff == 0.1

    def test_missing_prs_list(self):
        with pytest.raises(PRSAssetError, match="prs_list"):
            parse_prs_configs({"models": []})

    def test_entry_without_name(self):
        with pytest.raises(PRSAssetError, match="entry 0"):
            parse_prs_configs({"prs_list": [{"lower_cutoff": 0.1}]})

    def test_numeric_string_cutoff_coerced(self):
        configs = parse_prs_configs(
            {"prs_list": [{"name": "a", "lower_cutoff": "0.25", "upper_cutoff": 1}]}
        )
        assert configs[0].lower_cutoff == 0.25
        assert isinstance(configs[0].upper_cutoff, float)

    def test_non_numeric_cutoff(self):
        with pytest.raises(PRSAssetError, match="non-numeric cutoff"):
            parse_prs_configs({"prs_list": [{"name": "a", "lower_cutoff": "low"}]})

    def test_boolean_cutoff(self):
        with pytest.raises(PRSAssetError, match="entry 0"):
            parse_prs_configs({"prs_list": [{"name": "a", "upper_cutoff": True}]})


class TestParsePrsWeights:
    def test_valid(self):
        (table,) = parse_prs_weights([{"weights": [[0.5, "A"], ["0.25", "G"]]}])
        assert table.weights == [(0.5, "A"), (0.25, "G")]

    def test_not_a_list(self):
        with pytest.raises(PRSAssetError):
            parse_prs_weights({"weights": []})

    def test_missing_weights_key(self):
        with pytest.raises(PRSAssetError, match="entry 1"):
            parse_prs_weights([{"weights": []}, {"w": []}])

    def test_malformed_pair(self):
        with pytest.raises(PRSAssetError, match="malformed"):
            parse_prs_weights([{"weights": [["x", "A"]]}])


class TestParseIndexMap:
    def test_keys_lowercased(self):
        assert parse_index_map({"RS1": 0, "rs2": 5}) == {"rs1": 0, "rs2": 5}

    def test_negative_index(self):
        with pytest.raises(PRSAssetError, match="rs1"):
            parse_index_map({"rs1": -1})

    def test_boolean_index(self):
        with pytest.raises(PRSAssetError):
            parse_index_map({"rs1": True})

    def test_not_an_object(self):
        with pytest.raises(PRSAssetError):
            parse_index_map([["rs1", 0]])


class TestLoadPrsAssets:
    def test_fixture_assets(self, fixtures_dir):
        assets = load_prs_assets(
            fixtures_dir / "prs_config.json",
            fixtures_dir / "prs_weights.json",
            fixtures_dir / "prs_index_map.json",
        )
        assert [c.name for c in assets.configs] == [
            "Coronary artery disease",
            "Type 2 diabetes",
            "Height",
        ]
        assert assets.configs[1].lower_is_better is True
        assert assets.configs[2].extra == {"unit": "cm"}
        assert len(assets.weights) == 3
        assert assets.index_map["rs4988235"] == 1

    def test_configs_and_weights_must_be_parallel(self, fixtures_dir, tmp_path):
        weights = tmp_path / "weights.json"
        weights.write_text(json.dumps([{"weights": []}]))
        with pytest.raises(PRSAssetError, match="3 models"):
            load_prs_assets(
                fixtures_dir / "prs_config.json",
                weights,
                fixtures_dir / "prs_index_map.json",
            )

    def test_missing_file(self, fixtures_dir, tmp_path):
        from genome_report.references import ReferenceLoadError

        with pytest.raises(ReferenceLoadError):
            load_prs_assets(
                tmp_path / "missing.json",
                fixtures_dir / "prs_weights.json",
                fixtures_dir / "prs_index_map.json",
            )
