from pathlib import Path

import pytest

from boostercheck.models.report import Severity
from boostercheck.services.index_reconciler import (
    check_booster_type_coverage,
    check_collector_superset,
    check_collector_supersets,
    check_index_files,
    load_index,
    pick_limited_type,
    reconcile_index,
)


def _booster(*ranges: str, bonus: list[str] | None = None) -> dict:
    slots = [{"name": "main", "count": 1, "pool": {"nonfoil": list(ranges)}}]
    if bonus:
        slots.append({"name": "bonus", "count": 1, "bonusSet": "spg", "pool": {"foil": bonus}})
    return {"slots": slots}


class TestLoadIndex:
    def test_loads_boosters_mapping(self, write_index, data_dir: Path) -> None:
        write_index({"dsk": ["play", "collector"]})

        index, report = load_index(data_dir / "index.json")

        assert index == {"dsk": ["play", "collector"]}
        assert report.findings == []

    def test_invalid_json(self, data_dir: Path) -> None:
        (data_dir / "index.json").write_text("[", encoding="utf-8")

        index, report = load_index(data_dir / "index.json")

        assert index is None
        assert report.errors[0].subject == "index.json"

    def test_missing_boosters_key(self, data_dir: Path) -> None:
        (data_dir / "index.json").write_text('{"sets": {}}', encoding="utf-8")

        index, report = load_index(data_dir / "index.json")

        assert index is None
        assert report.has_errors


class TestCheckIndexFiles:
    def test_consistent_index(self) -> None:
        report = check_index_files({"dsk": ["play"]}, ["dsk-play.json"])
        assert report.findings == []

    def test_indexed_file_missing_is_error(self) -> None:
        report = check_index_files({"dsk": ["play", "collector"]}, ["dsk-play.json"])

        assert [f.severity for f in report.findings] == [Severity.ERROR]
        assert "dsk-collector.json" in report.errors[0].message

    def test_unlisted_file_is_only_warning(self) -> None:
        report = check_index_files({"dsk": ["play"]}, ["dsk-play.json", "blb-play.json"])

        assert not report.has_errors
        assert len(report.warnings) == 1
        assert report.warnings[0].subject == "blb-play.json"

    def test_types_must_be_array(self) -> None:
        report = check_index_files({"dsk": "play"}, [])
        assert report.errors[0].message == '"dsk" should have an array of types'


class TestPickLimitedType:
    def test_priority_order(self) -> None:
        assert pick_limited_type(["collector", "set", "play"]) == "play"
        assert pick_limited_type(["set", "draft"]) == "draft"
        assert pick_limited_type(["collector", "set"]) == "set"

    def test_none_available(self) -> None:
        assert pick_limited_type(["collector", "jumpstart"]) is None


class TestCollectorSuperset:
    def test_superset_has_no_findings(self) -> None:
        report = check_collector_superset("dsk", "play", _booster("1-100"), _booster("1-300"))
        assert report.findings == []

    def test_basic_lands_missing_are_ignored(self) -> None:
        report = check_collector_superset(
            "dsk", "play", _booster("1-100", "280"), _booster("1-100")
        )
        assert report.findings == []

    def test_missing_main_set_card_is_warning(self) -> None:
        report = check_collector_superset(
            "dsk", "play", _booster("1-100", "150"), _booster("1-100")
        )

        assert len(report.warnings) == 1
        assert report.warnings[0].subject == "dsk"
        assert "150-150" in report.warnings[0].message

    def test_span_reaching_outside_land_window_is_reported(self) -> None:
        report = check_collector_superset(
            "dsk", "draft", _booster("1-100", "240-290"), _booster("1-100")
        )
        assert report.warnings[0].message == "Draft CNs 240-290 not in collector booster"

    def test_bonus_slots_are_excluded(self) -> None:
        report = check_collector_superset(
            "otj", "play", _booster("1-100", bonus=["1-65"]), _booster("1-100")
        )
        assert report.findings == []

    def test_land_window_is_configurable(self) -> None:
        report = check_collector_superset(
            "dsk",
            "play",
            _booster("1-100", "280"),
            _booster("1-100"),
            basic_land_range=(380, 400),
        )
        assert len(report.warnings) == 1


class TestCheckCollectorSupersets:
    def test_pairs_collector_with_limited_booster(self) -> None:
        index = {"dsk": ["play", "collector"], "blb": ["play"]}
        documents = {
            ("dsk", "play"): _booster("1-200"),
            ("dsk", "collector"): _booster("1-100"),
            ("blb", "play"): _booster("1-10"),
        }

        report = check_collector_supersets(index, documents)

        assert [f.subject for f in report.warnings] == ["dsk"]

    def test_skips_missing_documents(self) -> None:
        index = {"dsk": ["play", "collector"]}
        report = check_collector_supersets(index, {("dsk", "play"): _booster("1-200")})
        assert report.findings == []


class TestBoosterTypeCoverage:
    def test_collector_era_set_without_collector(self) -> None:
        report = check_booster_type_coverage({"dsk": ["play"], "m19": ["draft"]})

        assert len(report.warnings) == 1
        assert report.warnings[0].subject == "dsk"

    def test_lone_collector_booster(self) -> None:
        report = check_booster_type_coverage({"sld": ["collector"]}, collector_era_sets=())
        assert report.warnings[0].message == "Has collector booster but no draft/play/set booster"

    @pytest.mark.parametrize("types", [["play", "collector"], ["set", "collector"]])
    def test_complete_sets(self, types: list[str]) -> None:
        report = check_booster_type_coverage({"dsk": types})
        assert report.findings == []


class TestReconcileIndex:
    def test_merges_all_checks(self) -> None:
        index = {"dsk": ["play", "collector"], "neo": ["draft"]}
        documents = {
            ("dsk", "play"): _booster("1-200"),
            ("dsk", "collector"): _booster("1-100"),
            ("neo", "draft"): _booster("1-100"),
        }
        present = ["dsk-play.json", "dsk-collector.json", "extra-play.json"]

        report = reconcile_index(index, documents, present)

        assert [f.message for f in report.errors] == [
            'References "neo-draft.json" but file doesn\'t exist'
        ]
        assert {f.subject for f in report.warnings} == {"extra-play.json", "dsk", "neo"}
