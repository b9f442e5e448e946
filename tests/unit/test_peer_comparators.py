"""Tests de los comparadores Hash, FileProperties, Json, External e Image."""

import os
import sys

import pytest
from PIL import Image

from backend.core.dxcompare.comparators import (
    ExternalComparator, FilePropertiesComparator, HashComparator, ImageComparator,
    JsonComparator
)
from backend.core.dxcompare.comparators.json_comparator import canonical_sort
from backend.core.dxcompare.errors import ErrorCategory
from backend.core.dxcompare.rules import (
    ExternalConfig, FilePropertiesConfig, HashConfig, ImageCompareConfig, JsonCompareConfig
)

SAME_CONTENT_SCRIPT = (
    "import sys; "
    "sys.exit(0 if open(sys.argv[1]).read() == open(sys.argv[2]).read() else 3)"
)


class TestHashComparator:
    def test_equal_content_passes(self, write_file):
        nominal = write_file("n/bin.dat", b"\x00\x01payload")
        actual = write_file("a/bin.dat", b"\x00\x01payload")

        outcome = HashComparator().run(nominal, actual, HashConfig())

        assert outcome.passed
        assert outcome.diff.nominal_digest == outcome.diff.actual_digest
        assert len(outcome.diff.nominal_digest) == 64

    def test_different_content_fails(self, write_file):
        nominal = write_file("n/bin.dat", b"one")
        actual = write_file("a/bin.dat", b"two")

        assert not HashComparator().run(nominal, actual, HashConfig()).passed


class TestFilePropertiesComparator:
    def test_unconfigured_checks_are_skipped(self, write_file):
        nominal = write_file("n/f.txt", "short")
        actual = write_file("a/f.txt", "much longer content")

        outcome = FilePropertiesComparator().run(nominal, actual, FilePropertiesConfig())

        assert outcome.passed
        assert outcome.diff.checks == []

    def test_size_tolerance(self, write_file):
        nominal = write_file("n/f.txt", "12345")
        actual = write_file("a/f.txt", "1234567")

        ok = FilePropertiesComparator().run(
            nominal, actual, FilePropertiesConfig(file_size_tolerance_bytes=2)
        )
        too_big = FilePropertiesComparator().run(
            nominal, actual, FilePropertiesConfig(file_size_tolerance_bytes=1)
        )

        assert ok.passed
        assert not too_big.passed

    def test_modification_date_tolerance(self, write_file):
        nominal = write_file("n/f.txt", "x")
        actual = write_file("a/f.txt", "x")
        os.utime(nominal, (1_000_000, 1_000_000))
        os.utime(actual, (1_000_100, 1_000_100))

        comparator = FilePropertiesComparator()

        assert comparator.run(
            nominal, actual, FilePropertiesConfig(modification_date_tolerance_secs=100)
        ).passed
        assert not comparator.run(
            nominal, actual, FilePropertiesConfig(modification_date_tolerance_secs=99)
        ).passed

    def test_forbidden_name_checked_on_both_paths(self, write_file):
        nominal = write_file("n/report.txt", "x")
        actual = write_file("a/report FINAL.txt", "x")

        outcome = FilePropertiesComparator().run(
            nominal, actual, FilePropertiesConfig(forbid_name_regex="FINAL")
        )

        assert not outcome.passed
        failed = [check.name for check in outcome.diff.checks if not check.passed]
        assert failed == ["forbid_name_regex (actual)"]


class TestJsonComparator:
    def test_ignored_key_at_any_depth_passes(self, write_file):
        nominal = write_file("n/doc.json", '{"a": {"b": {"timestamp": 1, "v": 2}}, "timestamp": 5}')
        actual = write_file("a/doc.json", '{"a": {"b": {"timestamp": 9, "v": 2}}, "timestamp": 7}')

        outcome = JsonComparator().run(nominal, actual, JsonCompareConfig(ignore_keys=["timestamp"]))

        assert outcome.passed

    def test_value_difference_is_reported_by_path(self, write_file):
        nominal = write_file("n/doc.json", '{"items": [{"name": "a"}, {"name": "b"}]}')
        actual = write_file("a/doc.json", '{"items": [{"name": "a"}, {"name": "c"}]}')

        outcome = JsonComparator().run(nominal, actual, JsonCompareConfig())

        assert not outcome.passed
        assert [d.path for d in outcome.diff.differences] == ["items[1].name"]

    def test_missing_and_extra_keys(self, write_file):
        nominal = write_file("n/doc.json", '{"only_nominal": 1, "shared": 2}')
        actual = write_file("a/doc.json", '{"shared": 2, "only_actual": 3}')

        diff = JsonComparator().run(nominal, actual, JsonCompareConfig()).diff

        assert diff.left_extra == ["only_nominal"]
        assert diff.right_extra == ["only_actual"]

    def test_array_order_matters_unless_sorted(self, write_file):
        nominal = write_file("n/doc.json", '{"tags": [3, 1, 2], "nested": [[2, 1], "x"]}')
        actual = write_file("a/doc.json", '{"tags": [1, 2, 3], "nested": ["x", [1, 2]]}')

        positional = JsonComparator().run(nominal, actual, JsonCompareConfig())
        sorted_outcome = JsonComparator().run(nominal, actual, JsonCompareConfig(sort_arrays=True))

        assert not positional.passed
        assert sorted_outcome.passed

    def test_bool_and_number_differ(self, write_file):
        nominal = write_file("n/doc.json", '{"flag": true}')
        actual = write_file("a/doc.json", '{"flag": 1}')

        assert not JsonComparator().run(nominal, actual, JsonCompareConfig()).passed

    def test_root_type_mismatch(self, write_file):
        nominal = write_file("n/doc.json", '[1, 2]')
        actual = write_file("a/doc.json", '{"a": 1}')

        outcome = JsonComparator().run(nominal, actual, JsonCompareConfig())

        assert outcome.diff.root_mismatch

    def test_parse_error_is_error_outcome(self, write_file):
        nominal = write_file("n/doc.json", '{"a": ')
        actual = write_file("a/doc.json", '{"a": 1}')

        outcome = JsonComparator().run(nominal, actual, JsonCompareConfig())

        assert not outcome.passed
        assert outcome.error.code == "JSON_PARSE_ERROR"
        assert outcome.error.category == ErrorCategory.PARSE

    def test_canonical_sort_mixed_types(self):
        assert canonical_sort([None, "b", 2, True, "a", 1]) == [None, True, 1, 2, "a", "b"]


class TestExternalComparator:
    def test_exit_code_zero_passes(self, write_file):
        nominal = write_file("n/f.txt", "same")
        actual = write_file("a/f.txt", "same")
        config = ExternalConfig(executable=sys.executable, extra_params=["-c", SAME_CONTENT_SCRIPT])

        outcome = ExternalComparator().run(nominal, actual, config)

        assert outcome.passed
        assert outcome.diff.command[-2:] == [str(nominal), str(actual)]

    def test_non_zero_exit_fails(self, write_file):
        nominal = write_file("n/f.txt", "same")
        actual = write_file("a/f.txt", "other")
        config = ExternalConfig(executable=sys.executable, extra_params=["-c", SAME_CONTENT_SCRIPT])

        outcome = ExternalComparator().run(nominal, actual, config)

        assert not outcome.passed
        assert outcome.diff.return_code == 3
        assert outcome.error is None

    def test_launch_failure_is_process_error(self, write_file):
        nominal = write_file("n/f.txt", "x")
        actual = write_file("a/f.txt", "x")

        outcome = ExternalComparator().run(
            nominal, actual, ExternalConfig(executable="/nonexistent/checker-binary")
        )

        assert not outcome.passed
        assert outcome.error.code == "PROCESS_LAUNCH_FAILED"
        assert outcome.error.category == ErrorCategory.PROCESS

    def test_timeout_is_process_error(self, write_file):
        nominal = write_file("n/f.txt", "x")
        actual = write_file("a/f.txt", "x")
        config = ExternalConfig(
            executable=sys.executable,
            extra_params=["-c", "import time; time.sleep(10)"],
            timeout_secs=0.5
        )

        outcome = ExternalComparator().run(nominal, actual, config)

        assert outcome.error.code == "PROCESS_TIMEOUT"


class TestImageComparator:
    @pytest.fixture
    def make_image(self, tmp_path):
        def _make(relative, size=(16, 16), color=(10, 20, 30)):
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            Image.new("RGB", size, color).save(path)
            return path
        return _make

    def test_identical_images_score_one(self, make_image):
        nominal = make_image("n/img.png")
        actual = make_image("a/img.png")

        outcome = ImageComparator().run(nominal, actual, ImageCompareConfig(threshold=0.99))

        assert outcome.passed
        assert outcome.diff.score == pytest.approx(1.0)

    def test_threshold_applies_to_score(self, make_image):
        nominal = make_image("n/img.png", color=(0, 0, 0))
        actual = make_image("a/img.png", color=(51, 0, 0))

        strict = ImageComparator().run(nominal, actual, ImageCompareConfig(threshold=0.9))
        lenient = ImageComparator().run(nominal, actual, ImageCompareConfig(threshold=0.75))

        assert strict.diff.score == pytest.approx(0.8)
        assert not strict.passed
        assert lenient.passed

    def test_gray_mode(self, make_image):
        nominal = make_image("n/img.png", color=(100, 100, 100))
        actual = make_image("a/img.png", color=(100, 100, 100))

        outcome = ImageComparator().run(nominal, actual, ImageCompareConfig(threshold=1.0, mode="Gray"))

        assert outcome.passed
        assert outcome.diff.mode == "Gray"

    def test_size_mismatch_is_error(self, make_image):
        nominal = make_image("n/img.png", size=(10, 10))
        actual = make_image("a/img.png", size=(12, 10))

        outcome = ImageComparator().run(nominal, actual, ImageCompareConfig(threshold=0.5))

        assert outcome.error.code == "IMAGE_SIZE_MISMATCH"

    def test_undecodable_image_is_parse_error(self, write_file, make_image):
        nominal = write_file("n/img.png", b"garbage")
        actual = make_image("a/img.png")

        outcome = ImageComparator().run(nominal, actual, ImageCompareConfig(threshold=0.5))

        assert outcome.error.code == "IMAGE_DECODE_FAILED"
