"""Tests de backend/core/dxcompare/rules.py"""

import pytest

from backend.core.dxcompare.csv_engine import ModeKind
from backend.core.dxcompare.csv_engine.preprocessing import ExtractHeaders, SortByColumnName
from backend.core.dxcompare.errors import ConfigurationError
from backend.core.dxcompare.rules import (
    ConfigurationFile, CsvCompareConfig, HashConfig, HashFunction, PdfTextConfig,
    PlainTextConfig, Rule, load_rules
)

FULL_CONFIG = """
rules:
  - name: "Tablas"
    pattern_include:
      - "**/*.csv"
    pattern_exclude:
      - "**/tmp_*.csv"
    CSV:
      field_delimiter: ";"
      decimal_separator: ","
      comparison_modes:
        - Absolute: 0.1
        - Relative: 0.05
        - Ignore
      exclude_field_regex: "^Generated"
      preprocessing:
        - ExtractHeaders
        - SortByColumnName: "Time"
        - DeleteCellByName:
            header: "Time"
            row: 0
  - name: "Logs"
    pattern_include: "**/*.log"
    PlainText:
      threshold: 0.9
      ignore_lines:
        - "^Date:"
  - name: "Binarios"
    pattern_include: ["**/*.bin"]
    Hash:
      hash: Sha256
  - name: "Documentos"
    pattern_include: ["**/*.pdf"]
    PDFText:
      threshold: 1.0
  - name: "Metadatos"
    pattern_include: ["**/*"]
    FileProperties:
      file_size_tolerance_bytes: 10
  - name: "Json"
    pattern_include: ["**/*.json"]
    Json:
      ignore_keys: ["timestamp"]
  - name: "Imagenes"
    pattern_include: ["**/*.png"]
    Image:
      threshold: 0.95
  - name: "Externo"
    pattern_include: ["**/*.dat"]
    External:
      executable: "diff"
      extra_params: ["-q"]
"""


class TestRule:
    def test_exactly_one_comparison_is_required(self):
        with pytest.raises(ValueError, match="exactamente un comparador"):
            Rule(name="vacía", pattern_include=["*.csv"])

    def test_two_comparisons_are_rejected(self):
        with pytest.raises(ValueError, match="exactamente un comparador"):
            Rule(name="doble", pattern_include=["*.csv"], CSV={}, Hash={})

    def test_comparison_property_returns_active_config(self):
        rule = Rule(name="hash", pattern_include="*.bin", Hash={})

        assert isinstance(rule.comparison, HashConfig)
        assert rule.comparison.hash == HashFunction.SHA256
        assert rule.pattern_include == ["*.bin"]
        assert rule.pattern_exclude == []

    def test_plain_and_pdf_text_are_distinct_variants(self):
        plain = Rule(name="t", pattern_include=["*.txt"], PlainText={"threshold": 0.5})
        pdf = Rule(name="p", pattern_include=["*.pdf"], PDFText={"threshold": 0.5})

        assert type(plain.comparison) is PlainTextConfig
        assert type(pdf.comparison) is PdfTextConfig

    def test_invalid_glob_is_rejected(self):
        with pytest.raises(ValueError):
            Rule(name="glob", pattern_include=["[abc"], Hash={})

    def test_unknown_key_is_rejected(self):
        with pytest.raises(ValueError):
            Rule(name="dir", pattern_include=["*"], Directory={})

    def test_matcher_uses_both_pattern_lists(self):
        rule = Rule(name="m", pattern_include=["*.csv"], pattern_exclude=["skip.csv"], Hash={})

        matcher = rule.matcher()

        assert matcher.matches("keep.csv")
        assert not matcher.matches("skip.csv")


class TestCsvCompareConfig:
    def test_invalid_regex_is_rejected(self):
        with pytest.raises(ValueError):
            CsvCompareConfig(exclude_field_regex="(unclosed")

    def test_negative_tolerance_is_rejected(self):
        with pytest.raises(ValueError):
            CsvCompareConfig(comparison_modes=[{"Absolute": -0.1}])

    def test_delimiter_must_be_single_char(self):
        with pytest.raises(ValueError):
            CsvCompareConfig(field_delimiter=";;")

    def test_delimiter_and_decimal_separator_differ(self):
        with pytest.raises(ValueError):
            CsvCompareConfig(field_delimiter=",", decimal_separator=",")

    def test_null_lists_default_to_empty(self):
        config = CsvCompareConfig(comparison_modes=None, preprocessing=None)

        assert config.comparison_modes == []
        assert config.preprocessing == []


class TestConfigurationFile:
    def test_full_document_loads(self, write_file):
        path = write_file("config.yml", FULL_CONFIG)

        rules = load_rules(path)

        assert [rule.comparison.KIND for rule in rules] == [
            "CSV", "PlainText", "Hash", "PDFText", "FileProperties", "Json", "Image", "External"
        ]
        csv_config = rules[0].comparison
        assert [mode.kind for mode in csv_config.comparison_modes] == [
            ModeKind.ABSOLUTE, ModeKind.RELATIVE, ModeKind.IGNORE
        ]
        assert isinstance(csv_config.preprocessing[0], ExtractHeaders)
        assert isinstance(csv_config.preprocessing[1], SortByColumnName)
        assert csv_config.exclude_field_regex.search("Generated at 10:00")
        assert rules[1].comparison.ignore_lines[0].search("Date: today")

    def test_empty_comparison_value_uses_defaults(self):
        config = ConfigurationFile.from_dict(
            {"rules": [{"name": "h", "pattern_include": ["*"], "Hash": None}]}
        )

        assert isinstance(config.rules[0].comparison, HashConfig)

    @pytest.mark.parametrize("document", [
        "rules:\n  - name: x\n    pattern_include: ['*']\n",
        "rules:\n  - name: x\n    pattern_include: ['*']\n    CSV: {}\n    Json: {}\n",
        "rules:\n  - name: x\n    pattern_include: ['*']\n    Json:\n      ignore_keys: ['(']\n",
        "rules: [unclosed\n",
        "- just a list\n",
    ])
    def test_invalid_documents_raise_configuration_error(self, write_file, document):
        path = write_file("bad.yml", document)

        with pytest.raises(ConfigurationError):
            ConfigurationFile.from_file(path)

    def test_missing_file_raises_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_rules(tmp_path / "missing.yml")
