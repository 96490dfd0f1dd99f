"""
Unit tests for declarative rule configuration.
"""

import tempfile
from datetime import timedelta
from pathlib import Path

import pytest

from ruleforge import RuleConfigLoader, Validator
from ruleforge.core.errors import RuleConfigError
from ruleforge.core.models import CascadeMode, RuleDefinition, Severity
from ruleforge.core.rules import (
    ColorFormat,
    ColorRule,
    DurationRule,
    FileExtensionRule,
    JsonRule,
    LengthRule,
    PasswordRule,
)


CUSTOMER_RULES = """
name: customer
rule_level_cascade_mode: stop_on_first_failure

rules:
  customer_id:
    - type: not_empty
    - type: regex
      params:
        pattern: "^CUS[0-9]{6}$"
      error_code: CUSTOMER_ID_FORMAT

  age:
    - type: inclusive_between
      params: {lower: 18, upper: 120}
      severity: warning

  nickname:
    - type: max_length
      params: {max_length: 3}
      enabled: false

  tags:
    - type: for_each
      items:
        - type: not_empty
        - type: max_length
          params: {max_length: 5}

rule_sets:
  registration:
    password:
      - type: min_length
        params: {min_length: 8}
        message: "Password is too short"
"""


def write_config(content: str, name: str = "rules") -> Path:
    with tempfile.NamedTemporaryFile(mode="w", prefix=name, suffix=".yaml", delete=False) as f:
        f.write(content)
        return Path(f.name)


@pytest.fixture
def config_path():
    path = write_config(CUSTOMER_RULES)
    yield path
    path.unlink()


class TestRuleConfigLoader:
    """Tests for RuleConfigLoader"""

    def test_load_validator_from_yaml(self, config_path):
        validator = RuleConfigLoader(config_path).load_validator()

        assert isinstance(validator, Validator)
        assert validator.name == "customer"
        assert validator.rule_level_cascade_mode is CascadeMode.STOP_ON_FIRST_FAILURE
        assert validator.rule_set_names == ["registration"]

    def test_loaded_rules_validate(self, config_path):
        validator = RuleConfigLoader(config_path).load_validator()
        outcome = validator.validate({"customer_id": "bad", "age": 150, "nickname": "toolong", "tags": ["", "ok"]})

        assert [f.property_path for f in outcome.failures] == ["customer_id", "age", "tags[0]"]
        assert outcome.failures[0].error_code == "CUSTOMER_ID_FORMAT"
        assert outcome.failures[1].severity is Severity.WARNING

    def test_valid_record(self, config_path):
        validator = RuleConfigLoader(config_path).load_validator()
        outcome = validator.validate({"customer_id": "CUS123456", "age": 40, "tags": ["vip"]})
        assert outcome.is_valid

    def test_rule_set_with_custom_message(self, config_path):
        validator = RuleConfigLoader(config_path).load_validator()
        outcome = validator.validate({"password": "short"}, rule_set="registration")
        assert outcome.error_message == "Password is too short"

    def test_name_defaults_to_file_stem(self):
        path = write_config("rules:\n  code:\n    - type: not_empty\n", name="orders")
        try:
            validator = RuleConfigLoader(path).load_validator()
            assert validator.name == path.stem
        finally:
            path.unlink()

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader("/nonexistent/path/rules.yaml")

    def test_missing_rules_section(self):
        path = write_config("invalid:\n  - this is not a valid rules section\n")
        try:
            with pytest.raises(RuleConfigError) as exc_info:
                RuleConfigLoader(path).load_config()
            assert "rules" in str(exc_info.value)
        finally:
            path.unlink()

    def test_invalid_yaml(self):
        path = write_config("rules: [unclosed\n")
        try:
            with pytest.raises(RuleConfigError):
                RuleConfigLoader(path).load_config()
        finally:
            path.unlink()

    def test_config_error_is_value_error(self):
        path = write_config("rules:\n  code:\n    - type: sometimes_valid\n")
        try:
            with pytest.raises(ValueError):
                RuleConfigLoader(path).load_validator()
        finally:
            path.unlink()


class TestFromMapping:
    """Tests for building validators from parsed mappings"""

    def test_minimal_mapping(self):
        validator = RuleConfigLoader.from_mapping({"rules": {"code": [{"type": "not_empty"}]}})
        assert validator.name == "config_validator"
        assert not validator.validate({"code": ""}).is_valid

    def test_unknown_rule_type(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"rules": {"code": [{"type": "sometimes_valid"}]}})

    def test_bad_params(self):
        with pytest.raises(RuleConfigError) as exc_info:
            RuleConfigLoader.from_mapping({"rules": {"code": [{"type": "length", "params": {"min": 2}}]}})
        assert "length" in str(exc_info.value)

    def test_invalid_rule_parameters(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"rules": {"code": [{"type": "regex", "params": {"pattern": "("}}]}})

    def test_rules_must_be_lists(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"rules": {"code": {"type": "not_empty"}}})

    def test_rule_must_be_mapping(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"rules": {"code": ["not_empty"]}})

    def test_invalid_cascade_mode(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"cascade_mode": "sometimes", "rules": {}})

    def test_reserved_rule_set_name(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"rules": {}, "rule_sets": {"default": {"code": [{"type": "not_empty"}]}}})

    def test_validator_cascade_mode(self):
        validator = RuleConfigLoader.from_mapping(
            {
                "cascade_mode": "stop_on_first_failure",
                "rules": {"a": [{"type": "not_empty"}], "b": [{"type": "not_empty"}]},
            }
        )
        assert len(validator.validate({"a": "", "b": ""}).failures) == 1


class TestBuildRule:
    """Tests for RuleConfigLoader.build_rule"""

    def test_options_applied(self):
        definition = RuleDefinition(
            type="length",
            params={"min_length": 2, "max_length": 4},
            severity="info",
            error_code="LEN",
        )
        rule = RuleConfigLoader.build_rule(definition)

        assert isinstance(rule, LengthRule)
        assert rule.severity is Severity.INFO
        assert rule.error_code == "LEN"

    def test_message_key(self):
        rule = RuleConfigLoader.build_rule(RuleDefinition(type="not_empty", message_key="Predicate"))
        outcome = rule.evaluate("")
        assert outcome.failures[0].message_key == "Predicate"
        assert outcome.error_message == "Value is invalid"

    def test_disabled_item_rules_skipped(self):
        definition = RuleDefinition(
            type="for_each",
            items=[{"type": "not_empty"}, {"type": "max_length", "params": {"max_length": 1}, "enabled": False}],
        )
        rule = RuleConfigLoader.build_rule(definition)
        assert rule.evaluate(["ok"]).is_valid
        assert not rule.evaluate([""]).is_valid

    def test_for_each_with_only_disabled_items(self):
        definition = RuleDefinition(type="for_each", items=[{"type": "not_empty", "enabled": False}])
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.build_rule(definition)

    @pytest.mark.parametrize(
        "option",
        [{"message": "bad tags"}, {"message_key": "NotEmpty"}, {"error_code": "TAGS"}, {"severity": "warning"}],
    )
    def test_for_each_rejects_rule_options(self, option):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping(
                {"rules": {"tags": [{"type": "for_each", "items": [{"type": "not_empty"}], **option}]}}
            )

    def test_for_each_item_options_apply(self):
        definition = RuleDefinition(
            type="for_each",
            items=[{"type": "not_empty", "message": "tag required", "error_code": "TAG"}],
        )
        failure = RuleConfigLoader.build_rule(definition).evaluate(["ok", ""]).failures[0]
        assert failure.property_path == "[1]"
        assert failure.message == "tag required"
        assert failure.error_code == "TAG"

    def test_for_each_follows_rule_level_cascade(self):
        validator = RuleConfigLoader.from_mapping(
            {
                "rule_level_cascade_mode": "stop_on_first_failure",
                "rules": {
                    "tags": [
                        {
                            "type": "for_each",
                            "items": [
                                {"type": "min_length", "params": {"min_length": 5}},
                                {"type": "regex", "params": {"pattern": "^x"}},
                            ],
                        }
                    ]
                },
            }
        )
        outcome = validator.validate({"tags": ["ab"]})
        assert [f.message_key for f in outcome.failures] == ["MinLength"]


class TestAdditionalRuleTypes:
    """Tests for password, json, file_extension, duration and color rule types"""

    def test_password(self):
        rule = RuleConfigLoader.build_rule(
            RuleDefinition(type="password", params={"min_length": 10, "require_special_character": False})
        )
        assert isinstance(rule, PasswordRule)
        assert rule.min_length == 10
        assert rule.evaluate("LongEnough12").is_valid
        assert not rule.evaluate("Short1").is_valid

    def test_json(self):
        rule = RuleConfigLoader.build_rule(RuleDefinition(type="json", params={"require_object": True, "max_depth": 1}))
        assert isinstance(rule, JsonRule)
        assert rule.evaluate('{"a": 1}').is_valid
        assert rule.evaluate('{"a": {"b": 1}}').failures[0].message_key == "JsonDepth"

    def test_json_conflicting_options(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.build_rule(RuleDefinition(type="json", params={"require_object": True, "require_array": True}))

    def test_file_extension(self):
        rule = RuleConfigLoader.build_rule(
            RuleDefinition(type="file_extension", params={"allowed_extensions": ["pdf", "png"]})
        )
        assert isinstance(rule, FileExtensionRule)
        assert rule.allowed_extensions == [".pdf", ".png"]
        assert rule.evaluate("scan.PNG").is_valid

    def test_duration_in_seconds(self):
        rule = RuleConfigLoader.build_rule(
            RuleDefinition(type="duration", params={"minimum": 60, "maximum": 3600, "allow_zero": False})
        )
        assert isinstance(rule, DurationRule)
        assert rule.minimum == timedelta(minutes=1)
        assert rule.maximum == timedelta(hours=1)
        assert rule.evaluate(timedelta(seconds=30)).failures[0].message_key == "MinDuration"

    def test_duration_rejects_non_numeric_bounds(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.build_rule(RuleDefinition(type="duration", params={"minimum": "a minute"}))

    def test_color_formats_by_name(self):
        rule = RuleConfigLoader.build_rule(RuleDefinition(type="color", params={"formats": ["hex", "rgb"]}))
        assert isinstance(rule, ColorRule)
        assert rule.formats == ColorFormat.HEX | ColorFormat.RGB
        assert rule.evaluate("#abc").is_valid
        assert not rule.evaluate("rgba(0, 0, 0, 0.5)").is_valid

    def test_color_defaults_to_all(self):
        rule = RuleConfigLoader.build_rule(RuleDefinition(type="color"))
        assert rule.formats == ColorFormat.ALL

    def test_unknown_color_format(self):
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.build_rule(RuleDefinition(type="color", params={"formats": ["cmyk"]}))
