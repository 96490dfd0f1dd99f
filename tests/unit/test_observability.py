"""
Unit tests for structured logging and Prometheus metrics.
"""

import json

import pytest

from ruleforge import RuleConfigLoader, Validator
from ruleforge.core.errors import RuleConfigError
from ruleforge.observability import metrics
from ruleforge.observability.logger import get_logger, log_operation, setup_logger


def sample(name: str, **labels) -> float:
    return metrics.REGISTRY.get_sample_value(name, labels) or 0.0


class TestLogger:
    """Tests for logger setup"""

    def test_json_format(self, capsys):
        logger = setup_logger("ruleforge_test_json", level="INFO", format_type="json")
        logger.info("Validation completed", extra={"validator": "person", "failure_count": 2})

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "Validation completed"
        assert record["level"] == "INFO"
        assert record["logger"] == "ruleforge_test_json"
        assert record["validator"] == "person"
        assert record["failure_count"] == 2
        assert "timestamp" in record

    def test_text_format(self, capsys):
        logger = setup_logger("ruleforge_test_text", level="INFO", format_type="text")
        logger.warning("Skipping unknown rule set")
        assert " - WARNING - " in capsys.readouterr().out

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        logger = setup_logger("ruleforge_test_env", format_type="text")
        assert logger.level == 10

    def test_setup_does_not_duplicate_handlers(self):
        setup_logger("ruleforge_test_dupes")
        logger = setup_logger("ruleforge_test_dupes")
        assert len(logger.handlers) == 1

    def test_module_loggers_share_package_handler(self):
        logger = get_logger("ruleforge.core.engine.validator")
        assert logger.name == "ruleforge.core.engine.validator"
        assert get_logger("ruleforge").handlers

    def test_log_operation(self, capsys):
        logger = setup_logger("ruleforge_test_operation", level="INFO", format_type="text")
        with log_operation("Loading rule config", logger=logger, path="rules.yaml"):
            pass

        output = capsys.readouterr().out
        assert "Starting: Loading rule config" in output
        assert "Completed: Loading rule config" in output

    def test_log_operation_propagates_errors(self, capsys):
        logger = setup_logger("ruleforge_test_operation_error", level="INFO", format_type="text")
        with pytest.raises(RuntimeError):
            with log_operation("Loading rule config", logger=logger):
                raise RuntimeError("boom")

        assert "Failed: Loading rule config" in capsys.readouterr().out


class TestMetrics:
    """Tests for Prometheus metrics"""

    def test_validation_metrics_recorded(self):
        validator = Validator(name="metrics_test")
        validator.rule_for("name").not_empty()

        before_invalid = sample("ruleforge_validations_total", validator="metrics_test", mode="sync", outcome="invalid")
        before_failures = sample("ruleforge_validation_failures_total", validator="metrics_test", severity="error")
        before_count = sample("ruleforge_validation_duration_seconds_count", validator="metrics_test", mode="sync")

        validator.validate({"name": ""})

        assert sample("ruleforge_validations_total", validator="metrics_test", mode="sync", outcome="invalid") == before_invalid + 1
        assert sample("ruleforge_validation_failures_total", validator="metrics_test", severity="error") == before_failures + 1
        assert sample("ruleforge_validation_duration_seconds_count", validator="metrics_test", mode="sync") == before_count + 1

    @pytest.mark.asyncio
    async def test_async_mode_label(self):
        validator = Validator(name="metrics_async_test")
        validator.rule_for("name").not_empty()

        before = sample("ruleforge_validations_total", validator="metrics_async_test", mode="async", outcome="valid")
        await validator.validate_async({"name": "x"})
        assert sample("ruleforge_validations_total", validator="metrics_async_test", mode="async", outcome="valid") == before + 1

    def test_metrics_can_be_disabled(self):
        validator = Validator(name="metrics_disabled_test", collect_metrics=False)
        validator.rule_for("name").not_empty()
        validator.validate({"name": ""})

        assert sample("ruleforge_validations_total", validator="metrics_disabled_test", mode="sync", outcome="invalid") == 0

    def test_nested_validators_are_not_counted(self):
        child = Validator(name="metrics_child_test")
        child.rule_for("street").not_empty()
        parent = Validator(name="metrics_parent_test")
        parent.rule_for("address").set_validator(child)
        parent.rule_for_each("previous").set_validator(child)

        before_parent = sample("ruleforge_validations_total", validator="metrics_parent_test", mode="sync", outcome="invalid")
        before_failures = sample("ruleforge_validation_failures_total", validator="metrics_parent_test", severity="error")

        outcome = parent.validate({"address": {"street": ""}, "previous": [{"street": ""}, {"street": "x"}]})

        assert len(outcome.failures) == 2
        assert sample("ruleforge_validations_total", validator="metrics_parent_test", mode="sync", outcome="invalid") == before_parent + 1
        assert sample("ruleforge_validation_failures_total", validator="metrics_parent_test", severity="error") == before_failures + 2
        for outcome_label in ("valid", "invalid"):
            assert sample("ruleforge_validations_total", validator="metrics_child_test", mode="sync", outcome=outcome_label) == 0
        assert sample("ruleforge_validation_duration_seconds_count", validator="metrics_child_test", mode="sync") == 0

    @pytest.mark.asyncio
    async def test_nested_validators_are_not_counted_async(self):
        child = Validator(name="metrics_async_child_test")
        child.rule_for("street").not_empty()
        parent = Validator(name="metrics_async_parent_test")
        parent.rule_for("address").set_validator(child)

        await parent.validate_async({"address": {"street": ""}})

        assert sample("ruleforge_validations_total", validator="metrics_async_parent_test", mode="async", outcome="invalid") == 1
        assert sample("ruleforge_validations_total", validator="metrics_async_child_test", mode="async", outcome="invalid") == 0

    def test_nested_validator_still_counted_when_called_directly(self):
        child = Validator(name="metrics_direct_child_test")
        child.rule_for("street").not_empty()
        child.validate({"street": ""})

        assert sample("ruleforge_validations_total", validator="metrics_direct_child_test", mode="sync", outcome="invalid") == 1

    def test_rule_config_load_metrics(self):
        before_success = sample("ruleforge_rule_config_loads_total", status="success")
        before_failure = sample("ruleforge_rule_config_loads_total", status="failure")
        before_count = sample("ruleforge_rule_config_load_duration_seconds_count")

        RuleConfigLoader.from_mapping({"rules": {"code": [{"type": "not_empty"}]}})
        with pytest.raises(RuleConfigError):
            RuleConfigLoader.from_mapping({"rules": {"code": [{"type": "unknown"}]}})

        assert sample("ruleforge_rule_config_loads_total", status="success") == before_success + 1
        assert sample("ruleforge_rule_config_loads_total", status="failure") == before_failure + 1
        assert sample("ruleforge_rule_config_load_duration_seconds_count") == before_count + 2

    def test_generate_metrics(self):
        Validator(name="metrics_export_test").validate({})
        output = metrics.generate_metrics()

        assert b"ruleforge_validations_total" in output
        assert metrics.get_content_type().startswith("text/plain")
