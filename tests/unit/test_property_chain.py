"""
Unit tests for PropertyRuleChain, property resolution and the fluent RuleBuilder.
"""

from datetime import timedelta
from types import SimpleNamespace

import pytest

from ruleforge.core.engine import PropertyRuleChain, RuleBuilder, resolve_property
from ruleforge.core.errors import InvalidPropertyExpressionError, UsageError
from ruleforge.core.localization import DefaultMessageFormatter
from ruleforge.core.models import ApplyConditionTo, CascadeMode, Severity, ValidationContext
from ruleforge.core.rules import ColorFormat, EmailRule, LengthRule, MustRule, NotEmptyRule


def always_fails(message: str) -> MustRule:
    return MustRule(lambda value: False, message)


class TestResolveProperty:
    """Tests for property expression resolution"""

    def test_attribute_name(self):
        name, accessor = resolve_property("first_name")
        assert name == "first_name"
        assert accessor(SimpleNamespace(first_name="Ann")) == "Ann"

    def test_mapping_access(self):
        _, accessor = resolve_property("first_name")
        assert accessor({"first_name": "Ann"}) == "Ann"
        assert accessor({}) is None

    def test_missing_attribute_raises(self):
        _, accessor = resolve_property("first_name")
        with pytest.raises(AttributeError):
            accessor(SimpleNamespace())

    def test_callable_with_name(self):
        name, accessor = resolve_property(lambda p: p.address.city, name="city")
        assert name == "city"
        assert accessor(SimpleNamespace(address=SimpleNamespace(city="Oslo"))) == "Oslo"

    def test_name_overrides_attribute(self):
        name, _ = resolve_property("email", name="EmailAddress")
        assert name == "EmailAddress"

    @pytest.mark.parametrize("expression", ["address.city", "first name", "", "class", "1abc"])
    def test_non_member_access_rejected(self, expression):
        with pytest.raises(InvalidPropertyExpressionError):
            resolve_property(expression)

    def test_callable_without_name_rejected(self):
        with pytest.raises(InvalidPropertyExpressionError):
            resolve_property(lambda p: p.name)

    def test_invalid_expression_is_usage_error(self):
        with pytest.raises(UsageError):
            resolve_property(42)


class TestPropertyRuleChain:
    """Tests for PropertyRuleChain evaluation"""

    def make_chain(self, *rules, cascade_mode=None):
        name, accessor = resolve_property("name")
        chain = PropertyRuleChain(name, accessor, cascade_mode=cascade_mode)
        for rule in rules:
            chain.add_rule(rule)
        return chain

    def test_failures_prefixed_with_property_name(self):
        chain = self.make_chain(NotEmptyRule())
        outcome = chain.evaluate({"name": ""})
        assert outcome.failures[0].property_path == "name"
        assert outcome.failures[0].message == "name must not be empty"

    def test_continue_runs_every_rule(self):
        chain = self.make_chain(always_fails("r1"), always_fails("r2"), always_fails("r3"))
        outcome = chain.evaluate({"name": "x"})
        assert [f.message for f in outcome.failures] == ["r1", "r2", "r3"]

    def test_stop_on_first_failure(self):
        chain = self.make_chain(
            always_fails("r1"), always_fails("r2"), always_fails("r3"),
            cascade_mode=CascadeMode.STOP_ON_FIRST_FAILURE,
        )
        outcome = chain.evaluate({"name": "x"})
        assert [f.message for f in outcome.failures] == ["r1"]

    def test_cascade_argument_overrides_chain_mode(self):
        chain = self.make_chain(always_fails("r1"), always_fails("r2"))
        outcome = chain.evaluate({"name": "x"}, cascade_mode=CascadeMode.STOP_ON_FIRST_FAILURE)
        assert len(outcome.failures) == 1

    def test_condition_gates_whole_chain(self):
        chain = self.make_chain(NotEmptyRule(), always_fails("never"))
        chain.add_condition(lambda instance: instance["flag"])

        assert chain.evaluate({"flag": False, "name": ""}).is_valid
        assert len(chain.evaluate({"flag": True, "name": ""}).failures) == 2

    def test_conditions_are_anded(self):
        chain = self.make_chain(NotEmptyRule())
        chain.add_condition(lambda instance: instance["a"])
        chain.add_condition(lambda instance: instance["b"], invert=True)

        assert not chain.evaluate({"a": True, "b": False, "name": ""}).is_valid
        assert chain.evaluate({"a": True, "b": True, "name": ""}).is_valid

    def test_value_is_extracted_on_every_call(self):
        chain = self.make_chain(NotEmptyRule())
        assert not chain.evaluate({"name": ""}).is_valid
        assert chain.evaluate({"name": "filled"}).is_valid

    def test_display_name_used_in_messages(self):
        name, accessor = resolve_property("first_name")
        chain = PropertyRuleChain(name, accessor, display_name="First Name")
        chain.add_rule(NotEmptyRule())
        outcome = chain.evaluate({"first_name": ""}, ValidationContext(instance={"first_name": ""}))
        assert outcome.failures[0].message == "First Name must not be empty"
        assert outcome.failures[0].property_path == "first_name"

    @pytest.mark.asyncio
    async def test_async_matches_sync(self):
        chain = self.make_chain(NotEmptyRule(), LengthRule(5, 10), EmailRule())
        instance = {"name": "abc"}
        assert chain.evaluate(instance).failures == (await chain.evaluate_async(instance)).failures


class TestRuleBuilder:
    """Tests for the fluent RuleBuilder"""

    def make_builder(self, each=False):
        name, accessor = resolve_property("name")
        chain = PropertyRuleChain(name, accessor)
        return RuleBuilder(chain, each=each), chain

    def test_rules_added_in_order(self):
        builder, chain = self.make_builder()
        builder.not_empty().length(2, 50).email()
        assert [rule.rule_type for rule in chain.rules] == ["not_empty", "length", "email"]

    def test_with_options_apply_to_last_rule(self):
        builder, chain = self.make_builder()
        builder.not_empty().length(2, 5).with_message("too long").with_severity(Severity.WARNING).with_error_code("L1")

        outcome = chain.evaluate({"name": "abcdefg"})
        failure = outcome.failures[0]
        assert failure.message == "too long"
        assert failure.severity is Severity.WARNING
        assert failure.error_code == "L1"
        assert chain.rules[0].severity is Severity.ERROR

    @pytest.mark.parametrize(
        "option,argument",
        [
            ("with_message", "x"),
            ("with_message_key", "NotEmpty"),
            ("with_severity", Severity.INFO),
            ("with_error_code", "E1"),
        ],
    )
    def test_options_before_any_rule_raise(self, option, argument):
        builder, _ = self.make_builder()
        with pytest.raises(UsageError):
            getattr(builder, option)(argument)

    def test_when_applies_to_all_rules(self):
        builder, chain = self.make_builder()
        builder.not_empty().when(lambda instance: instance["active"]).length(2, 5)

        assert chain.evaluate({"active": False, "name": ""}).is_valid
        assert not chain.evaluate({"active": True, "name": ""}).is_valid

    def test_when_current_rule_only(self):
        builder, chain = self.make_builder()
        builder.not_empty().length(5, 10).when(lambda instance: instance["strict"], ApplyConditionTo.CURRENT_RULE)

        outcome = chain.evaluate({"strict": False, "name": "abc"})
        assert outcome.is_valid
        outcome = chain.evaluate({"strict": True, "name": "abc"})
        assert outcome.failures[0].message_key == "Length"

    def test_unless(self):
        builder, chain = self.make_builder()
        builder.not_empty().unless(lambda instance: instance["draft"])
        assert chain.evaluate({"draft": True, "name": ""}).is_valid

    def test_current_rule_condition_without_rule_raises(self):
        builder, _ = self.make_builder()
        with pytest.raises(UsageError):
            builder.when(lambda instance: True, ApplyConditionTo.CURRENT_RULE)

    def test_with_message_after_current_rule_condition(self):
        builder, chain = self.make_builder()
        builder.length(5, 10).when(lambda instance: True, ApplyConditionTo.CURRENT_RULE).with_message("bad length")
        assert chain.evaluate({"name": "abc"}).error_message == "bad length"

    def test_transform_applies_to_following_rules(self):
        builder, chain = self.make_builder()
        builder.length(1, 3).transform(str.strip).length(1, 3)

        outcome = chain.evaluate({"name": "  ab  "})
        assert len(outcome.failures) == 1
        assert outcome.failures[0].property_path == "name"

    def test_transforms_compose(self):
        builder, chain = self.make_builder()
        builder.transform(lambda v: v.strip()).transform(str.upper).equal("ABC")
        assert chain.evaluate({"name": "  abc "}).is_valid

    def test_cascade(self):
        builder, chain = self.make_builder()
        builder.cascade(CascadeMode.STOP_ON_FIRST_FAILURE).not_empty().length(2, 5)
        assert chain.cascade_mode is CascadeMode.STOP_ON_FIRST_FAILURE

    def test_with_name(self):
        builder, chain = self.make_builder()
        builder.with_name("Full name").not_empty()
        assert chain.evaluate({"name": ""}).error_message == "Full name must not be empty"

    def test_with_message_key_and_formatter(self):
        formatter = DefaultMessageFormatter(locale="tr")
        builder, chain = self.make_builder()
        builder.length(5, 10).with_message_key("Predicate").with_message_formatter(formatter)

        outcome = chain.evaluate({"name": "abc"})
        assert outcome.error_message == "name geçersiz"
        assert outcome.failures[0].message_key == "Predicate"

    def test_each_builder_reports_items(self):
        builder, chain = self.make_builder(each=True)
        builder.not_empty().max_length(3)

        outcome = chain.evaluate({"name": ["", "ok", "toolong"]})
        assert [f.property_path for f in outcome.failures] == ["name[0]", "name[2]"]
        assert len(chain.rules) == 1

    def test_for_each(self):
        builder, chain = self.make_builder()
        builder.not_null().for_each(lambda item: item.not_empty().email())

        outcome = chain.evaluate({"name": ["a@b.co", "bad", ""]})
        assert [(f.property_path, f.message_key) for f in outcome.failures] == [
            ("name[1]", "Email"),
            ("name[2]", "NotEmpty"),
        ]

    def test_for_each_requires_item_rules(self):
        builder, _ = self.make_builder()
        with pytest.raises(UsageError):
            builder.for_each(lambda item: None)

    def test_all_of_and_any_of(self):
        builder, chain = self.make_builder()
        builder.any_of(EmailRule(), LengthRule(10, 10))
        assert chain.evaluate({"name": "a@b.co"}).is_valid
        assert not chain.evaluate({"name": "nope"}).is_valid

        builder, chain = self.make_builder()
        builder.all_of(NotEmptyRule(), EmailRule())
        assert chain.evaluate({"name": ""}).failures[0].message_key == "NotEmpty"

    def test_must_with_instance(self):
        builder, chain = self.make_builder()
        builder.must(lambda instance, value: value != instance["nick"], "must differ", with_instance=True)
        assert chain.evaluate({"nick": "bob", "name": "alice"}).is_valid
        assert chain.evaluate({"nick": "bob", "name": "bob"}).error_message == "must differ"

    def test_add_rule_rejects_non_rules(self):
        builder, _ = self.make_builder()
        with pytest.raises(UsageError):
            builder.add_rule(lambda value: True)

    @pytest.mark.parametrize(
        "option,argument",
        [
            ("with_message", "x"),
            ("with_message_key", "NotEmpty"),
            ("with_message_formatter", DefaultMessageFormatter(locale="tr")),
            ("with_severity", Severity.WARNING),
            ("with_error_code", "E1"),
        ],
    )
    def test_options_after_for_each_raise(self, option, argument):
        builder, _ = self.make_builder()
        builder.for_each(lambda item: item.not_empty())
        with pytest.raises(UsageError, match="for_each"):
            getattr(builder, option)(argument)

    def test_options_inside_for_each_apply_to_items(self):
        builder, chain = self.make_builder()
        builder.for_each(lambda item: item.not_empty().with_severity(Severity.WARNING).with_error_code("TAG"))

        failure = chain.evaluate({"name": ["ok", ""]}).failures[0]
        assert failure.property_path == "name[1]"
        assert failure.severity is Severity.WARNING
        assert failure.error_code == "TAG"

    def test_each_builder_inherits_chain_cascade(self):
        builder, chain = self.make_builder(each=True)
        builder.min_length(5).matches("^x")

        assert len(chain.evaluate({"name": ["ab"]}).failures) == 2
        outcome = chain.evaluate({"name": ["ab"]}, cascade_mode=CascadeMode.STOP_ON_FIRST_FAILURE)
        assert [f.message_key for f in outcome.failures] == ["MinLength"]

    def test_additional_rule_methods(self):
        builder, chain = self.make_builder()
        builder.password().json().file_extension("pdf").duration().color()
        assert [rule.rule_type for rule in chain.rules] == ["password", "json", "file_extension", "duration", "color"]

    def test_file_extension_builder(self):
        builder, chain = self.make_builder()
        builder.file_extension("pdf", ".docx")

        assert chain.evaluate({"name": "cv.docx"}).is_valid
        assert chain.evaluate({"name": "cv.txt"}).error_message == (
            "name must have one of the following extensions: .pdf, .docx"
        )

    def test_duration_builder(self):
        builder, chain = self.make_builder()
        builder.duration(maximum=timedelta(minutes=5))

        assert chain.evaluate({"name": timedelta(minutes=1)}).is_valid
        assert chain.evaluate({"name": timedelta(minutes=10)}).failures[0].message_key == "MaxDuration"

    def test_color_builder(self):
        builder, chain = self.make_builder()
        builder.color(ColorFormat.HEX)

        assert chain.evaluate({"name": "#00ff00"}).is_valid
        assert chain.evaluate({"name": "rgb(0, 255, 0)"}).error_message == "name must be a valid color"
