"""Unit tests for subject composition.

Tests the SubjectComposer and render_template for:
- Outcome category selection
- Built-in default and configured templates
- Property substitution (non-recursive, order independent)
- Subject prefix handling
- Unknown build status errors
"""

from datetime import datetime

import pytest

from build_notifier.config.exceptions import ConfigurationError, UnknownBuildStatusError
from build_notifier.config.models import PublisherConfig, SubjectCategory
from build_notifier.domain.models import BuildResult
from build_notifier.routing import SubjectComposer, render_template


@pytest.fixture
def default_config():
    """Configuration relying entirely on the built-in subject templates."""
    return PublisherConfig()


class TestDefaultSubjects:
    """Tests for subjects rendered from the built-in templates."""

    def test_success(self, default_config, success_result):
        """Test the plain success subject."""
        composer = SubjectComposer(default_config)

        assert composer.compose(success_result) == "Foo Build Successful: Build 42"

    def test_success_with_prefix(self, success_result):
        """Test that the prefix is followed by exactly one space."""
        composer = SubjectComposer(PublisherConfig(subject_prefix="RC:"))

        assert composer.compose(success_result) == "RC: Foo Build Successful: Build 42"

    def test_fixed(self, default_config, fixed_result):
        """Test that a success after a failure is reported as fixed."""
        composer = SubjectComposer(default_config)

        assert composer.compose(fixed_result) == "Foo Build Fixed: Build 42"

    def test_broken(self, default_config, broken_result):
        """Test the newly broken subject."""
        composer = SubjectComposer(default_config)

        assert composer.compose(broken_result) == "Foo Build Failed"

    def test_still_broken(self, default_config, still_broken_result):
        """Test the still broken subject."""
        composer = SubjectComposer(default_config)

        assert composer.compose(still_broken_result) == "Foo is still broken"

    def test_exception(self, default_config, exception_result):
        """Test the exception subject."""
        composer = SubjectComposer(default_config)

        assert composer.compose(exception_result) == "Foo Exception in Build !"


class TestTemplateSelection:
    """Tests for category selection and configured templates."""

    def test_select_template_returns_category(self, default_config, fixed_result):
        """Test that a changed success selects the fixed category."""
        composer = SubjectComposer(default_config)

        category, template = composer.select_template(fixed_result)

        assert category == SubjectCategory.FIXED
        assert template == "${CCNetProject} Build Fixed: Build ${CCNetLabel}"

    def test_configured_template_overrides_default(self, still_broken_result):
        """Test that a configured template is used for its category only."""
        config = PublisherConfig.model_validate(
            {"subjects": {"StillBroken": "Still red: ${CCNetProject} #${CCNetLabel}"}}
        )
        composer = SubjectComposer(config)

        assert composer.compose(still_broken_result) == "Still red: Foo #42"
        assert config.subjects[SubjectCategory.BROKEN] == "${CCNetProject} Build Failed"

    def test_prefix_override_argument(self, success_result):
        """Test that an explicit prefix replaces the configured one."""
        composer = SubjectComposer(PublisherConfig(subject_prefix="RC:"), subject_prefix="[CI]")

        assert composer.compose(success_result) == "[CI] Foo Build Successful: Build 42"

    def test_unknown_status_raises(self, default_config):
        """Test that a status outside success/failure/exception is rejected."""
        composer = SubjectComposer(default_config)
        result = BuildResult(status="unknown", previous_status="success")

        with pytest.raises(UnknownBuildStatusError) as exc_info:
            composer.compose(result)

        assert isinstance(exc_info.value, ConfigurationError)
        assert "Unknown build status" in str(exc_info.value)

    def test_compose_is_idempotent(self, default_config, broken_result):
        """Test that composing twice gives identical output."""
        composer = SubjectComposer(default_config)

        assert composer.compose(broken_result) == composer.compose(broken_result)


class TestRenderTemplate:
    """Tests for placeholder substitution."""

    def test_replaces_every_occurrence(self):
        """Test that repeated placeholders are all replaced."""
        assert render_template("${a}-${a}", {"a": "x"}) == "x-x"

    def test_unknown_placeholders_left_as_is(self):
        """Test that placeholders without a property remain literal."""
        assert render_template("${CCNetProject} ${Missing}", {"CCNetProject": "Foo"}) == (
            "Foo ${Missing}"
        )

    def test_substitution_is_not_recursive(self):
        """Test that substituted text is never expanded again."""
        properties = {"a": "${b}", "b": "B"}

        assert render_template("${a} ${b}", properties) == "${b} B"

    def test_substitution_independent_of_key_order(self):
        """Test that property ordering does not affect the result."""
        forward = {"a": "${b}", "b": "${a}"}
        backward = {"b": "${a}", "a": "${b}"}

        assert render_template("${a}|${b}", forward) == render_template("${a}|${b}", backward)
        assert render_template("${a}|${b}", forward) == "${b}|${a}"

    def test_values_converted_to_display_strings(self):
        """Test number, list, date and None conversion."""
        properties = {
            "label": 42,
            "users": ["alice", "bob"],
            "single": ["alice"],
            "started": datetime(2026, 10, 18, 12, 30),
            "empty": None,
        }

        rendered = render_template(
            "${label}|${users}|${single}|${started}|${empty}", properties
        )

        assert rendered == '42|"alice,bob"|alice|2026-10-18T12:30:00|'

    def test_template_without_placeholders(self):
        """Test that plain text passes through unchanged."""
        assert render_template("Nightly build", {"a": "b"}) == "Nightly build"

    def test_keys_with_braces_and_metacharacters(self):
        """Test that unusual property names are matched literally."""
        properties = {"a{1}": "A", "x.y": "dot"}

        assert render_template("${a{1}} ${x.y} ${x-y}", properties) == "A dot ${x-y}"

    def test_longer_key_wins_over_its_prefix(self):
        """Test that a key containing a closing brace is matched as a whole."""
        properties = {"a": "short", "a}b": "long"}

        assert render_template("${a}b} ${a}", properties) == "long short"

    def test_no_properties(self):
        """Test that a template renders unchanged without properties."""
        assert render_template("${CCNetProject} Build Failed", {}) == "${CCNetProject} Build Failed"
