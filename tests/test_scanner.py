"""Tests for CapabilityScanner: discovery, naming, and the multi-kind policy."""
from typing import Annotated

import pytest

from mcpeasy.capabilities import Argument, CapabilityScanner, Property, prompt, resource, tool
from mcpeasy.errors import CapabilityConfigurationError


@pytest.fixture
def scanner():
    return CapabilityScanner()


class Plain:
    def method(self, value: Annotated[str, Property()]) -> str:
        return value


class Base:
    @tool()
    def inherited(self) -> str:
        return "base"


class Child(Base):
    @tool()
    def own(self) -> str:
        return "child"


class BrokenResource:
    @resource(uri="")
    def nowhere(self) -> str:
        return ""


class ParameterizedResource:
    @resource(uri="items://one")
    def item(self, item_id: str) -> str:
        return item_id


class DefaultedResource:
    @resource(uri="items://default")
    def item(self, item_id: str = "first") -> str:
        return item_id


class MultiKind:
    @tool(name="both")
    @prompt(name="both")
    def both(self, text: Annotated[str, Property(), Argument()]) -> str:
        return text


class Tracking:
    def __init__(self):
        self.called = False

    @tool()
    def touch(self) -> None:
        self.called = True


class TestScanTools:

    def test_finds_tools_in_declaration_order(self, scanner, sample):
        names = [t.name for t in scanner.scan_tools(sample)]

        assert names == ["echo", "add", "greet_person", "describe_point", "boom", "record", "nothing"]

    def test_name_defaults_to_method_name(self, scanner, sample):
        echo = scanner.scan_tools(sample)[0]

        assert echo.name == "echo"
        assert echo.description == "Echoes back the provided message"

    def test_description_falls_back_to_docstring(self, scanner, sample):
        greet = next(t for t in scanner.scan_tools(sample) if t.name == "greet_person")

        assert greet.description == "Greets somebody."

    def test_tool_carries_schema_method_and_instance(self, scanner, sample):
        add = scanner.scan_tools(sample)[1]

        assert list(add.input_schema.properties) == ["a", "b"]
        assert add.input_schema.required == ["a", "b"]
        assert add.method is type(sample).add
        assert add.instance is sample

    def test_inherited_methods_are_ignored(self, scanner):
        assert [t.name for t in scanner.scan_tools(Child())] == ["own"]

    def test_scan_is_deterministic(self, scanner, sample):
        first = [t.name for t in scanner.scan_tools(sample)]
        second = [t.name for t in scanner.scan_tools(sample)]

        assert first == second

    def test_scan_never_invokes_methods(self, scanner):
        instance = Tracking()
        scanner.scan_tools(instance)

        assert instance.called is False


class TestScanResources:

    def test_finds_resources(self, scanner, sample):
        resources = scanner.scan_resources(sample)

        assert [r.uri for r in resources] == ["status://server", "notes://today"]
        assert resources[0].title == "Server Status"
        assert resources[0].mime_type == "application/json"

    def test_mime_type_defaults_to_text_plain(self, scanner, sample):
        notes = scanner.scan_resources(sample)[1]

        assert notes.mime_type == "text/plain"
        assert notes.description == "Today's notes."
        assert notes.name == "notes://today"

    def test_empty_uri_fails_fast(self, scanner):
        with pytest.raises(CapabilityConfigurationError, match="non-empty uri"):
            scanner.scan_resources(BrokenResource())

    def test_parameters_without_defaults_fail_fast(self, scanner):
        with pytest.raises(CapabilityConfigurationError, match=r"must not take parameters, got \['item_id'\]"):
            scanner.scan_resources(ParameterizedResource())

    def test_defaulted_parameters_are_allowed(self, scanner):
        [item] = scanner.scan_resources(DefaultedResource())

        assert item.uri == "items://default"


class TestScanPrompts:

    def test_prompt_metadata(self, scanner, sample):
        [review] = scanner.scan_prompts(sample)

        assert review.name == "code_review"
        assert review.title == "Code Review"
        assert review.description == "Review some code"

    def test_prompt_arguments_in_order(self, scanner, sample):
        [review] = scanner.scan_prompts(sample)

        assert [(a.name, a.required) for a in review.arguments] == [("language", True), ("focusArea", False)]
        assert review.arguments[0].description == "Programming language"


class TestNoMetadata:

    def test_plain_class_has_no_capabilities(self, scanner):
        instance = Plain()

        assert scanner.scan_tools(instance) == []
        assert scanner.scan_resources(instance) == []
        assert scanner.scan_prompts(instance) == []

    def test_undecorated_method_is_absent(self, scanner, sample):
        all_names = (
            [t.name for t in scanner.scan_tools(sample)]
            + [r.name for r in scanner.scan_resources(sample)]
            + [p.name for p in scanner.scan_prompts(sample)]
        )

        assert "helper" not in all_names


class TestMultipleKinds:
    """A method marked as several kinds is registered under each kind independently."""

    def test_registered_under_every_kind(self, scanner):
        instance = MultiKind()

        [as_tool] = scanner.scan_tools(instance)
        [as_prompt] = scanner.scan_prompts(instance)

        assert as_tool.name == as_prompt.name == "both"
        assert list(as_tool.input_schema.properties) == ["text"]
        assert [a.name for a in as_prompt.arguments] == ["text"]
        assert scanner.scan_resources(instance) == []

    def test_same_kind_twice_is_rejected(self):
        with pytest.raises(ValueError, match="already marked as a tool"):
            class Twice:
                @tool(name="a")
                @tool(name="b")
                def twice(self):
                    pass
