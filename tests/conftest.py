"""Shared pytest fixtures for the extractor tests."""

import pytest

from helpers import FakeEngineClient, enum_row, function_row, type_row


@pytest.fixture
def function_rows():
    return [
        function_row(
            "Csv.Document",
            documentation={
                "Documentation.Description": "Returns the contents of a CSV document.",
                "Documentation.LongDescription": "Returns the contents of the CSV document as a table.",
                "Documentation.Category": "Accessing data",
            },
            parameters={"a": "text", "b": "number"},
            required="1",
            return_type="Table",
        ),
        function_row("", documentation={"Documentation.Category": "List"}, parameters=["y"]),
        function_row(
            "List.Legacy",
            documentation={"Documentation.Category": "List"},
            parameters=["x"],
            required=0,
        ),
    ]


@pytest.fixture
def type_rows():
    return [
        type_row(
            "JoinKind.Type",
            base_type="number",
            documentation={
                "Documentation.Description": "Specifies the kind of join operation.",
                "Documentation.AllowedValues": ["JoinKind.Inner", "JoinKind.LeftOuter"],
            },
        ),
        type_row(None, base_type="text"),
        type_row("Binary.Type", base_type="binary"),
    ]


@pytest.fixture
def enum_rows():
    return [
        enum_row("JoinKind", "Inner", "JoinKind.Inner", 0),
        enum_row("Occurrence", "First", "Occurrence.First", 0),
        enum_row("JoinKind", "LeftOuter", "JoinKind.LeftOuter", 1),
        enum_row("Placeholder", ""),
        enum_row("Occurrence", None),
        enum_row("Occurrence", "Last", "Occurrence.Last", 1),
    ]


@pytest.fixture
def fake_client(function_rows, type_rows, enum_rows):
    return FakeEngineClient(function_rows, type_rows, enum_rows)
