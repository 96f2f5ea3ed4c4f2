"""Shared pytest fixtures for outline tests."""

import pytest

from outline.core.ir import Document, FieldSpec, Function, Operator, Param, TypeSpec


@pytest.fixture
def two_funcs_doc() -> Document:
    """The document described by TWO_FUNCS_TABS."""
    return Document(
        name="twoFuncs",
        path="twoFuncs",
        functions=[
            Function(
                function_name="difference",
                signature="difference(a,b int) int",
                receiver="twoFuncs",
            ),
            Function(
                function_name="sum",
                signature="sum(a,b int) int",
                description="add two things together",
                receiver="twoFuncs",
            ),
        ],
    )


@pytest.fixture
def time_doc() -> Document:
    """The document described by TIME_SPACES."""
    return Document(
        name="time",
        functions=[
            Function(
                function_name="duration",
                signature="duration(string) duration",
                description="parse a duration",
                receiver="time",
            ),
            Function(
                function_name="time",
                signature="time(string, format=..., location=...) time",
                description="parse a time",
                receiver="time",
            ),
            Function(
                function_name="now",
                signature="now() time",
                description=(
                    "new time instance set to current time "
                    "implementations are able to make this a constant"
                ),
                receiver="time",
            ),
            Function(
                function_name="zero",
                signature="zero() time",
                description="a constant",
                receiver="time",
            ),
        ],
        types=[
            TypeSpec(
                name="duration",
                description="a period of time",
                methods=[
                    Function(
                        function_name="add",
                        receiver="duration",
                        signature="add(d duration) int",
                        params=[Param(name="d", type="duration")],
                    )
                ],
                fields=[
                    FieldSpec(
                        name="hours",
                        type="float",
                        description="number of hours starting at zero",
                    ),
                    FieldSpec(name="minutes", type="float"),
                    FieldSpec(name="nanoseconds", type="int"),
                    FieldSpec(name="seconds", description="number of seconds starting at zero"),
                ],
                operators=[
                    Operator(expression="duration - time = duration"),
                    Operator(expression="duration + time = time"),
                    Operator(expression="duration == duration = boolean"),
                    Operator(expression="duration < duration = booleans"),
                ],
            ),
            TypeSpec(
                name="time",
                operators=[
                    Operator(expression="time == time = boolean"),
                    Operator(expression="time < time = boolean"),
                ],
            ),
        ],
    )
