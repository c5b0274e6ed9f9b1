"""
Tests for AnswerPair Value Object.
Covers: defaults, camelCase aliases, coercion of non-string answers, stream parsing, validation.
"""

import pytest
from pydantic import ValidationError

from exam_grader.domain.grading.value_objects import AnswerPair, Domain


def test_defaults():
    pair = AnswerPair(student_answer="a", model_answer="b")

    assert pair.max_marks == 10.0
    assert pair.domain == Domain.CSE
    assert pair.question_text == ""


def test_accepts_camel_case_keys():
    pair = AnswerPair.model_validate(
        {
            "studentAnswer": "Stack is LIFO",
            "modelAnswer": "A stack is LIFO",
            "maxMarks": 5,
            "stream": "EEE",
            "question": "What is a stack?",
        }
    )

    assert pair.student_answer == "Stack is LIFO"
    assert pair.model_answer == "A stack is LIFO"
    assert pair.max_marks == 5.0
    assert pair.domain == Domain.EEE
    assert pair.question_text == "What is a stack?"


@pytest.mark.parametrize("value", [None, 12, ["list"], {"a": 1}])
def test_non_string_answers_become_empty(value):
    pair = AnswerPair.model_validate({"student_answer": value, "model_answer": "x"})

    assert pair.student_answer == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("cse", Domain.CSE),
        ("Mechanical", Domain.MECHANICAL),
        ("MECH", Domain.MECHANICAL),
        ("civil", Domain.CIVIL),
        ("unknown", Domain.CSE),
        (None, Domain.CSE),
    ],
)
def test_domain_is_parsed_leniently(raw, expected):
    pair = AnswerPair.model_validate({"student_answer": "a", "model_answer": "b", "domain": raw})

    assert pair.domain == expected


@pytest.mark.parametrize("max_marks", [0, -3, "ten"])
def test_invalid_max_marks_raise(max_marks):
    with pytest.raises(ValidationError):
        AnswerPair(student_answer="a", model_answer="b", max_marks=max_marks)


def test_is_immutable():
    pair = AnswerPair(student_answer="a", model_answer="b")

    with pytest.raises(ValidationError):
        pair.student_answer = "changed"
