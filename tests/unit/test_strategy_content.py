"""
Unit tests for remedial lesson content.
"""

import operator

import pytest

from mathsprint.adaptive.strategies import STRATEGY_CATALOG
from mathsprint.adaptive.strategy_content import STRATEGY_CONTENT, get_strategy_content

OPS = {"+": operator.add, "-": operator.sub, "×": operator.mul}


@pytest.mark.parametrize("strategy", STRATEGY_CATALOG, ids=lambda s: s.id)
def test_every_strategy_has_content(strategy):
    content = get_strategy_content(strategy.id)
    assert content is not None
    assert content.title == strategy.name
    assert content.steps
    assert content.tip


@pytest.mark.parametrize("content", STRATEGY_CONTENT.values(), ids=lambda c: c.id)
def test_worked_example_is_correct(content):
    symbol = next(s for s in OPS if f" {s} " in content.example.problem)
    ex = content.example
    assert OPS[symbol](ex.operand_a, ex.operand_b) == ex.answer


def test_unknown_id_returns_none():
    assert get_strategy_content("div_long_division") is None


def test_table_is_read_only():
    with pytest.raises(TypeError):
        STRATEGY_CONTENT["new"] = None


def test_to_dict_drops_empty_step_fields():
    data = get_strategy_content("mul_nines").to_dict()
    assert data["example"]["answer"] == 63
    assert "highlight" not in data["steps"][1]
    assert data["steps"][0]["highlight"] == "9"
