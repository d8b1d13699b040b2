from __future__ import annotations

import json

import pytest

from investcalc.profiles import (
    DEFAULT_PROFILE,
    PROFILES,
    InvalidProfileTable,
    RiskProfile,
    UnknownProfile,
    get_profile,
    load_profile_table,
    parse_profile_table,
    profile_names,
    validate_profile_table,
)


def test_builtin_table_is_ordered():
    validate_profile_table(PROFILES)
    assert DEFAULT_PROFILE in PROFILES
    assert profile_names() == ["Conservative", "Balanced", "Ambitious"]


def test_balanced_rates():
    balanced = get_profile("Balanced")
    assert balanced.rates() == {"expected": 0.057, "worst": 0.032, "best": 0.072}


def test_unknown_profile_lists_known_names():
    with pytest.raises(UnknownProfile) as excinfo:
        get_profile("Gedreven")
    assert excinfo.value.name == "Gedreven"
    assert excinfo.value.known == ["Ambitious", "Balanced", "Conservative"]
    assert isinstance(excinfo.value, LookupError)


def test_load_profile_table(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text(
        json.dumps({"Steady": {"expected": 0.05, "worst": 0.03, "best": 0.06}}),
        encoding="utf-8",
    )
    table = load_profile_table(str(path))
    assert table == {"Steady": RiskProfile("Steady", expected=0.05, worst=0.03, best=0.06)}
    assert get_profile("Steady", table).best == 0.06
    with pytest.raises(UnknownProfile):
        get_profile("Balanced", table)


@pytest.mark.parametrize(
    "data,message",
    [
        ({"Odd": {"expected": 0.05, "worst": 0.06, "best": 0.07}}, "worst <= expected <= best"),
        ({"Odd": {"expected": 0.05, "worst": 0.03}}, "missing rate(s): best"),
        ({"Odd": {"expected": "high", "worst": 0.03, "best": 0.07}}, "non-numeric"),
        ({"Odd": {"expected": float("nan"), "worst": 0.03, "best": 0.07}}, "non-finite"),
        ({"Odd": 0.05}, "object of rates"),
        ({}, "empty"),
        ([], "JSON object"),
    ],
)
def test_invalid_tables(data, message):
    with pytest.raises(InvalidProfileTable, match=message.replace("(", r"\(").replace(")", r"\)")):
        parse_profile_table(data)


def test_load_rejects_malformed_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidProfileTable):
        load_profile_table(str(path))
