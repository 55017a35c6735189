from decimal import Decimal

import pytest

from benchmarks.models import PremiumMode
from benchmarks.validators import (
    assert_non_negative_int,
    validate_bucket_breakdown,
    validate_goal_map,
    validate_lob_breakdown,
    validate_optional_premium_targets,
    validate_premium_mode,
    validate_premium_targets,
)
from core.exceptions import ValidationError


def test_bucket_breakdown_requires_pc_and_fs():
    assert validate_bucket_breakdown({"PC": 1000, "FS": 500}) == {"PC": 1000, "FS": 500}

    with pytest.raises(ValidationError) as excinfo:
        validate_bucket_breakdown({"FS": 500})
    assert excinfo.value.field == "premiumByBucket.PC"


def test_bucket_breakdown_keeps_optional_ips():
    assert validate_bucket_breakdown({"PC": "10.5", "FS": 0, "IPS": 3}) == {"PC": 10.5, "FS": 0, "IPS": 3}


@pytest.mark.parametrize("bad", [-1, "abc", True, None, float("nan")])
def test_bucket_values_must_be_non_negative_numbers(bad):
    with pytest.raises(ValidationError) as excinfo:
        validate_bucket_breakdown({"PC": bad, "FS": 1})
    assert excinfo.value.field == "premiumByBucket.PC"


def test_premium_mode_must_be_lob_or_bucket():
    assert validate_premium_mode("lob") == PremiumMode.LOB
    with pytest.raises(ValidationError) as excinfo:
        validate_premium_mode("MONTHLY")
    assert excinfo.value.message == "premiumMode must be 'LOB' or 'BUCKET'"


def test_lob_breakdown_rows():
    rows = validate_lob_breakdown([{"lobId": " x ", "premium": "12.5"}])
    assert rows == [{"lobId": "x", "premium": 12.5}]

    with pytest.raises(ValidationError) as excinfo:
        validate_lob_breakdown([])
    assert excinfo.value.field == "premiumByLob"

    with pytest.raises(ValidationError) as excinfo:
        validate_lob_breakdown([{"lobId": "x", "premium": 1}, {"lobId": "", "premium": 1}])
    assert excinfo.value.field == "premiumByLob[1].lobId"

    with pytest.raises(ValidationError) as excinfo:
        validate_lob_breakdown([{"lobId": "x", "premium": -3}])
    assert excinfo.value.field == "premiumByLob[0].premium"


def test_lob_breakdown_checks_known_ids():
    with pytest.raises(ValidationError) as excinfo:
        validate_lob_breakdown([{"lobId": "nope", "premium": 1}], known_lob_ids={"yes"})
    assert excinfo.value.field == "premiumByLob[0].lobId"


def test_premium_targets_keep_only_the_matching_breakdown():
    targets = validate_premium_targets("BUCKET", [{"lobId": "x", "premium": 1}], {"PC": 1, "FS": 2})
    assert targets.premium_mode == PremiumMode.BUCKET
    assert targets.premium_by_lob is None
    assert targets.premium_by_bucket == {"PC": 1, "FS": 2}


def test_optional_targets_need_a_mode_for_a_breakdown():
    assert validate_optional_premium_targets(None, None, None).premium_mode is None

    with pytest.raises(ValidationError) as excinfo:
        validate_optional_premium_targets(None, None, {"PC": 1, "FS": 1})
    assert excinfo.value.field == "premiumModeOverride"

    with pytest.raises(ValidationError) as excinfo:
        validate_optional_premium_targets("LOB", None, None)
    assert excinfo.value.field == "premiumByLobOverride"


def test_integer_counts():
    assert assert_non_negative_int("4", "apps") == 4
    with pytest.raises(ValidationError):
        assert_non_negative_int(Decimal("1.5"), "apps")


def test_goal_map_drops_blank_keys():
    assert validate_goal_map({"Auto": 3, " ": 9}, "appGoalsByLob") == {"Auto": 3}
    with pytest.raises(ValidationError) as excinfo:
        validate_goal_map({"Auto": -1}, "appGoalsByLob")
    assert excinfo.value.field == "appGoalsByLob.Auto"
