"""Write-side validation for benchmark expectations and overrides.

Every check raises ``core.exceptions.ValidationError(field, message)``;
callers validate the whole payload before touching the database.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from core.exceptions import ValidationError
from production.lob import BUCKET_FS, BUCKET_IPS, BUCKET_PC

from benchmarks.models import PremiumMode


@dataclass(frozen=True)
class PremiumTargets:
    premium_mode: str | None
    premium_by_lob: list | None
    premium_by_bucket: dict | None


def _blank(value) -> bool:
    return value is None or value == ""


def _json_number(value: Decimal):
    return int(value) if value == value.to_integral_value() else float(value)


def assert_non_negative_number(value, field: str) -> Decimal:
    if isinstance(value, bool) or _blank(value):
        raise ValidationError(field, f"{field}: must be a non-negative number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(field, f"{field}: must be a non-negative number") from None
    if not number.is_finite() or number < 0:
        raise ValidationError(field, f"{field}: must be a non-negative number")
    return number


def assert_non_negative_int(value, field: str) -> int:
    number = assert_non_negative_number(value, field)
    if number != number.to_integral_value():
        raise ValidationError(field, f"{field}: must be a non-negative integer")
    return int(number)


def optional_non_negative_int(value, field: str):
    return None if _blank(value) else assert_non_negative_int(value, field)


def optional_non_negative_number(value, field: str):
    return None if _blank(value) else assert_non_negative_number(value, field)


def validate_premium_mode(value, field: str = "premiumMode") -> str:
    mode = value.strip().upper() if isinstance(value, str) else ""
    if mode not in PremiumMode.values:
        raise ValidationError(field, f"{field} must be 'LOB' or 'BUCKET'")
    return mode


def validate_bucket_breakdown(value, field: str = "premiumByBucket") -> dict:
    """``{PC, FS}`` required, ``IPS`` optional; all non-negative."""
    if not isinstance(value, dict):
        raise ValidationError(field, f"{field} must be an object with PC and FS numbers")
    result = {
        BUCKET_PC: _json_number(assert_non_negative_number(value.get(BUCKET_PC), f"{field}.{BUCKET_PC}")),
        BUCKET_FS: _json_number(assert_non_negative_number(value.get(BUCKET_FS), f"{field}.{BUCKET_FS}")),
    }
    if not _blank(value.get(BUCKET_IPS)):
        result[BUCKET_IPS] = _json_number(assert_non_negative_number(value[BUCKET_IPS], f"{field}.{BUCKET_IPS}"))
    return result


def validate_lob_breakdown(value, field: str = "premiumByLob", *, known_lob_ids=None) -> list:
    """Non-empty list of ``{lobId, premium}``.

    When ``known_lob_ids`` is given, every ``lobId`` must be one of them.
    """
    if not isinstance(value, list) or not value:
        raise ValidationError(field, f"{field} must be a non-empty array of {{ lobId, premium }}")
    rows = []
    for index, row in enumerate(value):
        row = row if isinstance(row, dict) else {}
        lob_id = row.get("lobId").strip() if isinstance(row.get("lobId"), str) else ""
        if not lob_id:
            raise ValidationError(f"{field}[{index}].lobId", f"{field}[{index}].lobId is required")
        if known_lob_ids is not None and lob_id not in known_lob_ids:
            raise ValidationError(f"{field}[{index}].lobId", f"Unknown line of business {lob_id}")
        premium = assert_non_negative_number(row.get("premium"), f"{field}[{index}].premium")
        rows.append({"lobId": lob_id, "premium": _json_number(premium)})
    return rows


def validate_premium_targets(mode, premium_by_lob, premium_by_bucket, *, prefix="premium", suffix="", known_lob_ids=None):
    """Validate a mode plus the breakdown matching it; the other one is dropped."""
    mode = validate_premium_mode(mode, f"{prefix}Mode{suffix}")
    if mode == PremiumMode.LOB:
        rows = validate_lob_breakdown(premium_by_lob, f"{prefix}ByLob{suffix}", known_lob_ids=known_lob_ids)
        return PremiumTargets(PremiumMode.LOB, rows, None)
    buckets = validate_bucket_breakdown(premium_by_bucket, f"{prefix}ByBucket{suffix}")
    return PremiumTargets(PremiumMode.BUCKET, None, buckets)


def validate_optional_premium_targets(mode, premium_by_lob, premium_by_bucket, *, known_lob_ids=None):
    """Override flavour: everything may be absent, but a breakdown needs a mode."""
    if _blank(mode):
        if premium_by_lob is not None:
            raise ValidationError(
                "premiumModeOverride",
                "premiumModeOverride required when providing premiumByLobOverride",
            )
        if premium_by_bucket is not None:
            raise ValidationError(
                "premiumModeOverride",
                "premiumModeOverride required when providing premiumByBucketOverride",
            )
        return PremiumTargets(None, None, None)
    return validate_premium_targets(
        mode,
        premium_by_lob,
        premium_by_bucket,
        suffix="Override",
        known_lob_ids=known_lob_ids,
    )


def validate_goal_map(value, field: str) -> dict:
    """``{key: non-negative int}``; blank keys are dropped."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(field, f"{field} must be an object")
    result = {}
    for key, goal in value.items():
        key = str(key or "").strip()
        if key:
            result[key] = assert_non_negative_int(goal, f"{field}.{key}")
    return result
