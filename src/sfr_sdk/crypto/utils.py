"""Validation, formatting and display helpers for token API data.

Everything here is a pure function with no network access. Validators
never raise; they return a :class:`ValidationResult` whose ``errors`` are
user-facing Japanese messages. Combine results with
:func:`merge_validation_results` and turn a failed result into an
exception with :func:`throw_if_invalid`.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from sfr_sdk.crypto.models import (
    ApiErrorBody,
    ProposalStatus,
    StatsPeriod,
    TransactionType,
    VoteChoice,
)
from sfr_sdk.exceptions import SfrError, ValidationError

MAX_SFR_AMOUNT = 1_000_000_000

_AMOUNT_RE = re.compile(r"^\d+(\.\d{1,8})?$")
_UUID_V4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SPECIAL_CHARS_RE = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
_LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_LEADING_INT_RE = re.compile(r"^\s*[+-]?\d+")
_THOUSANDS_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")

_WEEKDAYS_JA = ("月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日", "日曜日")


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)


def _result(errors: list[str]) -> ValidationResult:
    return ValidationResult(is_valid=not errors, errors=errors)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


# ------------------------------------------------------------------ #
# Validators
# ------------------------------------------------------------------ #


def validate_sfr_amount(amount: str) -> ValidationResult:
    """Check a token amount: digits with up to 8 decimals, between 0 and 1e9."""
    if _blank(amount):
        return _result(["金額は必須です"])

    errors: list[str] = []
    if not _AMOUNT_RE.match(amount):
        errors.append("金額は数値で、小数点以下8桁まで入力可能です")

    try:
        value = float(amount)
    except ValueError:
        errors.append("金額が無効な数値です")
    else:
        if math.isnan(value):
            errors.append("金額が無効な数値です")
        elif value < 0:
            errors.append("金額は0以上である必要があります")
        elif value > MAX_SFR_AMOUNT:
            errors.append("金額が上限を超えています")
    return _result(errors)


def validate_uuid(value: str) -> ValidationResult:
    if _blank(value):
        return _result(["IDは必須です"])
    if not _UUID_V4_RE.match(value):
        return _result(["有効なUUID形式ではありません"])
    return _result([])


def validate_date_string(value: str) -> ValidationResult:
    """Check a ``YYYY-MM-DD`` string naming a real calendar date."""
    if _blank(value):
        return _result(["日付は必須です"])
    if not _DATE_RE.match(value):
        return _result(["日付はYYYY-MM-DD形式で入力してください"])
    try:
        date.fromisoformat(value)
    except ValueError:
        return _result(["有効な日付ではありません"])
    return _result([])


def validate_datetime_string(value: str) -> ValidationResult:
    """Check a ``YYYY-MM-DDTHH:MM:SS`` string (no fraction, no offset)."""
    if _blank(value):
        return _result(["日時は必須です"])
    if not _DATETIME_RE.match(value):
        return _result(["日時はYYYY-MM-DDTHH:mm:ss形式で入力してください"])
    try:
        datetime.strptime(value, "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return _result(["有効な日時ではありません"])
    return _result([])


def validate_email(value: str) -> ValidationResult:
    if _blank(value):
        return _result(["メールアドレスは必須です"])
    if not _EMAIL_RE.match(value):
        return _result(["有効なメールアドレス形式ではありません"])
    return _result([])


def validate_score(
    score: Optional[float], min_score: float = 0, max_score: float = 100
) -> ValidationResult:
    if score is None:
        return _result(["スコアは必須です"])
    if isinstance(score, bool) or not isinstance(score, (int, float)) or math.isnan(score):
        return _result(["スコアは数値である必要があります"])
    if score < min_score:
        return _result([f"スコアは{min_score}以上である必要があります"])
    if score > max_score:
        return _result([f"スコアは{max_score}以下である必要があります"])
    return _result([])


def validate_evaluation_score(score: Optional[float]) -> ValidationResult:
    """Evaluation scores run from 1.0 to 5.0."""
    return validate_score(score, 1.0, 5.0)


def validate_password(password: str) -> ValidationResult:
    """Check length (8-128) and the four required character classes.

    All failing rules are reported, not just the first.
    """
    if _blank(password):
        return _result(["パスワードは必須です"])

    errors: list[str] = []
    if len(password) < 8:
        errors.append("パスワードは8文字以上である必要があります")
    if len(password) > 128:
        errors.append("パスワードは128文字以下である必要があります")
    if not re.search(r"[a-z]", password):
        errors.append("パスワードには小文字を含める必要があります")
    if not re.search(r"[A-Z]", password):
        errors.append("パスワードには大文字を含める必要があります")
    if not re.search(r"\d", password):
        errors.append("パスワードには数字を含める必要があります")
    if not _SPECIAL_CHARS_RE.search(password):
        errors.append("パスワードには特殊文字を含める必要があります")
    return _result(errors)


def merge_validation_results(*results: ValidationResult) -> ValidationResult:
    return _result([error for result in results for error in result.errors])


def throw_if_invalid(result: ValidationResult) -> None:
    """Raise :class:`~sfr_sdk.exceptions.ValidationError` when *result* failed."""
    if not result.is_valid:
        raise ValidationError(result.errors)


# ------------------------------------------------------------------ #
# Formatting
# ------------------------------------------------------------------ #


def format_sfr_amount(
    amount: Union[str, float, int],
    decimals: int = 8,
    thousands_separator: bool = True,
    currency: bool = True,
) -> str:
    """Render an amount like ``1,234.5 SFR``.

    The value is rounded to *decimals* places and trailing fractional zeros
    are dropped; integer digits are never stripped. Unparsable input
    renders as ``"0"``.
    """
    value = safe_parse_float(str(amount), math.nan)
    if math.isnan(value):
        return "0"

    formatted = f"{value:.{decimals}f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")

    if thousands_separator:
        integer, dot, fraction = formatted.partition(".")
        formatted = _THOUSANDS_RE.sub(",", integer) + dot + fraction

    if currency:
        formatted = f"{formatted} SFR"
    return formatted


def format_percentage(value: float, decimals: int = 2, show_sign: bool = False) -> str:
    """Render a ratio as a percentage: ``0.1234`` becomes ``12.34%``."""
    sign = "+" if show_sign and value > 0 else ""
    return f"{sign}{value * 100:.{decimals}f}%"


def _parse_datetime(value: Union[str, date, datetime]) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: Union[str, date, datetime], style: str = "medium") -> str:
    """Format a date in Japanese.

    ``short``: ``2025/8/20``; ``medium``: ``2025年8月20日``;
    ``long``: ``2025年8月20日水曜日``.
    """
    parsed = _parse_datetime(value)
    if parsed is None:
        return "無効な日付"
    if style == "short":
        return f"{parsed.year}/{parsed.month}/{parsed.day}"
    medium = f"{parsed.year}年{parsed.month}月{parsed.day}日"
    if style == "long":
        return medium + _WEEKDAYS_JA[parsed.weekday()]
    return medium


def format_relative_time(
    value: Union[str, datetime], now: Optional[datetime] = None
) -> str:
    """Describe how long ago *value* was, e.g. ``3日前`` or ``5分前``.

    Uses the largest whole unit among days, hours, minutes and seconds.
    Times in the future are reported in seconds (``10秒後``).
    """
    parsed = _parse_datetime(value)
    if parsed is None:
        return "無効な日時"
    if now is None:
        now = datetime.now(timezone.utc) if parsed.tzinfo else datetime.now()

    seconds = math.floor((now - parsed).total_seconds())
    if seconds < 0:
        return f"{-seconds}秒後"
    minutes, hours, days = seconds // 60, seconds // 3600, seconds // 86400
    if days > 0:
        return f"{days}日前"
    if hours > 0:
        return f"{hours}時間前"
    if minutes > 0:
        return f"{minutes}分前"
    return f"{seconds}秒前"


# ------------------------------------------------------------------ #
# Display names
# ------------------------------------------------------------------ #

_TRANSACTION_TYPE_NAMES = {
    TransactionType.EARN: "報酬獲得",
    TransactionType.SPEND: "使用・支払い",
    TransactionType.COLLECT: "徴収",
    TransactionType.BURN: "バーン（焼却）",
    TransactionType.TRANSFER: "送金・転送",
}

_PROPOSAL_STATUS_NAMES = {
    ProposalStatus.DRAFT: "下書き",
    ProposalStatus.VOTING: "投票中",
    ProposalStatus.PASSED: "可決",
    ProposalStatus.REJECTED: "否決",
    ProposalStatus.EXPIRED: "期限切れ",
}

_VOTE_CHOICE_NAMES = {
    VoteChoice.YES: "賛成",
    VoteChoice.NO: "反対",
    VoteChoice.ABSTAIN: "棄権",
}

_STATS_PERIOD_NAMES = {
    StatsPeriod.DAILY: "日次",
    StatsPeriod.WEEKLY: "週次",
    StatsPeriod.MONTHLY: "月次",
}


def _display_name(names: dict[Any, str], value: Any) -> str:
    # str enums hash like their values, so plain strings hit the same keys.
    return names.get(value, getattr(value, "value", value))


def get_transaction_type_display_name(value: Union[TransactionType, str]) -> str:
    return _display_name(_TRANSACTION_TYPE_NAMES, value)


def get_proposal_status_display_name(value: Union[ProposalStatus, str]) -> str:
    return _display_name(_PROPOSAL_STATUS_NAMES, value)


def get_vote_choice_display_name(value: Union[VoteChoice, str]) -> str:
    return _display_name(_VOTE_CHOICE_NAMES, value)


def get_stats_period_display_name(value: Union[StatsPeriod, str]) -> str:
    return _display_name(_STATS_PERIOD_NAMES, value)


# ------------------------------------------------------------------ #
# Error messages and parsing
# ------------------------------------------------------------------ #

ERROR_MESSAGES_JA = {
    "NETWORK_ERROR": "ネットワークエラーが発生しました",
    "TIMEOUT_ERROR": "リクエストがタイムアウトしました",
    "UNKNOWN_ERROR": "予期しないエラーが発生しました",
    "UNAUTHORIZED": "認証が必要です",
    "FORBIDDEN": "この操作を行う権限がありません",
    "TOKEN_EXPIRED": "認証トークンが期限切れです",
    "VALIDATION_ERROR": "入力内容に誤りがあります",
    "INVALID_AMOUNT": "金額が無効です",
    "INVALID_USER_ID": "ユーザーIDが無効です",
    "INVALID_PROPOSAL_ID": "提案IDが無効です",
    "INSUFFICIENT_BALANCE": "残高が不足しています",
    "USER_NOT_FOUND": "ユーザーが見つかりません",
    "PROPOSAL_NOT_FOUND": "提案が見つかりません",
    "VOTING_CLOSED": "投票期間が終了しています",
    "ALREADY_VOTED": "既に投票済みです",
    "COLLECTION_NOT_ALLOWED": "徴収できません",
    "REWARD_CALCULATION_FAILED": "報酬計算に失敗しました",
    "INTERNAL_SERVER_ERROR": "サーバー内部エラーが発生しました",
    "SERVICE_UNAVAILABLE": "サービスが一時的に利用できません",
    "RATE_LIMIT_EXCEEDED": "リクエスト制限を超過しました",
    "MAINTENANCE_MODE": "メンテナンス中です",
}

_FALLBACK_ERROR_MESSAGE = "エラーが発生しました"


def get_localized_error_message(error: Union[SfrError, ApiErrorBody]) -> str:
    """Japanese message for a known error code, else the error's own message."""
    if isinstance(error, SfrError):
        code, message = error.code, error.message
    else:
        code, message = error.error, error.message
    return ERROR_MESSAGES_JA.get(code or "") or message or _FALLBACK_ERROR_MESSAGE


def safe_parse_float(value: Optional[str], default: float = 0) -> float:
    """Parse the leading number of *value*, ignoring trailing text."""
    match = _LEADING_FLOAT_RE.match(value or "")
    if match is None:
        return default
    return float(match.group(0))


def safe_parse_int(value: Optional[str], default: int = 0) -> int:
    """Parse the leading base-10 integer of *value*, ignoring trailing text."""
    match = _LEADING_INT_RE.match(value or "")
    if match is None:
        return default
    return int(match.group(0))
