from __future__ import annotations

from smsbridge.core.dispatch import (
    EncodingAwarePolicy,
    LengthThresholdPolicy,
    SmsEncoding,
    detect_encoding,
    divide_message,
    utf16_length,
)


def test_160_chars_is_a_single_segment() -> None:
    assert divide_message("a" * 160) == ["a" * 160]


def test_161_chars_split_without_loss() -> None:
    body = "".join(chr(ord("a") + i % 26) for i in range(161))

    parts = divide_message(body)

    assert len(parts) == 2
    assert [len(p) for p in parts] == [153, 8]
    assert "".join(parts) == body


def test_extension_characters_cost_two_septets_and_stay_whole() -> None:
    body = "a" * 152 + "€" + "b" * 10

    parts = divide_message(body)

    assert parts[0] == "a" * 152
    assert parts[1].startswith("€")
    assert "".join(parts) == body


def test_non_gsm_text_uses_ucs2_limits() -> None:
    body = "я" * 71

    assert detect_encoding(body) is SmsEncoding.UCS2
    assert divide_message("я" * 70) == ["я" * 70]
    parts = divide_message(body)
    assert [len(p) for p in parts] == [67, 4]
    assert "".join(parts) == body


def test_surrogate_pairs_are_not_split() -> None:
    body = "x" * 66 + "😀" + "y" * 5

    parts = divide_message(body)

    assert parts == ["x" * 66, "😀yyyyy"]


def test_length_threshold_policy_is_configurable() -> None:
    assert LengthThresholdPolicy().fits_single("a" * 160)
    assert not LengthThresholdPolicy().fits_single("a" * 161)
    assert not LengthThresholdPolicy(70).fits_single("a" * 71)


def test_length_threshold_counts_utf16_units() -> None:
    assert utf16_length("😀" * 80) == 160
    assert LengthThresholdPolicy().fits_single("😀" * 80)
    assert not LengthThresholdPolicy().fits_single("😀" * 81)
    assert LengthThresholdPolicy().fits_single("я" * 160)


def test_encoding_aware_policy() -> None:
    policy = EncodingAwarePolicy()
    assert policy.fits_single("a" * 160)
    assert not policy.fits_single("я" * 71)
    assert not policy.fits_single("{" * 81)
