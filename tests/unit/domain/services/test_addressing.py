from __future__ import annotations

from knot_cloud.domain.services.addressing import gateway_address_for


def test_gateway_address_replaces_last_four_characters() -> None:
    assert gateway_address_for("abcd1234ef56") == "abcd12340000"


def test_gateway_address_of_short_address_is_suffix() -> None:
    assert gateway_address_for("abc") == "0000"
    assert gateway_address_for("") == "0000"
