import pytest

from qrshield.engine import PatternRule
from qrshield.qr_scanner import decode_qr_image, describe_payload
from qrshield.utils.reason_cleaner import clean_reasons


@pytest.mark.parametrize(
    "raw, qr_type",
    [
        ("https://example.com/menu", "url"),
        ("WIFI:S:CafeGuest;T:WPA;P:secret;;", "wifi"),
        ("bitcoin:bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh", "crypto"),
        ("BEGIN:VCARD\nVERSION:3.0\nFN:Jane Doe\nEND:VCARD", "vcard"),
        ("https://paypal.me/someone/25", "payment"),
        ("Thanks for visiting our store", "text"),
        ("ABC123XYZ", "unknown"),
    ],
)
def test_describe_payload(raw, qr_type):
    assert describe_payload(raw).qr_type == qr_type


def test_url_without_scheme_is_normalized():
    info = describe_payload("www.example.com/path")
    assert info.qr_type == "url"
    assert info.normalized == "https://www.example.com/path"


def test_undecodable_bytes_return_none():
    assert decode_qr_image(b"") is None
    assert decode_qr_image(b"\x00\x01 not an image") is None


def test_decodes_real_qr_code(qr_png):
    assert decode_qr_image(qr_png) == "https://bit.ly/x"


def test_zbar_fallback_reads_real_qr_code(qr_png):
    pytest.importorskip("pyzbar.pyzbar")
    from qrshield.qr_scanner.decoder import _decode_zbar

    assert _decode_zbar(qr_png) == ["https://bit.ly/x"]


def test_clean_reasons_one_sentence_per_category():
    rules = [
        PatternRule("bit.ly", "shortener"),
        PatternRule("tinyurl.com", "shortener"),
        PatternRule("xn--", "encoding"),
        PatternRule("odd", "custom"),
    ]
    reasons = clean_reasons(rules)
    assert len(reasons) == 3
    assert "bit.ly" in reasons[0]
    assert "encoding" in reasons[1]
    assert "'odd'" in reasons[2]
