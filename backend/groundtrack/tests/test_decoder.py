"""
Test suite for the telemetry product decoder
"""

import math

import cbor2
import pytest

from conftest import ISS_LINE1, ISS_LINE2, encode_product, make_product
from groundtrack.domains.telemetry.exceptions import (
    EmptyPayload,
    InvalidImageProduct,
    MalformedBinary,
    MissingRequiredField,
    TelemetryError,
    UnsupportedProductType,
)
from groundtrack.domains.telemetry.services.decoder_service import (
    MISSING_TIMESTAMP,
    decode,
    decode_json_view,
    extract_track_inputs,
)


def test_decode_valid_image_product():
    product = decode(encode_product())

    assert product.instrument == "avhrr_3"
    assert product.product_type == "image"
    assert len(product.images) == 1
    assert product.tle["line1"] == ISS_LINE1


def test_decode_preserves_unknown_fields():
    product = decode(encode_product(projection_cfg={"type": "equirec"}, has_proj=True))

    view = product.to_json_view()
    assert view["type"] == "image"
    assert view["projection_cfg"] == {"type": "equirec"}
    assert view["has_proj"] is True


@pytest.mark.parametrize("field", ["instrument", "type"])
def test_decode_missing_required_field(field):
    data = make_product()
    del data[field]

    with pytest.raises(MissingRequiredField) as exc_info:
        decode(cbor2.dumps(data))
    assert exc_info.value.field == field
    assert exc_info.value.code == "MissingRequiredField"


def test_decode_empty_instrument_counts_as_missing():
    with pytest.raises(MissingRequiredField):
        decode(encode_product(instrument=""))


def test_decode_unsupported_product_type():
    with pytest.raises(UnsupportedProductType) as exc_info:
        decode(encode_product(type="radiation"))
    assert exc_info.value.product_type == "radiation"


@pytest.mark.parametrize("images", [[], None])
def test_decode_image_product_without_channels(images):
    data = make_product()
    if images is None:
        del data["images"]
    else:
        data["images"] = images

    with pytest.raises(InvalidImageProduct):
        decode(cbor2.dumps(data))


def test_decode_wrong_field_type_is_malformed():
    with pytest.raises(MalformedBinary):
        decode(encode_product(images="not-a-list"))


def test_decode_empty_payload():
    with pytest.raises(EmptyPayload):
        decode(b"")


def test_decode_garbage_bytes():
    with pytest.raises(MalformedBinary):
        decode(b"\xff\xfe\xfd not cbor")


def test_decode_non_map_root():
    with pytest.raises(MalformedBinary):
        decode(cbor2.dumps([1, 2, 3]))


def test_all_decoder_errors_share_a_base():
    for exc_type in (
        EmptyPayload,
        MalformedBinary,
        InvalidImageProduct,
    ):
        assert issubclass(exc_type, TelemetryError)
        assert issubclass(exc_type, ValueError)


def test_json_view_normalizes_keys_and_values():
    raw = {
        "instrument": "msu_mr",
        1: "int key",
        b"raw": b"\x00\x01",
        "nested": {2.5: float("nan")},
    }

    view = decode_json_view(cbor2.dumps(raw))

    assert view["1"] == "int key"
    assert view["raw"] == "AAE="
    assert view["nested"] == {"2.5": None}


def test_json_view_does_not_validate():
    view = decode_json_view(cbor2.dumps({"type": "radiation"}))
    assert view == {"type": "radiation"}


def test_extract_track_inputs_ignores_product_validation():
    # 沒有 instrument/type/images，但 tle 與 timestamps 完整
    blob = cbor2.dumps(
        {
            "tle": {"line1": ISS_LINE1, "line2": ISS_LINE2},
            "timestamps": [100.0, -1, 200],
        }
    )

    inputs = extract_track_inputs(blob)

    assert inputs.has_tle()
    assert inputs.timestamps == [100.0, -1.0, 200.0]


def test_extract_track_inputs_non_numeric_timestamps_become_sentinels():
    blob = encode_product(timestamps=[1.5, "x", None, True, float("inf")])

    inputs = extract_track_inputs(blob)

    assert inputs.timestamps[0] == 1.5
    assert inputs.timestamps[1:] == [MISSING_TIMESTAMP] * 4
    assert all(math.isfinite(t) for t in inputs.timestamps)


@pytest.mark.parametrize(
    "overrides",
    [
        {"tle": None},
        {"tle": {"line1": ISS_LINE1}},
        {"tle": {"line1": 1, "line2": 2}},
    ],
)
def test_extract_track_inputs_without_usable_tle(overrides):
    inputs = extract_track_inputs(encode_product(**overrides))
    assert not inputs.has_tle()


@pytest.mark.parametrize("timestamps", [[], None, "1,2,3"])
def test_extract_track_inputs_without_timestamps(timestamps):
    inputs = extract_track_inputs(encode_product(timestamps=timestamps))
    assert not inputs.has_timestamps()


def test_extract_track_inputs_still_rejects_unparseable_blob():
    with pytest.raises(MalformedBinary):
        extract_track_inputs(b"\x9f")
