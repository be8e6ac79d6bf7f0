import pytest

from thresholdkit.encode_cli import (
    EXIT_DATAERR,
    EXIT_OK,
    base64_to_hex,
    hex_to_base64,
    main,
)


def test_hex_to_base64_known_value():
    data, encoded = hex_to_base64("010203")
    assert data == b"\x01\x02\x03"
    assert encoded == "AQID"


def test_base64_to_hex_round_trip():
    _, encoded = hex_to_base64("deadbeef00")
    data, hex_value = base64_to_hex(encoded)
    assert hex_value == "deadbeef00"
    assert data == bytes.fromhex("deadbeef00")


def test_upper_case_hex_is_accepted_and_lowered():
    data, encoded = hex_to_base64("ABCDEF")
    assert base64_to_hex(encoded) == (data, "abcdef")


def test_empty_values():
    assert hex_to_base64("") == (b"", "")
    assert base64_to_hex("") == (b"", "")


@pytest.mark.parametrize("value", ["zz", "123", "0x01", "01 02"])
def test_invalid_hex(value):
    with pytest.raises(ValueError, match="Invalid hex string"):
        hex_to_base64(value)


@pytest.mark.parametrize("value", ["AQI", "A$ID", "AQIE=", "é"])
def test_invalid_base64(value):
    with pytest.raises(ValueError, match="Invalid base64 string"):
        base64_to_hex(value)


def test_main_base64_to_hex_output(capsys):
    assert main(["base64-to-hex", "--value", "AQID"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out == 'Decoded bytes: [1, 2, 3]\nHex: "010203"\n'


def test_main_hex_to_base64_output(capsys):
    assert main(["hex-to-base64", "-v", "010203"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out == 'Decoded bytes: [1, 2, 3]\nBase64: "AQID"\n'


def test_main_reports_invalid_input(capsys):
    assert main(["hex-to-base64", "-v", "zz"]) == EXIT_DATAERR
    assert capsys.readouterr().out == "Error: Invalid hex string\n"


def test_main_reports_invalid_base64(capsys):
    assert main(["base64-to-hex", "-v", "!!"]) == EXIT_DATAERR
    assert capsys.readouterr().out == "Error: Invalid base64 string\n"


def test_main_requires_value():
    with pytest.raises(SystemExit) as excinfo:
        main(["base64-to-hex"])
    assert excinfo.value.code == 2