"""Tests for src/regfile/values.py and src/regfile/hives.py - typed values."""

import pytest

from core.enums import DocumentEncoding
from regfile.exceptions import ValueDecodeError
from regfile.hives import split_hive
from regfile.value_types import RegValueKind
from regfile.values import RegistryValue, decode_hex_string, parse_hex_bytes
from tests.fixtures.helpers import utf16_hex

KEY = "HKEY_CURRENT_USER\\Software\\Contoso"


def make(raw_data, encoding=DocumentEncoding.UTF8, name="Value"):
    return RegistryValue.from_raw(KEY, name, raw_data, encoding)


class TestHexBytes:
    """Tests for comma-hex byte list decoding."""

    def test_binary_decode(self):
        assert parse_hex_bytes("01,02,0a,ff") == bytes([0x01, 0x02, 0x0A, 0xFF])

    def test_continuation_splice(self):
        """A wrapped list decodes the same as the single-line form."""
        assert parse_hex_bytes("01,\\\r\n  02,03") == parse_hex_bytes("01,02,03")

    def test_trailing_comma(self):
        assert parse_hex_bytes("01,02,") == b"\x01\x02"

    def test_uppercase_and_single_digit(self):
        assert parse_hex_bytes("A,FF") == b"\x0a\xff"

    def test_empty(self):
        assert parse_hex_bytes("") == b""
        assert parse_hex_bytes("  ") == b""

    @pytest.mark.parametrize("payload", ["01,zz", "01,,02", "100", "01 02"])
    def test_invalid_tokens(self, payload):
        with pytest.raises(ValueDecodeError):
            parse_hex_bytes(payload)


class TestHexString:
    """Tests for string payload decoding."""

    def test_utf16(self):
        assert decode_hex_string("Aé".encode("utf-16-le"), DocumentEncoding.UTF8) == "Aé"

    def test_legacy_single_byte(self):
        assert decode_hex_string(b"A\xe9", DocumentEncoding.LEGACY_8BIT) == "Aé"

    def test_legacy_custom_codec(self):
        assert decode_hex_string(b"\x80", DocumentEncoding.LEGACY_8BIT, "cp1252") == "€"

    def test_odd_length_utf16(self):
        with pytest.raises(ValueDecodeError):
            decode_hex_string(b"\x41\x00\x42", DocumentEncoding.UTF8)


class TestDword:
    """Tests for REG_DWORD values."""

    def test_decode(self):
        value = make("dword:0000002a")
        assert value.kind is RegValueKind.DWORD
        assert value.value == 42

    @pytest.mark.parametrize("number", [0, 1, 255, 0x7FFFFFFF, 0x80000000, 0xFFFFFFFF])
    def test_round_trip(self, number):
        assert make(f"dword:{number:08x}").value == number

    def test_uppercase_prefix_and_digits(self):
        assert make("DWORD:000000FF").value == 255

    @pytest.mark.parametrize("raw", ["dword:", "dword:xyz", "dword:123456789", "dword:-1"])
    def test_invalid(self, raw):
        with pytest.raises(ValueDecodeError):
            make(raw)


class TestQword:
    """Tests for REG_QWORD values."""

    def test_little_endian(self):
        value = make("hex(b):00,e1,f5,05,00,00,00,00")
        assert value.kind is RegValueKind.QWORD
        assert value.value == 100000000

    def test_max(self):
        assert make("hex(b):ff,ff,ff,ff,ff,ff,ff,ff").value == 0xFFFFFFFFFFFFFFFF

    @pytest.mark.parametrize("raw", ["hex(b):", "hex(b):01,02", "hex(b):00,00,00,00,00,00,00,00,00"])
    def test_wrong_length(self, raw):
        with pytest.raises(ValueDecodeError):
            make(raw)


class TestBinary:
    """Tests for REG_BINARY values."""

    def test_decode(self):
        value = make("hex:01,02,0a,ff")
        assert value.kind is RegValueKind.BINARY
        assert value.value == b"\x01\x02\x0a\xff"
        assert value.raw_bytes == value.value

    def test_wrapped(self):
        assert make("hex:01,\\\r\n  02,03").value == make("hex:01,02,03").value

    def test_empty(self):
        assert make("hex:").value == b""


class TestMultiSz:
    """Tests for REG_MULTI_SZ values."""

    def test_two_entries(self):
        value = make("hex(7):" + utf16_hex("A\0B\0\0"))
        assert value.kind is RegValueKind.MULTI_SZ
        assert value.value == ["A", "B"]

    def test_empty_list(self):
        assert make("hex(7):").value == []

    def test_only_terminators(self):
        assert make("hex(7):00,00,00,00").value == []

    def test_legacy_single_byte(self):
        value = make("hex(7):41,00,42,00,00", DocumentEncoding.LEGACY_8BIT)
        assert value.value == ["A", "B"]

    def test_odd_length(self):
        with pytest.raises(ValueDecodeError):
            make("hex(7):41,00,42")


class TestTerminatedStrings:
    """Tests for REG_EXPAND_SZ and REG_LINK values."""

    def test_expand_sz(self):
        value = make("hex(2):" + utf16_hex("%SystemRoot%\\system32\0"))
        assert value.kind is RegValueKind.EXPAND_SZ
        assert value.value == "%SystemRoot%\\system32"

    def test_only_final_nul_removed(self):
        assert make("hex(2):" + utf16_hex("a\0\0")).value == "a\0"

    def test_link(self):
        value = make("hex(6):" + utf16_hex("\\Registry\\Machine"))
        assert value.kind is RegValueKind.LINK
        assert value.value == "\\Registry\\Machine"


class TestStringValues:
    """Tests for REG_SZ values."""

    def test_quoted(self):
        value = make('"plain text"')
        assert value.kind is RegValueKind.SZ
        assert value.value == "plain text"

    def test_escapes(self):
        assert make('"C:\\\\Windows\\\\System32"').value == "C:\\Windows\\System32"
        assert make('"say \\"hi\\""').value == 'say "hi"'

    def test_invalid_escape_kept(self):
        assert make('"C:\\Windows"').value == "C:\\Windows"

    def test_empty_string(self):
        assert make('""').value == ""

    def test_unquoted(self):
        assert make("bare").value == "bare"


class TestOpaqueKinds:
    """Tests for REG_NONE and resource kinds."""

    def test_none(self):
        value = make("hex(0):01,02")
        assert value.kind is RegValueKind.NONE
        assert value.value is None
        assert value.raw_bytes == b"\x01\x02"

    @pytest.mark.parametrize(
        "raw, kind",
        [
            ("hex(8):01,\\\r\n  02", RegValueKind.RESOURCE_LIST),
            ("hex(9):01,02", RegValueKind.FULL_RESOURCE_DESCRIPTOR),
            ("hex(a):01,02", RegValueKind.RESOURCE_REQUIREMENTS_LIST),
        ],
    )
    def test_resource_kinds_expose_payload(self, raw, kind):
        value = make(raw)
        assert value.kind is kind
        assert value.value == "01,02"


class TestRegistryValue:
    """Tests for value metadata."""

    def test_fields(self):
        value = RegistryValue.from_raw("  " + KEY + " ", "Count", "dword:00000001")
        assert value.key_path == KEY
        assert value.name == "Count"
        assert value.raw_data == "dword:00000001"
        assert value.payload == "00000001"
        assert value.encoding is DocumentEncoding.UTF8

    def test_root(self):
        value = make("dword:00000001")
        assert value.root == "HKEY_CURRENT_USER"
        assert value.key_path_without_root == "Software\\Contoso"

    def test_raw_data_keeps_prefix(self):
        assert make("hex:01").raw_data.startswith(RegValueKind.BINARY.prefix)

    def test_string_has_no_raw_bytes(self):
        assert make('"x"').raw_bytes is None

    def test_immutable(self):
        value = make("dword:00000001")
        with pytest.raises(AttributeError):
            value.name = "Other"

    def test_str(self):
        assert str(make("dword:0000002a", name="Count")) == KEY + "\\Count=dword:42"
        assert str(make('"x"', name="")) == KEY + "\\=x"

    def test_decode_error_names_value(self):
        with pytest.raises(ValueDecodeError) as excinfo:
            make("dword:zz", name="Broken")
        error = excinfo.value
        assert error.key_path == KEY
        assert error.name == "Broken"
        assert error.raw_data == "dword:zz"
        assert "Broken" in str(error)


class TestSplitHive:
    """Tests for root hive derivation."""

    @pytest.mark.parametrize(
        "hive",
        [
            "HKEY_LOCAL_MACHINE",
            "HKEY_CLASSES_ROOT",
            "HKEY_USERS",
            "HKEY_CURRENT_CONFIG",
            "HKEY_CURRENT_USER",
        ],
    )
    def test_known_hives(self, hive):
        assert split_hive(hive + "\\Software\\X") == (hive, "Software\\X")

    def test_hive_only(self):
        assert split_hive("HKEY_USERS") == ("HKEY_USERS", "")

    def test_no_hive(self):
        assert split_hive("SomeRandomKey") == ("", "SomeRandomKey")

    def test_case_sensitive(self):
        assert split_hive("hkey_current_user\\Software") == ("", "hkey_current_user\\Software")

    def test_only_one_separator_stripped(self):
        assert split_hive("HKEY_USERS\\\\x") == ("HKEY_USERS", "\\x")
