from __future__ import annotations

import codecs
from pathlib import Path

CRLF = "\r\n"

UNICODE_HEADER = "Windows Registry Editor Version 5.00"


def reg_text(*lines: str, header: str = UNICODE_HEADER) -> str:
    """Join lines into .reg text with CR-LF endings, as regedit writes them."""
    return CRLF.join([header, "", *lines]) + CRLF


def utf16_hex(text: str) -> str:
    """Encode text as the comma hex list regedit uses for hex(2)/hex(7) data."""
    return ",".join(f"{byte:02x}" for byte in text.encode("utf-16-le"))


def write_utf16_reg(path: Path, text: str) -> Path:
    """Write a regedit 5 style file: UTF-16LE with BOM."""
    path.write_bytes(codecs.BOM_UTF16_LE + text.encode("utf-16-le"))
    return path


SAMPLE_LINES = (
    r"[HKEY_LOCAL_MACHINE\SOFTWARE\Contoso\App]",
    '@="default value data"',
    '"InstallPath"="C:\\\\Program Files\\\\Contoso"',
    '"Count"=dword:0000002a',
    '"Blob"=hex:01,02,0a,ff',
    '"Paths"=hex(7):' + utf16_hex("A\0B\0\0"),
    '"Stamp"=hex(b):00,e1,f5,05,00,00,00,00',
    '"Env"=hex(2):' + utf16_hex("%SystemRoot%\0"),
    "",
    r"[HKEY_CURRENT_USER\Software\Contoso]",
    '"Quoted"="say \\"hi\\""',
    "",
    r"[HKEY_CURRENT_USER\Software\Contoso\Empty]",
    "",
)


def sample_reg_text() -> str:
    return reg_text(*SAMPLE_LINES)
